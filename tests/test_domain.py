"""Tests for domain entities, demo data and configuration."""

from contrib_leaderboard.config import LeaderboardConfig
from contrib_leaderboard.domain.achievements import generate_achievements
from contrib_leaderboard.domain.community_stats import CommunityStats, build_dashboard_stats
from contrib_leaderboard.domain.contributor import ContributorRecord, LeaderboardEntry
from contrib_leaderboard.domain.demo_data import demo_leaderboard
from contrib_leaderboard.domain.estimation import RandomContributionEstimator
from contrib_leaderboard.domain.rate_limit import RateLimitState
from contrib_leaderboard.domain.repository import RepositorySummary


def test_contributor_record_merge():
    record = ContributorRecord(login="alice", avatar_url="", profile_url="")

    record.merge(10, weekly=2, monthly=5)
    record.merge(4, weekly=1, monthly=2)

    assert record.total_contributions == 14
    assert record.repository_count == 2
    assert record.weekly_contributions == 3
    assert record.monthly_contributions == 7


def test_demo_leaderboard_looks_like_live_data():
    entries = demo_leaderboard()

    assert len(entries) >= 3
    assert [e.rank for e in entries] == list(range(1, len(entries) + 1))
    assert all(isinstance(e, LeaderboardEntry) for e in entries)
    assert all(e.score == e.total_contributions * 10 for e in entries)
    assert all(len(e.achievements) <= 3 for e in entries)
    assert set(entries[0].to_dict()) == set(entries[1].to_dict())


def test_demo_achievements_follow_the_rules():
    for entry in demo_leaderboard():
        assert entry.achievements == tuple(generate_achievements(entry.score, entry.total_contributions))


def test_demo_leaderboard_is_a_fresh_copy():
    assert demo_leaderboard() == demo_leaderboard()
    assert demo_leaderboard() is not demo_leaderboard()


def test_seeded_estimator_is_reproducible():
    first = RandomContributionEstimator(seed=7)
    second = RandomContributionEstimator(seed=7)

    draws = [first.estimate(100) for _ in range(5)]

    assert draws == [second.estimate(100) for _ in range(5)]
    for weekly, monthly in draws:
        assert 10 <= weekly <= 30
        assert 30 <= monthly <= 60


def test_repository_summary_from_api():
    summary = RepositorySummary.from_api({"id": 3, "full_name": "acme/tool", "stargazers_count": None})

    assert summary.full_name == "acme/tool"
    assert summary.stars == 0


def test_rate_limit_state_is_low_only_when_not_limited():
    assert RateLimitState(remaining=5, limit=60).is_low()
    assert not RateLimitState(is_limited=True, remaining=0, limit=60).is_low()
    assert not RateLimitState().is_low()


def test_dashboard_stats_take_top_four():
    entries = demo_leaderboard()

    stats = build_dashboard_stats(CommunityStats(total_stars=10), entries)

    assert stats.total_stars == 10
    assert stats.top_contributors == entries[:4]


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("GITHUB_ORG", "acme")
    monkeypatch.setenv("LEADERBOARD_TOP_REPOS", "5")
    monkeypatch.setenv("LEADERBOARD_REQUEST_DELAY", "0.5")
    monkeypatch.setenv("LEADERBOARD_AUTO_RETRY", "false")
    monkeypatch.setenv("LEADERBOARD_SEED", "42")
    monkeypatch.setenv("LEADERBOARD_RATE_LIMIT_BACKOFF", "90")

    config = LeaderboardConfig.from_env()

    assert config.org == "acme"
    assert config.top_repositories == 5
    assert config.request_delay_seconds == 0.5
    assert config.auto_retry is False
    assert config.estimator_seed == 42
    assert config.rate_limit_backoff_seconds == 90
    assert config.per_page == 100


def test_config_defaults(monkeypatch):
    for name in ("GITHUB_ORG", "LEADERBOARD_TOP_REPOS", "LEADERBOARD_SEED", "LEADERBOARD_AUTO_RETRY"):
        monkeypatch.delenv(name, raising=False)

    config = LeaderboardConfig.from_env()

    assert config.org == "recodehive"
    assert config.top_repositories == 10
    assert config.auto_retry is True
    assert config.estimator_seed is None
