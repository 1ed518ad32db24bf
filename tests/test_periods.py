"""Tests for period views over a leaderboard snapshot."""

import pytest

from contrib_leaderboard.domain.contributor import LeaderboardEntry
from contrib_leaderboard.domain.periods import (
    Period,
    contribution_count,
    filter_by_period,
    summarize,
)


def make_entry(login, total, weekly=0, monthly=0, rank=0):
    return LeaderboardEntry(
        rank=rank,
        login=login,
        avatar_url="",
        profile_url=f"https://github.com/{login}",
        total_contributions=total,
        repository_count=1,
        score=total * 10,
        weekly_contributions=weekly,
        monthly_contributions=monthly,
    )


@pytest.fixture
def snapshot():
    return (
        make_entry("alice", 100, weekly=5, monthly=40, rank=1),
        make_entry("bob", 80, weekly=20, monthly=30, rank=2),
        make_entry("carol", 60, weekly=10, monthly=50, rank=3),
    )


def test_weekly_view_reorders_by_weekly_count(snapshot):
    view = filter_by_period(snapshot, Period.WEEKLY)

    assert [e.login for e in view] == ["bob", "carol", "alice"]
    assert [e.rank for e in view] == [1, 2, 3]


def test_monthly_view_accepts_string_period(snapshot):
    view = filter_by_period(snapshot, "monthly")

    assert [e.login for e in view] == ["carol", "alice", "bob"]


def test_overall_view_uses_total_contributions(snapshot):
    reversed_snapshot = tuple(reversed(snapshot))

    view = filter_by_period(reversed_snapshot, Period.OVERALL)

    assert [e.login for e in view] == ["alice", "bob", "carol"]


def test_filter_does_not_touch_the_snapshot(snapshot):
    before = list(snapshot)

    filter_by_period(snapshot, Period.WEEKLY)

    assert list(snapshot) == before
    assert [e.rank for e in snapshot] == [1, 2, 3]


@pytest.mark.parametrize("period", list(Period))
def test_filter_is_idempotent(snapshot, period):
    once = filter_by_period(snapshot, period)

    assert filter_by_period(once, period) == once


def test_missing_period_counts_rank_as_zero():
    entries = [make_entry("alice", 10, weekly=None), make_entry("bob", 5, weekly=3)]

    view = filter_by_period(entries, Period.WEEKLY)

    assert [e.login for e in view] == ["bob", "alice"]
    assert contribution_count(view[1], Period.WEEKLY) == 0


def test_ranks_are_dense_with_ties():
    entries = [make_entry(name, 10) for name in ("a", "b", "c", "d")]

    view = filter_by_period(entries, Period.OVERALL)

    assert [e.rank for e in view] == [1, 2, 3, 4]
    # stable: equal counts keep their input order
    assert [e.login for e in view] == ["a", "b", "c", "d"]


def test_empty_snapshot():
    assert filter_by_period([], Period.MONTHLY) == []
    assert summarize([], Period.MONTHLY).contributors == 0


def test_summary_reports_count_top_and_rounded_average(snapshot):
    summary = summarize(filter_by_period(snapshot, Period.WEEKLY), Period.WEEKLY)

    assert summary.contributors == 3
    assert summary.top == 20
    # (20 + 10 + 5) / 3 = 11.67
    assert summary.average == 12
