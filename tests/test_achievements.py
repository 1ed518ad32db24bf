"""Tests for contributor score and achievement badges."""

from contrib_leaderboard.domain.achievements import (
    ACHIEVEMENT_RULES,
    MAX_ACHIEVEMENTS,
    compute_score,
    generate_achievements,
)


def test_score_is_ten_points_per_contribution():
    assert compute_score(0) == 0
    assert compute_score(42) == 420


def test_no_badges_below_every_threshold():
    assert generate_achievements(score=90, total_contributions=9) == []


def test_low_scorer_gets_rising_star_and_consistent():
    """Score and contribution badges combine when both match."""
    assert generate_achievements(score=120, total_contributions=12) == ["Rising Star", "Consistent"]


def test_badges_follow_priority_order_and_cap_at_three():
    """The highest score tiers come first and push out contribution badges."""
    badges = generate_achievements(score=7000, total_contributions=700)

    assert badges == ["Legend", "Elite Contributor", "Master Contributor"]


def test_mid_range_contributor():
    # score 600 -> Active Contributor, Rising Star; 60 contributions -> Half Century, ...
    badges = generate_achievements(score=600, total_contributions=60)

    assert badges == ["Active Contributor", "Rising Star", "Half Century"]


def test_contribution_badges_fill_remaining_slots():
    """Badges depend only on the two inputs, not on how they relate."""
    badges = generate_achievements(score=0, total_contributions=150)

    assert badges == ["PR Master", "Century Club", "Half Century"]


def test_cap_does_not_pad_short_lists():
    badges = generate_achievements(score=0, total_contributions=25)

    assert badges == ["Quick Contributor", "Consistent"]


def test_badge_count_never_exceeds_cap():
    for contributions in (0, 10, 25, 50, 99, 100, 150, 300, 500, 700, 1000):
        badges = generate_achievements(compute_score(contributions), contributions)
        assert len(badges) <= MAX_ACHIEVEMENTS
        labels = [rule.label for rule in ACHIEVEMENT_RULES]
        assert badges == sorted(badges, key=labels.index)
