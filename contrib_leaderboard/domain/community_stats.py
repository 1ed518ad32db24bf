"""Org-wide counters supplied by the community stats source."""

from dataclasses import dataclass, field
from typing import Protocol, Sequence, Tuple

from contrib_leaderboard.domain.contributor import LeaderboardEntry

TOP_CONTRIBUTORS_SHOWN = 4


@dataclass(frozen=True)
class CommunityStats:
    total_stars: int = 0
    total_contributors: int = 0
    total_repositories: int = 0
    total_forks: int = 0


class CommunityStatsSource(Protocol):
    """Anything that can hand over pre-aggregated org counts."""

    def get_stats(self) -> CommunityStats:
        ...


@dataclass(frozen=True)
class DashboardStats:
    total_contributors: int
    total_repositories: int
    total_stars: int
    total_forks: int
    top_contributors: Tuple[LeaderboardEntry, ...] = field(default_factory=tuple)


def build_dashboard_stats(
    stats: CommunityStats,
    entries: Sequence[LeaderboardEntry],
) -> DashboardStats:
    """Combine the org counters with the first few leaderboard rows."""
    return DashboardStats(
        total_contributors=stats.total_contributors,
        total_repositories=stats.total_repositories,
        total_stars=stats.total_stars,
        total_forks=stats.total_forks,
        top_contributors=tuple(entries[:TOP_CONTRIBUTORS_SHOWN]),
    )
