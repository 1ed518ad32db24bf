"""Domain entities for contributors and leaderboard rows."""

from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass
class ContributorRecord:
    """
    Accumulator entry for one contributor during an aggregation run.

    Totals only ever grow while repositories are merged in; the record is
    thrown away once the run has produced its leaderboard entries.
    """

    login: str
    avatar_url: str
    profile_url: str
    total_contributions: int = 0
    repository_count: int = 0
    weekly_contributions: int = 0
    monthly_contributions: int = 0

    def merge(self, contributions: int, weekly: int, monthly: int) -> None:
        """Fold one repository's numbers for this contributor into the totals."""
        self.total_contributions += contributions
        self.repository_count += 1
        self.weekly_contributions += weekly
        self.monthly_contributions += monthly


@dataclass(frozen=True)
class LeaderboardEntry:
    """Immutable leaderboard row. Only `rank` changes, via `with_rank`."""

    rank: int
    login: str
    avatar_url: str
    profile_url: str
    total_contributions: int
    repository_count: int
    score: int
    achievements: Tuple[str, ...] = ()
    weekly_contributions: Optional[int] = 0
    monthly_contributions: Optional[int] = 0
    streak: int = 0

    def with_rank(self, rank: int) -> "LeaderboardEntry":
        return replace(self, rank=rank)

    def to_dict(self) -> dict:
        return {
            "rank": self.rank,
            "login": self.login,
            "avatar_url": self.avatar_url,
            "profile_url": self.profile_url,
            "total_contributions": self.total_contributions,
            "repository_count": self.repository_count,
            "score": self.score,
            "achievements": list(self.achievements),
            "weekly_contributions": self.weekly_contributions or 0,
            "monthly_contributions": self.monthly_contributions or 0,
            "streak": self.streak,
        }
