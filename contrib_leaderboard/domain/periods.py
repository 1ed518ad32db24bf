"""Time-period views over a leaderboard snapshot."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Sequence, Union

from contrib_leaderboard.domain.contributor import LeaderboardEntry


class Period(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    OVERALL = "overall"


DEFAULT_PERIOD = Period.MONTHLY


@dataclass(frozen=True)
class LeaderboardSummary:
    """Headline numbers shown above a period view."""

    contributors: int
    top: int
    average: int


def _as_period(period: Union[Period, str]) -> Period:
    if isinstance(period, Period):
        return period
    try:
        return Period(str(period).lower())
    except ValueError:
        # Unknown values rank by overall contributions
        return Period.OVERALL


def contribution_count(entry: LeaderboardEntry, period: Union[Period, str]) -> int:
    """Contribution count an entry is ranked by for the given period."""
    period = _as_period(period)
    if period is Period.WEEKLY:
        return entry.weekly_contributions or 0
    if period is Period.MONTHLY:
        return entry.monthly_contributions or 0
    return entry.total_contributions or 0


def assign_ranks(entries: Iterable[LeaderboardEntry]) -> List[LeaderboardEntry]:
    """Dense 1-based ranks in iteration order."""
    return [entry.with_rank(index) for index, entry in enumerate(entries, start=1)]


def filter_by_period(
    entries: Sequence[LeaderboardEntry],
    period: Union[Period, str],
) -> List[LeaderboardEntry]:
    """
    Re-rank a snapshot for a period view.

    Sorting is stable and descending on the period's count; the input
    sequence is left as is and a new list with fresh ranks is returned.
    """
    period = _as_period(period)
    ordered = sorted(entries, key=lambda entry: contribution_count(entry, period), reverse=True)
    return assign_ranks(ordered)


def summarize(entries: Sequence[LeaderboardEntry], period: Union[Period, str]) -> LeaderboardSummary:
    """Contributor count, top count and rounded average for a period view."""
    if not entries:
        return LeaderboardSummary(contributors=0, top=0, average=0)

    counts = [contribution_count(entry, period) for entry in entries]
    return LeaderboardSummary(
        contributors=len(entries),
        top=max(counts),
        average=int(math.floor(sum(counts) / len(counts) + 0.5)),
    )
