"""Weekly and monthly contribution estimates.

The contributors endpoint only returns all-time counts, so the period views
are fed with estimates derived from those counts.
"""

import math
import random
from typing import Optional, Protocol, Tuple

WEEKLY_SHARE = (0.1, 0.3)
MONTHLY_SHARE = (0.3, 0.6)
STREAK_RANGE = (1, 10)


class ContributionEstimator(Protocol):
    def estimate(self, contributions: int) -> Tuple[int, int]:
        """Return (weekly, monthly) estimates for one repository's count."""
        ...

    def streak(self) -> int:
        ...


class RandomContributionEstimator:
    """Draws period shares uniformly. Pass a seed for reproducible runs."""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def estimate(self, contributions: int) -> Tuple[int, int]:
        weekly = math.floor(contributions * self._random.uniform(*WEEKLY_SHARE))
        monthly = math.floor(contributions * self._random.uniform(*MONTHLY_SHARE))
        return weekly, monthly

    def streak(self) -> int:
        return self._random.randint(*STREAK_RANGE)


class FixedShareEstimator:
    """Deterministic estimator using fixed shares of the all-time count."""

    def __init__(self, weekly_share: float = 0.2, monthly_share: float = 0.45, streak: int = 1):
        self.weekly_share = weekly_share
        self.monthly_share = monthly_share
        self._streak = streak

    def estimate(self, contributions: int) -> Tuple[int, int]:
        return (
            math.floor(contributions * self.weekly_share),
            math.floor(contributions * self.monthly_share),
        )

    def streak(self) -> int:
        return self._streak
