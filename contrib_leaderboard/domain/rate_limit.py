"""Rate limit status shared between the fetcher and whatever reports on it."""

from dataclasses import dataclass
from typing import Optional

DEFAULT_RATE_LIMIT = 60  # unauthenticated GitHub REST quota per hour
LOW_REMAINING_THRESHOLD = 20


@dataclass(frozen=True)
class RateLimitState:
    """Snapshot of the remote API quota. `reset_time` is epoch seconds."""

    is_limited: bool = False
    reset_time: Optional[int] = None
    remaining: Optional[int] = None
    limit: Optional[int] = None

    def is_low(self, threshold: int = LOW_REMAINING_THRESHOLD) -> bool:
        """True when the quota is not exhausted yet but close to it."""
        if self.is_limited or not self.remaining:
            return False
        return self.remaining < threshold

    def to_dict(self) -> dict:
        return {
            "is_limited": self.is_limited,
            "reset_time": self.reset_time,
            "remaining": self.remaining,
            "limit": self.limit,
        }


def format_countdown(seconds: Optional[int]) -> str:
    """Render a retry countdown as `m:ss`."""
    if not seconds or seconds < 0:
        return "0:00"
    return f"{seconds // 60}:{seconds % 60:02d}"
