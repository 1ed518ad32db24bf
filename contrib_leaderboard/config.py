"""Tunable settings for the leaderboard pipeline, read from the environment."""

import os
from dataclasses import dataclass
from typing import Optional

from contrib_leaderboard.domain.rate_limit import LOW_REMAINING_THRESHOLD


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return int(value)


@dataclass(frozen=True)
class LeaderboardConfig:
    """Immutable pipeline settings. Defaults match the public dashboard."""

    org: str = "recodehive"
    api_base_url: str = "https://api.github.com"
    user_agent: str = "RecodeHive-Dashboard/1.0"

    top_repositories: int = 10
    # Only the most starred repositories are scanned; bounds requests per run.

    per_page: int = 100
    request_delay_seconds: float = 0.1
    timeout_seconds: float = 30.0

    auto_retry: bool = True
    # Re-run the aggregation once a rate limit countdown reaches zero.

    countdown_interval_seconds: float = 1.0
    rate_limit_backoff_seconds: int = 60
    # Wait used when a rate limit response carries no usable reset time.

    estimator_seed: Optional[int] = None
    low_remaining_threshold: int = LOW_REMAINING_THRESHOLD

    @classmethod
    def from_env(cls) -> "LeaderboardConfig":
        """Build a config from environment variables, falling back to defaults."""
        defaults = cls()
        return cls(
            org=os.getenv("GITHUB_ORG", defaults.org),
            api_base_url=os.getenv("GITHUB_API_URL", defaults.api_base_url),
            top_repositories=int(os.getenv("LEADERBOARD_TOP_REPOS", str(defaults.top_repositories))),
            per_page=int(os.getenv("LEADERBOARD_PER_PAGE", str(defaults.per_page))),
            request_delay_seconds=float(
                os.getenv("LEADERBOARD_REQUEST_DELAY", str(defaults.request_delay_seconds))
            ),
            timeout_seconds=float(os.getenv("LEADERBOARD_TIMEOUT", str(defaults.timeout_seconds))),
            auto_retry=_env_bool("LEADERBOARD_AUTO_RETRY", defaults.auto_retry),
            rate_limit_backoff_seconds=int(
                os.getenv("LEADERBOARD_RATE_LIMIT_BACKOFF", str(defaults.rate_limit_backoff_seconds))
            ),
            estimator_seed=_env_int("LEADERBOARD_SEED"),
            low_remaining_threshold=int(
                os.getenv("LEADERBOARD_LOW_REMAINING", str(defaults.low_remaining_threshold))
            ),
        )
