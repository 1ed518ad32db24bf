"""Application service that builds the cross-repository contributor leaderboard."""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple, Union

from contrib_leaderboard.config import LeaderboardConfig
from contrib_leaderboard.domain.achievements import compute_score, generate_achievements
from contrib_leaderboard.domain.community_stats import (
    CommunityStatsSource,
    DashboardStats,
    build_dashboard_stats,
)
from contrib_leaderboard.domain.contributor import ContributorRecord, LeaderboardEntry
from contrib_leaderboard.domain.demo_data import DEMO_FALLBACK_MESSAGE, demo_leaderboard
from contrib_leaderboard.domain.estimation import ContributionEstimator, RandomContributionEstimator
from contrib_leaderboard.domain.periods import (
    DEFAULT_PERIOD,
    LeaderboardSummary,
    Period,
    assign_ranks,
    filter_by_period,
    summarize,
)
from contrib_leaderboard.domain.rate_limit import RateLimitState
from contrib_leaderboard.domain.repository import RepositorySummary
from contrib_leaderboard.infrastructure.github_client import (
    AggregationError,
    GitHubRestClient,
    NetworkError,
    RateLimitExceeded,
)
from contrib_leaderboard.infrastructure.rate_limit_tracker import RateLimitTracker

logger = logging.getLogger(__name__)

ALREADY_LIMITED_MESSAGE = "Rate limit exceeded. Please wait before trying again."
PARTIAL_RESULT_MESSAGE = (
    "GitHub API rate limit reached. Showing partial results; "
    "the leaderboard will refresh automatically when the limit resets."
)


@dataclass(frozen=True)
class LeaderboardResult:
    """Outcome of one aggregation run, ready for presentation."""

    entries: Tuple[LeaderboardEntry, ...]
    rate_limit: RateLimitState
    message: Optional[str] = None
    is_demo: bool = False
    is_rate_limited: bool = False
    repositories_processed: int = 0

    @property
    def is_empty(self) -> bool:
        """No contributors to show; an empty state rather than an error."""
        return not self.entries


@dataclass
class _RunAccumulator:
    contributors: Dict[str, ContributorRecord] = field(default_factory=dict)
    repositories_processed: int = 0
    rate_limited: bool = False


class LeaderboardService:
    """Service for aggregating contributor statistics across an organization."""

    def __init__(
        self,
        github_client: GitHubRestClient,
        tracker: RateLimitTracker,
        config: Optional[LeaderboardConfig] = None,
        estimator: Optional[ContributionEstimator] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize leaderboard service.

        Args:
            github_client: GitHub API client
            tracker: Rate limit tracker shared with the client
            config: Pipeline settings. Defaults are used if None.
            estimator: Weekly/monthly estimation strategy
            sleep: Pause function used between repository requests
        """
        self.github_client = github_client
        self.tracker = tracker
        self.config = config or LeaderboardConfig()
        self.estimator = estimator or RandomContributionEstimator(self.config.estimator_seed)
        self._sleep = sleep
        self._snapshot: Tuple[LeaderboardEntry, ...] = ()
        self._retry_org: Optional[str] = None
        # One aggregation at a time, whichever thread triggers it
        self._run_lock = threading.Lock()
        self.tracker.add_reset_listener(self._retry_after_reset)

    @property
    def snapshot(self) -> Tuple[LeaderboardEntry, ...]:
        """Leaderboard from the latest run, ranked by overall contributions."""
        return self._snapshot

    def build_leaderboard(self, org: Optional[str] = None) -> LeaderboardResult:
        """
        Run one aggregation for an organization and replace the snapshot.

        Never raises: a rate limit mid-run yields partial data, and a failure
        before any repository could be processed yields the demo leaderboard.

        Args:
            org: Organization login. Defaults to the configured org.

        Returns:
            LeaderboardResult with entries ranked by overall contributions
        """
        org = org or self.config.org
        with self._run_lock:
            return self._build_leaderboard(org)

    def _build_leaderboard(self, org: str) -> LeaderboardResult:
        if self.tracker.is_limited:
            logger.warning(f"Skipping leaderboard refresh for '{org}': rate limit still active")
            return LeaderboardResult(
                entries=self._snapshot,
                rate_limit=self.tracker.state,
                message=ALREADY_LIMITED_MESSAGE,
                is_rate_limited=True,
            )

        logger.info(f"Building contributor leaderboard for '{org}'")

        try:
            repositories = self.github_client.list_org_repositories(org)
        except RateLimitExceeded as e:
            logger.error(f"Rate limit hit while listing repositories for '{org}': {e}")
            result = self._fall_back_to_demo(DEMO_FALLBACK_MESSAGE)
            self._schedule_retry(org)
            return result
        except NetworkError as e:
            logger.error(f"Error fetching repositories for '{org}': {e}")
            return self._fall_back_to_demo(str(e))
        except AggregationError as e:
            logger.error(f"Error fetching repositories for '{org}': {e}")
            return self._fall_back_to_demo(DEMO_FALLBACK_MESSAGE)

        selected = self.select_repositories(repositories)
        run = self._collect_contributors(selected)
        entries = self.rank_contributors(run.contributors.values())
        self._snapshot = tuple(entries)

        message = None
        if run.rate_limited:
            message = PARTIAL_RESULT_MESSAGE
            self._schedule_retry(org)
        elif not entries:
            logger.info(f"No contributors found for '{org}'")

        logger.info(
            f"Leaderboard built: {len(entries)} contributors from "
            f"{run.repositories_processed}/{len(selected)} repositories"
        )
        return LeaderboardResult(
            entries=self._snapshot,
            rate_limit=self.tracker.state,
            message=message,
            is_rate_limited=run.rate_limited,
            repositories_processed=run.repositories_processed,
        )

    def select_repositories(self, repositories: List[RepositorySummary]) -> List[RepositorySummary]:
        """Most starred repositories first, capped to the configured count."""
        ordered = sorted(repositories, key=lambda repo: repo.stars, reverse=True)
        return ordered[: self.config.top_repositories]

    def _collect_contributors(self, repositories: List[RepositorySummary]) -> _RunAccumulator:
        run = _RunAccumulator()

        for index, repo in enumerate(repositories):
            # Requests stay sequential and spaced out to spare the shared quota
            if index > 0:
                self._sleep(self.config.request_delay_seconds)

            try:
                response = self.github_client.list_contributors(repo.full_name, per_page=self.config.per_page)
            except RateLimitExceeded as e:
                logger.warning(
                    f"Rate limit hit at repository {index + 1}/{len(repositories)} "
                    f"({repo.full_name}); stopping with partial results: {e}"
                )
                run.rate_limited = True
                break
            except NetworkError as e:
                logger.warning(f"Error fetching contributors for {repo.full_name}: {e}")
                continue

            if not response.ok:
                logger.warning(f"Skipping {repo.full_name}: contributors request returned {response.status_code}")
                continue

            try:
                contributors = response.json()
            except ValueError as e:
                logger.warning(f"Skipping {repo.full_name}: invalid contributors response: {e}")
                continue

            if not isinstance(contributors, list):
                logger.warning(f"Skipping {repo.full_name}: contributors response is not a list")
                continue

            self.merge_contributors(run.contributors, contributors)
            run.repositories_processed += 1

        return run

    def merge_contributors(self, accumulator: Dict[str, ContributorRecord], contributors: list) -> None:
        """
        Merge one repository's contributor list into the accumulator.

        Only human accounts are counted; each login is credited with one more
        repository and its contributions are added to the running totals.
        """
        for contributor in contributors:
            if not isinstance(contributor, dict):
                continue
            login = contributor.get("login")
            if not login or contributor.get("type") != "User":
                continue

            contributions = contributor.get("contributions") or 0
            weekly, monthly = self.estimator.estimate(contributions)

            record = accumulator.get(login)
            if record is None:
                record = ContributorRecord(
                    login=login,
                    avatar_url=contributor.get("avatar_url") or "",
                    profile_url=contributor.get("html_url") or f"https://github.com/{login}",
                )
                accumulator[login] = record
            record.merge(contributions, weekly, monthly)

    def rank_contributors(self, records) -> List[LeaderboardEntry]:
        """Turn accumulated records into ranked entries, most contributions first."""
        entries = []
        for record in records:
            if record.total_contributions <= 0:
                continue
            score = compute_score(record.total_contributions)
            entries.append(
                LeaderboardEntry(
                    rank=0,
                    login=record.login,
                    avatar_url=record.avatar_url,
                    profile_url=record.profile_url,
                    total_contributions=record.total_contributions,
                    repository_count=record.repository_count,
                    score=score,
                    achievements=tuple(generate_achievements(score, record.total_contributions)),
                    weekly_contributions=record.weekly_contributions,
                    monthly_contributions=record.monthly_contributions,
                    streak=self.estimator.streak(),
                )
            )

        # Ties keep a fixed order so results do not depend on fetch order
        entries.sort(key=lambda entry: entry.login.lower())
        entries.sort(key=lambda entry: entry.total_contributions, reverse=True)
        return assign_ranks(entries)

    def view(self, period: Union[Period, str, None] = None) -> List[LeaderboardEntry]:
        """Re-rank the current snapshot for a period without fetching anything."""
        return filter_by_period(self._snapshot, period or DEFAULT_PERIOD)

    def summary(self, period: Union[Period, str, None] = None) -> LeaderboardSummary:
        period = period or DEFAULT_PERIOD
        return summarize(self.view(period), period)

    def dashboard_stats(self, stats_source: CommunityStatsSource) -> DashboardStats:
        """Org-wide counters from the stats source plus the current top contributors."""
        return build_dashboard_stats(stats_source.get_stats(), self._snapshot)

    def _fall_back_to_demo(self, message: str) -> LeaderboardResult:
        logger.warning("Using fallback leaderboard data due to GitHub API limitations")
        self._snapshot = demo_leaderboard()
        return LeaderboardResult(
            entries=self._snapshot,
            rate_limit=self.tracker.state,
            message=message,
            is_demo=True,
            is_rate_limited=self.tracker.is_limited,
        )

    def _schedule_retry(self, org: str) -> None:
        # The countdown always runs so the limit clears; only the re-run is optional
        if self.config.auto_retry:
            self._retry_org = org
        if self.tracker.start_countdown():
            seconds = self.tracker.seconds_until_reset()
            if self.config.auto_retry:
                logger.info(f"Leaderboard refresh scheduled in {seconds}s")
            else:
                logger.info(f"Rate limit resets in {seconds}s")

    def _retry_after_reset(self) -> None:
        org, self._retry_org = self._retry_org, None
        if org is None:
            return
        if not self._run_lock.acquire(blocking=False):
            logger.info(f"Leaderboard refresh for '{org}' already running, skipping automatic retry")
            return
        try:
            logger.info(f"Rate limit cleared, refreshing leaderboard for '{org}'")
            self._build_leaderboard(org)
        finally:
            self._run_lock.release()
