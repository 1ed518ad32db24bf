"""GitHub REST API client that reports every response to the rate limit tracker."""

import logging
from typing import List, Optional

import requests

from contrib_leaderboard.domain.rate_limit import DEFAULT_RATE_LIMIT
from contrib_leaderboard.domain.repository import RepositorySummary
from contrib_leaderboard.infrastructure.rate_limit_tracker import RateLimitTracker

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Unable to fetch live data. Showing demo data instead."


class GitHubAPIError(Exception):
    """Base class for errors raised by the GitHub client."""
    pass


class RateLimitExceeded(GitHubAPIError):
    """Raised when GitHub API rate limit is exceeded."""

    def __init__(self, reset_time: int, remaining: int = 0, limit: int = DEFAULT_RATE_LIMIT):
        super().__init__("GitHub API rate limit exceeded. Using cached data.")
        self.reset_time = reset_time
        self.remaining = remaining
        self.limit = limit


class NetworkError(GitHubAPIError):
    """Raised when the request never produced a response."""

    def __init__(self, message: str = NETWORK_ERROR_MESSAGE):
        super().__init__(message)


class AggregationError(Exception):
    """Raised when the leaderboard source data cannot be used at all."""
    pass


class SourceUnavailable(AggregationError):
    """Raised when the organization repository list could not be fetched."""
    pass


class MalformedResponse(SourceUnavailable):
    """Raised when the repository list response is not a JSON list."""
    pass


def _header_int(response: requests.Response, name: str) -> Optional[int]:
    value = response.headers.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class GitHubRestClient:
    """Client for the public GitHub REST API. Makes one request per call, no retries."""

    API_BASE_URL = "https://api.github.com"
    RATE_LIMIT_STATUS = 403
    DEFAULT_PER_PAGE = 100

    REMAINING_HEADER = "X-RateLimit-Remaining"
    RESET_HEADER = "X-RateLimit-Reset"
    LIMIT_HEADER = "X-RateLimit-Limit"

    def __init__(
        self,
        tracker: RateLimitTracker,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        user_agent: str = "RecodeHive-Dashboard/1.0",
        timeout: float = 30,
    ):
        """
        Initialize GitHub REST client.

        Args:
            tracker: Shared rate limit tracker updated after every response
            base_url: API root. Defaults to the public GitHub API.
            session: HTTP session to use. A new one is created if None.
            user_agent: Value of the User-Agent header
            timeout: Per-request timeout in seconds
        """
        self.tracker = tracker
        self.base_url = (base_url or self.API_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": user_agent,
        }

    def fetch(self, url: str) -> requests.Response:
        """
        GET a URL and record the quota headers of the response.

        Args:
            url: Absolute URL or path relative to the API root

        Returns:
            The response, whatever its status unless it signals an exhausted quota

        Raises:
            RateLimitExceeded: If the API answered with the rate limit status
            NetworkError: If the request failed before a response arrived
        """
        if not url.startswith("http"):
            url = f"{self.base_url}{url}"

        try:
            response = self.session.get(url, headers=self.headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning(f"Network error, falling back to demo data: {e}")
            raise NetworkError() from e

        remaining = _header_int(response, self.REMAINING_HEADER)
        reset_time = _header_int(response, self.RESET_HEADER)
        limit = _header_int(response, self.LIMIT_HEADER)

        if response.status_code == self.RATE_LIMIT_STATUS:
            state = self.tracker.mark_limited(
                reset_time=reset_time,
                remaining=remaining if remaining is not None else 0,
                limit=limit if limit is not None else DEFAULT_RATE_LIMIT,
            )
            raise RateLimitExceeded(
                reset_time=state.reset_time,
                remaining=state.remaining,
                limit=state.limit,
            )

        self.tracker.update(remaining=remaining, limit=limit)
        return response

    def list_org_repositories(self, org: str) -> List[RepositorySummary]:
        """
        Fetch the public repositories of an organization (first page only).

        Args:
            org: Organization login

        Returns:
            Repository summaries in API order

        Raises:
            SourceUnavailable: If the API answered with an error status
            MalformedResponse: If the body is not a JSON list
            RateLimitExceeded, NetworkError: See `fetch`
        """
        response = self.fetch(
            f"/orgs/{org}/repos?type=public&per_page={self.DEFAULT_PER_PAGE}"
        )
        if not response.ok:
            raise SourceUnavailable(f"GitHub API request failed: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponse("Invalid GitHub API response format") from e

        if not isinstance(data, list):
            raise MalformedResponse("Invalid GitHub API response format")

        repositories = [
            RepositorySummary.from_api(item)
            for item in data
            if isinstance(item, dict) and item.get("full_name")
        ]
        logger.info(f"Fetched {len(repositories)} public repositories for '{org}'")
        return repositories

    def list_contributors(self, full_name: str, per_page: int = DEFAULT_PER_PAGE) -> requests.Response:
        """Fetch the contributor list of a repository. Non-OK responses are returned as is."""
        return self.fetch(f"/repos/{full_name}/contributors?per_page={per_page}")
