"""Pytest configuration and fixtures.

The GitHub API is replaced by a scripted session so tests never touch the
network, and time comes from a settable clock.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
import requests
from requests.structures import CaseInsensitiveDict

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from contrib_leaderboard.config import LeaderboardConfig  # noqa: E402
from contrib_leaderboard.domain.estimation import FixedShareEstimator  # noqa: E402
from contrib_leaderboard.infrastructure.github_client import GitHubRestClient  # noqa: E402
from contrib_leaderboard.infrastructure.rate_limit_tracker import RateLimitTracker  # noqa: E402

API = "https://api.example.test"


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, payload=None, headers=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self._text = text
        self.headers = CaseInsensitiveDict(headers or {})

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self._text is not None:
            return json.loads(self._text)
        return self._payload


class FakeSession:
    """Returns scripted responses keyed by URL path; records every request."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls: list[str] = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append(url)
        path = url[len(API):] if url.startswith(API) else url
        result = self.routes.get(path)
        if result is None:
            return FakeResponse(404, {"message": "Not Found"})
        if isinstance(result, BaseException):
            raise result
        return result

    def called(self, fragment: str) -> bool:
        return any(fragment in url for url in self.calls)


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def repos_path(org: str = "acme") -> str:
    return f"/orgs/{org}/repos?type=public&per_page=100"


def contributors_path(full_name: str) -> str:
    return f"/repos/{full_name}/contributors?per_page=100"


def user(login: str, contributions: int, type_: str = "User") -> dict:
    return {
        "login": login,
        "avatar_url": f"https://avatars.example.test/{login}",
        "html_url": f"https://github.com/{login}",
        "contributions": contributions,
        "type": type_,
    }


def rate_limited_response(reset: int = 1_700_000_120) -> FakeResponse:
    return FakeResponse(
        403,
        {"message": "API rate limit exceeded"},
        headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": str(reset), "X-RateLimit-Limit": "60"},
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tracker(clock):
    tracker = RateLimitTracker(clock=clock)
    yield tracker
    tracker.stop_countdown()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(tracker, session) -> GitHubRestClient:
    return GitHubRestClient(tracker, base_url=API, session=session)


@pytest.fixture
def config() -> LeaderboardConfig:
    return LeaderboardConfig(org="acme", api_base_url=API, auto_retry=False)


@pytest.fixture
def estimator() -> FixedShareEstimator:
    return FixedShareEstimator(weekly_share=0.2, monthly_share=0.5, streak=3)
