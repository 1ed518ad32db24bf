"""Process-wide record of the GitHub API quota and the countdown to its reset."""

import logging
import math
import threading
import time
from typing import Callable, List, Optional

from contrib_leaderboard.domain.rate_limit import (
    DEFAULT_RATE_LIMIT,
    LOW_REMAINING_THRESHOLD,
    RateLimitState,
)

logger = logging.getLogger(__name__)


class RateLimitTracker:
    """
    Shared quota state for the fetcher and the status reporter.

    Every write goes through one lock, so worker threads (the countdown thread
    included) never interleave updates.
    """

    DEFAULT_FALLBACK_BACKOFF = 60

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        countdown_interval: float = 1.0,
        fallback_backoff: int = DEFAULT_FALLBACK_BACKOFF,
    ):
        """
        Initialize tracker.

        Args:
            clock: Returns the current epoch time in seconds
            countdown_interval: Seconds between countdown ticks
            fallback_backoff: Seconds to wait when the reset time is missing or stale
        """
        self._clock = clock
        self._countdown_interval = countdown_interval
        self._fallback_backoff = fallback_backoff
        self._lock = threading.RLock()
        self._state = RateLimitState()
        self._reset_listeners: List[Callable[[], None]] = []
        self._countdown_thread: Optional[threading.Thread] = None
        self._stop_countdown = threading.Event()

    @property
    def state(self) -> RateLimitState:
        with self._lock:
            return self._state

    @property
    def is_limited(self) -> bool:
        return self.state.is_limited

    def is_low(self, threshold: int = LOW_REMAINING_THRESHOLD) -> bool:
        return self.state.is_low(threshold)

    def update(
        self,
        remaining: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> RateLimitState:
        """Record the latest quota values seen on a successful response."""
        with self._lock:
            if self._state.is_limited:
                # A limit only clears through its countdown
                return self._state
            self._state = RateLimitState(
                is_limited=False,
                remaining=remaining if remaining is not None else self._state.remaining,
                limit=limit if limit is not None else self._state.limit,
            )
            return self._state

    def mark_limited(
        self,
        reset_time: Optional[int],
        remaining: int = 0,
        limit: int = DEFAULT_RATE_LIMIT,
    ) -> RateLimitState:
        """
        Enter the limited state until `reset_time` (epoch seconds).

        A missing reset time, or one already in the past, is replaced by
        now plus the fallback backoff so the limit never clears instantly.
        """
        with self._lock:
            now = self._clock()
            if not reset_time or reset_time <= now:
                logger.warning(
                    f"Rate limit reset time missing or stale ({reset_time}); "
                    f"backing off {self._fallback_backoff}s"
                )
                reset_time = math.ceil(now + self._fallback_backoff)
            self._state = RateLimitState(
                is_limited=True,
                reset_time=reset_time,
                remaining=remaining,
                limit=limit,
            )
            logger.warning(
                f"GitHub API rate limit reached ({remaining}/{limit} remaining). "
                f"Resets at {reset_time}"
            )
            return self._state

    def clear(self) -> None:
        with self._lock:
            self._state = RateLimitState()

    def seconds_until_reset(self) -> Optional[int]:
        """Whole seconds left until the limit resets, or None when not limited."""
        state = self.state
        if not state.is_limited:
            return None
        reset_time = state.reset_time or 0
        return max(0, math.ceil(reset_time - self._clock()))

    def add_reset_listener(self, callback: Callable[[], None]) -> None:
        with self._lock:
            self._reset_listeners.append(callback)

    def tick(self) -> Optional[int]:
        """
        Advance the countdown by one step.

        Clears the limit and notifies reset listeners once the reset time has
        passed.

        Returns:
            Seconds left, or None when the tracker is (now) not limited
        """
        with self._lock:
            seconds_left = self.seconds_until_reset()
            if seconds_left is None:
                return None
            if seconds_left > 0:
                return seconds_left
            self._state = RateLimitState()
            listeners = list(self._reset_listeners)

        logger.info("GitHub API rate limit reset")
        for callback in listeners:
            callback()
        return None

    def start_countdown(self) -> bool:
        """
        Start the background countdown while limited.

        Returns:
            True if a new countdown thread was started
        """
        with self._lock:
            if not self._state.is_limited:
                return False
            if self._countdown_thread is not None:
                # The running countdown keeps going while limited
                return False
            self._stop_countdown.clear()
            self._countdown_thread = threading.Thread(
                target=self._run_countdown,
                name="rate-limit-countdown",
                daemon=True,
            )
            self._countdown_thread.start()
            return True

    def stop_countdown(self) -> None:
        self._stop_countdown.set()
        thread = self._countdown_thread
        if thread and thread is not threading.current_thread():
            thread.join(timeout=self._countdown_interval * 2)

    def _run_countdown(self) -> None:
        try:
            while not self._stop_countdown.wait(self._countdown_interval):
                try:
                    self.tick()
                except Exception as e:
                    logger.error(f"Error in rate limit reset listener: {e}", exc_info=True)
                with self._lock:
                    # A listener may have hit the limit again; keep counting then
                    if not self._state.is_limited:
                        self._countdown_thread = None
                        return
        finally:
            with self._lock:
                if self._countdown_thread is threading.current_thread():
                    self._countdown_thread = None
