"""Per-client fixed-window rate limiting for the HTTP boundary."""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, NoReturn

from buildcost.exceptions import RateLimitExceededError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitState:
    """Allowance left for one client after a counted request."""

    limit: int
    remaining: int
    reset_after: int


@dataclass
class _Window:
    started: float
    count: int


class FixedWindowRateLimiter:
    """Counts requests per client key in fixed windows.

    Args:
        name: Label used in logs and error codes (e.g. ``"calculation"``).
        max_requests: Requests allowed per window.
        window_seconds: Window length.
        message: Error message returned to throttled clients.
        error_code: Code reported with a 429. Defaults to
            ``"<NAME>_RATE_LIMIT_EXCEEDED"``.
        clock: Monotonic clock, injectable for tests.
    """

    def __init__(
        self,
        name: str,
        max_requests: int,
        window_seconds: float,
        message: str,
        error_code: str | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests < 1 or window_seconds <= 0:
            msg = "max_requests and window_seconds must be positive"
            raise ValueError(msg)
        self.name = name
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.message = message
        self.error_code = error_code or f"{name.upper()}_RATE_LIMIT_EXCEEDED"
        self._clock = clock
        self._windows: dict[str, _Window] = {}
        self._lock = threading.Lock()
        self._last_prune = clock()

    def check(self, key: str) -> None:
        """Raise if ``key`` has no allowance left, without counting a request.

        Raises:
            RateLimitExceededError: If ``key`` has used up its allowance for
                the current window.
        """
        now = self._clock()
        with self._lock:
            window = self._current_window(key, now)
            if window is not None and window.count >= self.max_requests:
                self._reject(key, window, now)

    def hit(self, key: str) -> RateLimitState:
        """Count one request for ``key``.

        Rejected requests are not counted.

        Raises:
            RateLimitExceededError: If ``key`` has used up its allowance for
                the current window.
        """
        now = self._clock()
        with self._lock:
            self._maybe_prune(now)
            window = self._current_window(key, now)
            if window is None:
                window = _Window(started=now, count=0)
                self._windows[key] = window
            if window.count >= self.max_requests:
                self._reject(key, window, now)

            window.count += 1
            return RateLimitState(
                limit=self.max_requests,
                remaining=self.max_requests - window.count,
                reset_after=max(0, self._reset_after(window, now)),
            )

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()
            self._last_prune = self._clock()

    def _current_window(self, key: str, now: float) -> _Window | None:
        window = self._windows.get(key)
        if window is None or now - window.started >= self.window_seconds:
            return None
        return window

    def _reset_after(self, window: _Window, now: float) -> int:
        return math.ceil(window.started + self.window_seconds - now)

    def _reject(self, key: str, window: _Window, now: float) -> NoReturn:
        logger.warning(
            "Rate limit '%s' exceeded for %s (%d requests / %ss)",
            self.name,
            key,
            self.max_requests,
            self.window_seconds,
        )
        raise RateLimitExceededError(
            self.message,
            self.error_code,
            retry_after=max(1, self._reset_after(window, now)),
        )

    def _maybe_prune(self, now: float) -> None:
        # Expired windows are dropped at most once per window length.
        if now - self._last_prune < self.window_seconds:
            return
        self._last_prune = now
        expired = [
            key for key, window in self._windows.items()
            if now - window.started >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]
