"""Fixed-window, per-client request limiting (in memory, single process)."""

from __future__ import annotations

import math
import time
from collections.abc import Callable

from fastapi import Request

from skillbuilder.errors import RateLimitExceededError


def get_client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    if request.client:
        return request.client.host

    return "unknown"


class FixedWindowRateLimiter:
    """Allow ``max_requests`` per key in each ``window_seconds`` window.

    Windows are aligned to the first request of each key and reset wholesale
    when they expire. Usable directly as a FastAPI dependency.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: int,
        *,
        message: str | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.message = message
        self._clock = clock
        # key -> (window_start, count)
        self._windows: dict[str, tuple[float, int]] = {}

    def hit(self, key: str) -> tuple[bool, float]:
        """Count a request. Returns (allowed, seconds until the window resets)."""
        now = self._clock()
        start, count = self._windows.get(key, (now, 0))
        if now - start >= self.window_seconds:
            start, count = now, 0

        reset_in = self.window_seconds - (now - start)
        if count >= self.max_requests:
            self._windows[key] = (start, count)
            return False, reset_in

        self._windows[key] = (start, count + 1)
        self._evict(now)
        return True, reset_in

    def _evict(self, now: float) -> None:
        if len(self._windows) < 10_000:
            return
        expired = [k for k, (start, _) in self._windows.items() if now - start >= self.window_seconds]
        for k in expired:
            del self._windows[k]

    def reset(self) -> None:
        self._windows.clear()

    async def __call__(self, request: Request) -> None:
        allowed, reset_in = self.hit(get_client_ip(request))
        if not allowed:
            raise RateLimitExceededError(self.message, retry_after=math.ceil(reset_in))
