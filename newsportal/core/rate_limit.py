"""
Fixed-window request counters keyed by route group and client address.

Each group (public reads, admin operations, login attempts, uploads) has its
own ceiling and window length, read from settings on every call so limits can
be tuned or disabled through the environment.
"""

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

import structlog
from fastapi import Request

from ..config import get_settings
from .exceptions import RateLimitExceededError

logger = structlog.get_logger(__name__)


@dataclass
class _Window:
    started_at: float
    count: int
    length: int

    def expired(self, now: float) -> bool:
        return now - self.started_at >= self.length


class FixedWindowCounter:
    def __init__(self, clock: Callable[[], float] = time.monotonic, sweep_interval: float = 60):
        self._clock = clock
        self._windows: Dict[Tuple[str, str], _Window] = {}
        self._lock = threading.Lock()
        self._sweep_interval = sweep_interval
        self._last_sweep = clock()

    def __len__(self) -> int:
        return len(self._windows)

    def _sweep(self, now: float) -> None:
        expired = [key for key, window in self._windows.items() if window.expired(now)]
        for key in expired:
            del self._windows[key]
        self._last_sweep = now

    def hit(self, group: str, client: str, limit: int, window_seconds: int) -> Tuple[bool, int]:
        """Count one request. Returns (allowed, seconds until the window resets)."""
        now = self._clock()
        key = (group, client)
        with self._lock:
            if now - self._last_sweep >= self._sweep_interval:
                self._sweep(now)
            window = self._windows.get(key)
            if window is None or window.expired(now):
                window = _Window(started_at=now, count=0, length=window_seconds)
                self._windows[key] = window
            window.count += 1
            retry_after = max(1, math.ceil(window_seconds - (now - window.started_at)))
            return window.count <= limit, retry_after

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


counter = FixedWindowCounter()


class RateLimiter:
    """FastAPI dependency enforcing one group's window."""

    def __init__(self, group: str):
        self.group = group

    def _limits(self) -> Tuple[int, int]:
        settings = get_settings()
        limit = getattr(settings, f"rate_limit_{self.group}")
        window = getattr(settings, f"rate_limit_{self.group}_window")
        return limit, window

    async def __call__(self, request: Request) -> None:
        if not get_settings().rate_limit_enabled:
            return
        client = request.client.host if request.client else "unknown"
        limit, window = self._limits()
        allowed, retry_after = counter.hit(self.group, client, limit, window)
        if not allowed:
            logger.warning("Rate limit exceeded", group=self.group, client=client, path=request.url.path)
            raise RateLimitExceededError(self.group, retry_after)


public_limiter = RateLimiter("public")
admin_limiter = RateLimiter("admin")
auth_limiter = RateLimiter("auth")
heavy_limiter = RateLimiter("heavy")
