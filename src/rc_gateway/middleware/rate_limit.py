"""Fixed-window rate limiting, in-memory and process-local.

Rules:
  - Auth endpoints: RATE_LIMIT_AUTH_REQUESTS per RATE_LIMIT_AUTH_WINDOW_MS per client
  - Everything else: RATE_LIMIT_API_REQUESTS per RATE_LIMIT_API_WINDOW_MS per client

Windows are aligned to multiples of window_ms, so every request in the same
window maps to the same key ``"{client}:{window_start}"`` and shares one
counter. Counters are lost on restart and are not shared between processes.

Client key: first X-Forwarded-For hop, then X-Real-IP, then
X-Vercel-Forwarded-For, then the socket peer. Requests with none of these
share the ``"unknown"`` bucket.
"""

import asyncio
import logging
import math
import threading
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum

from config.settings import settings

logger = logging.getLogger("rc.ratelimit")

UNKNOWN_CLIENT = "unknown"


class RateLimitPolicy(str, Enum):
    AUTH = "auth"
    API = "api"


@dataclass(frozen=True)
class RateLimitPreset:
    max_requests: int
    window_ms: int


def preset_for(policy: RateLimitPolicy) -> RateLimitPreset:
    if policy is RateLimitPolicy.AUTH:
        return RateLimitPreset(settings.RATE_LIMIT_AUTH_REQUESTS, settings.RATE_LIMIT_AUTH_WINDOW_MS)
    return RateLimitPreset(settings.RATE_LIMIT_API_REQUESTS, settings.RATE_LIMIT_API_WINDOW_MS)


@dataclass
class RateLimitEntry:
    count: int
    reset_time_ms: int


class FixedWindowRateLimiter:
    """Owned per application (see ``app.state.rate_limiter``); pass a clock in tests."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._entries: dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def allow(self, client_key: str, max_requests: int, window_ms: int) -> bool:
        now = self._now_ms()
        window_start = (now // window_ms) * window_ms
        key = f"{client_key}:{window_start}"

        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._entries[key] = RateLimitEntry(count=1, reset_time_ms=window_start + window_ms)
                return True
            if entry.count >= max_requests:
                return False
            entry.count += 1
            return True

    def retry_after_seconds(self, window_ms: int) -> int:
        """Seconds until the current window rolls over (at least 1)."""
        now = self._now_ms()
        reset = (now // window_ms) * window_ms + window_ms
        return max(1, math.ceil((reset - now) / 1000))

    def sweep(self) -> int:
        """Drop entries whose window has ended. Returns how many were removed."""
        now = self._now_ms()
        with self._lock:
            expired = [k for k, e in self._entries.items() if now >= e.reset_time_ms]
            for k in expired:
                del self._entries[k]
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)

    async def run_sweeper(self, interval_seconds: float) -> None:
        """Background loop started from the app lifespan; cancelled on shutdown."""
        while True:
            await asyncio.sleep(interval_seconds)
            removed = self.sweep()
            if removed:
                logger.debug("rate limit sweep removed %d entries", removed)


def client_key(headers: Mapping[str, str], peer: str | None = None) -> str:
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    for name in ("x-real-ip", "x-vercel-forwarded-for"):
        value = headers.get(name)
        if value and value.strip():
            return value.strip()
    return peer or UNKNOWN_CLIENT
