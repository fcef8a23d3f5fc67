"""In-process fixed-window rate limiting for the contact form.

State lives in process memory only. It is shared by every request handled
by this process and is lost on restart; it is not coordinated across
multiple server instances.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from typing import Final

logger = logging.getLogger(__name__)

DEFAULT_MAX_REQUESTS: Final[int] = 5
DEFAULT_WINDOW_SECONDS: Final[float] = 60 * 60
DEFAULT_SWEEP_INTERVAL_SECONDS: Final[float] = 10 * 60


@dataclass
class RateLimitRecord:
    """Counter for a single key within its current window."""

    count: int
    reset_time: float


class RateLimiter:
    """Fixed-window counter keyed by client identifier (usually an IP)."""

    def __init__(
        self,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._records: dict[str, RateLimitRecord] = {}
        self._lock = Lock()

    def check(self, key: str) -> bool:
        """Record an attempt for ``key`` and return True if it is allowed.

        A denied attempt does not increment the counter.
        """
        now = self._clock()
        with self._lock:
            record = self._records.get(key)
            if record is None or now > record.reset_time:
                self._records[key] = RateLimitRecord(count=1, reset_time=now + self.window_seconds)
                return True

            if record.count >= self.max_requests:
                return False

            record.count += 1
            return True

    def sweep(self) -> int:
        """Drop records whose window has expired and return how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [key for key, record in self._records.items() if now > record.reset_time]
            for key in expired:
                del self._records[key]
        return len(expired)

    def get(self, key: str) -> RateLimitRecord | None:
        """Return a copy of the record for ``key``, if any."""
        with self._lock:
            record = self._records.get(key)
            if record is None:
                return None
            return RateLimitRecord(count=record.count, reset_time=record.reset_time)

    def clear(self) -> None:
        """Forget every record."""
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class RateLimitSweeper:
    """Periodically removes expired rate-limit records to bound memory use."""

    def __init__(
        self,
        limiter: RateLimiter,
        interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
    ) -> None:
        self.limiter = limiter
        self.interval_seconds = max(0.01, float(interval_seconds))
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the background sweep loop."""
        if self._task is None or self._task.done():
            self._stopping.clear()
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop the background sweep loop."""
        if self._task is None:
            return

        self._stopping.set()
        await self._task
        self._task = None

    async def _run(self) -> None:
        while not self._stopping.is_set():
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self.interval_seconds)
            except TimeoutError:
                removed = self.limiter.sweep()
                if removed:
                    logger.debug("Removed %d expired rate limit records", removed)
