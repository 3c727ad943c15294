"""Rate limiting for async outbound calls."""

from __future__ import annotations

import asyncio
import functools
import time
from collections import deque
from typing import Any, Awaitable, Callable, TypeVar

from ddgtool.logging import get_logger
from ddgtool.models.search import ThrottleOptions

logger = get_logger(__name__)

T = TypeVar("T")


class ThrottleGate:
    """Sliding-window rate limiter that delays, never rejects.

    At most ``limit`` calls are admitted in any window of ``interval_ms``.
    Callers wait on a single lock, so admission follows submission order.
    """

    def __init__(self, limit: int = 1, interval_ms: float = 3000.0) -> None:
        """Initialize throttle gate.

        Args:
            limit: Calls admitted per window.
            interval_ms: Window length in milliseconds.
        """
        if limit <= 0:
            raise ValueError("limit must be positive")
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self.limit = limit
        self.interval_ms = interval_ms
        self._admitted: deque[float] = deque()
        self._lock = asyncio.Lock()

    @classmethod
    def from_options(cls, options: ThrottleOptions) -> ThrottleGate:
        return cls(limit=options.limit, interval_ms=options.interval)

    async def acquire(self) -> None:
        """Wait until a slot in the current window opens."""
        interval_s = self.interval_ms / 1000.0
        async with self._lock:
            now = time.monotonic()
            while self._admitted and now - self._admitted[0] >= interval_s:
                self._admitted.popleft()

            if len(self._admitted) >= self.limit:
                wait_time = self._admitted[0] + interval_s - now
                logger.debug(
                    "Throttle gate delaying call",
                    extra={"wait_ms": int(wait_time * 1000), "limit": self.limit},
                )
                await asyncio.sleep(wait_time)
                self._admitted.popleft()
                now = time.monotonic()

            self._admitted.append(now)

    def wrap(self, func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        """Return ``func`` gated by this throttle."""

        @functools.wraps(func)
        async def _throttled(*args: Any, **kwargs: Any) -> T:
            await self.acquire()
            return await func(*args, **kwargs)

        _throttled.gate = self  # type: ignore[attr-defined]
        return _throttled


def throttle(options: ThrottleOptions) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Build a decorator that gates an async callable with a fresh :class:`ThrottleGate`."""

    def _decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        return ThrottleGate.from_options(options).wrap(func)

    return _decorator
