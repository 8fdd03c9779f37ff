"""Track GitHub rate limit headers and pause before the quota runs out."""

from __future__ import annotations

import asyncio
import logging
import time

import httpx

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 10


class RateLimitMonitor:
    def __init__(self, threshold: int = DEFAULT_THRESHOLD) -> None:
        self._threshold = threshold
        self._remaining: int | None = None
        self._reset_at: float | None = None

    def update(self, response: httpx.Response) -> None:
        """Record the quota advertised by a response."""
        remaining = response.headers.get("X-RateLimit-Remaining")
        reset = response.headers.get("X-RateLimit-Reset")
        if remaining is not None:
            self._remaining = int(remaining)
        if reset is not None:
            self._reset_at = float(reset)

    async def wait_if_needed(self) -> None:
        """Sleep until the quota resets when it has dropped to the threshold."""
        if self._remaining is None or self._reset_at is None:
            return
        if self._remaining > self._threshold:
            return
        delay = max(0.0, self._reset_at - time.time()) + 1
        logger.warning(
            "Rate limit nearly exhausted (%d left), waiting %.0fs for reset",
            self._remaining,
            delay,
        )
        await asyncio.sleep(delay)
        self._remaining = None
