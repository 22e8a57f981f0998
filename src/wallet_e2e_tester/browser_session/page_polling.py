"""Bounded poll-until-ready helper for asynchronous page state."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class PollTimeoutError(Exception):
    """Raised when a probe never produced a value before its deadline."""


async def poll_until(
    probe: Callable[[], Awaitable[T | None]],
    *,
    timeout_seconds: float,
    interval_seconds: float,
    backoff: float = 1.0,
    max_interval_seconds: float | None = None,
    description: str = "condition",
) -> T:
    """Await `probe` until it returns a non-None value or the deadline passes.

    The wait between attempts starts at `interval_seconds` and is multiplied by
    `backoff` after each miss, capped at `max_interval_seconds` when given. The
    probe always runs at least once, and once more right at the deadline.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout_seconds
    delay = interval_seconds
    attempts = 0
    while True:
        attempts += 1
        value = await probe()
        if value is not None:
            return value
        remaining = deadline - loop.time()
        if remaining <= 0:
            raise PollTimeoutError(
                f"Timed out after {timeout_seconds:g}s waiting for {description} "
                f"({attempts} attempts)."
            )
        logger.debug("Waiting for %s, attempt %d missed", description, attempts)
        await asyncio.sleep(min(delay, remaining))
        delay *= backoff
        if max_interval_seconds is not None:
            delay = min(delay, max_interval_seconds)
