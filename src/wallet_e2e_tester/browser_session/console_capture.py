"""Single-shot capture of in-page console messages."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

ConsolePredicate = Callable[[str], bool]


class ConsoleCaptureTimeout(Exception):
    """Raised when no matching console message arrived before the capture deadline."""


def _accept_any(_text: str) -> bool:
    return True


class ConsoleMessageCapture:
    """Resolves once with the text of the first matching console message.

    The listener is attached on construction, so create the capture before
    triggering the action that logs. The captured value never changes after
    it is set.
    """

    def __init__(self, page: Any, predicate: ConsolePredicate | None = None) -> None:
        self._page = page
        self._predicate = predicate or _accept_any
        self._future: asyncio.Future[str] = asyncio.get_running_loop().create_future()
        self._attached = True
        page.on("console", self._on_console)

    @property
    def done(self) -> bool:
        return self._future.done() and not self._future.cancelled()

    @property
    def attached(self) -> bool:
        return self._attached

    def _on_console(self, message: Any) -> None:
        if self._future.done():
            return
        text = message.text
        if not self._predicate(text):
            logger.debug("Ignoring console message: %s", text)
            return
        self._future.set_result(text)

    async def wait(self, timeout_seconds: float) -> str:
        """Return the captured text, raising ConsoleCaptureTimeout after `timeout_seconds`."""
        try:
            return await asyncio.wait_for(asyncio.shield(self._future), timeout_seconds)
        except TimeoutError as exc:
            raise ConsoleCaptureTimeout(
                f"No console message captured within {timeout_seconds:g}s."
            ) from exc
        finally:
            self.cancel()

    def detach(self) -> None:
        if not self._attached:
            return
        self._attached = False
        self._page.remove_listener("console", self._on_console)

    def cancel(self) -> None:
        self.detach()
        if not self._future.done():
            self._future.cancel()

    def __enter__(self) -> ConsoleMessageCapture:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()
