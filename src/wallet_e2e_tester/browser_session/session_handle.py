"""Shared browser page handle borrowed by every stage."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AsyncExitStack
from typing import Any

from .console_capture import ConsoleMessageCapture, ConsolePredicate
from .page_polling import PollTimeoutError, poll_until

logger = logging.getLogger(__name__)


class BrowserSessionError(Exception):
    """Raised when the browser session cannot be opened or used."""


def _identity(text: str) -> str:
    return text


class BrowserSession:
    """One page inside the wallet-enabled browser, closed exactly once."""

    def __init__(self, page: Any, *, resources: AsyncExitStack | None = None) -> None:
        self._page = page
        self._resources = resources or AsyncExitStack()
        self._closed = False

    @property
    def page(self) -> Any:
        return self._page

    @property
    def browser_context(self) -> Any:
        return self._page.context

    @property
    def closed(self) -> bool:
        return self._closed

    async def goto(self, url: str) -> None:
        self._ensure_open()
        logger.debug("Navigating to %s", url)
        await self._page.goto(url)

    async def fill(self, selector: str, value: str) -> None:
        self._ensure_open()
        await self._page.locator(selector).fill(value)

    async def click(self, selector: str) -> None:
        self._ensure_open()
        await self._page.locator(selector).click()

    async def select_option(self, selector: str, value: str) -> None:
        self._ensure_open()
        await self._page.locator(selector).select_option(value)

    async def inner_text(self, selector: str) -> str:
        self._ensure_open()
        return await self._page.locator(selector).inner_text()

    async def evaluate(self, expression: str, argument: Any = None) -> Any:
        self._ensure_open()
        return await self._page.evaluate(expression, argument)

    async def wait_for_text(
        self,
        selector: str,
        expected: str,
        *,
        timeout_seconds: float,
        interval_seconds: float = 0.25,
        normalize: Callable[[str], str] = _identity,
    ) -> str:
        """Poll an element until its normalized text equals `expected`.

        Returns the last text observed, which differs from `expected` when the
        deadline passed first.
        """
        last_seen = ""

        async def _probe() -> str | None:
            nonlocal last_seen
            last_seen = (await self.inner_text(selector)).strip()
            return last_seen if normalize(last_seen) == normalize(expected) else None

        try:
            return await poll_until(
                _probe,
                timeout_seconds=timeout_seconds,
                interval_seconds=interval_seconds,
                description=f"{selector} to read {expected!r}",
            )
        except PollTimeoutError:
            return last_seen

    def capture_console_message(
        self, predicate: ConsolePredicate | None = None
    ) -> ConsoleMessageCapture:
        """Attach a single-shot console listener to the page."""
        self._ensure_open()
        return ConsoleMessageCapture(self._page, predicate)

    async def close(self) -> None:
        """Close the page and release the browser; later calls are no-ops."""
        if self._closed:
            return
        self._closed = True
        try:
            await self._page.close()
        finally:
            await self._resources.aclose()
        logger.info("Browser session closed")

    def _ensure_open(self) -> None:
        if self._closed:
            raise BrowserSessionError("Browser session is already closed.")
