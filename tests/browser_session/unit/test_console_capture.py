"""Console message capture tests."""

from __future__ import annotations

import asyncio

import pytest
from support.fakes import FakePage
from wallet_e2e_tester.browser_session.console_capture import (
    ConsoleCaptureTimeout,
    ConsoleMessageCapture,
)


def test_capture_resolves_with_first_message_and_ignores_later_ones() -> None:
    async def _scenario() -> str:
        page = FakePage()
        capture = ConsoleMessageCapture(page)
        page.emit_console("0xfirst")
        page.emit_console("0xsecond")
        return await capture.wait(timeout_seconds=1)

    assert asyncio.run(_scenario()) == "0xfirst"


def test_capture_skips_messages_rejected_by_predicate() -> None:
    async def _scenario() -> str:
        page = FakePage()
        capture = ConsoleMessageCapture(page, lambda text: text.startswith("0x"))
        page.emit_console("Download the React DevTools")
        page.emit_console("0xabc")
        return await capture.wait(timeout_seconds=1)

    assert asyncio.run(_scenario()) == "0xabc"


def test_capture_times_out_and_detaches_listener() -> None:
    page = FakePage()

    async def _scenario() -> ConsoleMessageCapture:
        capture = ConsoleMessageCapture(page)
        with pytest.raises(ConsoleCaptureTimeout):
            await capture.wait(timeout_seconds=0.05)
        return capture

    capture = asyncio.run(_scenario())

    assert capture.attached is False
    assert capture.done is False
    assert page.listeners["console"] == []


def test_messages_before_attachment_are_not_captured() -> None:
    async def _scenario() -> str:
        page = FakePage()
        page.emit_console("0xbefore")
        capture = ConsoleMessageCapture(page)
        page.emit_console("0xafter")
        return await capture.wait(timeout_seconds=1)

    assert asyncio.run(_scenario()) == "0xafter"


def test_context_manager_cancels_pending_capture() -> None:
    page = FakePage()

    async def _scenario() -> ConsoleMessageCapture:
        with ConsoleMessageCapture(page) as capture:
            pass
        return capture

    capture = asyncio.run(_scenario())

    assert capture.attached is False
    assert page.listeners["console"] == []
