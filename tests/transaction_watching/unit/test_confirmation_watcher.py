"""Transaction confirmation watcher tests."""

from __future__ import annotations

import asyncio

import pytest
from support.fakes import DAPP_URL, HARDHAT_ADDRESS, FakePage, FakeWallet, fast_settings
from wallet_e2e_tester.browser_session.console_capture import ConsoleCaptureTimeout
from wallet_e2e_tester.browser_session.page_polling import PollTimeoutError
from wallet_e2e_tester.browser_session.session_handle import BrowserSession
from wallet_e2e_tester.transaction_watching.confirmation_watcher import (
    TransactionConfirmationWatcher,
    TransferRequest,
    looks_like_transaction_hash,
)
from wallet_e2e_tester.transaction_watching.receipt_models import TransactionReceipt

_TRANSFER = TransferRequest(recipient=HARDHAT_ADDRESS, amount="0x1", transaction_type="0x2")


def _watcher(page: FakePage, wallet) -> TransactionConfirmationWatcher:
    return TransactionConfirmationWatcher(
        BrowserSession(page),
        wallet,
        dapp_url=DAPP_URL,
        timeouts=fast_settings().timeouts,
    )


def test_hash_logged_during_slow_confirmation_is_used_for_receipt_query() -> None:
    page = FakePage()
    wallet = FakeWallet(page, tx_hash="0xABC", mining_delay_seconds=0.05)

    receipt = asyncio.run(_watcher(page, wallet).submit_and_verify(_TRANSFER))

    assert receipt.succeeded is True
    receipt_query = next(action[1] for action in page.actions if action[0] == "goto")
    assert "request.html" in receipt_query
    assert "0xABC" in receipt_query


def test_console_listener_is_attached_before_form_submission() -> None:
    page = FakePage()
    wallet = FakeWallet(page)

    asyncio.run(_watcher(page, wallet).submit_and_capture_hash(_TRANSFER))

    listen_index = page.actions.index(("listen", "console"))
    submit_index = page.actions.index(("click", "#submitForm"))
    assert listen_index < submit_index
    assert page.actions[:3] == [
        ("fill", "#toInput", HARDHAT_ADDRESS),
        ("fill", "#amountInput", "0x1"),
        ("select_option", "#typeInput", "0x2"),
    ]
    assert page.listeners["console"] == []


def test_reverted_receipt_is_returned_for_the_caller_to_judge() -> None:
    page = FakePage()
    wallet = FakeWallet(page, receipt_status="0x0")

    receipt = asyncio.run(_watcher(page, wallet).submit_and_verify(_TRANSFER))

    assert isinstance(receipt, TransactionReceipt)
    assert receipt.succeeded is False


def test_missing_console_hash_raises_local_capture_timeout() -> None:
    page = FakePage()

    class SilentWallet(FakeWallet):
        async def confirm_transaction_and_wait_for_mining(self) -> None:
            self.calls.append("confirm_transaction_and_wait_for_mining")

    with pytest.raises(ConsoleCaptureTimeout):
        asyncio.run(_watcher(page, SilentWallet(page)).submit_and_verify(_TRANSFER))
    assert page.listeners["console"] == []


def test_receipt_that_never_renders_raises_poll_timeout() -> None:
    page = FakePage()

    async def _scenario() -> None:
        await _watcher(page, FakeWallet(page)).fetch_receipt("0xabc")

    page.texts["body > main"] = "Response: null"
    with pytest.raises(PollTimeoutError, match="receipt of 0xabc"):
        asyncio.run(_scenario())


@pytest.mark.parametrize(
    ("text", "expected"),
    [("0xABC", True), (" 0x5c50 ", True), ("Download the React DevTools", False), ("0x", False)],
)
def test_looks_like_transaction_hash(text: str, expected: bool) -> None:
    assert looks_like_transaction_hash(text) is expected
