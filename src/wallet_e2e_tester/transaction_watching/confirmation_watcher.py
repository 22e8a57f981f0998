"""Submit a transfer, capture its hash from the console and verify the receipt."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from wallet_e2e_tester.browser_session.page_polling import poll_until
from wallet_e2e_tester.browser_session.session_handle import BrowserSession
from wallet_e2e_tester.configuration.runtime_settings import TimeoutSettings
from wallet_e2e_tester.wallet_driving.wallet_contracts import WalletDriver

from . import dapp_page
from .receipt_models import TransactionReceipt, parse_receipt_response

logger = logging.getLogger(__name__)

_HEX_VALUE = re.compile(r"^0x[0-9a-fA-F]+$")


def looks_like_transaction_hash(text: str) -> bool:
    return _HEX_VALUE.match(text.strip()) is not None


@dataclass(frozen=True)
class TransferRequest:
    """Values entered into the dApp send form."""

    recipient: str
    amount: str
    transaction_type: str


class TransactionConfirmationWatcher:
    """Bridges the dApp's console-logged hash with wallet confirmation and receipt lookup."""

    def __init__(
        self,
        session: BrowserSession,
        wallet: WalletDriver,
        *,
        dapp_url: str,
        timeouts: TimeoutSettings,
    ) -> None:
        self._session = session
        self._wallet = wallet
        self._dapp_url = dapp_url
        self._timeouts = timeouts

    async def submit_and_verify(self, transfer: TransferRequest) -> TransactionReceipt:
        tx_hash = await self.submit_and_capture_hash(transfer)
        return await self.fetch_receipt(tx_hash)

    async def submit_and_capture_hash(self, transfer: TransferRequest) -> str:
        """Submit the send form and return the hash the dApp logs after confirmation."""
        await self._session.fill(dapp_page.RECIPIENT_INPUT, transfer.recipient)
        await self._session.fill(dapp_page.AMOUNT_INPUT, transfer.amount)
        await self._session.select_option(
            dapp_page.TRANSACTION_TYPE_SELECT, transfer.transaction_type
        )
        # The dApp only logs the hash, so listen before anything can trigger it.
        with self._session.capture_console_message(looks_like_transaction_hash) as capture:
            await self._session.click(dapp_page.SUBMIT_FORM_BUTTON)
            await self._wallet.confirm_transaction_and_wait_for_mining()
            tx_hash = (await capture.wait(self._timeouts.console_capture_seconds)).strip()
        logger.info("Captured transaction hash %s", tx_hash)
        return tx_hash

    async def fetch_receipt(self, tx_hash: str) -> TransactionReceipt:
        """Load the receipt through the dApp diagnostic page, polling until it renders."""
        await self._session.goto(
            dapp_page.build_request_url(self._dapp_url, "eth_getTransactionReceipt", [tx_hash])
        )

        async def _probe() -> TransactionReceipt | None:
            return parse_receipt_response(await self._session.inner_text(dapp_page.RESPONSE_BODY))

        receipt = await poll_until(
            _probe,
            timeout_seconds=self._timeouts.receipt_poll_seconds,
            interval_seconds=self._timeouts.receipt_poll_interval_seconds,
            backoff=self._timeouts.receipt_poll_backoff,
            max_interval_seconds=5.0,
            description=f"receipt of {tx_hash}",
        )
        logger.info("Receipt for %s has status %s", tx_hash, receipt.status)
        return receipt
