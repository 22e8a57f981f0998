"""MetaMask extension automation over the shared Playwright browser context."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import urlparse

from wallet_e2e_tester.browser_session.page_polling import PollTimeoutError, poll_until
from wallet_e2e_tester.browser_session.session_handle import BrowserSession
from wallet_e2e_tester.configuration.account_derivation import is_private_key, normalize_mnemonic
from wallet_e2e_tester.configuration.runtime_settings import NetworkSpec

from . import metamask_selectors as selectors
from .wallet_contracts import WalletDriverError

logger = logging.getLogger(__name__)

_POLL_INTERVAL_SECONDS = 0.25


class MetaMaskExtensionDriver:
    """Drives MetaMask onboarding, network, connection and confirmation popups."""

    def __init__(
        self,
        session: BrowserSession,
        *,
        popup_timeout_seconds: float = 30.0,
        mining_timeout_seconds: float = 180.0,
    ) -> None:
        self._session = session
        self._context = session.browser_context
        self._popup_timeout_seconds = popup_timeout_seconds
        self._mining_timeout_seconds = mining_timeout_seconds
        self._extension_id: str | None = None

    async def setup_wallet(self, secret_material: str, password: str) -> None:
        """Import the wallet; private keys are imported on top of a throwaway phrase."""
        phrase = (
            selectors.DEFAULT_ONBOARDING_PHRASE
            if is_private_key(secret_material)
            else normalize_mnemonic(secret_material)
        )
        words = phrase.split()
        home = await self._open_extension_page(selectors.HOME_PAGE)
        try:
            await home.get_by_test_id(selectors.TERMS_CHECKBOX).click()
            await home.get_by_test_id(selectors.IMPORT_WALLET_BUTTON).click()
            await home.get_by_test_id(selectors.METAMETRICS_DECLINE_BUTTON).click()
            if len(words) != 12:
                await home.locator(selectors.SRP_WORD_COUNT_SELECT).select_option(str(len(words)))
            for index, word in enumerate(words):
                await home.get_by_test_id(selectors.SRP_WORD_INPUT.format(index=index)).fill(word)
            await home.get_by_test_id(selectors.SRP_CONFIRM_BUTTON).click()
            await home.get_by_test_id(selectors.PASSWORD_NEW_INPUT).fill(password)
            await home.get_by_test_id(selectors.PASSWORD_CONFIRM_INPUT).fill(password)
            await home.get_by_test_id(selectors.PASSWORD_TERMS_CHECKBOX).click()
            await home.get_by_test_id(selectors.PASSWORD_IMPORT_BUTTON).click()
            await home.get_by_test_id(selectors.ONBOARDING_DONE_BUTTON).click()
            await home.get_by_test_id(selectors.PIN_EXTENSION_NEXT_BUTTON).click()
            await home.get_by_test_id(selectors.PIN_EXTENSION_DONE_BUTTON).click()
            if is_private_key(secret_material):
                await self._import_private_key(home, secret_material.strip())
        finally:
            await home.close()
        logger.info("Wallet imported into MetaMask")

    async def add_network(self, network: NetworkSpec) -> None:
        """Request the chain through the dApp provider and approve it in the popup."""
        chain = {
            "chainId": network.expected_chain_id_hex,
            "chainName": network.name,
            "rpcUrls": [network.rpc_url],
            "nativeCurrency": {
                "name": network.currency_symbol,
                "symbol": network.currency_symbol,
                "decimals": 18,
            },
        }
        if network.block_explorer_url:
            chain["blockExplorerUrls"] = [network.block_explorer_url]
        request = asyncio.ensure_future(self._session.evaluate(selectors.ADD_CHAIN_SCRIPT, chain))
        try:
            popup = await self._wait_for_notification(pending=request)
            if popup is not None:
                await popup.get_by_test_id(selectors.CONFIRMATION_SUBMIT_BUTTON).click()
                await popup.get_by_test_id(selectors.CONFIRMATION_SUBMIT_BUTTON).click()
            await asyncio.wait_for(request, self._popup_timeout_seconds)
        except TimeoutError as exc:
            raise WalletDriverError(f"Adding network {network.name} did not complete.") from exc
        finally:
            if not request.done():
                request.cancel()

    async def accept_access(self) -> None:
        popup = await self._wait_for_notification()
        if popup is None:  # pragma: no cover
            raise WalletDriverError("Connection request popup did not appear.")
        await popup.get_by_test_id(selectors.FOOTER_NEXT_BUTTON).click()
        await popup.get_by_test_id(selectors.FOOTER_NEXT_BUTTON).click()

    async def confirm_transaction_and_wait_for_mining(self) -> None:
        popup = await self._wait_for_notification()
        if popup is None:  # pragma: no cover
            raise WalletDriverError("Transaction confirmation popup did not appear.")
        await popup.get_by_test_id(selectors.FOOTER_NEXT_BUTTON).click()

        home = await self._open_extension_page(selectors.HOME_PAGE)
        try:
            await home.get_by_test_id(selectors.ACTIVITY_TAB).click()

            async def _mined() -> bool | None:
                pending = await home.locator(selectors.PENDING_TRANSACTION).count()
                confirmed = await home.locator(selectors.CONFIRMED_TRANSACTION).count()
                return True if pending == 0 and confirmed > 0 else None

            await poll_until(
                _mined,
                timeout_seconds=self._mining_timeout_seconds,
                interval_seconds=1.0,
                backoff=1.5,
                max_interval_seconds=5.0,
                description="transaction to be mined",
            )
        except PollTimeoutError as exc:
            raise WalletDriverError(str(exc)) from exc
        finally:
            await home.close()
        logger.info("Transaction confirmed and mined")

    async def _import_private_key(self, home: Any, private_key: str) -> None:
        await home.get_by_test_id(selectors.ACCOUNT_MENU_BUTTON).click()
        await home.get_by_test_id(selectors.ACCOUNT_MENU_ACTION_BUTTON).click()
        await home.get_by_role("button", name=selectors.IMPORT_ACCOUNT_LABEL).click()
        await home.locator(selectors.PRIVATE_KEY_INPUT).fill(private_key)
        await home.get_by_test_id(selectors.IMPORT_ACCOUNT_CONFIRM_BUTTON).click()

    async def _open_extension_page(self, page_name: str) -> Any:
        extension_id = await self._resolve_extension_id()
        page = await self._context.new_page()
        await page.goto(f"chrome-extension://{extension_id}/{page_name}")
        return page

    async def _resolve_extension_id(self) -> str:
        if self._extension_id is not None:
            return self._extension_id

        async def _probe() -> str | None:
            workers = list(self._context.background_pages) + list(self._context.service_workers)
            for worker in workers:
                parsed = urlparse(worker.url)
                if parsed.scheme == "chrome-extension" and parsed.netloc:
                    return parsed.netloc
            return None

        try:
            self._extension_id = await poll_until(
                _probe,
                timeout_seconds=self._popup_timeout_seconds,
                interval_seconds=_POLL_INTERVAL_SECONDS,
                description="wallet extension background worker",
            )
        except PollTimeoutError as exc:
            raise WalletDriverError("Wallet extension is not loaded in the browser.") from exc
        return self._extension_id

    async def _wait_for_notification(self, pending: asyncio.Future | None = None) -> Any | None:
        """Return the open notification popup, or None if `pending` settled without one."""

        async def _probe() -> Any | None:
            for page in self._context.pages:
                if selectors.NOTIFICATION_PAGE in page.url and not page.is_closed():
                    return page
            if pending is not None and pending.done():
                pending.result()
                return False
            return None

        try:
            popup = await poll_until(
                _probe,
                timeout_seconds=self._popup_timeout_seconds,
                interval_seconds=_POLL_INTERVAL_SECONDS,
                description="wallet notification popup",
            )
        except PollTimeoutError as exc:
            raise WalletDriverError(str(exc)) from exc
        if popup is False:
            return None
        await popup.wait_for_load_state()
        return popup
