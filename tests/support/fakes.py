"""In-memory stand-ins for the browser page, wallet driver and metrics sink."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

from wallet_e2e_tester.browser_session.session_handle import BrowserSession
from wallet_e2e_tester.configuration.runtime_settings import (
    HarnessSettings,
    NetworkSpec,
    RunConfig,
    TimeoutSettings,
)
from wallet_e2e_tester.outcome_reporting.outcome_state import OutcomeRecorder
from wallet_e2e_tester.stage_sequencing.stage_contracts import StageContext

HARDHAT_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
HARDHAT_MNEMONIC = "test test test test test test test test test test test junk"
HARDHAT_ADDRESS = "0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266"
DAPP_URL = "http://localhost:9011"
RPC_URL = "https://rpc.example"
TX_HASH = "0x5c504ed432cb51138bcf09aa5e8a410dd4a1e204ef84bfed1be16dfba1b22060"


class FakeConsoleMessage:  # pylint: disable=too-few-public-methods
    def __init__(self, text: str) -> None:
        self.text = text


class FakeLocator:
    def __init__(self, page: FakePage, selector: str) -> None:
        self._page = page
        self._selector = selector

    async def fill(self, value: str) -> None:
        self._page.actions.append(("fill", self._selector, value))

    async def click(self) -> None:
        self._page.actions.append(("click", self._selector))

    async def select_option(self, value: str) -> None:
        self._page.actions.append(("select_option", self._selector, value))

    async def inner_text(self) -> str:
        return self._page.text_for(self._selector)


class FakePage:
    """Records page interactions; element text is scripted per selector.

    A list value renders one entry per read and then keeps showing the last one.
    """

    def __init__(self, texts: dict[str, Any] | None = None) -> None:
        self.texts: dict[str, Any] = dict(texts or {})
        self.actions: list[tuple[Any, ...]] = []
        self.listeners: dict[str, list[Callable[[Any], None]]] = {}
        self.url = "about:blank"
        self.close_calls = 0
        self.context: Any = None

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def text_for(self, selector: str) -> str:
        value = self.texts.get(selector, "")
        if isinstance(value, list):
            return value.pop(0) if len(value) > 1 else (value[0] if value else "")
        return value

    async def goto(self, url: str) -> None:
        self.url = url
        self.actions.append(("goto", url))

    async def evaluate(self, expression: str, argument: Any = None) -> Any:
        self.actions.append(("evaluate", expression, argument))
        return None

    def on(self, event: str, handler: Callable[[Any], None]) -> None:
        self.actions.append(("listen", event))
        self.listeners.setdefault(event, []).append(handler)

    def remove_listener(self, event: str, handler: Callable[[Any], None]) -> None:
        self.listeners[event].remove(handler)

    def emit_console(self, text: str) -> None:
        for handler in list(self.listeners.get("console", [])):
            handler(FakeConsoleMessage(text))

    async def close(self) -> None:
        self.close_calls += 1


class FakeWallet:
    """Wallet driver that updates the fake dApp page the way the real wallet would."""

    def __init__(
        self,
        page: FakePage,
        *,
        chain_id_text: str = "0x1a4",
        account_text: str = HARDHAT_ADDRESS,
        tx_hash: str = TX_HASH,
        receipt_status: str = "0x1",
        mining_delay_seconds: float = 0.0,
    ) -> None:
        self._page = page
        self._chain_id_text = chain_id_text
        self._account_text = account_text
        self._tx_hash = tx_hash
        self._receipt_status = receipt_status
        self._mining_delay_seconds = mining_delay_seconds
        self.calls: list[str] = []
        self.added_networks: list[NetworkSpec] = []

    async def setup_wallet(self, secret_material: str, password: str) -> None:
        self.calls.append("setup_wallet")

    async def add_network(self, network: NetworkSpec) -> None:
        self.calls.append("add_network")
        self.added_networks.append(network)
        self._page.texts["#chainId"] = self._chain_id_text

    async def accept_access(self) -> None:
        self.calls.append("accept_access")
        self._page.texts["#accounts"] = self._account_text

    async def confirm_transaction_and_wait_for_mining(self) -> None:
        self.calls.append("confirm_transaction_and_wait_for_mining")
        self._page.emit_console(self._tx_hash)
        await asyncio.sleep(self._mining_delay_seconds)
        self._page.texts["body > main"] = [
            "",
            "Response: null",
            f'Response: {{"status":"{self._receipt_status}","transactionHash":"{self._tx_hash}"}}',
        ]


class RecordingReporter:  # pylint: disable=too-few-public-methods
    def __init__(self) -> None:
        self.reports: list[bool] = []

    def report(self, succeeded: bool) -> None:
        self.reports.append(succeeded)


def fast_settings() -> HarnessSettings:
    return HarnessSettings(
        timeouts=TimeoutSettings(
            setup_stage_seconds=5,
            network_stage_seconds=5,
            connect_stage_seconds=5,
            transaction_stage_seconds=5,
            mining_seconds=1,
            console_capture_seconds=1,
            receipt_poll_seconds=1,
            receipt_poll_interval_seconds=0.01,
            receipt_poll_backoff=1.0,
            ui_assertion_seconds=0.1,
        )
    )


def run_config() -> RunConfig:
    return RunConfig(
        secret_material=HARDHAT_PRIVATE_KEY,
        rpc_url=RPC_URL,
        dapp_url=DAPP_URL,
        expected_sender=HARDHAT_ADDRESS,
        expected_recipient=HARDHAT_ADDRESS,
    )


def make_context(
    page: FakePage,
    wallet: Any,
    reporter: RecordingReporter,
    *,
    settings: HarnessSettings | None = None,
) -> StageContext:
    async def _open() -> BrowserSession:
        return BrowserSession(page)

    return StageContext(
        config=run_config(),
        settings=settings or fast_settings(),
        outcome=OutcomeRecorder(reporter),
        open_session=_open,
        wallet_factory=lambda _session: wallet,
    )
