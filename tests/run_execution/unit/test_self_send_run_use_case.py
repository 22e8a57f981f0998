"""Self-send run use-case tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from support.fakes import (
    DAPP_URL,
    HARDHAT_ADDRESS,
    HARDHAT_MNEMONIC,
    HARDHAT_PRIVATE_KEY,
    RPC_URL,
    FakePage,
    FakeWallet,
    RecordingReporter,
)
from wallet_e2e_tester.browser_session.session_handle import BrowserSession
from wallet_e2e_tester.run_execution import (
    RunExecutionError,
    RunOutcome,
    RunRequest,
    execute_self_send_run,
)
from wallet_e2e_tester.configuration import load_harness_settings
from wallet_e2e_tester.run_execution import self_send_run_use_case
from wallet_e2e_tester.stage_sequencing import StageStatus

_FAST_SETTINGS = """\
timeouts:
  setup_stage_seconds: 5
  network_stage_seconds: 5
  connect_stage_seconds: 5
  transaction_stage_seconds: 5
  mining_seconds: 1
  console_capture_seconds: 1
  receipt_poll_seconds: 1
  receipt_poll_interval_seconds: 0.01
  receipt_poll_backoff: 1
  ui_assertion_seconds: 0.1
"""


def _environment(**overrides: str) -> dict[str, str]:
    values = {
        "METAMASK_SECRET_WORDS_OR_PRIVATEKEY": HARDHAT_PRIVATE_KEY,
        "METAMASK_OP_GOERLI_RPC_URL": RPC_URL,
        "METAMASK_DAPP_URL": f"{DAPP_URL}/",
    }
    values.update(overrides)
    return values


class _Harness:
    """Wires one fake page and wallet into the run use case."""

    def __init__(self, **wallet_options: object) -> None:
        self.page = FakePage()
        self.wallet = FakeWallet(self.page, **wallet_options)  # type: ignore[arg-type]
        self.reporter = RecordingReporter()
        self.sessions_opened = 0

    async def open_session(self) -> BrowserSession:
        self.sessions_opened += 1
        return BrowserSession(self.page)

    def attach_wallet(self, _session: BrowserSession) -> FakeWallet:
        return self.wallet

    def run(self, settings_path: Path, environ: dict[str, str] | None = None) -> RunOutcome:
        return execute_self_send_run(
            RunRequest(settings_path=str(settings_path)),
            environ=environ if environ is not None else _environment(),
            reporter=self.reporter,
            session_opener=self.open_session,
            wallet_factory=self.attach_wallet,
        )


@pytest.fixture()
def settings_path(tmp_path: Path) -> Path:
    path = tmp_path / "harness.yaml"
    path.write_text(_FAST_SETTINGS, encoding="utf-8")
    return path


def test_self_send_run_passes_every_stage_and_reports_success_once(settings_path: Path) -> None:
    harness = _Harness()

    outcome = harness.run(settings_path)

    assert outcome.succeeded is True
    assert outcome.expected_sender == HARDHAT_ADDRESS
    assert [result.stage_name for result in outcome.sequence.results] == [
        "Setup wallet and dApp",
        "Add op-goerli network",
        f"Connect wallet with {HARDHAT_ADDRESS}",
        "Send an EIP-1559 transaction and verify success",
    ]
    assert all(result.status == StageStatus.PASSED for result in outcome.sequence.results)
    assert harness.wallet.calls == [
        "setup_wallet",
        "add_network",
        "accept_access",
        "confirm_transaction_and_wait_for_mining",
    ]
    assert harness.reporter.reports == [True]
    assert harness.sessions_opened == 1
    assert harness.page.close_calls == 1


def test_self_send_run_uses_one_page_for_every_stage(settings_path: Path) -> None:
    harness = _Harness()

    harness.run(settings_path)

    visited = [action[1] for action in harness.page.actions if action[0] == "goto"]
    assert visited[0] == DAPP_URL
    assert visited[1].startswith(f"{DAPP_URL}/request.html?")
    assert ("click", "#connectButton") in harness.page.actions
    assert ("fill", "#toInput", HARDHAT_ADDRESS) in harness.page.actions
    assert harness.wallet.added_networks[0].rpc_url == RPC_URL


def test_self_send_run_with_mnemonic_targets_the_same_account(settings_path: Path) -> None:
    harness = _Harness()

    outcome = harness.run(
        settings_path,
        _environment(METAMASK_SECRET_WORDS_OR_PRIVATEKEY=f"  {HARDHAT_MNEMONIC.upper()} "),
    )

    assert outcome.expected_sender == HARDHAT_ADDRESS
    assert outcome.succeeded is True


def test_reverted_transaction_fails_final_stage_and_reports_failure_once(
    settings_path: Path,
) -> None:
    harness = _Harness(receipt_status="0x0")

    outcome = harness.run(settings_path)

    assert outcome.succeeded is False
    assert outcome.sequence.results[-1].status == StageStatus.FAILED
    assert "status 0x0" in (outcome.sequence.results[-1].error_message or "")
    assert harness.reporter.reports == [False]
    assert harness.page.close_calls == 1


def test_wrong_chain_id_stops_run_before_connecting(settings_path: Path) -> None:
    harness = _Harness(chain_id_text="0x5")

    outcome = harness.run(settings_path)

    assert [result.status for result in outcome.sequence.results] == [
        StageStatus.PASSED,
        StageStatus.FAILED,
        StageStatus.SKIPPED,
        StageStatus.SKIPPED,
    ]
    assert "accept_access" not in harness.wallet.calls
    assert harness.reporter.reports == [False]


def test_wrong_account_stops_run_before_sending(settings_path: Path) -> None:
    harness = _Harness(account_text="0x70997970c51812dc3a010c7d01b50e0d17dc79c8")

    outcome = harness.run(settings_path)

    assert [result.status for result in outcome.sequence.results] == [
        StageStatus.PASSED,
        StageStatus.PASSED,
        StageStatus.FAILED,
        StageStatus.SKIPPED,
    ]
    assert "confirm_transaction_and_wait_for_mining" not in harness.wallet.calls
    assert harness.reporter.reports == [False]
    assert harness.page.close_calls == 1


def test_missing_environment_value_fails_before_any_stage(settings_path: Path) -> None:
    harness = _Harness()
    environ = _environment()
    del environ["METAMASK_DAPP_URL"]

    with pytest.raises(RunExecutionError, match="METAMASK_DAPP_URL is required"):
        harness.run(settings_path, environ)

    assert harness.sessions_opened == 0
    assert harness.reporter.reports == []


def test_invalid_secret_material_fails_before_any_stage(settings_path: Path) -> None:
    harness = _Harness()

    with pytest.raises(RunExecutionError, match="METAMASK_SECRET_WORDS_OR_PRIVATEKEY"):
        harness.run(
            settings_path, _environment(METAMASK_SECRET_WORDS_OR_PRIVATEKEY="not a real phrase")
        )

    assert harness.sessions_opened == 0
    assert harness.reporter.reports == []


def test_default_wallet_driver_waits_for_mining_with_its_own_timeout(
    settings_path: Path,
) -> None:
    settings = load_harness_settings(settings_path)
    page = FakePage()
    page.context = object()

    factory = self_send_run_use_case._default_wallet_factory(  # pylint: disable=protected-access
        settings
    )
    driver = factory(BrowserSession(page))

    assert driver._mining_timeout_seconds == 1.0  # type: ignore[attr-defined]
