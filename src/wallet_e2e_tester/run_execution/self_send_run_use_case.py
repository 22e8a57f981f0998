"""Self-send run use-case service."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping

from wallet_e2e_tester.browser_session.browser_launcher import open_browser_session
from wallet_e2e_tester.browser_session.session_handle import BrowserSession
from wallet_e2e_tester.configuration import (
    ConfigurationError,
    HarnessSettings,
    RunConfig,
    load_harness_settings,
    read_environment,
    resolve_run_config,
)
from wallet_e2e_tester.outcome_reporting import (
    OutcomeRecorder,
    OutcomeReporter,
    PushgatewayOutcomeReporter,
)
from wallet_e2e_tester.stage_sequencing import StageContext, run_stages
from wallet_e2e_tester.stage_sequencing.stage_contracts import SessionOpener, WalletFactory
from wallet_e2e_tester.wallet_driving import MetaMaskExtensionDriver, WalletDriver

from .run_contracts import RunOutcome, RunRequest
from .self_send_stages import build_self_send_stages


class RunExecutionError(Exception):
    """Raised when a run use case cannot be started."""


def execute_self_send_run(
    request: RunRequest,
    *,
    environ: Mapping[str, str] | None = None,
    reporter: OutcomeReporter | None = None,
    session_opener: SessionOpener | None = None,
    wallet_factory: WalletFactory | None = None,
) -> RunOutcome:
    """Resolve configuration, then run the self-send stages and return their outcome.

    Configuration problems raise RunExecutionError before any browser starts
    and without reporting an outcome.
    """
    config, settings = _load_run_configuration(request, environ)
    context = StageContext(
        config=config,
        settings=settings,
        outcome=OutcomeRecorder(reporter or PushgatewayOutcomeReporter(settings.metrics)),
        open_session=session_opener or _default_session_opener(settings),
        wallet_factory=wallet_factory or _default_wallet_factory(settings),
    )
    sequence = asyncio.run(run_stages(build_self_send_stages(config, settings), context))
    return RunOutcome(sequence=sequence, expected_sender=config.expected_sender)


def _load_run_configuration(
    request: RunRequest, environ: Mapping[str, str] | None
) -> tuple[RunConfig, HarnessSettings]:
    try:
        source = environ if environ is not None else read_environment(request.env_file)
        config = resolve_run_config(source)
        settings = load_harness_settings(request.settings_path, source=source)
    except ConfigurationError as exc:
        raise RunExecutionError(str(exc)) from exc
    return config, settings


def _default_session_opener(settings: HarnessSettings) -> SessionOpener:
    async def _open() -> BrowserSession:
        return await open_browser_session(settings.browser)

    return _open


def _default_wallet_factory(settings: HarnessSettings) -> WalletFactory:
    def _attach(session: BrowserSession) -> WalletDriver:
        return MetaMaskExtensionDriver(
            session,
            mining_timeout_seconds=settings.timeouts.mining_seconds,
        )

    return _attach
