"""Stage sequencing entities."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from wallet_e2e_tester.browser_session.session_handle import BrowserSession
from wallet_e2e_tester.configuration.runtime_settings import HarnessSettings, RunConfig
from wallet_e2e_tester.outcome_reporting.outcome_state import OutcomeRecorder
from wallet_e2e_tester.wallet_driving.wallet_contracts import WalletDriver

logger = logging.getLogger(__name__)

SessionOpener = Callable[[], Awaitable[BrowserSession]]
WalletFactory = Callable[[BrowserSession], WalletDriver]


class StageContextError(Exception):
    """Raised when a stage needs session state that has not been set up."""


class StageStatus(str, Enum):
    """Stage execution outcome status."""

    PASSED = "passed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class StageResult:
    """Outcome of running one stage."""

    stage_name: str
    status: StageStatus
    duration_seconds: float
    error_message: str | None

    @property
    def ok(self) -> bool:
        return self.status == StageStatus.PASSED

    @staticmethod
    def passed(stage_name: str, duration_seconds: float = 0.0) -> StageResult:
        return StageResult(
            stage_name=stage_name,
            status=StageStatus.PASSED,
            duration_seconds=duration_seconds,
            error_message=None,
        )

    @staticmethod
    def failed(
        stage_name: str, error: Exception | str, duration_seconds: float = 0.0
    ) -> StageResult:
        return StageResult(
            stage_name=stage_name,
            status=StageStatus.FAILED,
            duration_seconds=duration_seconds,
            error_message=str(error) or type(error).__name__,
        )

    @staticmethod
    def timed_out(stage_name: str, timeout_seconds: float, duration_seconds: float) -> StageResult:
        return StageResult(
            stage_name=stage_name,
            status=StageStatus.TIMED_OUT,
            duration_seconds=duration_seconds,
            error_message=f"Stage exceeded its {timeout_seconds:g}s deadline.",
        )

    @staticmethod
    def skipped(stage_name: str) -> StageResult:
        return StageResult(
            stage_name=stage_name,
            status=StageStatus.SKIPPED,
            duration_seconds=0.0,
            error_message=None,
        )


StageFunction = Callable[["StageContext"], Awaitable[StageResult]]


@dataclass(frozen=True)
class Stage:
    """Named step of the run with its hard deadline."""

    name: str
    run: StageFunction
    timeout_seconds: float


@dataclass
class StageContext:  # pylint: disable=too-many-instance-attributes
    """State owned by the sequencer and borrowed by every stage."""

    config: RunConfig
    settings: HarnessSettings
    outcome: OutcomeRecorder
    open_session: SessionOpener
    wallet_factory: WalletFactory
    session: BrowserSession | None = None
    wallet: WalletDriver | None = None

    async def start_session(self) -> BrowserSession:
        """Open the run's only browser session and attach the wallet driver to it."""
        if self.session is not None:
            raise StageContextError("Browser session is already open for this run.")
        self.session = await self.open_session()
        self.wallet = self.wallet_factory(self.session)
        return self.session

    def require_session(self) -> BrowserSession:
        if self.session is None:
            raise StageContextError("Browser session has not been opened by an earlier stage.")
        return self.session

    def require_wallet(self) -> WalletDriver:
        if self.wallet is None:
            raise StageContextError("Wallet driver has not been attached by an earlier stage.")
        return self.wallet

    async def release_session(self) -> None:
        """Close the shared session if one was opened; close errors are logged."""
        if self.session is None:
            return
        try:
            await self.session.close()
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.warning("Failed to close browser session: %s", exc)


@dataclass(frozen=True)
class SequenceOutcome:
    """Ordered stage results plus the overall verdict."""

    results: tuple[StageResult, ...]
    succeeded: bool

    @property
    def first_failure(self) -> StageResult | None:
        for result in self.results:
            if result.status in (StageStatus.FAILED, StageStatus.TIMED_OUT):
                return result
        return None
