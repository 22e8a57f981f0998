"""Write-once run verdict tracking."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .metrics_reporter import OutcomeReporter

logger = logging.getLogger(__name__)


@dataclass
class OutcomeState:
    """Mutable verdict flags for one run."""

    succeeded: bool = False
    failure_reported: bool = False

    @property
    def verdict_emitted(self) -> bool:
        return self.succeeded or self.failure_reported


class OutcomeRecorder:
    """Emits at most one verdict per run through the outcome reporter."""

    def __init__(self, reporter: OutcomeReporter) -> None:
        self._reporter = reporter
        self._state = OutcomeState()

    @property
    def state(self) -> OutcomeState:
        return self._state

    @property
    def succeeded(self) -> bool:
        return self._state.succeeded

    def record_success(self) -> bool:
        """Mark the run successful and report it. Returns False if a verdict already exists."""
        if self._state.verdict_emitted:
            logger.warning("Ignoring success verdict; run verdict was already reported.")
            return False
        self._state.succeeded = True
        self._reporter.report(True)
        return True

    def record_failure(self, reason: str) -> bool:
        """Mark the run failed and report it. Returns False if a verdict already exists."""
        if self._state.verdict_emitted:
            logger.debug("Failure already accounted for, not reporting again: %s", reason)
            return False
        self._state.failure_reported = True
        logger.error("Run failed: %s", reason)
        self._reporter.report(False)
        return True

    def finalize(self) -> bool:
        """Report a failure when the run ended without any verdict."""
        if self._state.verdict_emitted:
            return False
        return self.record_failure("run ended without reporting a verdict")
