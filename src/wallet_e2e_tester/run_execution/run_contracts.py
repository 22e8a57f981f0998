"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass

from wallet_e2e_tester.stage_sequencing.stage_contracts import SequenceOutcome


@dataclass(frozen=True)
class RunRequest:
    """Input contract for executing one run."""

    settings_path: str | None = None
    env_file: str | None = None


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one completed run."""

    sequence: SequenceOutcome
    expected_sender: str

    @property
    def succeeded(self) -> bool:
        return self.sequence.succeeded
