"""Stage sequencing exports."""

from .stage_contracts import (
    SequenceOutcome,
    Stage,
    StageContext,
    StageContextError,
    StageResult,
    StageStatus,
)
from .stage_sequencer import finish_run, run_stages

__all__ = [
    "Stage",
    "StageContext",
    "StageContextError",
    "StageResult",
    "StageStatus",
    "SequenceOutcome",
    "run_stages",
    "finish_run",
]
