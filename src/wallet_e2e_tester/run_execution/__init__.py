"""Run execution domain exports."""

from .run_contracts import RunOutcome, RunRequest
from .self_send_run_use_case import RunExecutionError, execute_self_send_run
from .self_send_stages import build_self_send_stages

__all__ = [
    "RunRequest",
    "RunOutcome",
    "RunExecutionError",
    "execute_self_send_run",
    "build_self_send_stages",
]
