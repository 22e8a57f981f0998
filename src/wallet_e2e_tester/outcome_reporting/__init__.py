"""Outcome reporting exports."""

from .metrics_reporter import SELF_SEND_METRIC_NAME, OutcomeReporter, PushgatewayOutcomeReporter
from .outcome_state import OutcomeRecorder, OutcomeState

__all__ = [
    "SELF_SEND_METRIC_NAME",
    "OutcomeReporter",
    "PushgatewayOutcomeReporter",
    "OutcomeRecorder",
    "OutcomeState",
]
