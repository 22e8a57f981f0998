"""Browser session exports."""

from .console_capture import ConsoleCaptureTimeout, ConsoleMessageCapture
from .page_polling import PollTimeoutError, poll_until
from .session_handle import BrowserSession, BrowserSessionError

__all__ = [
    "BrowserSession",
    "BrowserSessionError",
    "ConsoleCaptureTimeout",
    "ConsoleMessageCapture",
    "PollTimeoutError",
    "poll_until",
]
