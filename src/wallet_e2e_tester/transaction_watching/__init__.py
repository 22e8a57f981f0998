"""Transaction watching exports."""

from .confirmation_watcher import (
    TransactionConfirmationWatcher,
    TransferRequest,
    looks_like_transaction_hash,
)
from .dapp_page import build_request_url
from .receipt_models import (
    RECEIPT_FAILURE_STATUS,
    RECEIPT_SUCCESS_STATUS,
    ReceiptParseError,
    TransactionReceipt,
    parse_receipt_response,
)

__all__ = [
    "TransactionConfirmationWatcher",
    "TransferRequest",
    "looks_like_transaction_hash",
    "build_request_url",
    "RECEIPT_FAILURE_STATUS",
    "RECEIPT_SUCCESS_STATUS",
    "ReceiptParseError",
    "TransactionReceipt",
    "parse_receipt_response",
]
