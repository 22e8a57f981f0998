"""Transaction receipt entities and rendered-response parsing."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .dapp_page import ERROR_PREFIX, RESPONSE_PREFIX

RECEIPT_SUCCESS_STATUS = "0x1"
RECEIPT_FAILURE_STATUS = "0x0"


class ReceiptParseError(Exception):
    """Raised when the rendered diagnostic response is not a usable receipt."""


@dataclass(frozen=True)
class TransactionReceipt:
    """Receipt fields the run inspects; the rest is kept in `raw`."""

    status: str
    transaction_hash: str | None
    block_number: str | None
    raw: Mapping[str, Any] = field(repr=False)

    @property
    def succeeded(self) -> bool:
        return self.status == RECEIPT_SUCCESS_STATUS

    @staticmethod
    def from_rpc_payload(payload: Mapping[str, Any]) -> TransactionReceipt:
        status = payload.get("status")
        if not isinstance(status, str):
            raise ReceiptParseError("Transaction receipt has no status field.")
        return TransactionReceipt(
            status=status.lower(),
            transaction_hash=payload.get("transactionHash"),
            block_number=payload.get("blockNumber"),
            raw=dict(payload),
        )


def parse_receipt_response(rendered_text: str) -> TransactionReceipt | None:
    """Parse `Response: <json>` page text.

    Returns None while the response is not rendered yet or the node reports no
    receipt (pending transaction).

    Raises:
      ReceiptParseError: If the page shows an RPC error or a malformed body.
    """
    text = rendered_text.strip()
    if text.startswith(ERROR_PREFIX.strip()):
        raise ReceiptParseError(f"Receipt query failed: {text}")
    if not text.startswith(RESPONSE_PREFIX.strip()):
        return None
    body = text[len(RESPONSE_PREFIX.strip()) :].strip()
    if not body:
        return None
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as exc:
        raise ReceiptParseError(f"Receipt response is not valid JSON: {exc}") from exc
    if payload is None:
        return None
    if not isinstance(payload, Mapping):
        raise ReceiptParseError("Receipt response must be a JSON object.")
    return TransactionReceipt.from_rpc_payload(payload)
