"""Test dApp element ids and diagnostic request URLs."""

from __future__ import annotations

import json
from collections.abc import Sequence
from urllib.parse import urlencode

CHAIN_ID_FIELD = "#chainId"
ACCOUNTS_FIELD = "#accounts"
CONNECT_BUTTON = "#connectButton"
RECIPIENT_INPUT = "#toInput"
AMOUNT_INPUT = "#amountInput"
TRANSACTION_TYPE_SELECT = "#typeInput"
SUBMIT_FORM_BUTTON = "#submitForm"
RESPONSE_BODY = "body > main"

RESPONSE_PREFIX = "Response: "
ERROR_PREFIX = "Error: "


def build_request_url(dapp_url: str, method: str, params: Sequence[object]) -> str:
    """Build the dApp `request.html` URL that renders a provider RPC response."""
    query = urlencode({"method": method, "params": json.dumps(list(params))})
    return f"{dapp_url.rstrip('/')}/request.html?{query}"
