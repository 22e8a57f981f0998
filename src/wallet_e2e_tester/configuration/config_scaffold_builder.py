"""Harness settings scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_SETTINGS_FILENAME = "harness.yaml"

_SETTINGS_SCAFFOLD_TEMPLATE = """# Harness settings template for wallet-e2e-tester.
# Every key is optional; the values below are the built-in defaults.
# Required settings are read from the environment (or --env-file):
#   METAMASK_SECRET_WORDS_OR_PRIVATEKEY  private key (0x...) or mnemonic
#   METAMASK_OP_GOERLI_RPC_URL           RPC URL registered on the wallet
#   METAMASK_DAPP_URL                    base URL of the test dApp
# Optional environment overrides:
#   METAMASK_EXTENSION_PATH              unpacked wallet extension directory
#   PROMETHEUS_PUSHGATEWAY_URL           Pushgateway receiving the run verdict

network:
  name: "op-goerli"
  chain_id: 420
  currency_symbol: "OPG"
  block_explorer_url: "https://goerli-explorer.optimism.io"

transfer:
  # Hex quantities submitted through the dApp send form.
  amount: "0x1"
  transaction_type: "0x2"

timeouts:
  setup_stage_seconds: 120
  network_stage_seconds: 60
  connect_stage_seconds: 60
  # Mining, console capture and receipt polling all run inside the transaction stage.
  transaction_stage_seconds: 300
  mining_seconds: 180
  console_capture_seconds: 60
  receipt_poll_seconds: 30
  receipt_poll_interval_seconds: 0.5
  receipt_poll_backoff: 1.5
  ui_assertion_seconds: 10

browser:
  # extension_path: "<OPTIONAL>"
  headless: false
  slow_mo_ms: 0
  wallet_password: "Tester@1234"

metrics:
  # pushgateway_url: "<OPTIONAL>"
  job_name: "ufm-test-services-metamask"
  push_timeout_seconds: 5
"""


def build_placeholder_configuration() -> str:
    """Build a YAML harness settings template with defaults and inline guidance."""
    return _SETTINGS_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the harness settings template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Settings file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
