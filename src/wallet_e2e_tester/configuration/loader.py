"""Environment resolver and harness settings loader."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml
from dotenv import dotenv_values

from .account_derivation import AccountDerivationError, derive_address
from .runtime_settings import (
    BrowserSettings,
    HarnessSettings,
    MetricsSettings,
    NetworkSettings,
    RunConfig,
    TimeoutSettings,
    TransferSettings,
)

SECRET_ENV_VAR = "METAMASK_SECRET_WORDS_OR_PRIVATEKEY"
RPC_URL_ENV_VAR = "METAMASK_OP_GOERLI_RPC_URL"
DAPP_URL_ENV_VAR = "METAMASK_DAPP_URL"
EXTENSION_PATH_ENV_VAR = "METAMASK_EXTENSION_PATH"
PUSHGATEWAY_URL_ENV_VAR = "PROMETHEUS_PUSHGATEWAY_URL"


class ConfigurationError(Exception):
    """Raised when the run configuration is missing or invalid."""


def read_environment(env_file: Path | str | None = None) -> dict[str, str]:
    """Merge a `.env` file with the process environment (process values win)."""
    values: dict[str, str] = {}
    if env_file is not None:
        env_path = Path(env_file)
        if not env_path.exists():
            raise ConfigurationError(f"Environment file not found: {env_path}")
        values.update(
            {key: value for key, value in dotenv_values(env_path).items() if value is not None}
        )
    values.update(os.environ)
    return values


def resolve_run_config(source: Mapping[str, str]) -> RunConfig:
    """Validate the required settings and derive the expected self-send addresses."""
    secret_material = _require_non_empty_string(source.get(SECRET_ENV_VAR), SECRET_ENV_VAR)
    rpc_url = _require_url(source.get(RPC_URL_ENV_VAR), RPC_URL_ENV_VAR)
    dapp_url = _require_url(source.get(DAPP_URL_ENV_VAR), DAPP_URL_ENV_VAR)
    try:
        expected_sender = derive_address(secret_material)
    except AccountDerivationError as exc:
        raise ConfigurationError(f"{SECRET_ENV_VAR}: {exc}") from exc
    return RunConfig(
        secret_material=secret_material,
        rpc_url=rpc_url,
        dapp_url=dapp_url.rstrip("/"),
        expected_sender=expected_sender,
        expected_recipient=expected_sender,
    )


def load_harness_settings(
    settings_path: Path | str | None = None,
    *,
    source: Mapping[str, str] | None = None,
) -> HarnessSettings:
    """Load optional YAML harness settings and apply environment overrides."""
    environment = source if source is not None else {}
    parsed: Mapping[str, Any] = {}
    path: Path | None = None
    if settings_path is not None:
        path = Path(settings_path)
        parsed = _read_settings_document(path)

    browser = _parse_browser_section(parsed.get("browser"))
    extension_override = environment.get(EXTENSION_PATH_ENV_VAR)
    if extension_override:
        browser = BrowserSettings(
            extension_path=Path(extension_override).expanduser(),
            headless=browser.headless,
            slow_mo_ms=browser.slow_mo_ms,
            wallet_password=browser.wallet_password,
        )

    metrics = _parse_metrics_section(parsed.get("metrics"))
    pushgateway_override = environment.get(PUSHGATEWAY_URL_ENV_VAR)
    if pushgateway_override:
        metrics = MetricsSettings(
            pushgateway_url=_require_url(pushgateway_override, PUSHGATEWAY_URL_ENV_VAR),
            job_name=metrics.job_name,
            push_timeout_seconds=metrics.push_timeout_seconds,
        )

    return HarnessSettings(
        path=path,
        network=_parse_network_section(parsed.get("network")),
        transfer=_parse_transfer_section(parsed.get("transfer")),
        timeouts=_parse_timeouts_section(parsed.get("timeouts")),
        browser=browser,
        metrics=metrics,
    )


def _read_settings_document(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        raise ConfigurationError(f"Settings file not found: {path}")
    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse settings file: {exc}") from exc
    if parsed is None:
        return {}
    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Settings root must be a mapping.")
    return parsed


def _parse_network_section(value: Any) -> NetworkSettings:
    defaults = NetworkSettings()
    section = _optional_mapping(value, "network")
    explorer = section.get("block_explorer_url", defaults.block_explorer_url)
    return NetworkSettings(
        name=_require_non_empty_string(section.get("name", defaults.name), "network.name"),
        chain_id=_require_positive_int(
            section.get("chain_id", defaults.chain_id), "network.chain_id"
        ),
        currency_symbol=_require_non_empty_string(
            section.get("currency_symbol", defaults.currency_symbol),
            "network.currency_symbol",
        ),
        block_explorer_url=(
            None if explorer is None else _require_url(explorer, "network.block_explorer_url")
        ),
    )


def _parse_transfer_section(value: Any) -> TransferSettings:
    defaults = TransferSettings()
    section = _optional_mapping(value, "transfer")
    amount = _require_hex_quantity(section.get("amount", defaults.amount), "transfer.amount")
    if int(amount, 16) == 0:
        raise ConfigurationError("transfer.amount must be greater than zero.")
    return TransferSettings(
        amount=amount,
        transaction_type=_require_hex_quantity(
            section.get("transaction_type", defaults.transaction_type),
            "transfer.transaction_type",
        ),
    )


def _parse_timeouts_section(value: Any) -> TimeoutSettings:
    defaults = TimeoutSettings()
    section = _optional_mapping(value, "timeouts")
    parsed = {
        name: _require_positive_number(section.get(name, default), f"timeouts.{name}")
        for name, default in vars(defaults).items()
    }
    if parsed["receipt_poll_backoff"] < 1:
        raise ConfigurationError("timeouts.receipt_poll_backoff must be at least 1.")
    waits_in_transaction_stage = (
        parsed["mining_seconds"]
        + parsed["console_capture_seconds"]
        + parsed["receipt_poll_seconds"]
    )
    if waits_in_transaction_stage > parsed["transaction_stage_seconds"]:
        raise ConfigurationError(
            "timeouts.transaction_stage_seconds must be at least the sum of mining_seconds, "
            "console_capture_seconds and receipt_poll_seconds."
        )
    return TimeoutSettings(**parsed)


def _parse_browser_section(value: Any) -> BrowserSettings:
    defaults = BrowserSettings()
    section = _optional_mapping(value, "browser")
    extension_raw = section.get("extension_path")
    extension_path = None
    if extension_raw is not None:
        extension_path = Path(
            _require_non_empty_string(extension_raw, "browser.extension_path")
        ).expanduser()
    slow_mo_ms = section.get("slow_mo_ms", defaults.slow_mo_ms)
    if isinstance(slow_mo_ms, bool) or not isinstance(slow_mo_ms, int) or slow_mo_ms < 0:
        raise ConfigurationError("browser.slow_mo_ms must be a non-negative integer.")
    return BrowserSettings(
        extension_path=extension_path,
        headless=_require_bool(section.get("headless", defaults.headless), "browser.headless"),
        slow_mo_ms=slow_mo_ms,
        wallet_password=_require_non_empty_string(
            section.get("wallet_password", defaults.wallet_password),
            "browser.wallet_password",
        ),
    )


def _parse_metrics_section(value: Any) -> MetricsSettings:
    defaults = MetricsSettings()
    section = _optional_mapping(value, "metrics")
    pushgateway_url = section.get("pushgateway_url")
    return MetricsSettings(
        pushgateway_url=(
            None
            if pushgateway_url is None
            else _require_url(pushgateway_url, "metrics.pushgateway_url")
        ),
        job_name=_require_non_empty_string(
            section.get("job_name", defaults.job_name), "metrics.job_name"
        ),
        push_timeout_seconds=_require_positive_number(
            section.get("push_timeout_seconds", defaults.push_timeout_seconds),
            "metrics.push_timeout_seconds",
        ),
    )


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Settings section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if value is None:
        raise ConfigurationError(f"{field_name} is required.")
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_url(value: Any, field_name: str) -> str:
    url = _require_non_empty_string(value, field_name)
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConfigurationError(f"{field_name} must be a valid http(s) URL.")
    return url


def _require_hex_quantity(value: Any, field_name: str) -> str:
    text = _require_non_empty_string(value, field_name).lower()
    try:
        if not text.startswith("0x"):
            raise ValueError(text)
        int(text, 16)
    except ValueError as exc:
        raise ConfigurationError(f"{field_name} must be a 0x-prefixed hex quantity.") from exc
    return text


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value


def _require_positive_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{field_name} must be a number.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return float(value)


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value
