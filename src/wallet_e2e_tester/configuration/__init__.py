"""Configuration domain exports."""

from .account_derivation import AccountDerivationError, derive_address, is_private_key
from .config_scaffold_builder import (
    DEFAULT_SETTINGS_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import (
    ConfigurationError,
    load_harness_settings,
    read_environment,
    resolve_run_config,
)
from .runtime_settings import (
    BrowserSettings,
    HarnessSettings,
    MetricsSettings,
    NetworkSettings,
    NetworkSpec,
    RunConfig,
    TimeoutSettings,
    TransferSettings,
)

__all__ = [
    "RunConfig",
    "NetworkSpec",
    "NetworkSettings",
    "TransferSettings",
    "TimeoutSettings",
    "BrowserSettings",
    "MetricsSettings",
    "HarnessSettings",
    "AccountDerivationError",
    "derive_address",
    "is_private_key",
    "ConfigurationError",
    "read_environment",
    "resolve_run_config",
    "load_harness_settings",
    "DEFAULT_SETTINGS_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
