"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class RunConfig:
    """Environment-derived settings for one self-send run."""

    secret_material: str = field(repr=False)
    rpc_url: str
    dapp_url: str
    expected_sender: str
    expected_recipient: str


@dataclass(frozen=True)
class NetworkSpec:
    """Custom network registered on the wallet before connecting."""

    name: str
    chain_id: int
    rpc_url: str
    currency_symbol: str
    block_explorer_url: str | None

    @property
    def expected_chain_id_hex(self) -> str:
        """Chain id as rendered by the dApp, e.g. `0x1a4` for 420."""
        return hex(self.chain_id)


@dataclass(frozen=True)
class NetworkSettings:
    """Network profile without the RPC URL, which comes from the environment."""

    name: str = "op-goerli"
    chain_id: int = 420
    currency_symbol: str = "OPG"
    block_explorer_url: str | None = "https://goerli-explorer.optimism.io"

    def with_rpc_url(self, rpc_url: str) -> NetworkSpec:
        return NetworkSpec(
            name=self.name,
            chain_id=self.chain_id,
            rpc_url=rpc_url,
            currency_symbol=self.currency_symbol,
            block_explorer_url=self.block_explorer_url,
        )


@dataclass(frozen=True)
class TransferSettings:
    """Transfer form values submitted through the dApp."""

    amount: str = "0x1"
    transaction_type: str = "0x2"


@dataclass(frozen=True)
class TimeoutSettings:  # pylint: disable=too-many-instance-attributes
    """Stage deadlines and receipt polling policy, in seconds."""

    setup_stage_seconds: float = 120.0
    network_stage_seconds: float = 60.0
    connect_stage_seconds: float = 60.0
    transaction_stage_seconds: float = 300.0
    mining_seconds: float = 180.0
    console_capture_seconds: float = 60.0
    receipt_poll_seconds: float = 30.0
    receipt_poll_interval_seconds: float = 0.5
    receipt_poll_backoff: float = 1.5
    ui_assertion_seconds: float = 10.0


@dataclass(frozen=True)
class BrowserSettings:
    """Chromium launch options for the wallet-enabled browser."""

    extension_path: Path | None = None
    headless: bool = False
    slow_mo_ms: int = 0
    wallet_password: str = field(default="Tester@1234", repr=False)


@dataclass(frozen=True)
class MetricsSettings:
    """Pushgateway target for the aggregate run verdict."""

    pushgateway_url: str | None = None
    job_name: str = "ufm-test-services-metamask"
    push_timeout_seconds: float = 5.0


@dataclass(frozen=True)
class HarnessSettings:
    """Top-level harness settings aggregate."""

    path: Path | None = None
    network: NetworkSettings = field(default_factory=NetworkSettings)
    transfer: TransferSettings = field(default_factory=TransferSettings)
    timeouts: TimeoutSettings = field(default_factory=TimeoutSettings)
    browser: BrowserSettings = field(default_factory=BrowserSettings)
    metrics: MetricsSettings = field(default_factory=MetricsSettings)
