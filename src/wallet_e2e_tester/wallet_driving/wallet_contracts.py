"""Wallet driver contract consumed by the stages."""

from __future__ import annotations

from typing import Protocol

from wallet_e2e_tester.configuration.runtime_settings import NetworkSpec


class WalletDriverError(Exception):
    """Raised when a wallet automation step cannot be completed."""


class WalletDriver(Protocol):
    """Operations the stages need from the wallet extension automation."""

    async def setup_wallet(self, secret_material: str, password: str) -> None: ...

    async def add_network(self, network: NetworkSpec) -> None: ...

    async def accept_access(self) -> None: ...

    async def confirm_transaction_and_wait_for_mining(self) -> None: ...
