"""Wallet driver exports."""

from .metamask_driver import MetaMaskExtensionDriver
from .wallet_contracts import WalletDriver, WalletDriverError

__all__ = ["WalletDriver", "WalletDriverError", "MetaMaskExtensionDriver"]
