"""Sender address derivation from wallet secret material."""

from __future__ import annotations

import re

from eth_account import Account
from eth_utils import ValidationError

DEFAULT_DERIVATION_PATH = "m/44'/60'/0'/0/0"

_WHITESPACE = re.compile(r"\s+")


class AccountDerivationError(ValueError):
    """Raised when secret material is neither a private key nor a mnemonic."""


def is_private_key(secret_material: str) -> bool:
    """Return True when the secret has the direct private-key shape."""
    return secret_material.strip().startswith("0x")


def derive_address(secret_material: str, *, account_path: str = DEFAULT_DERIVATION_PATH) -> str:
    """Derive the lower-cased account address for a private key or mnemonic.

    Args:
      secret_material: `0x`-prefixed hex private key, or a BIP-39 mnemonic.
      account_path: HD derivation path used for mnemonics.

    Returns:
      The checksum-free, lower-cased `0x` address.

    Raises:
      AccountDerivationError: If the secret cannot be turned into an account.
    """
    secret = secret_material.strip()
    if not secret:
        raise AccountDerivationError("Secret material must not be empty.")
    try:
        if is_private_key(secret):
            account = Account.from_key(secret)
        else:
            Account.enable_unaudited_hdwallet_features()
            account = Account.from_mnemonic(
                normalize_mnemonic(secret), account_path=account_path
            )
    except (ValueError, TypeError, ValidationError) as exc:
        kind = "private key" if is_private_key(secret) else "mnemonic"
        raise AccountDerivationError(f"Secret material is not a valid {kind}.") from exc
    return str(account.address).lower()


def normalize_mnemonic(mnemonic: str) -> str:
    return _WHITESPACE.sub(" ", mnemonic.strip()).lower()
