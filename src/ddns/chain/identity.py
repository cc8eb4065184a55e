"""Signing identity derivation.

The secret is either a BIP-39 mnemonic (several words) or a raw hex
private key, with or without ``0x``. A mnemonic derives the first
account on the default Ethereum path ``m/44'/60'/0'/0/0``.
"""

from __future__ import annotations

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import ValidationError

from ddns.errors import InvalidSecret

DEFAULT_DERIVATION_PATH = "m/44'/60'/0'/0/0"

Account.enable_unaudited_hdwallet_features()


def is_mnemonic(secret: str) -> bool:
    return len(secret.split()) > 1


def derive_account(secret: str, derivation_path: str = DEFAULT_DERIVATION_PATH) -> LocalAccount:
    """Derive the signing account for ``secret``.

    Raises:
        InvalidSecret: The value is neither a valid mnemonic nor a valid
            private key.
    """
    value = (secret or "").strip()
    if not value:
        raise InvalidSecret("empty secret")
    if is_mnemonic(value):
        phrase = " ".join(value.split())
        try:
            return Account.from_mnemonic(phrase, account_path=derivation_path)
        except (ValueError, ValidationError) as exc:
            raise InvalidSecret(f"mnemonic rejected ({type(exc).__name__})") from None
    key = value if value.lower().startswith("0x") else "0x" + value
    if len(key) != 66:
        raise InvalidSecret("private key must be 32 bytes of hex")
    try:
        return Account.from_key(key)
    except (ValueError, TypeError, ValidationError) as exc:
        raise InvalidSecret(f"private key rejected ({type(exc).__name__})") from None
