"""Tests for signing identity derivation."""

import pytest
from fakes import SIGNER, SIGNER_KEY, SIGNER_MNEMONIC

from ddns.chain.identity import derive_account, is_mnemonic
from ddns.errors import InvalidSecret


class TestDeriveAccount:
    def test_private_key(self) -> None:
        assert derive_account(SIGNER_KEY).address == SIGNER

    def test_private_key_without_prefix(self) -> None:
        assert derive_account(SIGNER_KEY[2:]).address == SIGNER

    def test_private_key_with_whitespace(self) -> None:
        assert derive_account(f"  {SIGNER_KEY}\n").address == SIGNER

    def test_mnemonic(self) -> None:
        assert derive_account(SIGNER_MNEMONIC).address == SIGNER

    def test_mnemonic_extra_spaces(self) -> None:
        assert derive_account("  " + SIGNER_MNEMONIC.replace(" ", "   ")).address == SIGNER

    def test_other_derivation_path(self) -> None:
        account = derive_account(SIGNER_MNEMONIC, "m/44'/60'/0'/0/1")
        assert account.address == "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

    @pytest.mark.parametrize("secret", [
        "",
        "   ",
        "garbage",
        "0x1234",
        "zz" * 32,
        "not a real mnemonic phrase at all",
    ])
    def test_rejected(self, secret: str) -> None:
        with pytest.raises(InvalidSecret):
            derive_account(secret)

    def test_secret_not_echoed(self) -> None:
        bad = "zz" * 32
        with pytest.raises(InvalidSecret) as info:
            derive_account(bad)
        assert bad not in str(info.value)


class TestIsMnemonic:
    def test_words(self) -> None:
        assert is_mnemonic(SIGNER_MNEMONIC)

    def test_key(self) -> None:
        assert not is_mnemonic(SIGNER_KEY)
