"""EIP-137 namehash over ENSIP-15 normalized names.

Every supported registry identifies a name by its namehash: ENS uses it
as the ``bytes32`` node, the Unstoppable registries use the same value
as the ERC-721 ``uint256`` token id. Names are normalized with the
``ens`` package bundled with web3 before hashing, so visually equal
spellings (``Ｅxample.eth``, ``EXAMPLE.eth``) map to the node the
registries actually use.
"""

from __future__ import annotations

from ens._normalization import normalize_name_ensip15
from ens.utils import normal_name_to_hash

EMPTY_NODE = b"\x00" * 32


def normalize(name: str) -> str:
    """ENSIP-15 normalize ``name``.

    Raises:
        ens.exceptions.InvalidName: The name contains disallowed
            characters or an empty label.
    """
    if not name:
        return ""
    return normalize_name_ensip15(name).as_text


def namehash(name: str) -> bytes:
    """Compute the 32-byte namehash of a dot-separated name."""
    if not name:
        return EMPTY_NODE
    return bytes(normal_name_to_hash(normalize(name)))


def token_id(name: str) -> int:
    return int.from_bytes(namehash(name), "big")
