"""Registry family data model.

Each naming system is a member of a closed enum. Everything that differs
between families (suffixes, accepted content types, how the record is
stored, where the registry lives on each chain) is carried as data in a
FamilySpec rather than as per-family classes.

Supported combinations:

    ENS  .eth                                  ipfs-ns, swarm-ns
    CNS  .crypto                               ipfs-ns
    UNS  .coin .wallet .bitcoin .x .888 .nft   ipfs-ns
         .dao .blockchain
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from ddns.errors import UnsupportedContentType


class RegistryFamily(str, enum.Enum):
    """The naming systems a domain can belong to."""
    ENS = "ENS"
    CNS = "CNS"  # Unstoppable Domains, legacy .crypto registry
    UNS = "UNS"  # Unstoppable Domains, unified registry


class ContentType(str, enum.Enum):
    """Content-addressing scheme of a content hash."""
    IPFS = "ipfs-ns"
    SWARM = "swarm-ns"

    @classmethod
    def parse(cls, value: str) -> "ContentType":
        """Look up a content type by its tag, case-insensitively."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise UnsupportedContentType(value) from None


@dataclass(frozen=True)
class FamilySpec:
    """Static description of a registry family."""
    family: RegistryFamily
    suffixes: frozenset[str]
    content_types: frozenset[ContentType]
    write_method: str
    registries: dict[int, str]
    record_keys: dict[ContentType, str]

    def registry_address(self, chain_id: int) -> Optional[str]:
        return self.registries.get(chain_id)

    def record_key(self, content_type: ContentType) -> Optional[str]:
        return self.record_keys.get(content_type)


_ENS_REGISTRY = "0x00000000000c2e074ec69a0dfb2997ba6c7d2e1e"

FAMILY_SPECS: dict[RegistryFamily, FamilySpec] = {
    RegistryFamily.ENS: FamilySpec(
        family=RegistryFamily.ENS,
        suffixes=frozenset({"eth"}),
        content_types=frozenset({ContentType.IPFS, ContentType.SWARM}),
        write_method="setContenthash(bytes32,bytes)",
        registries={
            1: _ENS_REGISTRY,
            3: _ENS_REGISTRY,
            4: _ENS_REGISTRY,
            5: _ENS_REGISTRY,
            11155111: _ENS_REGISTRY,
        },
        record_keys={},
    ),
    RegistryFamily.CNS: FamilySpec(
        family=RegistryFamily.CNS,
        suffixes=frozenset({"crypto"}),
        content_types=frozenset({ContentType.IPFS}),
        write_method="set(string,string,uint256)",
        registries={
            1: "0xd1e5b0ff1287aa9f9a268759062e4ab08b9dacbe",
            4: "0xaad76bea7cfec82927239415bb18d2e93518ecbb",
        },
        record_keys={ContentType.IPFS: "ipfs.html.value"},
    ),
    RegistryFamily.UNS: FamilySpec(
        family=RegistryFamily.UNS,
        suffixes=frozenset({
            "coin", "wallet", "bitcoin", "x", "888", "nft", "dao", "blockchain",
        }),
        content_types=frozenset({ContentType.IPFS}),
        write_method="set(string,string,uint256)",
        registries={
            1: "0x049aba7510f45ba5b64ea9e658e342f904db358d",
            4: "0x7fb83000b8ed59d3ead22f0d584df3a85fbc0086",
            5: "0x070e83fced225184e67c86302493fffcdb953f71",
            137: "0xa9a6a3626993d487d2dbda3173cf58ca1a9d9e9f",
            80001: "0x2a93c52e7b6e7054870758e15a1446e769edfb93",
        },
        record_keys={ContentType.IPFS: "ipfs.html.value"},
    ),
}


def family_spec(family: RegistryFamily) -> FamilySpec:
    return FAMILY_SPECS[family]
