"""Update plan and result models.

A plan is everything needed to submit the write: the contract, the
method, and its already-encoded arguments. It is built only after the
name has been found and the signer authorized, and it is immutable, so
a dry run can stop right after planning without side effects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ddns.models.registry import ContentType, RegistryFamily


def _hex(value: bytes) -> str:
    return "0x" + value.hex()


@dataclass(frozen=True)
class UpdatePlan:
    """The resolved write for one name."""
    family: RegistryFamily
    name: str
    node: bytes
    chain_id: int
    signer: str
    contract: str
    method: str
    args: tuple[Any, ...]
    content_type: ContentType
    content_hash: str
    record: bytes

    def describe(self) -> dict[str, Any]:
        """Return a JSON-serialisable description of the plan."""
        return {
            "family": self.family.value,
            "name": self.name,
            "node": _hex(self.node),
            "chainId": self.chain_id,
            "signer": self.signer,
            "contract": self.contract,
            "method": self.method,
            "args": [_hex(a) if isinstance(a, bytes) else a for a in self.args],
            "contentType": self.content_type.value,
            "contentHash": self.content_hash,
            "record": _hex(self.record),
        }


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of an update.

    A dry run carries the plan and no transaction. A live run carries the
    transaction hash and the block it was confirmed in; it is only ever
    constructed after a successful receipt.
    """
    plan: UpdatePlan
    dry_run: bool
    tx_hash: Optional[str] = None
    block_number: Optional[int] = None

    @property
    def confirmed(self) -> bool:
        return self.tx_hash is not None and self.block_number is not None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"dryRun": self.dry_run, "plan": self.plan.describe()}
        if not self.dry_run:
            data["txHash"] = self.tx_hash
            data["blockNumber"] = self.block_number
            data["confirmed"] = self.confirmed
        return data
