"""ABI fragments for the contract methods the updater touches.

Only single-method fragments are kept; the chain client builds a
one-method contract object per call, so no full ABI JSON is shipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ContractMethod:
    """One contract function: name, input types, output types."""
    name: str
    inputs: tuple[str, ...]
    outputs: tuple[str, ...] = ()
    view: bool = True

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    def abi(self) -> dict[str, Any]:
        return {
            "type": "function",
            "name": self.name,
            "inputs": [{"name": f"arg{i}", "type": t} for i, t in enumerate(self.inputs)],
            "outputs": [{"name": "", "type": t} for t in self.outputs],
            "stateMutability": "view" if self.view else "nonpayable",
        }


# ENS registry
ENS_OWNER = ContractMethod("owner", ("bytes32",), ("address",))
ENS_RESOLVER = ContractMethod("resolver", ("bytes32",), ("address",))
ENS_IS_APPROVED_FOR_ALL = ContractMethod("isApprovedForAll", ("address", "address"), ("bool",))

# ENS public resolver
ENS_SET_CONTENTHASH = ContractMethod("setContenthash", ("bytes32", "bytes"), view=False)

# Unstoppable Domains registries (CNS and UNS)
UD_OWNER_OF = ContractMethod("ownerOf", ("uint256",), ("address",))
UD_IS_APPROVED_OR_OWNER = ContractMethod("isApprovedOrOwner", ("address", "uint256"), ("bool",))
CNS_RESOLVER_OF = ContractMethod("resolverOf", ("uint256",), ("address",))

# CNS resolver and UNS registry
UD_SET = ContractMethod("set", ("string", "string", "uint256"), view=False)

WRITE_METHODS: dict[str, ContractMethod] = {
    m.signature: m for m in (ENS_SET_CONTENTHASH, UD_SET)
}
