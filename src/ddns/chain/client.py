"""Chain client — one network connection and one signing identity.

Thin seam over web3: read-only calls for ownership checks, and a single
signed transaction for the record write. All web3/requests exceptions
are translated here into the package's error taxonomy.

Usage:
    client = ChainClient(secret, rpc_url)
    owner = client.call(registry, abi.ENS_OWNER, (node,))
    sent = client.send(resolver, abi.ENS_SET_CONTENTHASH, (node, record))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

import structlog
from requests.exceptions import RequestException
from web3 import HTTPProvider, Web3
from web3.exceptions import (
    BadFunctionCallOutput,
    ContractLogicError,
    TimeExhausted,
    Web3Exception,
    Web3RPCError,
)
from web3.middleware import ExtraDataToPOAMiddleware

from ddns.chain.identity import derive_account
from ddns.errors import (
    CallReverted,
    TransactionReverted,
    TransactionTimeout,
    UnreachableEndpoint,
)
from ddns.registry.abi import ContractMethod

log = structlog.get_logger(__name__)

DEFAULT_TX_TIMEOUT = 300.0
DEFAULT_REQUEST_TIMEOUT = 30.0

# Clique / Bor chains whose block headers carry extra-data
POA_CHAIN_IDS = frozenset({4, 5, 137, 80001})


@dataclass(frozen=True)
class SentTransaction:
    """A transaction that has been mined with status 1."""
    tx_hash: str
    block_number: int


def _revert_reason(exc: Web3Exception) -> str:
    message = getattr(exc, "message", None) or str(exc)
    return message or "execution reverted"


class ChainClient:
    """Network connection plus signing identity for one invocation.

    Construction derives the account first, then checks the endpoint,
    so a bad secret is reported without any network traffic.

    Raises (construction):
        InvalidSecret: The secret does not parse.
        UnreachableEndpoint: The RPC endpoint does not answer.
    """

    def __init__(
        self,
        secret: str,
        rpc_url: str,
        tx_timeout: float = DEFAULT_TX_TIMEOUT,
        web3: Optional[Web3] = None,
    ) -> None:
        self._account = derive_account(secret)
        self.rpc_url = rpc_url
        self._tx_timeout = tx_timeout
        self._w3 = web3 or Web3(
            HTTPProvider(rpc_url, request_kwargs={"timeout": DEFAULT_REQUEST_TIMEOUT})
        )

        try:
            connected = self._w3.is_connected()
            chain_id = int(self._w3.eth.chain_id) if connected else None
        except (RequestException, Web3Exception) as exc:
            raise UnreachableEndpoint(rpc_url, type(exc).__name__) from None
        if chain_id is None:
            raise UnreachableEndpoint(rpc_url)
        self._chain_id = chain_id

        if chain_id in POA_CHAIN_IDS:
            self._w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

        log.debug("chain_connected", chain_id=chain_id, signer=self.address)

    @property
    def address(self) -> str:
        return self._account.address

    @property
    def chain_id(self) -> int:
        return self._chain_id

    def _function(self, contract: str, method: ContractMethod, args: Sequence[Any]) -> Any:
        instance = self._w3.eth.contract(
            address=Web3.to_checksum_address(contract),
            abi=[method.abi()],
        )
        return getattr(instance.functions, method.name)(*args)

    def call(self, contract: str, method: ContractMethod, args: Sequence[Any] = ()) -> Any:
        """Run a read-only call and return the decoded result.

        Raises:
            CallReverted: The call reverted, or returned nothing decodable
                (no contract code at ``contract``).
            UnreachableEndpoint: The endpoint stopped answering or
                refused the request.
        """
        try:
            return self._function(contract, method, args).call()
        except (ContractLogicError, BadFunctionCallOutput) as exc:
            raise CallReverted(method.signature, _revert_reason(exc)) from None
        except Web3RPCError as exc:
            raise UnreachableEndpoint(self.rpc_url, _revert_reason(exc)) from None
        except RequestException as exc:
            raise UnreachableEndpoint(self.rpc_url, type(exc).__name__) from None

    def send(self, contract: str, method: ContractMethod, args: Sequence[Any] = ()) -> SentTransaction:
        """Sign, submit and wait for one transaction.

        Gas is estimated while building the transaction, so a call that
        would revert is rejected before anything is broadcast.

        Raises:
            TransactionReverted: Estimation reverted, the node refused the
                transaction (insufficient funds, stale nonce), or the
                mined transaction has status 0.
            TransactionTimeout: No receipt within the wait window.
            UnreachableEndpoint: The endpoint stopped answering.
        """
        try:
            tx = self._function(contract, method, args).build_transaction({
                "from": self.address,
                "chainId": self._chain_id,
                "nonce": self._w3.eth.get_transaction_count(self.address, "pending"),
            })
            signed = self._account.sign_transaction(tx)
            raw_hash = self._w3.eth.send_raw_transaction(signed.raw_transaction)
        except (ContractLogicError, Web3RPCError) as exc:
            raise TransactionReverted(_revert_reason(exc)) from None
        except RequestException as exc:
            raise UnreachableEndpoint(self.rpc_url, type(exc).__name__) from None

        tx_hash = Web3.to_hex(raw_hash)
        log.info("transaction_submitted", tx_hash=tx_hash, contract=contract, method=method.signature)

        try:
            receipt = self._w3.eth.wait_for_transaction_receipt(raw_hash, timeout=self._tx_timeout)
        except TimeExhausted:
            raise TransactionTimeout(tx_hash, self._tx_timeout) from None
        except RequestException as exc:
            raise UnreachableEndpoint(self.rpc_url, type(exc).__name__) from None

        if receipt["status"] != 1:
            raise TransactionReverted("transaction failed on-chain", tx_hash)
        return SentTransaction(tx_hash=tx_hash, block_number=int(receipt["blockNumber"]))
