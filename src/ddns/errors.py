"""Error taxonomy for a DDNS update.

Every failure is fatal to the invocation that raised it. Nothing in the
package retries: transient RPC trouble surfaces as UnreachableEndpoint or
TransactionTimeout and the caller decides what to do next.

Validation errors (UnsupportedDomain, UnsupportedContentType,
MalformedContentHash) are raised before any network I/O. Resolution
errors (DomainNotFound, NotAuthorized) are raised after reading chain
state but before anything is written.
"""

from __future__ import annotations

from typing import Optional


class DdnsError(Exception):
    """Base class for every error the update pipeline can raise."""


class UnsupportedDomain(DdnsError):
    """The name's suffix does not belong to any known registry family."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unsupported domain: {name!r}")


class UnsupportedContentType(DdnsError):
    """The content type is unknown, or not accepted by the name's family."""

    def __init__(self, content_type: str, family: Optional[str] = None) -> None:
        self.content_type = content_type
        self.family = family
        if family is None:
            message = f"Unsupported content type: {content_type!r}"
        else:
            message = f"Content type {content_type!r} is not supported by {family}"
        super().__init__(message)


class MalformedContentHash(DdnsError):
    """The content hash does not decode under the declared content type."""

    def __init__(self, value: str, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Malformed content hash {value!r}: {reason}")


class InvalidSecret(DdnsError):
    """The mnemonic or private key cannot produce a signing identity.

    The secret itself is never included in the message.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid secret: {reason}")


class UnreachableEndpoint(DdnsError):
    """The RPC endpoint did not answer."""

    def __init__(self, rpc_url: str, reason: str = "no response") -> None:
        self.rpc_url = rpc_url
        self.reason = reason
        super().__init__(f"RPC endpoint unreachable ({reason}): {rpc_url}")


class UnsupportedNetwork(DdnsError):
    """The connected chain has no registry deployment for the family."""

    def __init__(self, family: str, chain_id: int) -> None:
        self.family = family
        self.chain_id = chain_id
        super().__init__(f"{family} has no registry on chain {chain_id}")


class DomainNotFound(DdnsError):
    """The name has no owner (or no resolver) on the connected chain."""

    def __init__(self, name: str, reason: str = "not registered") -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Domain not found: {name} ({reason})")


class NotAuthorized(DdnsError):
    """The signing identity may not write records for the name."""

    def __init__(self, name: str, signer: str, owner: Optional[str] = None) -> None:
        self.name = name
        self.signer = signer
        self.owner = owner
        detail = f", owner: {owner}" if owner else ""
        super().__init__(f"{signer} is not authorized to update {name}{detail}")


class CallReverted(DdnsError):
    """A read-only contract call reverted.

    Raised by ChainClient.call; the locator turns it into a resolution
    error, so it does not normally reach the caller.
    """

    def __init__(self, method: str, reason: str) -> None:
        self.method = method
        self.reason = reason
        super().__init__(f"Call to {method} reverted: {reason}")


class TransactionReverted(DdnsError):
    """The network rejected the transaction."""

    def __init__(self, reason: str, tx_hash: Optional[str] = None) -> None:
        self.reason = reason
        self.tx_hash = tx_hash
        suffix = f" (tx {tx_hash})" if tx_hash else ""
        super().__init__(f"Transaction reverted: {reason}{suffix}")


class TransactionTimeout(DdnsError):
    """The transaction was not included within the wait window."""

    def __init__(self, tx_hash: str, timeout: float) -> None:
        self.tx_hash = tx_hash
        self.timeout = timeout
        super().__init__(f"Transaction {tx_hash} not confirmed after {timeout:g}s")
