"""DDNS service — the update executor and the package entry point.

One call updates one name:

    1. validate inputs, classify the name            (local)
    2. check the family accepts the content type     (local)
    3. encode the content hash                       (local)
    4. connect: derive the signer, check the RPC     (network)
    5. locate the write target, authorize the signer (chain reads)
    6. dry run: return the plan
    7. otherwise send the transaction, once

Each step short-circuits on failure. Steps 1-3 never construct a chain
client; steps 1-6 never write chain state; step 7 is never retried.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Union

import structlog

from ddns import codec
from ddns.chain.client import DEFAULT_TX_TIMEOUT, ChainClient
from ddns.errors import InvalidSecret, MalformedContentHash, UnreachableEndpoint, UnsupportedDomain
from ddns.models.registry import ContentType, RegistryFamily
from ddns.models.update import UpdatePlan, UpdateResult
from ddns.observability import configure_logging
from ddns.registry import abi
from ddns.registry.classifier import classify, normalize_name, require_content_type
from ddns.registry.locator import ResolverLocator

log = structlog.get_logger(__name__)

ClientFactory = Callable[[str, str], ChainClient]


@dataclass(frozen=True)
class PreparedUpdate:
    """Result of the local steps: everything known before connecting."""
    name: str
    family: RegistryFamily
    content_type: ContentType
    content_hash: str
    record: bytes


class DdnsService:
    """Update executor.

    Usage:
        service = DdnsService()
        result = service.update(secret, rpc_url, "example.eth", "Qm...", dry_run=True)

    ``client_factory`` builds the chain client from (secret, rpc_url);
    tests pass a fake here.
    """

    def __init__(
        self,
        client_factory: Optional[ClientFactory] = None,
        tx_timeout: float = DEFAULT_TX_TIMEOUT,
    ) -> None:
        self._tx_timeout = tx_timeout
        self._client_factory = client_factory or self._default_factory

    def _default_factory(self, secret: str, rpc_url: str) -> ChainClient:
        return ChainClient(secret, rpc_url, tx_timeout=self._tx_timeout)

    def prepare(
        self,
        name: str,
        content_hash: str,
        content_type: Union[ContentType, str] = ContentType.IPFS,
    ) -> PreparedUpdate:
        """Run the local steps (classify, check content type, encode)."""
        if not name or not name.strip():
            raise UnsupportedDomain(name or "")
        if not content_hash or not content_hash.strip():
            raise MalformedContentHash(content_hash or "", "empty value")

        normalized = normalize_name(name)
        family = classify(normalized)
        tag = require_content_type(family, content_type)
        record = codec.encode(content_hash, tag)
        human, _ = codec.decode(record)
        if human != content_hash.strip():
            # text-record families store this form, not the one supplied
            log.debug("content_hash_canonicalized", supplied=content_hash.strip(), canonical=human)
        log.debug("update_prepared", name=normalized, family=family.value, content_type=tag.value)
        return PreparedUpdate(
            name=normalized,
            family=family,
            content_type=tag,
            content_hash=human,
            record=record,
        )

    def plan(self, client: ChainClient, prepared: PreparedUpdate) -> UpdatePlan:
        """Locate and authorize against live chain state."""
        return ResolverLocator(client).locate(
            prepared.family,
            prepared.name,
            prepared.content_type,
            prepared.content_hash,
            prepared.record,
        )

    def update(
        self,
        secret: str,
        rpc_url: str,
        name: str,
        content_hash: str,
        content_type: Union[ContentType, str] = ContentType.IPFS,
        dry_run: bool = False,
    ) -> UpdateResult:
        """Update the content hash of ``name``.

        Returns:
            UpdateResult carrying the plan, plus the confirmed
            transaction for a live run.

        Raises:
            DdnsError: any member of the taxonomy in ``ddns.errors``.
        """
        if not secret or not secret.strip():
            raise InvalidSecret("empty secret")
        if not rpc_url or not rpc_url.strip():
            raise UnreachableEndpoint(rpc_url or "", "empty endpoint")

        prepared = self.prepare(name, content_hash, content_type)
        client = self._client_factory(secret, rpc_url)
        plan = self.plan(client, prepared)
        log.info(
            "update_planned",
            name=plan.name,
            family=plan.family.value,
            chain_id=plan.chain_id,
            contract=plan.contract,
            method=plan.method,
            signer=plan.signer,
            dry_run=dry_run,
        )

        if dry_run:
            return UpdateResult(plan=plan, dry_run=True)

        sent = client.send(plan.contract, abi.WRITE_METHODS[plan.method], plan.args)
        log.info("update_confirmed", name=plan.name, tx_hash=sent.tx_hash, block_number=sent.block_number)
        return UpdateResult(
            plan=plan,
            dry_run=False,
            tx_hash=sent.tx_hash,
            block_number=sent.block_number,
        )


def update(
    secret: str,
    rpc_url: str,
    name: str,
    content_hash: str,
    content_type: Union[ContentType, str] = ContentType.IPFS,
    dry_run: bool = False,
    verbose: bool = False,
    tx_timeout: float = DEFAULT_TX_TIMEOUT,
) -> UpdateResult:
    """Entry point: update one name's content hash, or simulate it."""
    if verbose:
        configure_logging(verbose=True)
    service = DdnsService(tx_timeout=tx_timeout)
    return service.update(secret, rpc_url, name, content_hash, content_type, dry_run)
