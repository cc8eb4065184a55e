"""Resolver locator — finds the contract to write and checks the signer may write it.

For every family the name is first resolved to its record identifier
(namehash), then ownership is read from live chain state and compared
with the signing identity. Only when the name exists and the signer is
the owner or an approved operator is an UpdatePlan produced:

    ENS  owner(node) -> isApprovedForAll -> resolver(node) -> setContenthash
    CNS  ownerOf(id) -> isApprovedOrOwner -> resolverOf(id) -> set(key, value, id)
    UNS  ownerOf(id) -> isApprovedOrOwner -> registry       -> set(key, value, id)

The same reads run for dry runs, so a dry run fails exactly where a
live run would.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

import structlog
from eth_utils import to_checksum_address

from ddns.errors import CallReverted, DomainNotFound, NotAuthorized, UnsupportedNetwork
from ddns.models.registry import ContentType, FamilySpec, RegistryFamily, family_spec
from ddns.models.update import UpdatePlan
from ddns.registry import abi
from ddns.registry.namehash import namehash, token_id

if TYPE_CHECKING:
    from ddns.chain.client import ChainClient

log = structlog.get_logger(__name__)


def _is_zero(address: str | None) -> bool:
    return not address or int(address, 16) == 0


def _same(a: str, b: str) -> bool:
    return to_checksum_address(a) == to_checksum_address(b)


class ResolverLocator:
    """Builds authorized UpdatePlans against one chain client."""

    def __init__(self, client: "ChainClient") -> None:
        self._client = client
        self._strategies: dict[RegistryFamily, Callable[..., UpdatePlan]] = {
            RegistryFamily.ENS: self._locate_ens,
            RegistryFamily.CNS: self._locate_cns,
            RegistryFamily.UNS: self._locate_uns,
        }

    def locate(
        self,
        family: RegistryFamily,
        name: str,
        content_type: ContentType,
        content_hash: str,
        record: bytes,
    ) -> UpdatePlan:
        """Resolve ``name`` and return the plan that writes ``record``.

        Args:
            family: Family returned by the classifier.
            name: Normalized domain name.
            content_type: Tag the record was encoded under.
            content_hash: Canonical human form of the content hash.
            record: Encoded content-hash record.

        Raises:
            UnsupportedNetwork: No registry for the family on this chain.
            DomainNotFound: The name has no owner or no resolver.
            NotAuthorized: The signer is neither owner nor operator.
        """
        spec = family_spec(family)
        chain_id = self._client.chain_id
        registry = spec.registry_address(chain_id)
        if registry is None:
            raise UnsupportedNetwork(family.value, chain_id)
        registry = to_checksum_address(registry)
        node = namehash(name)
        log.debug("locating", family=family.value, name=name, registry=registry, node="0x" + node.hex())
        return self._strategies[family](
            spec, registry, name, node, content_type, content_hash, record,
        )

    # ------------------------------------------------------------------ #
    # ENS                                                                 #
    # ------------------------------------------------------------------ #

    def _locate_ens(
        self,
        spec: FamilySpec,
        registry: str,
        name: str,
        node: bytes,
        content_type: ContentType,
        content_hash: str,
        record: bytes,
    ) -> UpdatePlan:
        signer = self._client.address
        owner = self._client.call(registry, abi.ENS_OWNER, (node,))
        if _is_zero(owner):
            raise DomainNotFound(name)
        if not _same(owner, signer) and not self._client.call(
            registry, abi.ENS_IS_APPROVED_FOR_ALL, (owner, signer),
        ):
            raise NotAuthorized(name, signer, owner)
        resolver = self._client.call(registry, abi.ENS_RESOLVER, (node,))
        if _is_zero(resolver):
            raise DomainNotFound(name, "no resolver set")
        return self._plan(
            spec, name, node, to_checksum_address(resolver),
            (node, record), content_type, content_hash, record,
        )

    # ------------------------------------------------------------------ #
    # Unstoppable Domains                                                 #
    # ------------------------------------------------------------------ #

    def _authorize_token(self, registry: str, name: str, token: int) -> None:
        signer = self._client.address
        try:
            owner = self._client.call(registry, abi.UD_OWNER_OF, (token,))
        except CallReverted:
            # ERC-721 ownerOf reverts for tokens that were never minted
            raise DomainNotFound(name) from None
        if _is_zero(owner):
            raise DomainNotFound(name)
        if not self._client.call(registry, abi.UD_IS_APPROVED_OR_OWNER, (signer, token)):
            raise NotAuthorized(name, signer, owner)

    def _text_args(self, spec: FamilySpec, content_type: ContentType, content_hash: str, token: int) -> tuple[Any, ...]:
        key = spec.record_key(content_type)
        return (key, content_hash, token)

    def _locate_cns(
        self,
        spec: FamilySpec,
        registry: str,
        name: str,
        node: bytes,
        content_type: ContentType,
        content_hash: str,
        record: bytes,
    ) -> UpdatePlan:
        token = token_id(name)
        self._authorize_token(registry, name, token)
        resolver = self._client.call(registry, abi.CNS_RESOLVER_OF, (token,))
        if _is_zero(resolver):
            raise DomainNotFound(name, "no resolver set")
        return self._plan(
            spec, name, node, to_checksum_address(resolver),
            self._text_args(spec, content_type, content_hash, token),
            content_type, content_hash, record,
        )

    def _locate_uns(
        self,
        spec: FamilySpec,
        registry: str,
        name: str,
        node: bytes,
        content_type: ContentType,
        content_hash: str,
        record: bytes,
    ) -> UpdatePlan:
        token = token_id(name)
        self._authorize_token(registry, name, token)
        # UNS registries store records themselves
        return self._plan(
            spec, name, node, registry,
            self._text_args(spec, content_type, content_hash, token),
            content_type, content_hash, record,
        )

    def _plan(
        self,
        spec: FamilySpec,
        name: str,
        node: bytes,
        contract: str,
        args: tuple[Any, ...],
        content_type: ContentType,
        content_hash: str,
        record: bytes,
    ) -> UpdatePlan:
        return UpdatePlan(
            family=spec.family,
            name=name,
            node=node,
            chain_id=self._client.chain_id,
            signer=self._client.address,
            contract=contract,
            method=spec.write_method,
            args=args,
            content_type=content_type,
            content_hash=content_hash,
            record=record,
        )


def locate(
    family: RegistryFamily,
    name: str,
    client: "ChainClient",
    content_type: ContentType,
    content_hash: str,
    record: bytes,
) -> UpdatePlan:
    return ResolverLocator(client).locate(family, name, content_type, content_hash, record)
