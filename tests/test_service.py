"""Tests for the update executor."""

from __future__ import annotations

import pytest
from fakes import IPFS_HASH, OTHER, SIGNER, SIGNER_KEY, SWARM_HASH, ZERO, FakeChainClient
from multiformats import CID
from structlog.testing import capture_logs

from ddns import codec
from ddns.errors import (
    DomainNotFound,
    InvalidSecret,
    MalformedContentHash,
    NotAuthorized,
    TransactionTimeout,
    UnreachableEndpoint,
    UnsupportedContentType,
    UnsupportedDomain,
)
from ddns.models.registry import ContentType, RegistryFamily
from ddns.service import DdnsService

RPC = "http://localhost:8545"


class RecordingFactory:
    """Client factory that hands out one fake and records its use."""

    def __init__(self, client: FakeChainClient) -> None:
        self.client = client
        self.requests: list[tuple[str, str]] = []

    def __call__(self, secret: str, rpc_url: str) -> FakeChainClient:
        self.requests.append((secret, rpc_url))
        return self.client


@pytest.fixture
def factory(client: FakeChainClient) -> RecordingFactory:
    return RecordingFactory(client)


@pytest.fixture
def service(factory: RecordingFactory) -> DdnsService:
    return DdnsService(client_factory=factory)


class TestScenarios:
    def test_dry_run_ens(self, service: DdnsService, client: FakeChainClient) -> None:
        client.register_ens("example.eth", SIGNER)
        result = service.update(SIGNER_KEY, RPC, "example.eth", IPFS_HASH, "ipfs-ns", dry_run=True)
        assert result.dry_run
        assert result.plan.family is RegistryFamily.ENS
        assert result.tx_hash is None
        assert not result.confirmed
        assert client.calls  # ownership was read
        assert client.sent == []

    def test_cns_rejects_swarm_before_connecting(self, service: DdnsService, factory: RecordingFactory) -> None:
        with pytest.raises(UnsupportedContentType):
            service.update(SIGNER_KEY, RPC, "example.crypto", SWARM_HASH, "swarm-ns")
        assert factory.requests == []

    def test_unregistered_uns_name(self, service: DdnsService, client: FakeChainClient) -> None:
        with pytest.raises(DomainNotFound):
            service.update(SIGNER_KEY, RPC, "nosuchdomain123.wallet", IPFS_HASH)
        assert client.sent == []

    def test_foreign_owner(self, service: DdnsService, client: FakeChainClient) -> None:
        client.register_ens("example.eth", OTHER)
        with pytest.raises(NotAuthorized):
            service.update(SIGNER_KEY, RPC, "example.eth", IPFS_HASH)
        assert client.sent == []


class TestValidation:
    @pytest.mark.parametrize("name", ["example.com", "", "   ", "eth"])
    def test_bad_name_never_connects(self, service: DdnsService, factory: RecordingFactory, name: str) -> None:
        with pytest.raises(UnsupportedDomain):
            service.update(SIGNER_KEY, RPC, name, IPFS_HASH)
        assert factory.requests == []

    @pytest.mark.parametrize("content_hash", ["", "QmNotAHash"])
    def test_bad_hash_never_connects(
        self, service: DdnsService, factory: RecordingFactory, content_hash: str,
    ) -> None:
        with pytest.raises(MalformedContentHash):
            service.update(SIGNER_KEY, RPC, "example.eth", content_hash)
        assert factory.requests == []

    def test_unknown_content_type(self, service: DdnsService, factory: RecordingFactory) -> None:
        with pytest.raises(UnsupportedContentType):
            service.update(SIGNER_KEY, RPC, "example.eth", IPFS_HASH, "onion")
        assert factory.requests == []

    def test_empty_secret(self, service: DdnsService, factory: RecordingFactory) -> None:
        with pytest.raises(InvalidSecret):
            service.update("", RPC, "example.eth", IPFS_HASH)
        assert factory.requests == []

    def test_empty_rpc(self, service: DdnsService, factory: RecordingFactory) -> None:
        with pytest.raises(UnreachableEndpoint):
            service.update(SIGNER_KEY, " ", "example.eth", IPFS_HASH)
        assert factory.requests == []


class TestPrepare:
    def test_normalizes_and_encodes(self, service: DdnsService) -> None:
        prepared = service.prepare(" Example.ETH. ", IPFS_HASH)
        assert prepared.name == "example.eth"
        assert prepared.family is RegistryFamily.ENS
        assert prepared.content_type is ContentType.IPFS
        assert prepared.record == codec.encode(IPFS_HASH)
        assert prepared.content_hash == IPFS_HASH

    def test_swarm_hash_canonicalized(self, service: DdnsService) -> None:
        prepared = service.prepare("example.eth", "0x" + SWARM_HASH.upper(), "swarm-ns")
        assert prepared.content_hash == SWARM_HASH


class TestLiveRun:
    def test_sends_once(self, service: DdnsService, client: FakeChainClient) -> None:
        client.register_ens("example.eth", SIGNER)
        result = service.update(SIGNER_KEY, RPC, "example.eth", IPFS_HASH)
        assert not result.dry_run
        assert result.confirmed
        assert result.tx_hash == "0x" + "ab" * 32
        assert result.block_number == 1234
        assert len(client.sent) == 1
        contract, method, args = client.sent[0]
        assert contract == result.plan.contract
        assert method == "setContenthash(bytes32,bytes)"
        assert args == result.plan.args

    def test_uns_write(self, service: DdnsService, client: FakeChainClient) -> None:
        client.register_ud(RegistryFamily.UNS, "example.wallet", SIGNER)
        service.update(SIGNER_KEY, RPC, "example.wallet", IPFS_HASH)
        assert client.sent[0][1] == "set(string,string,uint256)"
        assert client.sent[0][2][:2] == ("ipfs.html.value", IPFS_HASH)

    def test_dry_and_live_agree(self, client: FakeChainClient) -> None:
        client.register_ens("example.eth", SIGNER)
        service = DdnsService(client_factory=RecordingFactory(client))
        dry = service.update(SIGNER_KEY, RPC, "example.eth", IPFS_HASH, dry_run=True)
        live = service.update(SIGNER_KEY, RPC, "example.eth", IPFS_HASH)
        assert dry.plan == live.plan

    def test_send_failure_not_retried(self, service: DdnsService, client: FakeChainClient) -> None:
        client.register_ens("example.eth", SIGNER)
        client.send_error = TransactionTimeout("0x" + "ab" * 32, 300)
        with pytest.raises(TransactionTimeout):
            service.update(SIGNER_KEY, RPC, "example.eth", IPFS_HASH)
        assert len(client.sent) == 1

    def test_factory_receives_inputs(self, service: DdnsService, factory: RecordingFactory,
                                     client: FakeChainClient) -> None:
        client.register_ens("example.eth", SIGNER)
        service.update(SIGNER_KEY, RPC, "example.eth", IPFS_HASH, dry_run=True)
        assert factory.requests == [(SIGNER_KEY, RPC)]


class TestResultDescription:
    def test_dry_run_dict(self, service: DdnsService, client: FakeChainClient) -> None:
        client.register_ens("example.eth", SIGNER)
        data = service.update(SIGNER_KEY, RPC, "example.eth", IPFS_HASH, dry_run=True).to_dict()
        assert data["dryRun"] is True
        assert "txHash" not in data
        assert data["plan"]["record"] == "0x" + codec.encode(IPFS_HASH).hex()
        assert data["plan"]["args"][0].startswith("0x")

    def test_live_dict(self, service: DdnsService, client: FakeChainClient) -> None:
        client.register_ens("example.eth", SIGNER)
        data = service.update(SIGNER_KEY, RPC, "example.eth", IPFS_HASH).to_dict()
        assert data["txHash"] == "0x" + "ab" * 32
        assert data["blockNumber"] == 1234
        assert data["confirmed"] is True


class TestFailureParity:
    @pytest.mark.parametrize("state,error", [
        ("foreign_owner", NotAuthorized),
        ("unregistered", DomainNotFound),
        ("no_resolver", DomainNotFound),
    ])
    @pytest.mark.parametrize("dry_run", [True, False])
    def test_same_failure_either_way(self, state: str, error: type, dry_run: bool) -> None:
        client = FakeChainClient()
        if state == "foreign_owner":
            client.register_ens("example.eth", OTHER)
        elif state == "no_resolver":
            client.register_ens("example.eth", SIGNER, resolver=ZERO)
        service = DdnsService(client_factory=RecordingFactory(client))
        with pytest.raises(error):
            service.update(SIGNER_KEY, RPC, "example.eth", IPFS_HASH, dry_run=dry_run)
        assert client.sent == []

    @pytest.mark.parametrize("dry_run", [True, False])
    def test_uns_foreign_owner_either_way(self, dry_run: bool) -> None:
        client = FakeChainClient()
        client.register_ud(RegistryFamily.UNS, "example.wallet", OTHER)
        service = DdnsService(client_factory=RecordingFactory(client))
        with pytest.raises(NotAuthorized):
            service.update(SIGNER_KEY, RPC, "example.wallet", IPFS_HASH, dry_run=dry_run)
        assert client.sent == []


class TestNormalizedNames:
    def test_fullwidth_name_targets_registered_node(self, service: DdnsService, client: FakeChainClient) -> None:
        client.register_ens("example.eth", SIGNER)
        result = service.update(SIGNER_KEY, RPC, "ｅxample.eth", IPFS_HASH, dry_run=True)
        assert result.plan.name == "example.eth"


class TestCanonicalization:
    def test_rewritten_hash_is_logged(self, service: DdnsService) -> None:
        supplied = str(CID.decode(IPFS_HASH).set(base="base32", version=1))
        with capture_logs() as logs:
            prepared = service.prepare("example.crypto", supplied)
        assert prepared.content_hash == IPFS_HASH
        events = [e for e in logs if e["event"] == "content_hash_canonicalized"]
        assert events == [{
            "event": "content_hash_canonicalized",
            "log_level": "debug",
            "supplied": supplied,
            "canonical": IPFS_HASH,
        }]

    def test_canonical_input_not_logged(self, service: DdnsService) -> None:
        with capture_logs() as logs:
            service.prepare("example.crypto", IPFS_HASH)
        assert all(e["event"] != "content_hash_canonicalized" for e in logs)
