"""EIP-1577 content-hash codec.

A content-hash record is a namespace multicodec followed by a binary
CIDv1:

    ipfs-ns   e3 01 | 01 <codec> <multihash>
    swarm-ns  e4 01 | 01 fa01 1b 20 <32-byte keccak-256 hash>

``encode`` turns the human identifier (an IPFS CID string, or a Swarm
hash in hex) into that record; ``decode`` reverses it and reports the
content type it found. Decoding yields the canonical human form: CIDv0
for dag-pb/sha2-256 content, lowercase base32 CIDv1 for anything else,
bare lowercase hex for Swarm.

CID, multihash and varint handling comes from ``multiformats``.
"""

from __future__ import annotations

from typing import Union

from multiformats import CID, multicodec, multihash, varint

from ddns.errors import MalformedContentHash
from ddns.models.registry import ContentType

NAMESPACE_CODES: dict[ContentType, int] = {
    tag: multicodec.get(tag.value).code for tag in ContentType
}
_TYPES_BY_CODE = {code: tag for tag, code in NAMESPACE_CODES.items()}

SWARM_HASH_LENGTH = 32


def namespace_prefix(content_type: ContentType) -> bytes:
    return varint.encode(NAMESPACE_CODES[content_type])


def _parse_swarm(value: str) -> CID:
    text = value[2:] if value.lower().startswith("0x") else value
    if len(text) != SWARM_HASH_LENGTH * 2:
        raise ValueError(f"swarm hash must be {SWARM_HASH_LENGTH * 2} hex characters, got {len(text)}")
    try:
        digest = bytes.fromhex(text)
    except ValueError:
        raise ValueError("swarm hash is not hexadecimal") from None
    return CID("base32", 1, "swarm-manifest", multihash.wrap(digest, "keccak-256"))


def _is_v0_compatible(cid: CID) -> bool:
    return (
        cid.codec.name == "dag-pb"
        and cid.hashfun.name == "sha2-256"
        and len(cid.raw_digest) == 32
    )


def _check_swarm(cid: CID) -> None:
    if cid.codec.name != "swarm-manifest":
        raise ValueError(f"swarm payload codec {cid.codec.name} is not swarm-manifest")
    if cid.hashfun.name != "keccak-256" or len(cid.raw_digest) != SWARM_HASH_LENGTH:
        raise ValueError("swarm payload must be a 32-byte keccak-256 multihash")


def _human(cid: CID) -> str:
    if _is_v0_compatible(cid):
        return str(cid.set(base="base58btc", version=0))
    return str(cid.set(base="base32", version=1))


def encode(human_hash: str, content_type: Union[ContentType, str] = ContentType.IPFS) -> bytes:
    """Encode a human-readable content identifier as a content-hash record.

    Raises:
        MalformedContentHash: ``human_hash`` is not a valid identifier for
            ``content_type``.
        UnsupportedContentType: ``content_type`` is not a known tag.
    """
    tag = ContentType.parse(content_type) if isinstance(content_type, str) else content_type
    value = human_hash.strip()
    if not value:
        raise MalformedContentHash(human_hash, "empty value")
    try:
        if tag is ContentType.SWARM:
            cid = _parse_swarm(value)
        else:
            cid = CID.decode(value)
        payload = bytes(cid.set(version=1))
    # multiformats and its base decoders do not share an error base class
    except Exception as exc:
        raise MalformedContentHash(human_hash, str(exc) or type(exc).__name__) from None
    return namespace_prefix(tag) + payload


def decode(record: Union[bytes, str]) -> tuple[str, ContentType]:
    """Decode a content-hash record into (human hash, content type).

    ``record`` may be raw bytes or a ``0x``-prefixed hex string.
    """
    if isinstance(record, str):
        text = record[2:] if record.lower().startswith("0x") else record
        try:
            data = bytes.fromhex(text)
        except ValueError:
            raise MalformedContentHash(record, "record is not hexadecimal") from None
    else:
        data = bytes(record)
    shown = "0x" + data.hex()

    if not data:
        raise MalformedContentHash(shown, "empty record")
    try:
        code, _, rest = varint.decode_raw(data)
    except ValueError as exc:
        raise MalformedContentHash(shown, f"bad namespace prefix: {exc}") from None
    tag = _TYPES_BY_CODE.get(code)
    if tag is None:
        raise MalformedContentHash(shown, f"unknown namespace 0x{code:x}")
    payload = bytes(rest)
    if not payload or payload[0] != 1:
        raise MalformedContentHash(shown, "payload is not a binary CIDv1")
    try:
        cid = CID.decode(payload)
        if tag is ContentType.SWARM:
            _check_swarm(cid)
    except Exception as exc:
        raise MalformedContentHash(shown, str(exc) or type(exc).__name__) from None
    if bytes(cid) != payload:
        raise MalformedContentHash(shown, f"{len(payload) - len(bytes(cid))} trailing bytes after CID")
    if tag is ContentType.SWARM:
        return cid.raw_digest.hex(), tag
    return _human(cid), tag


def canonical(human_hash: str, content_type: Union[ContentType, str] = ContentType.IPFS) -> str:
    """Return the canonical human form of ``human_hash``."""
    value, _ = decode(encode(human_hash, content_type))
    return value
