"""EIP-1577 content-hash codec."""

from ddns.codec.content_hash import canonical, decode, encode, namespace_prefix

__all__ = ["canonical", "decode", "encode", "namespace_prefix"]
