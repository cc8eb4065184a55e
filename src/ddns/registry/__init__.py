"""Registry layer — classification, record identifiers, contract resolution."""

from ddns.registry.classifier import (
    classify,
    normalize_name,
    require_content_type,
    supports_content_type,
)
from ddns.registry.locator import ResolverLocator, locate
from ddns.registry.namehash import namehash, token_id

__all__ = [
    "classify",
    "normalize_name",
    "require_content_type",
    "supports_content_type",
    "ResolverLocator",
    "locate",
    "namehash",
    "token_id",
]
