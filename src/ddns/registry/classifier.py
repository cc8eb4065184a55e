"""Domain classifier — maps a name's suffix to its registry family.

Pure and local: nothing here touches the network, so an unsupported
name or content type is rejected before a chain client exists.
"""

from __future__ import annotations

from typing import Union

from ens.exceptions import InvalidName

from ddns.errors import UnsupportedContentType, UnsupportedDomain
from ddns.models.registry import FAMILY_SPECS, ContentType, RegistryFamily
from ddns.registry.namehash import normalize

_FAMILY_BY_SUFFIX: dict[str, RegistryFamily] = {
    suffix: spec.family
    for spec in FAMILY_SPECS.values()
    for suffix in spec.suffixes
}


def normalize_name(name: str) -> str:
    """Strip surrounding whitespace and a trailing root dot, then ENSIP-15 normalize.

    Raises:
        UnsupportedDomain: The name does not survive normalization.
    """
    stripped = name.strip().rstrip(".")
    try:
        return normalize(stripped)
    except InvalidName:
        raise UnsupportedDomain(name) from None


def classify(name: str) -> RegistryFamily:
    """Return the registry family that owns ``name``.

    The suffix is matched after normalization, so case and width
    variants of a suffix classify alike. A bare suffix (``"eth"``) or
    an empty label (``"foo..eth"``) is not a domain.
    """
    normalized = normalize_name(name)
    labels = normalized.split(".")
    if len(labels) < 2 or not all(labels):
        raise UnsupportedDomain(name)
    family = _FAMILY_BY_SUFFIX.get(labels[-1])
    if family is None:
        raise UnsupportedDomain(name)
    return family


def supports_content_type(family: RegistryFamily, content_type: Union[ContentType, str]) -> bool:
    if isinstance(content_type, str):
        try:
            content_type = ContentType.parse(content_type)
        except UnsupportedContentType:
            return False
    return content_type in FAMILY_SPECS[family].content_types


def require_content_type(family: RegistryFamily, content_type: Union[ContentType, str]) -> ContentType:
    """Parse ``content_type`` and check the family accepts it."""
    tag = ContentType.parse(content_type) if isinstance(content_type, str) else content_type
    if not supports_content_type(family, tag):
        raise UnsupportedContentType(tag.value, family.value)
    return tag
