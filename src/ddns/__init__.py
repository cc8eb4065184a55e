"""DDNS — content-hash updates for ENS and Unstoppable Domains names."""

from ddns.errors import DdnsError
from ddns.models import ContentType, RegistryFamily, UpdatePlan, UpdateResult
from ddns.service import DdnsService, update

__all__ = [
    "DdnsError",
    "ContentType",
    "RegistryFamily",
    "UpdatePlan",
    "UpdateResult",
    "DdnsService",
    "update",
]

__version__ = "0.1.0"
