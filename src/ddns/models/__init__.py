"""Core data models for DDNS updates."""

from ddns.models.registry import (
    FAMILY_SPECS,
    ContentType,
    FamilySpec,
    RegistryFamily,
    family_spec,
)
from ddns.models.update import UpdatePlan, UpdateResult

__all__ = [
    "FAMILY_SPECS",
    "ContentType",
    "FamilySpec",
    "RegistryFamily",
    "family_spec",
    "UpdatePlan",
    "UpdateResult",
]
