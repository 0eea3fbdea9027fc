"""Read-only reconciliation snapshots for drift detection against the upstream system."""

from __future__ import annotations

from .contracts import (
    AddressPhoneSnapshot,
    AddressSnapshot,
    ContactRelationshipSnapshot,
    ContactRestrictionSnapshot,
    ContactSnapshot,
    EmailSnapshot,
    EmploymentSnapshot,
    IdentitySnapshot,
    PhoneSnapshot,
    PrisonerRelationshipSnapshot,
    PrisonerSnapshot,
    RelationshipRestrictionSnapshot,
)
from .snapshot import SnapshotBuilder

__all__ = [
    "AddressPhoneSnapshot",
    "AddressSnapshot",
    "ContactRelationshipSnapshot",
    "ContactRestrictionSnapshot",
    "ContactSnapshot",
    "EmailSnapshot",
    "EmploymentSnapshot",
    "IdentitySnapshot",
    "PhoneSnapshot",
    "PrisonerRelationshipSnapshot",
    "PrisonerSnapshot",
    "RelationshipRestrictionSnapshot",
    "SnapshotBuilder",
]
