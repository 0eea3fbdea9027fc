"""Inbound request values for merge, reset and create operations.

These are frozen snapshots of what the upstream system sent. Nothing here is
persisted directly; the mergers turn them into entities.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date, datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class SyncRelationshipRestriction:
    source_id: int
    restriction_type: str
    start_date: date | None = None
    expiry_date: date | None = None
    comments: str | None = None
    created_by: str | None = None
    created_time: datetime | None = None
    updated_by: str | None = None
    updated_time: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class SyncRelationship:
    """A relationship as the upstream system knows it, keyed by its upstream id."""

    source_id: int
    contact_id: int
    prisoner_number: str
    relationship_type: str
    relationship_to_prisoner: str
    next_of_kin: bool = False
    emergency_contact: bool = False
    active: bool = True
    approved_visitor: bool = False
    current_term: bool = True
    comments: str | None = None
    expiry_date: date | None = None
    restrictions: tuple[SyncRelationshipRestriction, ...] = ()
    created_by: str | None = None
    created_time: datetime | None = None
    updated_by: str | None = None
    updated_time: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class MergeRelationshipsRequest:
    retained_prisoner_number: str
    removed_prisoner_number: str
    relationships: tuple[SyncRelationship, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class ResetRelationshipsRequest:
    prisoner_number: str
    relationships: tuple[SyncRelationship, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateRelationshipRequest:
    contact_id: int
    prisoner_number: str
    relationship_type: str
    relationship_to_prisoner: str
    next_of_kin: bool = False
    emergency_contact: bool = False
    active: bool = True
    approved_visitor: bool = False
    current_term: bool = True
    comments: str | None = None
    expiry_date: date | None = None
    created_by: str | None = None
    created_time: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class PrisonerMergeRequest:
    retaining_prisoner_number: str
    removing_prisoner_number: str


@dataclass(frozen=True, slots=True, kw_only=True)
class PrisonerRestrictionDetails:
    restriction_type: str
    effective_date: date
    authorised_username: str
    expiry_date: date | None = None
    comment_text: str | None = None
    current_term: bool = True
    created_by: str | None = None
    created_time: datetime | None = None
    updated_by: str | None = None
    updated_time: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ResetPrisonerRestrictionsRequest:
    prisoner_number: str
    restrictions: tuple[PrisonerRestrictionDetails, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class MergePrisonerRestrictionsRequest:
    keeping_prisoner_number: str
    removing_prisoner_number: str
    restrictions: tuple[PrisonerRestrictionDetails, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class SingleActiveValueUpdate:
    """A new current value for domestic status or number of children."""

    prisoner_number: str
    value: str | None
    created_by: str | None = None
    created_time: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class MigratedValue:
    """One historic domestic status or number-of-children value from the legacy system."""

    value: str | None
    created_by: str
    created_time: datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class MigrateHistoryRequest:
    prisoner_number: str
    current: MigratedValue | None = None
    history: tuple[MigratedValue, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class MigratePrisonerRestrictionsRequest:
    prisoner_number: str
    restrictions: tuple[PrisonerRestrictionDetails, ...]
