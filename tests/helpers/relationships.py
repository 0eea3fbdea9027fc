"""Builders for relationship rows and inbound relationship definitions."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from relsync.domain.merge import SyncRelationship, SyncRelationshipRestriction
from relsync.domain.model import PrisonerContact, PrisonerContactRestriction

if TYPE_CHECKING:
    from collections.abc import Iterable

CREATED = datetime(2024, 1, 10, 9, 0, tzinfo=UTC)


def make_relationship(
    prisoner_number: str,
    contact_id: int,
    *,
    relationship_type: str = "S",
    relationship_to_prisoner: str = "FRI",
    approved_visitor: bool = False,
    approved_by: str | None = None,
    approved_time: datetime | None = None,
    current_term: bool = True,
    active: bool = True,
) -> PrisonerContact:
    return PrisonerContact(
        contact_id=contact_id,
        prisoner_number=prisoner_number,
        relationship_type=relationship_type,
        relationship_to_prisoner=relationship_to_prisoner,
        approved_visitor=approved_visitor,
        approved_by=approved_by,
        approved_time=approved_time,
        current_term=current_term,
        active=active,
        created_by="SEED",
        created_time=CREATED,
    )


def make_relationship_restriction(
    relationship: PrisonerContact, restriction_type: str = "BAN"
) -> PrisonerContactRestriction:
    return PrisonerContactRestriction(
        prisoner_contact_id=relationship.require_id(),
        restriction_type=restriction_type,
        created_by="SEED",
        created_time=CREATED,
    )


def sync_restriction(source_id: int, restriction_type: str = "BAN") -> SyncRelationshipRestriction:
    return SyncRelationshipRestriction(source_id=source_id, restriction_type=restriction_type)


def sync_relationship(
    source_id: int,
    contact_id: int,
    prisoner_number: str,
    *,
    relationship_type: str = "S",
    relationship_to_prisoner: str = "FRI",
    approved_visitor: bool = False,
    restrictions: Iterable[SyncRelationshipRestriction] = (),
) -> SyncRelationship:
    return SyncRelationship(
        source_id=source_id,
        contact_id=contact_id,
        prisoner_number=prisoner_number,
        relationship_type=relationship_type,
        relationship_to_prisoner=relationship_to_prisoner,
        approved_visitor=approved_visitor,
        restrictions=tuple(restrictions),
    )
