"""Result and operation types shared by the mergers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from relsync.domain.model import ElementType

if TYPE_CHECKING:
    from datetime import datetime

    from relsync.domain.merge.requests import SyncRelationship
    from relsync.domain.model import PrisonerContact


@dataclass(frozen=True, slots=True)
class IdPair:
    """Upstream id paired with the id this system generated for it."""

    element_type: ElementType
    source_id: int
    new_id: int


@dataclass(frozen=True, slots=True, kw_only=True)
class RelationshipAndRestrictionIds:
    contact_id: int
    relationship: IdPair
    restrictions: tuple[IdPair, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class RemovedRelationshipIds:
    prisoner_number: str
    contact_id: int
    relationship_id: int
    restriction_ids: tuple[int, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class RelationshipsChangedResult:
    created: tuple[RelationshipAndRestrictionIds, ...] = ()
    removed: tuple[RemovedRelationshipIds, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class SingleActiveMergeResult:
    """``record_id`` is None when either identity had no active value."""

    element_type: ElementType
    record_id: int | None = None
    was_created: bool = False


@dataclass(frozen=True, slots=True)
class RemovedRestriction:
    prisoner_number: str
    restriction_id: int


@dataclass(frozen=True, slots=True, kw_only=True)
class RestrictionsChangedResult:
    prisoner_number: str
    created_ids: tuple[int, ...] = ()
    deleted: tuple[RemovedRestriction, ...] = ()

    @property
    def deleted_ids(self) -> tuple[int, ...]:
        return tuple(item.restriction_id for item in self.deleted)

    @property
    def has_changed(self) -> bool:
        return bool(self.created_ids or self.deleted)


@dataclass(frozen=True, slots=True, kw_only=True)
class HistoryMigrationResult:
    """Ids of a migrated single-active history; ``current_id`` is None without a current value."""

    element_type: ElementType
    prisoner_number: str
    current_id: int | None = None
    history_ids: tuple[int, ...] = ()
    deleted_count: int = 0


@dataclass(frozen=True, slots=True, kw_only=True)
class PrisonerMergeResult:
    number_of_children: SingleActiveMergeResult
    domestic_status: SingleActiveMergeResult
    restrictions: RestrictionsChangedResult


@dataclass(frozen=True, slots=True, kw_only=True)
class PriorRelationship:
    """Frozen copy of a relationship taken before it is wiped."""

    id: int
    prisoner_number: str
    contact_id: int
    relationship_type: str
    relationship_to_prisoner: str
    approved_visitor: bool
    approved_by: str | None
    approved_time: datetime | None
    restriction_ids: tuple[int, ...] = ()

    @classmethod
    def of(cls, entity: PrisonerContact, restriction_ids: tuple[int, ...]) -> PriorRelationship:
        return cls(
            id=entity.require_id(),
            prisoner_number=entity.prisoner_number,
            contact_id=entity.contact_id,
            relationship_type=entity.relationship_type,
            relationship_to_prisoner=entity.relationship_to_prisoner,
            approved_visitor=entity.approved_visitor,
            approved_by=entity.approved_by,
            approved_time=entity.approved_time,
            restriction_ids=restriction_ids,
        )

    def removed_ids(self) -> RemovedRelationshipIds:
        return RemovedRelationshipIds(
            prisoner_number=self.prisoner_number,
            contact_id=self.contact_id,
            relationship_id=self.id,
            restriction_ids=self.restriction_ids,
        )


# Consolidation operations -----------------------------------------------------


@dataclass(frozen=True, slots=True)
class Wipe:
    """Delete every relationship (and its restrictions) of these prisoner numbers."""

    prisoner_numbers: tuple[str, ...]

    def __post_init__(self) -> None:
        # duplicates would snapshot the same rows twice
        object.__setattr__(self, "prisoner_numbers", tuple(dict.fromkeys(self.prisoner_numbers)))


@dataclass(frozen=True, slots=True)
class Rebuild:
    """Recreate ``relationships`` under ``prisoner_number`` with fresh ids."""

    prisoner_number: str
    relationships: tuple[SyncRelationship, ...] = ()
