"""Delete and recreate prisoner contact relationships under new ids."""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from typing import TYPE_CHECKING

from relsync.domain.errors import InvariantViolationError, RequestValidationError
from relsync.domain.merge.approval import infer_approval
from relsync.domain.merge.contracts import (
    IdPair,
    PriorRelationship,
    Rebuild,
    RelationshipAndRestrictionIds,
    RelationshipsChangedResult,
    Wipe,
)
from relsync.domain.model import (
    ElementType,
    PrisonerContact,
    PrisonerContactRestriction,
    utcnow,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from relsync.domain.merge.requests import (
        MergeRelationshipsRequest,
        ResetRelationshipsRequest,
        SyncRelationship,
        SyncRelationshipRestriction,
    )
    from relsync.domain.ports.persistence import (
        PrisonerContactRepository,
        PrisonerContactRestrictionRepository,
    )

log = logging.getLogger(__name__)

type RelationshipPair = tuple[SyncRelationship, PrisonerContact]
type RestrictionPair = tuple[SyncRelationshipRestriction, PrisonerContactRestriction]


class RelationshipConsolidator:
    """Wipe the relationships of one or more prisoner numbers and rebuild from a definition list.

    Every recreated relationship and restriction receives a new id. The ids
    that existed before are reported as removed even when the same
    relationship is rebuilt.
    """

    def __init__(
        self,
        relationships: PrisonerContactRepository,
        restrictions: PrisonerContactRestrictionRepository,
        *,
        system_username: str,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._relationships = relationships
        self._restrictions = restrictions
        self._system_username = system_username
        self._clock = clock

    def merge(self, request: MergeRelationshipsRequest) -> RelationshipsChangedResult:
        retained = request.retained_prisoner_number
        removed = request.removed_prisoner_number
        if retained == removed:
            raise RequestValidationError(f"Cannot merge prisoner {retained} into itself")
        log.info("Merging relationships of %s into %s", removed, retained)
        return self.consolidate(
            Wipe((removed, retained)),
            Rebuild(retained, request.relationships),
        )

    def reset(self, request: ResetRelationshipsRequest) -> RelationshipsChangedResult:
        prisoner_number = request.prisoner_number
        log.info("Resetting relationships of %s", prisoner_number)
        return self.consolidate(
            Wipe((prisoner_number,)),
            Rebuild(prisoner_number, request.relationships),
        )

    def consolidate(self, wipe: Wipe, rebuild: Rebuild) -> RelationshipsChangedResult:
        self._validate(rebuild)
        prior = self._snapshot(wipe)
        self._wipe(wipe, prior)

        relationship_pairs = self._rebuild_relationships(rebuild, prior)
        created = self._rebuild_restrictions(relationship_pairs)

        log.info(
            "Relationships for %s consolidated: %d removed, %d created",
            rebuild.prisoner_number,
            len(prior),
            len(created),
        )
        return RelationshipsChangedResult(
            created=created,
            removed=tuple(snapshot.removed_ids() for snapshot in prior),
        )

    # Steps ------------------------------------------------------------------

    def _validate(self, rebuild: Rebuild) -> None:
        for definition in rebuild.relationships:
            if definition.prisoner_number != rebuild.prisoner_number:
                raise RequestValidationError(
                    f"Relationship {definition.source_id} belongs to prisoner "
                    f"{definition.prisoner_number}, expected {rebuild.prisoner_number}"
                )

        relationship_ids = Counter(definition.source_id for definition in rebuild.relationships)
        duplicates = sorted(source_id for source_id, count in relationship_ids.items() if count > 1)
        if duplicates:
            raise RequestValidationError(f"Duplicate relationship ids in request: {duplicates}")

        restriction_ids = Counter(
            restriction.source_id
            for definition in rebuild.relationships
            for restriction in definition.restrictions
        )
        duplicates = sorted(source_id for source_id, count in restriction_ids.items() if count > 1)
        if duplicates:
            raise RequestValidationError(f"Duplicate restriction ids in request: {duplicates}")

    def _snapshot(self, wipe: Wipe) -> tuple[PriorRelationship, ...]:
        prior: list[PriorRelationship] = []
        for prisoner_number in wipe.prisoner_numbers:
            entities = self._relationships.find_by_prisoner_number(prisoner_number)
            relationship_ids = [entity.require_id() for entity in entities]
            owned: defaultdict[int, list[int]] = defaultdict(list)
            for restriction in self._restrictions.find_by_relationship_ids(relationship_ids):
                owned[restriction.prisoner_contact_id].append(restriction.require_id())
            prior.extend(
                PriorRelationship.of(entity, tuple(owned[entity.require_id()]))
                for entity in entities
            )
        return tuple(prior)

    def _wipe(self, wipe: Wipe, prior: tuple[PriorRelationship, ...]) -> None:
        self._restrictions.delete_by_relationship_ids([snapshot.id for snapshot in prior])
        self._relationships.delete_by_prisoner_numbers(wipe.prisoner_numbers)

    def _rebuild_relationships(
        self, rebuild: Rebuild, prior: tuple[PriorRelationship, ...]
    ) -> list[RelationshipPair]:
        pairs: list[RelationshipPair] = []
        for definition in rebuild.relationships:
            entity = self._new_relationship(definition, rebuild.prisoner_number)
            approval = infer_approval(prior, definition)
            if definition.approved_visitor and approval is None:
                log.warning(
                    "No prior approval for visitor: contact %s, prisoner %s (%s/%s)",
                    definition.contact_id,
                    rebuild.prisoner_number,
                    definition.relationship_type,
                    definition.relationship_to_prisoner,
                )
            entity.apply_approval(approval)
            pairs.append((definition, entity))

        self._relationships.add_all(entity for _, entity in pairs)
        self._relationships.flush()
        return pairs

    def _rebuild_restrictions(
        self, relationship_pairs: list[RelationshipPair]
    ) -> tuple[RelationshipAndRestrictionIds, ...]:
        by_source_id: dict[int, PrisonerContact] = {}
        for definition, entity in relationship_pairs:
            if entity.id is None:
                raise InvariantViolationError(
                    f"Relationship {definition.source_id} was not assigned an id"
                )
            by_source_id[definition.source_id] = entity

        restriction_pairs: dict[int, list[RestrictionPair]] = {}
        for definition, _ in relationship_pairs:
            owner = by_source_id.get(definition.source_id)
            if owner is None:
                raise InvariantViolationError(
                    f"No recreated relationship for source id {definition.source_id}"
                )
            restriction_pairs[definition.source_id] = [
                (restriction, self._new_restriction(restriction, owner.require_id()))
                for restriction in definition.restrictions
            ]

        self._restrictions.add_all(
            entity for pairs in restriction_pairs.values() for _, entity in pairs
        )
        self._restrictions.flush()

        created: list[RelationshipAndRestrictionIds] = []
        for definition, entity in relationship_pairs:
            restrictions = tuple(
                IdPair(
                    ElementType.PRISONER_CONTACT_RESTRICTION,
                    restriction.source_id,
                    restriction_entity.require_id(),
                )
                for restriction, restriction_entity in restriction_pairs[definition.source_id]
            )
            created.append(
                RelationshipAndRestrictionIds(
                    contact_id=definition.contact_id,
                    relationship=IdPair(
                        ElementType.PRISONER_CONTACT,
                        definition.source_id,
                        entity.require_id(),
                    ),
                    restrictions=restrictions,
                )
            )
        return tuple(created)

    # Builders ---------------------------------------------------------------

    def _new_relationship(
        self, definition: SyncRelationship, prisoner_number: str
    ) -> PrisonerContact:
        return PrisonerContact(
            contact_id=definition.contact_id,
            prisoner_number=prisoner_number,
            relationship_type=definition.relationship_type,
            relationship_to_prisoner=definition.relationship_to_prisoner,
            next_of_kin=definition.next_of_kin,
            emergency_contact=definition.emergency_contact,
            active=definition.active,
            approved_visitor=definition.approved_visitor,
            current_term=definition.current_term,
            comments=definition.comments,
            expiry_date=definition.expiry_date,
            created_by=definition.created_by or self._system_username,
            created_time=definition.created_time or self._clock(),
            updated_by=definition.updated_by,
            updated_time=definition.updated_time,
        )

    def _new_restriction(
        self, definition: SyncRelationshipRestriction, relationship_id: int
    ) -> PrisonerContactRestriction:
        return PrisonerContactRestriction(
            prisoner_contact_id=relationship_id,
            restriction_type=definition.restriction_type,
            start_date=definition.start_date,
            expiry_date=definition.expiry_date,
            comments=definition.comments,
            created_by=definition.created_by or self._system_username,
            created_time=definition.created_time or self._clock(),
            updated_by=definition.updated_by,
            updated_time=definition.updated_time,
        )
