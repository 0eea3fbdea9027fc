"""Transactional services behind the sync and admin feeds.

Each function opens one unit of work, does all of its reads and writes in
it, and commits once. Any exception leaves both prisoner numbers as they
were. Event publication is the caller's job and happens after these return.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from relsync.domain.errors import DuplicateRelationshipError
from relsync.domain.merge import (
    HistoryMigrator,
    PrisonerMergeResult,
    RecencyMerger,
    RelationshipConsolidator,
    RestrictionSetMerger,
)
from relsync.domain.model import (
    DEFAULT_SYSTEM_USERNAME,
    Approval,
    PrisonerContact,
    PrisonerDomesticStatus,
    PrisonerNumberOfChildren,
    utcnow,
)
from relsync.domain.reconciliation import SnapshotBuilder
from relsync.domain.reference_data import ReferenceCodeValidator

if TYPE_CHECKING:
    from collections.abc import Callable

    from relsync.domain.merge import (
        CreateRelationshipRequest,
        HistoryMigrationResult,
        MergePrisonerRestrictionsRequest,
        MergeRelationshipsRequest,
        MigrateHistoryRequest,
        MigratePrisonerRestrictionsRequest,
        PrisonerMergeRequest,
        RelationshipsChangedResult,
        ResetPrisonerRestrictionsRequest,
        ResetRelationshipsRequest,
        RestrictionsChangedResult,
        SingleActiveMergeResult,
        SingleActiveValueUpdate,
    )
    from relsync.domain.ports.unit_of_work import SyncRepositories, SyncUnitOfWork
    from relsync.domain.reconciliation import ContactSnapshot, PrisonerSnapshot

type SyncUnitOfWorkFactory = Callable[[], SyncUnitOfWork]

log = logging.getLogger(__name__)


def _consolidator(repositories: SyncRepositories, system_username: str) -> RelationshipConsolidator:
    return RelationshipConsolidator(
        repositories.relationships,
        repositories.relationship_restrictions,
        system_username=system_username,
    )


def _restriction_merger(
    repositories: SyncRepositories, system_username: str
) -> RestrictionSetMerger:
    return RestrictionSetMerger(
        repositories.prisoner_restrictions,
        ReferenceCodeValidator(repositories.reference_codes),
        system_username=system_username,
    )


# Relationships ------------------------------------------------------------------


def merge_relationships(
    request: MergeRelationshipsRequest,
    *,
    unit_of_work_factory: SyncUnitOfWorkFactory,
    system_username: str = DEFAULT_SYSTEM_USERNAME,
) -> RelationshipsChangedResult:
    with unit_of_work_factory() as uow:
        result = _consolidator(uow.repositories, system_username).merge(request)
        uow.commit()
    return result


def reset_relationships(
    request: ResetRelationshipsRequest,
    *,
    unit_of_work_factory: SyncUnitOfWorkFactory,
    system_username: str = DEFAULT_SYSTEM_USERNAME,
) -> RelationshipsChangedResult:
    with unit_of_work_factory() as uow:
        result = _consolidator(uow.repositories, system_username).reset(request)
        uow.commit()
    return result


def create_relationship(
    request: CreateRelationshipRequest,
    *,
    unit_of_work_factory: SyncUnitOfWorkFactory,
    system_username: str = DEFAULT_SYSTEM_USERNAME,
) -> PrisonerContact:
    """Create one relationship, refusing a second active current-term copy."""

    created_by = request.created_by or system_username
    now = utcnow()
    with unit_of_work_factory() as uow:
        repository = uow.repositories.relationships
        if request.current_term:
            duplicates = repository.find_active_current_term(
                prisoner_number=request.prisoner_number,
                contact_id=request.contact_id,
                relationship_to_prisoner=request.relationship_to_prisoner,
            )
            if duplicates:
                raise DuplicateRelationshipError(
                    f"Contact {request.contact_id} already has an active "
                    f"{request.relationship_to_prisoner} relationship with prisoner "
                    f"{request.prisoner_number} (id {duplicates[0].require_id()})"
                )
        relationship = PrisonerContact(
            contact_id=request.contact_id,
            prisoner_number=request.prisoner_number,
            relationship_type=request.relationship_type,
            relationship_to_prisoner=request.relationship_to_prisoner,
            next_of_kin=request.next_of_kin,
            emergency_contact=request.emergency_contact,
            active=request.active,
            approved_visitor=request.approved_visitor,
            current_term=request.current_term,
            comments=request.comments,
            expiry_date=request.expiry_date,
            created_by=created_by,
            created_time=request.created_time or now,
        )
        relationship.apply_approval(Approval(approved_by=created_by, approved_time=now))
        repository.add(relationship)
        repository.flush()
        uow.commit()
    log.info(
        "Created relationship %s between contact %s and %s",
        relationship.id,
        relationship.contact_id,
        relationship.prisoner_number,
    )
    return relationship


# Single-active values -----------------------------------------------------------


def merge_number_of_children(
    request: PrisonerMergeRequest, *, unit_of_work_factory: SyncUnitOfWorkFactory
) -> SingleActiveMergeResult:
    with unit_of_work_factory() as uow:
        result = RecencyMerger(uow.repositories.number_of_children).merge(
            request.retaining_prisoner_number, request.removing_prisoner_number
        )
        uow.commit()
    return result


def merge_domestic_status(
    request: PrisonerMergeRequest, *, unit_of_work_factory: SyncUnitOfWorkFactory
) -> SingleActiveMergeResult:
    with unit_of_work_factory() as uow:
        result = RecencyMerger(uow.repositories.domestic_statuses).merge(
            request.retaining_prisoner_number, request.removing_prisoner_number
        )
        uow.commit()
    return result


def update_domestic_status(
    update: SingleActiveValueUpdate,
    *,
    unit_of_work_factory: SyncUnitOfWorkFactory,
    system_username: str = DEFAULT_SYSTEM_USERNAME,
) -> PrisonerDomesticStatus:
    record = PrisonerDomesticStatus(
        prisoner_number=update.prisoner_number,
        domestic_status_code=update.value,
        created_by=update.created_by or system_username,
        created_time=update.created_time or utcnow(),
    )
    with unit_of_work_factory() as uow:
        RecencyMerger(uow.repositories.domestic_statuses).supersede(record)
        uow.commit()
    return record


def update_number_of_children(
    update: SingleActiveValueUpdate,
    *,
    unit_of_work_factory: SyncUnitOfWorkFactory,
    system_username: str = DEFAULT_SYSTEM_USERNAME,
) -> PrisonerNumberOfChildren:
    record = PrisonerNumberOfChildren(
        prisoner_number=update.prisoner_number,
        number_of_children=update.value,
        created_by=update.created_by or system_username,
        created_time=update.created_time or utcnow(),
    )
    with unit_of_work_factory() as uow:
        RecencyMerger(uow.repositories.number_of_children).supersede(record)
        uow.commit()
    return record


# Prisoner restrictions ----------------------------------------------------------


def merge_prisoner_restrictions(
    request: PrisonerMergeRequest,
    *,
    unit_of_work_factory: SyncUnitOfWorkFactory,
    system_username: str = DEFAULT_SYSTEM_USERNAME,
) -> RestrictionsChangedResult:
    with unit_of_work_factory() as uow:
        result = _restriction_merger(uow.repositories, system_username).merge_restrictions(
            request.retaining_prisoner_number, request.removing_prisoner_number
        )
        uow.commit()
    return result


def reset_prisoner_restrictions(
    request: ResetPrisonerRestrictionsRequest,
    *,
    unit_of_work_factory: SyncUnitOfWorkFactory,
    system_username: str = DEFAULT_SYSTEM_USERNAME,
) -> RestrictionsChangedResult:
    with unit_of_work_factory() as uow:
        result = _restriction_merger(uow.repositories, system_username).reset_restrictions(
            request.prisoner_number, request.restrictions
        )
        uow.commit()
    return result


def replace_prisoner_restrictions_on_merge(
    request: MergePrisonerRestrictionsRequest,
    *,
    unit_of_work_factory: SyncUnitOfWorkFactory,
    system_username: str = DEFAULT_SYSTEM_USERNAME,
) -> RestrictionsChangedResult:
    with unit_of_work_factory() as uow:
        result = _restriction_merger(uow.repositories, system_username).replace_on_merge(
            request.keeping_prisoner_number,
            request.removing_prisoner_number,
            request.restrictions,
        )
        uow.commit()
    return result


# Combined ----------------------------------------------------------------------


def merge_prisoner(
    request: PrisonerMergeRequest,
    *,
    unit_of_work_factory: SyncUnitOfWorkFactory,
    system_username: str = DEFAULT_SYSTEM_USERNAME,
) -> PrisonerMergeResult:
    """Merge number of children, domestic status and prisoner restrictions together."""

    retaining = request.retaining_prisoner_number
    removing = request.removing_prisoner_number
    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        result = PrisonerMergeResult(
            number_of_children=RecencyMerger(repositories.number_of_children).merge(
                retaining, removing
            ),
            domestic_status=RecencyMerger(repositories.domestic_statuses).merge(
                retaining, removing
            ),
            restrictions=_restriction_merger(repositories, system_username).merge_restrictions(
                retaining, removing
            ),
        )
        uow.commit()
    log.info("Merged prisoner %s into %s", removing, retaining)
    return result


# Migration ---------------------------------------------------------------------


def migrate_domestic_status(
    request: MigrateHistoryRequest, *, unit_of_work_factory: SyncUnitOfWorkFactory
) -> HistoryMigrationResult:
    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        result = HistoryMigrator(
            repositories.domestic_statuses, ReferenceCodeValidator(repositories.reference_codes)
        ).migrate(request)
        uow.commit()
    return result


def migrate_number_of_children(
    request: MigrateHistoryRequest, *, unit_of_work_factory: SyncUnitOfWorkFactory
) -> HistoryMigrationResult:
    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        result = HistoryMigrator(
            repositories.number_of_children, ReferenceCodeValidator(repositories.reference_codes)
        ).migrate(request)
        uow.commit()
    return result


def migrate_prisoner_restrictions(
    request: MigratePrisonerRestrictionsRequest,
    *,
    unit_of_work_factory: SyncUnitOfWorkFactory,
    system_username: str = DEFAULT_SYSTEM_USERNAME,
) -> RestrictionsChangedResult:
    with unit_of_work_factory() as uow:
        result = _restriction_merger(uow.repositories, system_username).migrate_restrictions(
            request.prisoner_number, request.restrictions
        )
        uow.commit()
    return result


# Reconciliation ------------------------------------------------------------------


def reconcile_contact(
    contact_id: int, *, unit_of_work_factory: SyncUnitOfWorkFactory
) -> ContactSnapshot:
    with unit_of_work_factory() as uow:
        return SnapshotBuilder(uow.repositories).for_contact(contact_id)


def reconcile_prisoner(
    prisoner_number: str, *, unit_of_work_factory: SyncUnitOfWorkFactory
) -> PrisonerSnapshot:
    with unit_of_work_factory() as uow:
        return SnapshotBuilder(uow.repositories).for_prisoner(prisoner_number)
