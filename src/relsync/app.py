"""Application orchestration entry points.

Every mutating entry point runs its domain service in one transaction and,
only once that has committed, publishes the planned events. Migrations load
legacy data and publish nothing.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from relsync.adapters.event_log import LoggingEventPublisher
from relsync.adapters.sqlalchemy.unit_of_work import SqlAlchemySyncUnitOfWork, is_started, startup
from relsync.config import SyncConfig, get_sync_config
from relsync.domain import sync_admin
from relsync.domain.events import (
    PublishReport,
    events_for_prisoner_merge,
    events_for_relationship_created,
    events_for_relationships_changed,
    events_for_restrictions_changed,
    events_for_single_active_merge,
    events_for_single_active_value,
    publish_all,
)
from relsync.domain.ports.unit_of_work import SyncUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Iterable

    from relsync.domain.events import DomainEvent
    from relsync.domain.merge import (
        CreateRelationshipRequest,
        HistoryMigrationResult,
        MergePrisonerRestrictionsRequest,
        MergeRelationshipsRequest,
        MigrateHistoryRequest,
        MigratePrisonerRestrictionsRequest,
        PrisonerMergeRequest,
        PrisonerMergeResult,
        RelationshipsChangedResult,
        ResetPrisonerRestrictionsRequest,
        ResetRelationshipsRequest,
        RestrictionsChangedResult,
        SingleActiveMergeResult,
        SingleActiveValueUpdate,
    )
    from relsync.domain.model import (
        PrisonerContact,
        PrisonerDomesticStatus,
        PrisonerNumberOfChildren,
    )
    from relsync.domain.ports.events import EventPublisher
    from relsync.domain.reconciliation import ContactSnapshot, PrisonerSnapshot

UnitOfWorkFactory = Callable[[], SyncUnitOfWork]


log = getLogger(__name__)


@dataclass(slots=True)
class SyncOutcome[TResult]:
    """Committed result plus what happened when its events were published."""

    result: TResult
    events: PublishReport


def _unit_of_work_factory(unit_of_work_factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if unit_of_work_factory is not None:
        return unit_of_work_factory
    if not is_started():
        startup()
    return SqlAlchemySyncUnitOfWork


def _publish(
    events: Iterable[DomainEvent], publisher: EventPublisher | None
) -> PublishReport:
    return publish_all(events, publisher or LoggingEventPublisher())


def merge_relationships(
    request: MergeRelationshipsRequest,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    publisher: EventPublisher | None = None,
    config: SyncConfig | None = None,
) -> SyncOutcome[RelationshipsChangedResult]:
    """Merge the relationships of two prisoner numbers into the retained one."""

    settings = config or get_sync_config()
    result = sync_admin.merge_relationships(
        request,
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
        system_username=settings.system_username,
    )
    log.info(
        "Finished relationship merge %s -> %s: created=%s, removed=%s",
        request.removed_prisoner_number,
        request.retained_prisoner_number,
        len(result.created),
        len(result.removed),
    )
    events = events_for_relationships_changed(
        result, prisoner_number=request.retained_prisoner_number, source=settings.event_source
    )
    return SyncOutcome(result, _publish(events, publisher))


def reset_relationships(
    request: ResetRelationshipsRequest,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    publisher: EventPublisher | None = None,
    config: SyncConfig | None = None,
) -> SyncOutcome[RelationshipsChangedResult]:
    """Replace every relationship of a prisoner number with the supplied list."""

    settings = config or get_sync_config()
    result = sync_admin.reset_relationships(
        request,
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
        system_username=settings.system_username,
    )
    events = events_for_relationships_changed(
        result, prisoner_number=request.prisoner_number, source=settings.event_source
    )
    return SyncOutcome(result, _publish(events, publisher))


def create_relationship(
    request: CreateRelationshipRequest,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    publisher: EventPublisher | None = None,
    config: SyncConfig | None = None,
) -> SyncOutcome[PrisonerContact]:
    settings = config or get_sync_config()
    relationship = sync_admin.create_relationship(
        request,
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
        system_username=settings.system_username,
    )
    events = events_for_relationship_created(relationship, source=settings.event_source)
    return SyncOutcome(relationship, _publish(events, publisher))


def merge_number_of_children(
    request: PrisonerMergeRequest,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    publisher: EventPublisher | None = None,
) -> SyncOutcome[SingleActiveMergeResult]:
    result = sync_admin.merge_number_of_children(
        request, unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory)
    )
    events = events_for_single_active_merge(
        result, prisoner_number=request.retaining_prisoner_number
    )
    return SyncOutcome(result, _publish(events, publisher))


def merge_domestic_status(
    request: PrisonerMergeRequest,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    publisher: EventPublisher | None = None,
) -> SyncOutcome[SingleActiveMergeResult]:
    result = sync_admin.merge_domestic_status(
        request, unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory)
    )
    events = events_for_single_active_merge(
        result, prisoner_number=request.retaining_prisoner_number
    )
    return SyncOutcome(result, _publish(events, publisher))


def update_domestic_status(
    update: SingleActiveValueUpdate,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    publisher: EventPublisher | None = None,
    config: SyncConfig | None = None,
) -> SyncOutcome[PrisonerDomesticStatus]:
    settings = config or get_sync_config()
    record = sync_admin.update_domestic_status(
        update,
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
        system_username=settings.system_username,
    )
    events = events_for_single_active_value(
        record.element_type,
        record.require_id(),
        prisoner_number=record.prisoner_number,
        source=settings.event_source,
    )
    return SyncOutcome(record, _publish(events, publisher))


def update_number_of_children(
    update: SingleActiveValueUpdate,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    publisher: EventPublisher | None = None,
    config: SyncConfig | None = None,
) -> SyncOutcome[PrisonerNumberOfChildren]:
    settings = config or get_sync_config()
    record = sync_admin.update_number_of_children(
        update,
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
        system_username=settings.system_username,
    )
    events = events_for_single_active_value(
        record.element_type,
        record.require_id(),
        prisoner_number=record.prisoner_number,
        source=settings.event_source,
    )
    return SyncOutcome(record, _publish(events, publisher))


def merge_prisoner_restrictions(
    request: PrisonerMergeRequest,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    publisher: EventPublisher | None = None,
    config: SyncConfig | None = None,
) -> SyncOutcome[RestrictionsChangedResult]:
    settings = config or get_sync_config()
    result = sync_admin.merge_prisoner_restrictions(
        request,
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
        system_username=settings.system_username,
    )
    events = events_for_restrictions_changed(result, source=settings.event_source)
    return SyncOutcome(result, _publish(events, publisher))


def reset_prisoner_restrictions(
    request: ResetPrisonerRestrictionsRequest,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    publisher: EventPublisher | None = None,
    config: SyncConfig | None = None,
) -> SyncOutcome[RestrictionsChangedResult]:
    settings = config or get_sync_config()
    result = sync_admin.reset_prisoner_restrictions(
        request,
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
        system_username=settings.system_username,
    )
    events = events_for_restrictions_changed(result, source=settings.event_source)
    return SyncOutcome(result, _publish(events, publisher))


def replace_prisoner_restrictions_on_merge(
    request: MergePrisonerRestrictionsRequest,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    publisher: EventPublisher | None = None,
    config: SyncConfig | None = None,
) -> SyncOutcome[RestrictionsChangedResult]:
    settings = config or get_sync_config()
    result = sync_admin.replace_prisoner_restrictions_on_merge(
        request,
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
        system_username=settings.system_username,
    )
    events = events_for_restrictions_changed(result, source=settings.event_source)
    return SyncOutcome(result, _publish(events, publisher))


def merge_prisoner(
    request: PrisonerMergeRequest,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    publisher: EventPublisher | None = None,
    config: SyncConfig | None = None,
) -> SyncOutcome[PrisonerMergeResult]:
    """Merge number of children, domestic status and prisoner restrictions in one go."""

    settings = config or get_sync_config()
    result = sync_admin.merge_prisoner(
        request,
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
        system_username=settings.system_username,
    )
    events = events_for_prisoner_merge(
        result, prisoner_number=request.retaining_prisoner_number, source=settings.event_source
    )
    return SyncOutcome(result, _publish(events, publisher))


def migrate_domestic_status(
    request: MigrateHistoryRequest, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> HistoryMigrationResult:
    """Load domestic status history from the legacy system; no events are published."""

    return sync_admin.migrate_domestic_status(
        request, unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory)
    )


def migrate_number_of_children(
    request: MigrateHistoryRequest, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> HistoryMigrationResult:
    return sync_admin.migrate_number_of_children(
        request, unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory)
    )


def migrate_prisoner_restrictions(
    request: MigratePrisonerRestrictionsRequest,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: SyncConfig | None = None,
) -> RestrictionsChangedResult:
    settings = config or get_sync_config()
    return sync_admin.migrate_prisoner_restrictions(
        request,
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
        system_username=settings.system_username,
    )


def reconcile_contact(
    contact_id: int, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> ContactSnapshot:
    return sync_admin.reconcile_contact(
        contact_id, unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory)
    )


def reconcile_prisoner(
    prisoner_number: str, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> PrisonerSnapshot:
    return sync_admin.reconcile_prisoner(
        prisoner_number, unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory)
    )
