from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

import pytest

from relsync import app
from relsync.adapters.sqlalchemy.unit_of_work import configured_engine, shutdown
from relsync.domain.errors import RequestValidationError
from relsync.domain.events import OutboundEvent
from relsync.domain.merge import (
    CreateRelationshipRequest,
    MergeRelationshipsRequest,
    MigratedValue,
    MigrateHistoryRequest,
    MigratePrisonerRestrictionsRequest,
    PrisonerMergeRequest,
    ResetPrisonerRestrictionsRequest,
    ResetRelationshipsRequest,
    SingleActiveValueUpdate,
)
from relsync.domain.model import ReferenceCodeGroup, Source
from tests.helpers.contacts import seed_contact
from tests.helpers.events import RecordingPublisher
from tests.helpers.prisoner import (
    T0,
    make_domestic_status,
    make_prisoner_restriction,
    make_reference_code,
    restriction_details,
)
from tests.helpers.relationships import (
    make_relationship,
    make_relationship_restriction,
    sync_relationship,
)
from tests.helpers.store import persist

if TYPE_CHECKING:
    from collections.abc import Iterator

    from relsync.config import SyncConfig
    from tests.helpers.store import UnitOfWorkFactory


def test_merge_publishes_events_after_commit(
    sqlite_unit_of_work: UnitOfWorkFactory,
    publisher: RecordingPublisher,
    sync_config: SyncConfig,
) -> None:
    (old,) = persist(sqlite_unit_of_work, make_relationship("A4444AA", 10))
    (restriction,) = persist(sqlite_unit_of_work, make_relationship_restriction(old))

    outcome = app.merge_relationships(
        MergeRelationshipsRequest(
            retained_prisoner_number="A3333AA",
            removed_prisoner_number="A4444AA",
            relationships=(sync_relationship(1, 10, "A3333AA"),),
        ),
        unit_of_work_factory=sqlite_unit_of_work,
        publisher=publisher,
        config=sync_config,
    )

    assert outcome.events.ok is True
    assert publisher.types() == [
        OutboundEvent.PRISONER_CONTACT_RESTRICTION_DELETED,
        OutboundEvent.PRISONER_CONTACT_DELETED,
        OutboundEvent.PRISONER_CONTACT_CREATED,
    ]
    assert [event.identifier for event in publisher.events[:2]] == [restriction.id, old.id]
    assert {event.source for event in publisher.events} == {Source.NOMIS}
    with sqlite_unit_of_work() as uow:
        (stored,) = uow.repositories.relationships.find_by_prisoner_number("A3333AA")
    assert stored.created_by == "SYNC_TEST"


def test_publish_failure_does_not_undo_the_change(
    sqlite_unit_of_work: UnitOfWorkFactory, sync_config: SyncConfig
) -> None:
    publisher = RecordingPublisher(fail_on={OutboundEvent.PRISONER_CONTACT_CREATED})

    outcome = app.reset_relationships(
        ResetRelationshipsRequest(
            prisoner_number="A1234BC",
            relationships=(sync_relationship(1, 10, "A1234BC"),),
        ),
        unit_of_work_factory=sqlite_unit_of_work,
        publisher=publisher,
        config=sync_config,
    )

    assert outcome.events.ok is False
    with sqlite_unit_of_work() as uow:
        stored = uow.repositories.relationships.find_by_prisoner_number("A1234BC")
    assert [r.id for r in stored] == [outcome.result.created[0].relationship.new_id]


def test_failed_merge_publishes_nothing(
    sqlite_unit_of_work: UnitOfWorkFactory,
    publisher: RecordingPublisher,
    sync_config: SyncConfig,
) -> None:
    with pytest.raises(RequestValidationError):
        app.merge_relationships(
            MergeRelationshipsRequest(
                retained_prisoner_number="A3333AA", removed_prisoner_number="A3333AA"
            ),
            unit_of_work_factory=sqlite_unit_of_work,
            publisher=publisher,
            config=sync_config,
        )

    assert publisher.events == []


def test_create_relationship_announces_new_id(
    sqlite_unit_of_work: UnitOfWorkFactory,
    publisher: RecordingPublisher,
    sync_config: SyncConfig,
) -> None:
    outcome = app.create_relationship(
        CreateRelationshipRequest(
            contact_id=10,
            prisoner_number="A1234BC",
            relationship_type="S",
            relationship_to_prisoner="FRI",
        ),
        unit_of_work_factory=sqlite_unit_of_work,
        publisher=publisher,
        config=sync_config,
    )

    (event,) = publisher.events
    assert event.identifier == outcome.result.id
    assert event.contact_id == 10


def test_single_active_entry_points(
    sqlite_unit_of_work: UnitOfWorkFactory,
    publisher: RecordingPublisher,
    sync_config: SyncConfig,
) -> None:
    persist(sqlite_unit_of_work, make_domestic_status("B2222BB", "M"))
    request = PrisonerMergeRequest(
        retaining_prisoner_number="A1111AA", removing_prisoner_number="B2222BB"
    )

    merged = app.merge_domestic_status(
        request, unit_of_work_factory=sqlite_unit_of_work, publisher=publisher
    )
    children = app.merge_number_of_children(
        request, unit_of_work_factory=sqlite_unit_of_work, publisher=publisher
    )
    updated = app.update_domestic_status(
        SingleActiveValueUpdate(prisoner_number="A1111AA", value="S"),
        unit_of_work_factory=sqlite_unit_of_work,
        publisher=publisher,
        config=sync_config,
    )
    counted = app.update_number_of_children(
        SingleActiveValueUpdate(prisoner_number="A1111AA", value="2"),
        unit_of_work_factory=sqlite_unit_of_work,
        publisher=publisher,
        config=sync_config,
    )

    # no active value on the retaining side, so nothing merges
    assert merged.result.record_id is None
    assert children.result.record_id is None
    assert updated.result.created_by == "SYNC_TEST"
    assert publisher.types() == [
        OutboundEvent.PRISONER_DOMESTIC_STATUS_CREATED,
        OutboundEvent.PRISONER_NUMBER_OF_CHILDREN_CREATED,
    ]
    assert [e.identifier for e in publisher.events] == [updated.result.id, counted.result.id]


def test_single_active_merge_is_announced_from_dps(
    sqlite_unit_of_work: UnitOfWorkFactory,
    publisher: RecordingPublisher,
    sync_config: SyncConfig,
) -> None:
    persist(
        sqlite_unit_of_work,
        make_domestic_status("A1111AA", "S"),
        make_domestic_status("B2222BB", "M", created_time=T0 + timedelta(days=1)),
    )

    outcome = app.merge_domestic_status(
        PrisonerMergeRequest(
            retaining_prisoner_number="A1111AA", removing_prisoner_number="B2222BB"
        ),
        unit_of_work_factory=sqlite_unit_of_work,
        publisher=publisher,
    )

    assert sync_config.event_source is Source.NOMIS
    assert outcome.result.was_created is True
    (event,) = publisher.events
    assert event.event_type is OutboundEvent.PRISONER_DOMESTIC_STATUS_CREATED
    assert event.identifier == outcome.result.record_id
    assert event.source is Source.DPS


def test_restriction_entry_points(
    sqlite_unit_of_work: UnitOfWorkFactory,
    publisher: RecordingPublisher,
    sync_config: SyncConfig,
) -> None:
    persist(
        sqlite_unit_of_work,
        make_reference_code("CCTV"),
        make_prisoner_restriction("B2222BB", "CCTV"),
    )

    merged = app.merge_prisoner(
        PrisonerMergeRequest(
            retaining_prisoner_number="A1111AA", removing_prisoner_number="B2222BB"
        ),
        unit_of_work_factory=sqlite_unit_of_work,
        publisher=publisher,
        config=sync_config,
    )
    reset = app.reset_prisoner_restrictions(
        ResetPrisonerRestrictionsRequest(
            prisoner_number="A1111AA", restrictions=(restriction_details("CCTV"),)
        ),
        unit_of_work_factory=sqlite_unit_of_work,
        publisher=publisher,
        config=sync_config,
    )

    assert merged.result.restrictions.has_changed is True
    assert reset.result.deleted_ids == merged.result.restrictions.created_ids
    assert publisher.types() == [
        OutboundEvent.PRISONER_RESTRICTION_DELETED,
        OutboundEvent.PRISONER_RESTRICTION_CREATED,
        OutboundEvent.PRISONER_RESTRICTION_DELETED,
        OutboundEvent.PRISONER_RESTRICTION_CREATED,
    ]


def test_reconcile_contact(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    seeded = seed_contact(sqlite_unit_of_work)

    snapshot = app.reconcile_contact(seeded.contact_id, unit_of_work_factory=sqlite_unit_of_work)

    assert snapshot.contact_id == seeded.contact_id


@pytest.fixture
def default_adapter(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")
    shutdown()
    yield
    shutdown()


@pytest.mark.usefixtures("default_adapter")
def test_entry_points_start_the_adapter_on_demand() -> None:
    snapshot = app.reconcile_prisoner("A1234BC")

    assert snapshot.relationships == ()
    assert configured_engine() is not None


def test_migration_entry_points_store_without_announcing(
    sqlite_unit_of_work: UnitOfWorkFactory,
    publisher: RecordingPublisher,
    sync_config: SyncConfig,
) -> None:
    persist(
        sqlite_unit_of_work,
        make_reference_code("M", group=ReferenceCodeGroup.DOMESTIC_STS),
        make_reference_code("CCTV"),
        make_domestic_status("A1234BC", "M"),
    )
    current = MigratedValue(value="M", created_by="NOMIS_USER", created_time=T0)

    statuses = app.migrate_domestic_status(
        MigrateHistoryRequest(prisoner_number="A1234BC", current=current),
        unit_of_work_factory=sqlite_unit_of_work,
    )
    children = app.migrate_number_of_children(
        MigrateHistoryRequest(prisoner_number="A1234BC", history=(current,)),
        unit_of_work_factory=sqlite_unit_of_work,
    )
    restrictions = app.migrate_prisoner_restrictions(
        MigratePrisonerRestrictionsRequest(
            prisoner_number="A1234BC", restrictions=(restriction_details("CCTV"),)
        ),
        unit_of_work_factory=sqlite_unit_of_work,
        config=sync_config,
    )

    assert statuses.deleted_count == 1
    assert statuses.current_id is not None
    assert children.current_id is None
    assert len(children.history_ids) == 1
    assert len(restrictions.created_ids) == 1
    assert publisher.events == []
    with sqlite_unit_of_work() as uow:
        (stored,) = uow.repositories.prisoner_restrictions.find_by_prisoner_number("A1234BC")
    assert stored.created_by == "SYNC_TEST"
