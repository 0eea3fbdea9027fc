from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from relsync.domain.errors import NotFoundError
from relsync.domain.model import ContactAddressPhone
from relsync.domain.reconciliation import SnapshotBuilder
from tests.helpers.contacts import make_contact, seed_contact
from tests.helpers.relationships import make_relationship, make_relationship_restriction
from tests.helpers.store import persist

if TYPE_CHECKING:
    from relsync.domain.reconciliation import ContactSnapshot, PrisonerSnapshot
    from tests.helpers.store import UnitOfWorkFactory

PRISONER = "A1234BC"


def _contact_snapshot(factory: UnitOfWorkFactory, contact_id: int) -> ContactSnapshot:
    with factory() as uow:
        return SnapshotBuilder(uow.repositories).for_contact(contact_id)


def _prisoner_snapshot(factory: UnitOfWorkFactory, prisoner_number: str) -> PrisonerSnapshot:
    with factory() as uow:
        return SnapshotBuilder(uow.repositories).for_prisoner(prisoner_number)


def test_address_phones_are_not_listed_as_global_phones(
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    seeded = seed_contact(sqlite_unit_of_work)

    snapshot = _contact_snapshot(sqlite_unit_of_work, seeded.contact_id)

    assert [phone.contact_phone_id for phone in snapshot.phones] == [seeded.global_phone.id]
    (address,) = snapshot.addresses
    assert address.contact_address_id == seeded.address.id
    assert [phone.contact_phone_id for phone in address.phones] == [seeded.address_phone.id]
    assert address.phones[0].contact_address_phone_id == seeded.link.id
    assert address.phones[0].phone_type == "HOME"


def test_address_phone_pointing_at_unknown_phone_is_kept(
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    seeded = seed_contact(sqlite_unit_of_work)
    other = seed_contact(sqlite_unit_of_work, make_contact("Jones"))
    (dangling,) = persist(
        sqlite_unit_of_work,
        ContactAddressPhone(
            contact_id=seeded.contact_id,
            contact_address_id=seeded.address.require_id(),
            contact_phone_id=other.global_phone.require_id(),
            created_by="SEED",
        ),
    )

    snapshot = _contact_snapshot(sqlite_unit_of_work, seeded.contact_id)

    assert [phone.contact_phone_id for phone in snapshot.phones] == [seeded.global_phone.id]
    (address,) = snapshot.addresses
    assert [phone.contact_address_phone_id for phone in address.phones] == [
        seeded.link.id,
        dangling.id,
    ]
    unknown = address.phones[1]
    assert unknown.contact_phone_id == other.global_phone.id
    assert unknown.phone_type is None
    assert unknown.phone_number is None
    assert unknown.ext_number is None


def test_contact_snapshot_lists_every_sub_record(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    seeded = seed_contact(sqlite_unit_of_work)

    snapshot = _contact_snapshot(sqlite_unit_of_work, seeded.contact_id)

    assert snapshot.last_name == "Smith"
    assert [email.email_address for email in snapshot.emails] == ["jo@example.com"]
    assert [identity.identity_type for identity in snapshot.identities] == ["DL"]
    assert [employment.organisation_id for employment in snapshot.employments] == [77]
    assert [restriction.restriction_type for restriction in snapshot.restrictions] == ["BAN"]


def test_only_current_term_relationships_are_reported(
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    seeded = seed_contact(sqlite_unit_of_work)
    current, _, later = persist(
        sqlite_unit_of_work,
        make_relationship(PRISONER, seeded.contact_id),
        make_relationship(PRISONER, seeded.contact_id, current_term=False),
        make_relationship("B5555BB", seeded.contact_id, relationship_to_prisoner="BRO"),
    )
    (restriction,) = persist(sqlite_unit_of_work, make_relationship_restriction(current))

    snapshot = _contact_snapshot(sqlite_unit_of_work, seeded.contact_id)

    assert [r.prisoner_contact_id for r in snapshot.relationships] == [current.id, later.id]
    assert [
        item.prisoner_contact_restriction_id for item in snapshot.relationships[0].restrictions
    ] == [restriction.id]
    assert snapshot.relationships[1].restrictions == ()


def test_repeated_snapshots_are_identical(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    seeded = seed_contact(sqlite_unit_of_work)
    persist(
        sqlite_unit_of_work,
        make_relationship(PRISONER, seeded.contact_id),
        make_relationship("B5555BB", seeded.contact_id),
    )

    first = _contact_snapshot(sqlite_unit_of_work, seeded.contact_id)
    second = _contact_snapshot(sqlite_unit_of_work, seeded.contact_id)

    assert first == second
    assert _prisoner_snapshot(sqlite_unit_of_work, PRISONER) == _prisoner_snapshot(
        sqlite_unit_of_work, PRISONER
    )


def test_unknown_contact_is_not_found(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    with pytest.raises(NotFoundError, match=r"Contact \(404\) not found"):
        _contact_snapshot(sqlite_unit_of_work, 404)


def test_prisoner_snapshot_includes_contact_names(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    first = seed_contact(sqlite_unit_of_work, make_contact("Jones", "Sam"))
    second = seed_contact(sqlite_unit_of_work, make_contact("Adams", "Lee"))
    persist(
        sqlite_unit_of_work,
        make_relationship(PRISONER, second.contact_id),
        make_relationship(PRISONER, first.contact_id, relationship_to_prisoner="BRO"),
        make_relationship(PRISONER, first.contact_id, current_term=False),
    )

    snapshot = _prisoner_snapshot(sqlite_unit_of_work, PRISONER)

    assert snapshot.prisoner_number == PRISONER
    assert [(r.last_name, r.relationship_to_prisoner) for r in snapshot.relationships] == [
        ("Adams", "FRI"),
        ("Jones", "BRO"),
    ]


def test_prisoner_snapshot_with_missing_contact_fails(
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    persist(sqlite_unit_of_work, make_relationship(PRISONER, 999))

    with pytest.raises(NotFoundError, match=r"Contact \(999\)"):
        _prisoner_snapshot(sqlite_unit_of_work, PRISONER)


def test_prisoner_without_relationships_has_empty_snapshot(
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    assert _prisoner_snapshot(sqlite_unit_of_work, PRISONER).relationships == ()
