"""Ports for persisting domain aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from relsync.domain.model import (
    Contact,
    ContactAddress,
    ContactAddressPhone,
    ContactEmail,
    ContactEmployment,
    ContactIdentity,
    ContactOwned,
    ContactPhone,
    ContactRestriction,
    PrisonerContact,
    PrisonerContactRestriction,
    PrisonerDomesticStatus,
    PrisonerNumberOfChildren,
    PrisonerRestriction,
    ReferenceCode,
    SingleActiveRecord,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...

    def flush(self) -> None:
        """Push pending inserts and updates so generated ids become visible."""
        ...


@runtime_checkable
class PrisonerContactRepository(Repository[PrisonerContact], Protocol):
    """Persistence contract for prisoner to contact relationships."""

    def add_all(self, entities: Iterable[PrisonerContact]) -> None: ...

    def get(self, relationship_id: int) -> PrisonerContact | None: ...

    def find_by_prisoner_number(self, prisoner_number: str) -> list[PrisonerContact]: ...

    def find_by_contact_id(self, contact_id: int) -> list[PrisonerContact]: ...

    def find_active_current_term(
        self, *, prisoner_number: str, contact_id: int, relationship_to_prisoner: str
    ) -> list[PrisonerContact]: ...

    def delete_by_prisoner_numbers(self, prisoner_numbers: Sequence[str]) -> int: ...


@runtime_checkable
class PrisonerContactRestrictionRepository(Repository[PrisonerContactRestriction], Protocol):
    def add_all(self, entities: Iterable[PrisonerContactRestriction]) -> None: ...

    def find_by_relationship_ids(
        self, relationship_ids: Sequence[int]
    ) -> list[PrisonerContactRestriction]: ...

    def delete_by_relationship_ids(self, relationship_ids: Sequence[int]) -> int: ...


@runtime_checkable
class SingleActiveRecordRepository[TRecord: SingleActiveRecord](Repository[TRecord], Protocol):
    """Repository contract for one-active-value-with-history records."""

    @property
    def record_type(self) -> type[TRecord]: ...

    def find_active(self, prisoner_number: str) -> TRecord | None: ...

    def find_by_prisoner_number(self, prisoner_number: str) -> list[TRecord]: ...

    def delete_by_prisoner_number(self, prisoner_number: str) -> int: ...


@runtime_checkable
class DomesticStatusRepository(SingleActiveRecordRepository[PrisonerDomesticStatus], Protocol):
    """Repository contract for domestic status history."""


@runtime_checkable
class NumberOfChildrenRepository(
    SingleActiveRecordRepository[PrisonerNumberOfChildren], Protocol
):
    """Repository contract for number-of-children history."""


@runtime_checkable
class PrisonerRestrictionRepository(Repository[PrisonerRestriction], Protocol):
    def add_all(self, entities: Iterable[PrisonerRestriction]) -> None: ...

    def find_by_prisoner_number(self, prisoner_number: str) -> list[PrisonerRestriction]: ...

    def delete_by_prisoner_number(self, prisoner_number: str) -> int: ...


@runtime_checkable
class ContactRepository(Repository[Contact], Protocol):
    def get(self, contact_id: int) -> Contact | None: ...

    def get_many(self, contact_ids: Iterable[int]) -> dict[int, Contact]: ...


@runtime_checkable
class ContactOwnedRepository[TOwned: ContactOwned](Repository[TOwned], Protocol):
    """Read access to a contact's sub-entities, ordered by id."""

    def find_by_contact_id(self, contact_id: int) -> list[TOwned]: ...


@runtime_checkable
class ReferenceCodeRepository(Repository[ReferenceCode], Protocol):
    def get(self, group_code: str, code: str) -> ReferenceCode | None: ...


type ContactPhoneRepository = ContactOwnedRepository[ContactPhone]
type ContactAddressRepository = ContactOwnedRepository[ContactAddress]
type ContactAddressPhoneRepository = ContactOwnedRepository[ContactAddressPhone]
type ContactEmailRepository = ContactOwnedRepository[ContactEmail]
type ContactIdentityRepository = ContactOwnedRepository[ContactIdentity]
type ContactEmploymentRepository = ContactOwnedRepository[ContactEmployment]
type ContactRestrictionRepository = ContactOwnedRepository[ContactRestriction]
