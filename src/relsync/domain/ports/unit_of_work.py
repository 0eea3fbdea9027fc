"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from relsync.domain.ports.persistence import (
        ContactAddressPhoneRepository,
        ContactAddressRepository,
        ContactEmailRepository,
        ContactEmploymentRepository,
        ContactIdentityRepository,
        ContactPhoneRepository,
        ContactRepository,
        ContactRestrictionRepository,
        DomesticStatusRepository,
        NumberOfChildrenRepository,
        PrisonerContactRepository,
        PrisonerContactRestrictionRepository,
        PrisonerRestrictionRepository,
        ReferenceCodeRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection."""

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class SyncRepositories(RepositoryCollection):
    """Repositories touched by merge, reset and reconcile requests."""

    relationships: PrisonerContactRepository
    relationship_restrictions: PrisonerContactRestrictionRepository
    domestic_statuses: DomesticStatusRepository
    number_of_children: NumberOfChildrenRepository
    prisoner_restrictions: PrisonerRestrictionRepository
    contacts: ContactRepository
    contact_phones: ContactPhoneRepository
    contact_addresses: ContactAddressRepository
    contact_address_phones: ContactAddressPhoneRepository
    contact_emails: ContactEmailRepository
    contact_identities: ContactIdentityRepository
    contact_employments: ContactEmploymentRepository
    contact_restrictions: ContactRestrictionRepository
    reference_codes: ReferenceCodeRepository


type SyncUnitOfWork = UnitOfWork[SyncRepositories]
