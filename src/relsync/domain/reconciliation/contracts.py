"""Read-only snapshot documents compared against the upstream system of record.

Every collection is a tuple ordered by surrogate id, so two snapshots of
unchanged data compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date


@dataclass(frozen=True, slots=True, kw_only=True)
class PhoneSnapshot:
    contact_phone_id: int
    phone_type: str
    phone_number: str
    ext_number: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AddressPhoneSnapshot:
    contact_address_phone_id: int
    contact_phone_id: int
    phone_type: str | None
    phone_number: str | None
    ext_number: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AddressSnapshot:
    contact_address_id: int
    address_type: str | None
    primary_address: bool
    property: str | None
    street: str | None
    area: str | None
    postcode: str | None
    phones: tuple[AddressPhoneSnapshot, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class EmailSnapshot:
    contact_email_id: int
    email_address: str


@dataclass(frozen=True, slots=True, kw_only=True)
class IdentitySnapshot:
    contact_identity_id: int
    identity_type: str
    identity_value: str
    issuing_authority: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class EmploymentSnapshot:
    employment_id: int
    organisation_id: int
    active: bool


@dataclass(frozen=True, slots=True, kw_only=True)
class ContactRestrictionSnapshot:
    contact_restriction_id: int
    restriction_type: str
    start_date: date | None
    expiry_date: date | None


@dataclass(frozen=True, slots=True, kw_only=True)
class RelationshipRestrictionSnapshot:
    prisoner_contact_restriction_id: int
    restriction_type: str
    start_date: date | None
    expiry_date: date | None


@dataclass(frozen=True, slots=True, kw_only=True)
class ContactRelationshipSnapshot:
    prisoner_contact_id: int
    prisoner_number: str
    relationship_type: str
    relationship_to_prisoner: str
    next_of_kin: bool
    emergency_contact: bool
    approved_visitor: bool
    active: bool
    current_term: bool
    restrictions: tuple[RelationshipRestrictionSnapshot, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class ContactSnapshot:
    contact_id: int
    title: str | None
    last_name: str
    first_name: str
    middle_names: str | None
    date_of_birth: date | None
    staff_flag: bool
    phones: tuple[PhoneSnapshot, ...] = ()
    addresses: tuple[AddressSnapshot, ...] = ()
    emails: tuple[EmailSnapshot, ...] = ()
    identities: tuple[IdentitySnapshot, ...] = ()
    employments: tuple[EmploymentSnapshot, ...] = ()
    restrictions: tuple[ContactRestrictionSnapshot, ...] = ()
    relationships: tuple[ContactRelationshipSnapshot, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class PrisonerRelationshipSnapshot:
    prisoner_contact_id: int
    contact_id: int
    last_name: str
    first_name: str
    middle_names: str | None
    relationship_type: str
    relationship_to_prisoner: str
    next_of_kin: bool
    emergency_contact: bool
    approved_visitor: bool
    active: bool
    current_term: bool
    restrictions: tuple[RelationshipRestrictionSnapshot, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class PrisonerSnapshot:
    prisoner_number: str
    relationships: tuple[PrisonerRelationshipSnapshot, ...] = ()
