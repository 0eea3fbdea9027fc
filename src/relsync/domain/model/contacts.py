"""Contact records written by the CRUD sync and read during reconciliation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from relsync.domain.model.entity import TrackedEntity

if TYPE_CHECKING:
    from datetime import date


@dataclass(eq=False, kw_only=True)
class Contact(TrackedEntity):
    last_name: str
    first_name: str
    title: str | None = None
    middle_names: str | None = None
    date_of_birth: date | None = None
    staff_flag: bool = False


@dataclass(eq=False, kw_only=True)
class ContactOwned(TrackedEntity):
    contact_id: int


@dataclass(eq=False, kw_only=True)
class ContactPhone(ContactOwned):
    phone_type: str
    phone_number: str
    ext_number: str | None = None


@dataclass(eq=False, kw_only=True)
class ContactAddress(ContactOwned):
    address_type: str | None = None
    primary_address: bool = False
    flat: str | None = None
    property: str | None = None
    street: str | None = None
    area: str | None = None
    city_code: str | None = None
    county_code: str | None = None
    postcode: str | None = None
    country_code: str | None = None


@dataclass(eq=False, kw_only=True)
class ContactAddressPhone(ContactOwned):
    """Scopes a phone to an address; the phone is then excluded from the global list."""

    contact_address_id: int
    contact_phone_id: int


@dataclass(eq=False, kw_only=True)
class ContactEmail(ContactOwned):
    email_address: str


@dataclass(eq=False, kw_only=True)
class ContactIdentity(ContactOwned):
    identity_type: str
    identity_value: str
    issuing_authority: str | None = None


@dataclass(eq=False, kw_only=True)
class ContactEmployment(ContactOwned):
    organisation_id: int
    active: bool = True


@dataclass(eq=False, kw_only=True)
class ContactRestriction(ContactOwned):
    """Global restriction on a contact, independent of any prisoner."""

    restriction_type: str
    start_date: date | None = None
    expiry_date: date | None = None
    comments: str | None = None
