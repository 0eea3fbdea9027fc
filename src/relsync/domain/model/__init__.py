"""Public domain model surface."""

from __future__ import annotations

from relsync.domain.model.contacts import (
    Contact,
    ContactAddress,
    ContactAddressPhone,
    ContactEmail,
    ContactEmployment,
    ContactIdentity,
    ContactOwned,
    ContactPhone,
    ContactRestriction,
)
from relsync.domain.model.entity import (
    DEFAULT_SYSTEM_USERNAME,
    Entity,
    TrackedEntity,
    TypedEntity,
    utcnow,
)
from relsync.domain.model.enums import ElementType, ReferenceCodeGroup, Source
from relsync.domain.model.prisoner import (
    PrisonerDomesticStatus,
    PrisonerNumberOfChildren,
    PrisonerRestriction,
    SingleActiveRecord,
)
from relsync.domain.model.reference import ReferenceCode
from relsync.domain.model.relationships import (
    Approval,
    PrisonerContact,
    PrisonerContactRestriction,
)

__all__ = [  # noqa: RUF022
    # base
    "DEFAULT_SYSTEM_USERNAME",
    "Entity",
    "TrackedEntity",
    "TypedEntity",
    "utcnow",
    # enums
    "ElementType",
    "ReferenceCodeGroup",
    "Source",
    # relationships
    "Approval",
    "PrisonerContact",
    "PrisonerContactRestriction",
    # prisoner-owned
    "SingleActiveRecord",
    "PrisonerDomesticStatus",
    "PrisonerNumberOfChildren",
    "PrisonerRestriction",
    # contacts
    "Contact",
    "ContactOwned",
    "ContactPhone",
    "ContactAddress",
    "ContactAddressPhone",
    "ContactEmail",
    "ContactIdentity",
    "ContactEmployment",
    "ContactRestriction",
    # reference data
    "ReferenceCode",
]
