"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ElementType(StrEnum):
    """Discriminator carried by identifier pairs and outbound events."""

    PRISONER_CONTACT = "PRISONER_CONTACT"
    PRISONER_CONTACT_RESTRICTION = "PRISONER_CONTACT_RESTRICTION"
    PRISONER_RESTRICTION = "PRISONER_RESTRICTION"
    PRISONER_DOMESTIC_STATUS = "PRISONER_DOMESTIC_STATUS"
    PRISONER_NUMBER_OF_CHILDREN = "PRISONER_NUMBER_OF_CHILDREN"


class Source(StrEnum):
    """Which system originated a change."""

    DPS = "DPS"
    NOMIS = "NOMIS"


class ReferenceCodeGroup(StrEnum):
    RELATIONSHIP_TYPE = "RELATIONSHIP_TYPE"
    SOCIAL_RELATIONSHIP = "SOCIAL_RELATIONSHIP"
    OFFICIAL_RELATIONSHIP = "OFFICIAL_RELATIONSHIP"
    RESTRICTION = "RESTRICTION"
    DOMESTIC_STS = "DOMESTIC_STS"
    PHONE_TYPE = "PHONE_TYPE"
    ADDRESS_TYPE = "ADDRESS_TYPE"
    ID_TYPE = "ID_TYPE"
