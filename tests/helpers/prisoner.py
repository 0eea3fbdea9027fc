"""Builders for prisoner-owned records and reference data."""

from __future__ import annotations

from datetime import UTC, date, datetime

from relsync.domain.merge import PrisonerRestrictionDetails
from relsync.domain.model import (
    PrisonerDomesticStatus,
    PrisonerNumberOfChildren,
    PrisonerRestriction,
    ReferenceCode,
    ReferenceCodeGroup,
)

T0 = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


def make_domestic_status(
    prisoner_number: str,
    code: str,
    *,
    created_time: datetime = T0,
    active: bool = True,
) -> PrisonerDomesticStatus:
    return PrisonerDomesticStatus(
        prisoner_number=prisoner_number,
        domestic_status_code=code,
        active=active,
        created_by="SEED",
        created_time=created_time,
    )


def make_number_of_children(
    prisoner_number: str,
    value: str,
    *,
    created_time: datetime = T0,
    active: bool = True,
) -> PrisonerNumberOfChildren:
    return PrisonerNumberOfChildren(
        prisoner_number=prisoner_number,
        number_of_children=value,
        active=active,
        created_by="SEED",
        created_time=created_time,
    )


def make_prisoner_restriction(
    prisoner_number: str,
    restriction_type: str = "CCTV",
    *,
    comment_text: str | None = None,
) -> PrisonerRestriction:
    return PrisonerRestriction(
        prisoner_number=prisoner_number,
        restriction_type=restriction_type,
        effective_date=date(2024, 1, 1),
        expiry_date=date(2025, 1, 1),
        comment_text=comment_text,
        authorised_username="AUTH_USER",
        created_by="SEED",
        created_time=T0,
    )


def restriction_details(restriction_type: str = "CCTV") -> PrisonerRestrictionDetails:
    return PrisonerRestrictionDetails(
        restriction_type=restriction_type,
        effective_date=date(2024, 6, 1),
        authorised_username="AUTH_USER",
        comment_text=f"{restriction_type} in place",
    )


def make_reference_code(
    code: str,
    *,
    group: ReferenceCodeGroup = ReferenceCodeGroup.RESTRICTION,
    is_active: bool = True,
) -> ReferenceCode:
    return ReferenceCode(
        group_code=group,
        code=code,
        description=f"{code} description",
        is_active=is_active,
    )
