"""Prisoner to contact relationships and the restrictions hung off them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from relsync.domain.model.entity import TypedEntity
from relsync.domain.model.enums import ElementType

if TYPE_CHECKING:
    from datetime import date, datetime


@dataclass(frozen=True, slots=True)
class Approval:
    """Who approved a contact as a visitor, and when."""

    approved_by: str
    approved_time: datetime | None


@dataclass(eq=False, kw_only=True)
class PrisonerContact(TypedEntity):
    """Link between a contact and a prisoner number."""

    ELEMENT_TYPE: ClassVar[ElementType] = ElementType.PRISONER_CONTACT

    contact_id: int
    prisoner_number: str
    relationship_type: str
    relationship_to_prisoner: str
    next_of_kin: bool = False
    emergency_contact: bool = False
    active: bool = True
    approved_visitor: bool = False
    current_term: bool = True
    comments: str | None = None
    expiry_date: date | None = None
    approved_by: str | None = None
    approved_time: datetime | None = None

    @property
    def approval(self) -> Approval | None:
        if self.approved_by is None:
            return None
        return Approval(approved_by=self.approved_by, approved_time=self.approved_time)

    def apply_approval(self, approval: Approval | None) -> None:
        """Set approval provenance; it is always cleared for non-visitors."""

        if not self.approved_visitor or approval is None:
            self.approved_by = None
            self.approved_time = None
            return
        self.approved_by = approval.approved_by
        self.approved_time = approval.approved_time


@dataclass(eq=False, kw_only=True)
class PrisonerContactRestriction(TypedEntity):
    ELEMENT_TYPE: ClassVar[ElementType] = ElementType.PRISONER_CONTACT_RESTRICTION

    prisoner_contact_id: int
    restriction_type: str
    start_date: date | None = None
    expiry_date: date | None = None
    comments: str | None = None
