"""Records owned directly by a prisoner number."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Self

from relsync.domain.model.entity import Entity, TypedEntity, utcnow
from relsync.domain.model.enums import ElementType, ReferenceCodeGroup

if TYPE_CHECKING:
    from datetime import date, datetime


@dataclass(eq=False, kw_only=True)
class SingleActiveRecord(Entity):
    """One value per prisoner number is active; superseded values stay as history."""

    ELEMENT_TYPE: ClassVar[ElementType]
    REFERENCE_GROUP: ClassVar[ReferenceCodeGroup | None] = None

    prisoner_number: str
    active: bool = True
    created_by: str
    created_time: datetime = field(default_factory=utcnow)

    @property
    def element_type(self) -> ElementType:
        return self.ELEMENT_TYPE

    @property
    def value(self) -> str | None:
        raise NotImplementedError

    @classmethod
    def with_value(
        cls,
        value: str | None,
        *,
        prisoner_number: str,
        created_by: str,
        created_time: datetime,
        active: bool = True,
    ) -> Self:
        raise NotImplementedError

    def is_newer_than(self, other: SingleActiveRecord) -> bool:
        # strictly newer; equal timestamps are not newer
        return self.created_time > other.created_time

    def reparent(self, prisoner_number: str, *, active: bool | None = None) -> None:
        self.prisoner_number = prisoner_number
        if active is not None:
            self.active = active

    def deactivate(self) -> None:
        self.active = False


@dataclass(eq=False, kw_only=True)
class PrisonerDomesticStatus(SingleActiveRecord):
    ELEMENT_TYPE: ClassVar[ElementType] = ElementType.PRISONER_DOMESTIC_STATUS
    REFERENCE_GROUP: ClassVar[ReferenceCodeGroup | None] = ReferenceCodeGroup.DOMESTIC_STS

    domestic_status_code: str | None = None

    @property
    def value(self) -> str | None:
        return self.domestic_status_code

    @classmethod
    def with_value(
        cls,
        value: str | None,
        *,
        prisoner_number: str,
        created_by: str,
        created_time: datetime,
        active: bool = True,
    ) -> Self:
        return cls(
            prisoner_number=prisoner_number,
            domestic_status_code=value,
            active=active,
            created_by=created_by,
            created_time=created_time,
        )


@dataclass(eq=False, kw_only=True)
class PrisonerNumberOfChildren(SingleActiveRecord):
    ELEMENT_TYPE: ClassVar[ElementType] = ElementType.PRISONER_NUMBER_OF_CHILDREN

    number_of_children: str | None = None

    @property
    def value(self) -> str | None:
        return self.number_of_children

    @classmethod
    def with_value(
        cls,
        value: str | None,
        *,
        prisoner_number: str,
        created_by: str,
        created_time: datetime,
        active: bool = True,
    ) -> Self:
        return cls(
            prisoner_number=prisoner_number,
            number_of_children=value,
            active=active,
            created_by=created_by,
            created_time=created_time,
        )


@dataclass(eq=False, kw_only=True)
class PrisonerRestriction(TypedEntity):
    """Restriction applying to the prisoner as a whole."""

    ELEMENT_TYPE: ClassVar[ElementType] = ElementType.PRISONER_RESTRICTION

    prisoner_number: str
    restriction_type: str
    effective_date: date
    authorised_username: str
    expiry_date: date | None = None
    comment_text: str | None = None
    current_term: bool = True

    def copy_to(self, prisoner_number: str) -> PrisonerRestriction:
        """Return an unsaved copy owned by ``prisoner_number``; provenance is kept."""

        return PrisonerRestriction(
            prisoner_number=prisoner_number,
            restriction_type=self.restriction_type,
            effective_date=self.effective_date,
            expiry_date=self.expiry_date,
            comment_text=self.comment_text,
            authorised_username=self.authorised_username,
            current_term=self.current_term,
            created_by=self.created_by,
            created_time=self.created_time,
            updated_by=self.updated_by,
            updated_time=self.updated_time,
        )
