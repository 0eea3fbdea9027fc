"""Base building blocks shared by every persisted record."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, ClassVar, Final

from relsync.domain.errors import InvariantViolationError

if TYPE_CHECKING:
    from relsync.domain.model.enums import ElementType

# recorded as creator when the upstream system does not say who made a change
DEFAULT_SYSTEM_USERNAME: Final[str] = "SYSTEM"


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(eq=False, kw_only=True)
class Entity:
    """Surrogate identity is assigned by the database on flush."""

    id: int | None = None

    def require_id(self) -> int:
        if self.id is None:
            raise InvariantViolationError(
                f"{type(self).__name__} has no identifier; was it flushed?"
            )
        return self.id


@dataclass(eq=False, kw_only=True)
class TrackedEntity(Entity):
    """Entity carrying who created it and when, plus the last update."""

    created_by: str
    created_time: datetime = field(default_factory=utcnow)
    updated_by: str | None = None
    updated_time: datetime | None = None


@dataclass(eq=False, kw_only=True)
class TypedEntity(TrackedEntity):
    # class-level discriminator; subclasses must override
    ELEMENT_TYPE: ClassVar[ElementType]

    @property
    def element_type(self) -> ElementType:
        return self.ELEMENT_TYPE
