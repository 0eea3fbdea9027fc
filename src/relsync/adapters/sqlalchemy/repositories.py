"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, select

from relsync.adapters.sqlalchemy.mappings import (
    contact_table,
    prisoner_contact_restriction_table,
    prisoner_contact_table,
    prisoner_restriction_table,
    reference_code_table,
)
from relsync.domain.model import (
    Contact,
    ContactOwned,
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

    from sqlalchemy.orm import Session

# Bulk deletes run immediately and evict the matched objects from the session.
_DELETE_OPTIONS = {"synchronize_session": "fetch"}


class SqlAlchemyRepository[TEntity]:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: TEntity) -> None:
        self.session.add(entity)

    def add_all(self, entities: Iterable[TEntity]) -> None:
        self.session.add_all(entities)

    def flush(self) -> None:
        self.session.flush()


class SqlAlchemyPrisonerContactRepository(SqlAlchemyRepository[PrisonerContact]):
    def get(self, relationship_id: int) -> PrisonerContact | None:
        return self.session.get(PrisonerContact, relationship_id)

    def find_by_prisoner_number(self, prisoner_number: str) -> list[PrisonerContact]:
        stmt = (
            select(PrisonerContact)
            .where(prisoner_contact_table.c.prisoner_number == prisoner_number)
            .order_by(prisoner_contact_table.c.id)
        )
        return list(self.session.scalars(stmt))

    def find_by_contact_id(self, contact_id: int) -> list[PrisonerContact]:
        stmt = (
            select(PrisonerContact)
            .where(prisoner_contact_table.c.contact_id == contact_id)
            .order_by(prisoner_contact_table.c.id)
        )
        return list(self.session.scalars(stmt))

    def find_active_current_term(
        self, *, prisoner_number: str, contact_id: int, relationship_to_prisoner: str
    ) -> list[PrisonerContact]:
        stmt = (
            select(PrisonerContact)
            .where(prisoner_contact_table.c.prisoner_number == prisoner_number)
            .where(prisoner_contact_table.c.contact_id == contact_id)
            .where(prisoner_contact_table.c.relationship_to_prisoner == relationship_to_prisoner)
            .where(prisoner_contact_table.c.active.is_(True))
            .where(prisoner_contact_table.c.current_term.is_(True))
            .order_by(prisoner_contact_table.c.id)
        )
        return list(self.session.scalars(stmt))

    def delete_by_prisoner_numbers(self, prisoner_numbers: Sequence[str]) -> int:
        if not prisoner_numbers:
            return 0
        stmt = (
            delete(PrisonerContact)
            .where(prisoner_contact_table.c.prisoner_number.in_(prisoner_numbers))
            .execution_options(**_DELETE_OPTIONS)
        )
        return self.session.execute(stmt).rowcount


class SqlAlchemyPrisonerContactRestrictionRepository(
    SqlAlchemyRepository[PrisonerContactRestriction]
):
    def find_by_relationship_ids(
        self, relationship_ids: Sequence[int]
    ) -> list[PrisonerContactRestriction]:
        if not relationship_ids:
            return []
        table = prisoner_contact_restriction_table
        stmt = (
            select(PrisonerContactRestriction)
            .where(table.c.prisoner_contact_id.in_(relationship_ids))
            .order_by(table.c.id)
        )
        return list(self.session.scalars(stmt))

    def delete_by_relationship_ids(self, relationship_ids: Sequence[int]) -> int:
        if not relationship_ids:
            return 0
        stmt = (
            delete(PrisonerContactRestriction)
            .where(prisoner_contact_restriction_table.c.prisoner_contact_id.in_(relationship_ids))
            .execution_options(**_DELETE_OPTIONS)
        )
        return self.session.execute(stmt).rowcount


class SqlAlchemySingleActiveRecordRepository[TRecord: SingleActiveRecord](
    SqlAlchemyRepository[TRecord]
):
    """Shared queries for one-active-value-with-history tables."""

    def __init__(self, session: Session, record_type: type[TRecord]) -> None:
        super().__init__(session)
        self._record_type = record_type

    @property
    def record_type(self) -> type[TRecord]:
        return self._record_type

    def find_active(self, prisoner_number: str) -> TRecord | None:
        stmt = (
            select(self._record_type)
            .filter_by(prisoner_number=prisoner_number, active=True)
            .limit(1)
        )
        return self.session.scalars(stmt).one_or_none()

    def find_by_prisoner_number(self, prisoner_number: str) -> list[TRecord]:
        stmt = (
            select(self._record_type)
            .filter_by(prisoner_number=prisoner_number)
            .order_by(self._record_type.id)  # pyright: ignore[reportArgumentType]
        )
        return list(self.session.scalars(stmt))

    def delete_by_prisoner_number(self, prisoner_number: str) -> int:
        stmt = (
            delete(self._record_type)
            .filter_by(prisoner_number=prisoner_number)
            .execution_options(**_DELETE_OPTIONS)
        )
        return self.session.execute(stmt).rowcount


class SqlAlchemyDomesticStatusRepository(
    SqlAlchemySingleActiveRecordRepository[PrisonerDomesticStatus]
):
    def __init__(self, session: Session) -> None:
        super().__init__(session, PrisonerDomesticStatus)


class SqlAlchemyNumberOfChildrenRepository(
    SqlAlchemySingleActiveRecordRepository[PrisonerNumberOfChildren]
):
    def __init__(self, session: Session) -> None:
        super().__init__(session, PrisonerNumberOfChildren)


class SqlAlchemyPrisonerRestrictionRepository(SqlAlchemyRepository[PrisonerRestriction]):
    def find_by_prisoner_number(self, prisoner_number: str) -> list[PrisonerRestriction]:
        stmt = (
            select(PrisonerRestriction)
            .where(prisoner_restriction_table.c.prisoner_number == prisoner_number)
            .order_by(prisoner_restriction_table.c.id)
        )
        return list(self.session.scalars(stmt))

    def delete_by_prisoner_number(self, prisoner_number: str) -> int:
        stmt = (
            delete(PrisonerRestriction)
            .where(prisoner_restriction_table.c.prisoner_number == prisoner_number)
            .execution_options(**_DELETE_OPTIONS)
        )
        return self.session.execute(stmt).rowcount


class SqlAlchemyContactRepository(SqlAlchemyRepository[Contact]):
    def get(self, contact_id: int) -> Contact | None:
        return self.session.get(Contact, contact_id)

    def get_many(self, contact_ids: Iterable[int]) -> dict[int, Contact]:
        wanted = sorted(set(contact_ids))
        if not wanted:
            return {}
        stmt = select(Contact).where(contact_table.c.id.in_(wanted))
        return {contact.require_id(): contact for contact in self.session.scalars(stmt)}


class SqlAlchemyContactOwnedRepository[TOwned: ContactOwned](SqlAlchemyRepository[TOwned]):
    """Reads the rows of one contact sub-entity table, ordered by id."""

    def __init__(self, session: Session, entity_cls: type[TOwned]) -> None:
        super().__init__(session)
        self._entity_cls = entity_cls

    def find_by_contact_id(self, contact_id: int) -> list[TOwned]:
        stmt = (
            select(self._entity_cls)
            .filter_by(contact_id=contact_id)
            .order_by(self._entity_cls.id)  # pyright: ignore[reportArgumentType]
        )
        return list(self.session.scalars(stmt))


class SqlAlchemyReferenceCodeRepository(SqlAlchemyRepository[ReferenceCode]):
    def get(self, group_code: str, code: str) -> ReferenceCode | None:
        stmt = (
            select(ReferenceCode)
            .where(reference_code_table.c.group_code == group_code)
            .where(reference_code_table.c.code == code)
        )
        return self.session.scalars(stmt).one_or_none()
