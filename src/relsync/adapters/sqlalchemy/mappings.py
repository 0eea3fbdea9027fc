"""SQLAlchemy mapping metadata for the relsync domain model."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Dialect,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
    orm,
    true,
)

from relsync.domain.model import (
    Contact,
    ContactAddress,
    ContactAddressPhone,
    ContactEmail,
    ContactEmployment,
    ContactIdentity,
    ContactPhone,
    ContactRestriction,
    PrisonerContact,
    PrisonerContactRestriction,
    PrisonerDomesticStatus,
    PrisonerNumberOfChildren,
    PrisonerRestriction,
    ReferenceCode,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s",
    "pk": "pk_%(table_name)s",
}

# sqlite_autoincrement keeps SQLite from handing out ids of deleted rows again


def _id_column() -> Column[int]:
    return Column("id", Integer, primary_key=True, autoincrement=True)


def _created_columns() -> list[Column[Any]]:
    return [
        Column("created_by", String(100), nullable=False),
        Column("created_time", UTCDateTime(), nullable=False),
    ]


def _tracked_columns() -> list[Column[Any]]:
    return [
        *_created_columns(),
        Column("updated_by", String(100), nullable=True),
        Column("updated_time", UTCDateTime(), nullable=True),
    ]


# Relationships ----------------------------------------------------------------

prisoner_contact_table = Table(
    "prisoner_contact",
    mapper_registry.metadata,
    _id_column(),
    Column("contact_id", Integer, nullable=False, index=True),
    Column("prisoner_number", String(7), nullable=False, index=True),
    Column("relationship_type", String(12), nullable=False),
    Column("relationship_to_prisoner", String(12), nullable=False),
    Column("next_of_kin", Boolean, nullable=False, default=False),
    Column("emergency_contact", Boolean, nullable=False, default=False),
    Column("active", Boolean, nullable=False, default=True),
    Column("approved_visitor", Boolean, nullable=False, default=False),
    Column("current_term", Boolean, nullable=False, default=True),
    Column("comments", String(240), nullable=True),
    Column("expiry_date", Date, nullable=True),
    Column("approved_by", String(100), nullable=True),
    Column("approved_time", UTCDateTime(), nullable=True),
    *_tracked_columns(),
    sqlite_autoincrement=True,
)

prisoner_contact_restriction_table = Table(
    "prisoner_contact_restriction",
    mapper_registry.metadata,
    _id_column(),
    Column(
        "prisoner_contact_id",
        Integer,
        ForeignKey("prisoner_contact.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("restriction_type", String(12), nullable=False),
    Column("start_date", Date, nullable=True),
    Column("expiry_date", Date, nullable=True),
    Column("comments", String(240), nullable=True),
    *_tracked_columns(),
    sqlite_autoincrement=True,
)

# Prisoner-owned records -------------------------------------------------------

prisoner_domestic_status_table = Table(
    "prisoner_domestic_status",
    mapper_registry.metadata,
    _id_column(),
    Column("prisoner_number", String(7), nullable=False, index=True),
    Column("domestic_status_code", String(12), nullable=True),
    Column("active", Boolean, nullable=False, default=True),
    *_created_columns(),
    sqlite_autoincrement=True,
)

prisoner_number_of_children_table = Table(
    "prisoner_number_of_children",
    mapper_registry.metadata,
    _id_column(),
    Column("prisoner_number", String(7), nullable=False, index=True),
    Column("number_of_children", String(50), nullable=True),
    Column("active", Boolean, nullable=False, default=True),
    *_created_columns(),
    sqlite_autoincrement=True,
)

# at most one active value per prisoner number
for _single_active_table in (prisoner_domestic_status_table, prisoner_number_of_children_table):
    Index(
        f"uq_{_single_active_table.name}_active_prisoner_number",
        _single_active_table.c.prisoner_number,
        unique=True,
        sqlite_where=_single_active_table.c.active == true(),
        postgresql_where=_single_active_table.c.active == true(),
    )

prisoner_restriction_table = Table(
    "prisoner_restriction",
    mapper_registry.metadata,
    _id_column(),
    Column("prisoner_number", String(7), nullable=False, index=True),
    Column("restriction_type", String(12), nullable=False),
    Column("effective_date", Date, nullable=False),
    Column("expiry_date", Date, nullable=True),
    Column("comment_text", String(240), nullable=True),
    Column("authorised_username", String(100), nullable=False),
    Column("current_term", Boolean, nullable=False, default=True),
    *_tracked_columns(),
    sqlite_autoincrement=True,
)

# Contacts ---------------------------------------------------------------------

contact_table = Table(
    "contact",
    mapper_registry.metadata,
    _id_column(),
    Column("title", String(12), nullable=True),
    Column("last_name", String(35), nullable=False),
    Column("first_name", String(35), nullable=False),
    Column("middle_names", String(35), nullable=True),
    Column("date_of_birth", Date, nullable=True),
    Column("staff_flag", Boolean, nullable=False, default=False),
    *_tracked_columns(),
    sqlite_autoincrement=True,
)


def _contact_owned_table(name: str, *columns: Column[Any]) -> Table:
    return Table(
        name,
        mapper_registry.metadata,
        _id_column(),
        Column(
            "contact_id",
            Integer,
            ForeignKey("contact.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        *columns,
        *_tracked_columns(),
        sqlite_autoincrement=True,
    )


contact_phone_table = _contact_owned_table(
    "contact_phone",
    Column("phone_type", String(12), nullable=False),
    Column("phone_number", String(40), nullable=False),
    Column("ext_number", String(7), nullable=True),
)

contact_address_table = _contact_owned_table(
    "contact_address",
    Column("address_type", String(12), nullable=True),
    Column("primary_address", Boolean, nullable=False, default=False),
    Column("flat", String(30), nullable=True),
    Column("property", String(130), nullable=True),
    Column("street", String(160), nullable=True),
    Column("area", String(70), nullable=True),
    Column("city_code", String(12), nullable=True),
    Column("county_code", String(12), nullable=True),
    Column("postcode", String(12), nullable=True),
    Column("country_code", String(12), nullable=True),
)

contact_address_phone_table = _contact_owned_table(
    "contact_address_phone",
    Column(
        "contact_address_id",
        Integer,
        ForeignKey("contact_address.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "contact_phone_id",
        Integer,
        ForeignKey("contact_phone.id", ondelete="CASCADE"),
        nullable=False,
    ),
)

contact_email_table = _contact_owned_table(
    "contact_email",
    Column("email_address", String(240), nullable=False),
)

contact_identity_table = _contact_owned_table(
    "contact_identity",
    Column("identity_type", String(12), nullable=False),
    Column("identity_value", String(20), nullable=False),
    Column("issuing_authority", String(40), nullable=True),
)

contact_employment_table = _contact_owned_table(
    "contact_employment",
    Column("organisation_id", Integer, nullable=False),
    Column("active", Boolean, nullable=False, default=True),
)

contact_restriction_table = _contact_owned_table(
    "contact_restriction",
    Column("restriction_type", String(12), nullable=False),
    Column("start_date", Date, nullable=True),
    Column("expiry_date", Date, nullable=True),
    Column("comments", String(240), nullable=True),
)

# Reference data ---------------------------------------------------------------

reference_code_table = Table(
    "reference_codes",
    mapper_registry.metadata,
    _id_column(),
    Column("group_code", String(40), nullable=False),
    Column("code", String(40), nullable=False),
    Column("description", String(100), nullable=False),
    Column("display_order", Integer, nullable=False, default=0),
    Column("is_active", Boolean, nullable=False, default=True),
    UniqueConstraint("group_code", "code"),
    sqlite_autoincrement=True,
)

TABLE_BY_CLASS: dict[type[object], Table] = {
    PrisonerContact: prisoner_contact_table,
    PrisonerContactRestriction: prisoner_contact_restriction_table,
    PrisonerDomesticStatus: prisoner_domestic_status_table,
    PrisonerNumberOfChildren: prisoner_number_of_children_table,
    PrisonerRestriction: prisoner_restriction_table,
    Contact: contact_table,
    ContactPhone: contact_phone_table,
    ContactAddress: contact_address_table,
    ContactAddressPhone: contact_address_phone_table,
    ContactEmail: contact_email_table,
    ContactIdentity: contact_identity_table,
    ContactEmployment: contact_employment_table,
    ContactRestriction: contact_restriction_table,
    ReferenceCode: reference_code_table,
}


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")
    # no relationship() properties: the merge code manages ordering of dependent rows itself
    for entity_cls, table in TABLE_BY_CLASS.items():
        mapper_registry.map_imperatively(entity_cls, table)
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create every mapped table; used when migrations are bypassed."""

    start_mappers()
    mapper_registry.metadata.create_all(engine)
