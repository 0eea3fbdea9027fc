"""Initial relsync schema.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00

Relationships, prisoner-owned records, contacts and reference codes. The
single-active tables carry a partial unique index so that a prisoner number
never has two active values.
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

SINGLE_ACTIVE_TABLES: tuple[str, ...] = ("prisoner_domestic_status", "prisoner_number_of_children")

CONTACT_OWNED_TABLES: tuple[str, ...] = (
    "contact_phone",
    "contact_address",
    "contact_address_phone",
    "contact_email",
    "contact_identity",
    "contact_employment",
    "contact_restriction",
)

# (index name, table, column) for every plain lookup index
LOOKUP_INDEXES: tuple[tuple[str, str, str], ...] = (
    ("ix_prisoner_contact_contact_id", "prisoner_contact", "contact_id"),
    ("ix_prisoner_contact_prisoner_number", "prisoner_contact", "prisoner_number"),
    (
        "ix_prisoner_contact_restriction_prisoner_contact_id",
        "prisoner_contact_restriction",
        "prisoner_contact_id",
    ),
    (
        "ix_prisoner_domestic_status_prisoner_number",
        "prisoner_domestic_status",
        "prisoner_number",
    ),
    (
        "ix_prisoner_number_of_children_prisoner_number",
        "prisoner_number_of_children",
        "prisoner_number",
    ),
    ("ix_prisoner_restriction_prisoner_number", "prisoner_restriction", "prisoner_number"),
    *((f"ix_{table}_contact_id", table, "contact_id") for table in CONTACT_OWNED_TABLES),
)


def _created() -> list[sa.Column[object]]:
    return [
        sa.Column("created_by", sa.String(length=100), nullable=False),
        sa.Column("created_time", sa.DateTime(timezone=True), nullable=False),
    ]


def _tracked() -> list[sa.Column[object]]:
    return [
        *_created(),
        sa.Column("updated_by", sa.String(length=100), nullable=True),
        sa.Column("updated_time", sa.DateTime(timezone=True), nullable=True),
    ]


def _contact_owned(name: str, *columns: sa.Column[object]) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("contact_id", sa.Integer(), nullable=False),
        *columns,
        *_tracked(),
        sa.PrimaryKeyConstraint("id", name=f"pk_{name}"),
        sa.ForeignKeyConstraint(
            ["contact_id"], ["contact.id"], name=f"fk_{name}_contact_id", ondelete="CASCADE"
        ),
        sqlite_autoincrement=True,
    )


def _create_relationship_tables() -> None:
    op.create_table(
        "prisoner_contact",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("contact_id", sa.Integer(), nullable=False),
        sa.Column("prisoner_number", sa.String(length=7), nullable=False),
        sa.Column("relationship_type", sa.String(length=12), nullable=False),
        sa.Column("relationship_to_prisoner", sa.String(length=12), nullable=False),
        sa.Column("next_of_kin", sa.Boolean(), nullable=False),
        sa.Column("emergency_contact", sa.Boolean(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("approved_visitor", sa.Boolean(), nullable=False),
        sa.Column("current_term", sa.Boolean(), nullable=False),
        sa.Column("comments", sa.String(length=240), nullable=True),
        sa.Column("expiry_date", sa.Date(), nullable=True),
        sa.Column("approved_by", sa.String(length=100), nullable=True),
        sa.Column("approved_time", sa.DateTime(timezone=True), nullable=True),
        *_tracked(),
        sa.PrimaryKeyConstraint("id", name="pk_prisoner_contact"),
        sqlite_autoincrement=True,
    )
    op.create_table(
        "prisoner_contact_restriction",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("prisoner_contact_id", sa.Integer(), nullable=False),
        sa.Column("restriction_type", sa.String(length=12), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("expiry_date", sa.Date(), nullable=True),
        sa.Column("comments", sa.String(length=240), nullable=True),
        *_tracked(),
        sa.PrimaryKeyConstraint("id", name="pk_prisoner_contact_restriction"),
        sa.ForeignKeyConstraint(
            ["prisoner_contact_id"],
            ["prisoner_contact.id"],
            name="fk_prisoner_contact_restriction_prisoner_contact_id",
            ondelete="CASCADE",
        ),
        sqlite_autoincrement=True,
    )


def _create_prisoner_tables() -> None:
    op.create_table(
        "prisoner_domestic_status",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("prisoner_number", sa.String(length=7), nullable=False),
        sa.Column("domestic_status_code", sa.String(length=12), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
        *_created(),
        sa.PrimaryKeyConstraint("id", name="pk_prisoner_domestic_status"),
        sqlite_autoincrement=True,
    )
    op.create_table(
        "prisoner_number_of_children",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("prisoner_number", sa.String(length=7), nullable=False),
        sa.Column("number_of_children", sa.String(length=50), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
        *_created(),
        sa.PrimaryKeyConstraint("id", name="pk_prisoner_number_of_children"),
        sqlite_autoincrement=True,
    )
    op.create_table(
        "prisoner_restriction",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("prisoner_number", sa.String(length=7), nullable=False),
        sa.Column("restriction_type", sa.String(length=12), nullable=False),
        sa.Column("effective_date", sa.Date(), nullable=False),
        sa.Column("expiry_date", sa.Date(), nullable=True),
        sa.Column("comment_text", sa.String(length=240), nullable=True),
        sa.Column("authorised_username", sa.String(length=100), nullable=False),
        sa.Column("current_term", sa.Boolean(), nullable=False),
        *_tracked(),
        sa.PrimaryKeyConstraint("id", name="pk_prisoner_restriction"),
        sqlite_autoincrement=True,
    )


def _create_contact_tables() -> None:
    op.create_table(
        "contact",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=12), nullable=True),
        sa.Column("last_name", sa.String(length=35), nullable=False),
        sa.Column("first_name", sa.String(length=35), nullable=False),
        sa.Column("middle_names", sa.String(length=35), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("staff_flag", sa.Boolean(), nullable=False),
        *_tracked(),
        sa.PrimaryKeyConstraint("id", name="pk_contact"),
        sqlite_autoincrement=True,
    )
    _contact_owned(
        "contact_phone",
        sa.Column("phone_type", sa.String(length=12), nullable=False),
        sa.Column("phone_number", sa.String(length=40), nullable=False),
        sa.Column("ext_number", sa.String(length=7), nullable=True),
    )
    _contact_owned(
        "contact_address",
        sa.Column("address_type", sa.String(length=12), nullable=True),
        sa.Column("primary_address", sa.Boolean(), nullable=False),
        sa.Column("flat", sa.String(length=30), nullable=True),
        sa.Column("property", sa.String(length=130), nullable=True),
        sa.Column("street", sa.String(length=160), nullable=True),
        sa.Column("area", sa.String(length=70), nullable=True),
        sa.Column("city_code", sa.String(length=12), nullable=True),
        sa.Column("county_code", sa.String(length=12), nullable=True),
        sa.Column("postcode", sa.String(length=12), nullable=True),
        sa.Column("country_code", sa.String(length=12), nullable=True),
    )
    _contact_owned(
        "contact_address_phone",
        sa.Column(
            "contact_address_id",
            sa.Integer(),
            sa.ForeignKey(
                "contact_address.id",
                name="fk_contact_address_phone_contact_address_id",
                ondelete="CASCADE",
            ),
            nullable=False,
        ),
        sa.Column(
            "contact_phone_id",
            sa.Integer(),
            sa.ForeignKey(
                "contact_phone.id",
                name="fk_contact_address_phone_contact_phone_id",
                ondelete="CASCADE",
            ),
            nullable=False,
        ),
    )
    _contact_owned(
        "contact_email",
        sa.Column("email_address", sa.String(length=240), nullable=False),
    )
    _contact_owned(
        "contact_identity",
        sa.Column("identity_type", sa.String(length=12), nullable=False),
        sa.Column("identity_value", sa.String(length=20), nullable=False),
        sa.Column("issuing_authority", sa.String(length=40), nullable=True),
    )
    _contact_owned(
        "contact_employment",
        sa.Column("organisation_id", sa.Integer(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
    )
    _contact_owned(
        "contact_restriction",
        sa.Column("restriction_type", sa.String(length=12), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("expiry_date", sa.Date(), nullable=True),
        sa.Column("comments", sa.String(length=240), nullable=True),
    )


def upgrade() -> None:
    _create_relationship_tables()
    _create_prisoner_tables()
    _create_contact_tables()
    op.create_table(
        "reference_codes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("group_code", sa.String(length=40), nullable=False),
        sa.Column("code", sa.String(length=40), nullable=False),
        sa.Column("description", sa.String(length=100), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_reference_codes"),
        sa.UniqueConstraint("group_code", "code", name="uq_reference_codes_group_code"),
        sqlite_autoincrement=True,
    )

    for name, table, column in LOOKUP_INDEXES:
        op.create_index(name, table, [column], unique=False)
    for table in SINGLE_ACTIVE_TABLES:
        active = sa.column("active") == sa.true()
        op.create_index(
            f"uq_{table}_active_prisoner_number",
            table,
            ["prisoner_number"],
            unique=True,
            sqlite_where=active,
            postgresql_where=active,
        )


def downgrade() -> None:
    for table in reversed(SINGLE_ACTIVE_TABLES):
        op.drop_index(f"uq_{table}_active_prisoner_number", table_name=table)
    for name, table, _column in reversed(LOOKUP_INDEXES):
        op.drop_index(name, table_name=table)

    op.drop_table("reference_codes")
    for table in reversed(CONTACT_OWNED_TABLES):
        op.drop_table(table)
    op.drop_table("contact")
    op.drop_table("prisoner_restriction")
    op.drop_table("prisoner_number_of_children")
    op.drop_table("prisoner_domestic_status")
    op.drop_table("prisoner_contact_restriction")
    op.drop_table("prisoner_contact")
