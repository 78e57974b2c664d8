"""Initial migration: reference data, applications, users and role assignments.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

import uuid
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_DEFAULT_ROLES = [
    ("admin", "Administrator"),
    ("federal_repr", "Federal representative"),
    ("cc", "Central commission member"),
    ("mc", "Municipal commission member"),
    ("tc", "Territorial commission member"),
    ("observer", "Observer"),
]


def upgrade() -> None:
    # 1. reference data
    roles = op.create_table(
        "roles",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("slug", sa.String(50), nullable=False, unique=True),
        sa.Column("name", sa.String(200), nullable=False),
    )
    op.bulk_insert(roles, [{"id": uuid.uuid4(), "slug": slug, "name": name} for slug, name in _DEFAULT_ROLES])

    op.create_table(
        "current_roles",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("slug", sa.String(50), nullable=False, unique=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
        sa.Column("must_have_uic", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("must_have_tic", sa.Boolean, nullable=False, server_default="false"),
    )
    op.create_table(
        "regions",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("kind", sa.Integer, nullable=False),
        sa.Column("parent_id", sa.Uuid, sa.ForeignKey("regions.id"), nullable=True),
        sa.Column("has_tic", sa.Boolean, nullable=False, server_default="false"),
    )
    op.create_table(
        "uics",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("kind", sa.String(3), nullable=False),
        sa.Column("number", sa.Integer, nullable=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("region_id", sa.Uuid, sa.ForeignKey("regions.id"), nullable=True),
        sa.Column("adm_region_id", sa.Uuid, sa.ForeignKey("regions.id"), nullable=True),
        sa.CheckConstraint("kind IN ('uic', 'tic')", name="ck_uics_kind"),
    )
    op.create_index("ix_uics_number", "uics", ["number"])
    op.create_index("ix_uics_region_id", "uics", ["region_id"])
    op.create_table(
        "organisations",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String(200), nullable=False, unique=True),
    )
    op.create_table(
        "mobile_groups",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
    )

    # 2. applications
    op.create_table(
        "user_apps",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("patronymic", sa.String(100), nullable=True),
        sa.Column("year_born", sa.Integer, nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("uic", sa.Integer, nullable=True),
        sa.Column("can_be_observer", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("state", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("region_id", sa.Uuid, sa.ForeignKey("regions.id"), nullable=True),
        sa.Column("adm_region_id", sa.Uuid, sa.ForeignKey("regions.id"), nullable=True),
        sa.Column("organisation_id", sa.Uuid, sa.ForeignKey("organisations.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("state IN ('pending', 'approved', 'rejected')", name="ck_user_apps_state"),
    )
    op.create_table(
        "user_app_current_roles",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_app_id", sa.Uuid, sa.ForeignKey("user_apps.id", ondelete="CASCADE"), nullable=False),
        sa.Column("current_role_id", sa.Uuid, sa.ForeignKey("current_roles.id"), nullable=False),
        sa.Column("value", sa.String(200), nullable=True),
        sa.Column("position", sa.Integer, nullable=False),
    )

    # 3. users and assignments
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("phone", sa.String(10), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("patronymic", sa.String(100), nullable=True),
        sa.Column("year_born", sa.Integer, nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("hashed_password", sa.String(255), nullable=True),
        sa.Column("region_id", sa.Uuid, sa.ForeignKey("regions.id"), nullable=True),
        sa.Column("adm_region_id", sa.Uuid, sa.ForeignKey("regions.id"), nullable=True),
        sa.Column("organisation_id", sa.Uuid, sa.ForeignKey("organisations.id"), nullable=True),
        sa.Column("mobile_group_id", sa.Uuid, sa.ForeignKey("mobile_groups.id"), nullable=True),
        sa.Column("user_app_id", sa.Uuid, sa.ForeignKey("user_apps.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_users_phone", "users", ["phone"], unique=True)
    op.create_table(
        "user_roles",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("role_id", sa.Uuid, sa.ForeignKey("roles.id"), nullable=False),
        sa.UniqueConstraint("user_id", "role_id", name="uq_user_roles_user_role"),
    )
    op.create_table(
        "user_current_roles",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("current_role_id", sa.Uuid, sa.ForeignKey("current_roles.id"), nullable=False),
        sa.Column("uic_id", sa.Uuid, sa.ForeignKey("uics.id"), nullable=True),
        sa.Column("nomination_source_id", sa.Uuid, nullable=True),
        sa.UniqueConstraint("user_id", "current_role_id", name="uq_user_current_roles_user_role"),
    )


def downgrade() -> None:
    op.drop_table("user_current_roles")
    op.drop_table("user_roles")
    op.drop_index("ix_users_phone", table_name="users")
    op.drop_table("users")
    op.drop_table("user_app_current_roles")
    op.drop_table("user_apps")
    op.drop_table("mobile_groups")
    op.drop_table("organisations")
    op.drop_index("ix_uics_region_id", table_name="uics")
    op.drop_index("ix_uics_number", table_name="uics")
    op.drop_table("uics")
    op.drop_table("regions")
    op.drop_table("current_roles")
    op.drop_table("roles")
