"""Add project_technologies and project_users join tables

Revision ID: 002
Revises: 001
Create Date: 2025-01-05 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel

from alembic import op

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "project_technologies",
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("technology_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["technology_id"], ["technologies.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("project_id", "technology_id"),
    )
    # Reverse lookup: projects using a technology
    op.create_index(
        "ix_project_technologies_technology_id",
        "project_technologies",
        ["technology_id"],
        unique=False,
    )

    op.create_table(
        "project_users",
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("role", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "role IN ('owner', 'contributor', 'viewer')",
            name="ck_project_users_role",
        ),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("project_id", "user_id"),
    )
    # Reverse lookup: projects a user belongs to
    op.create_index("ix_project_users_user_id", "project_users", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_project_users_user_id", table_name="project_users")
    op.drop_table("project_users")
    op.drop_index("ix_project_technologies_technology_id", table_name="project_technologies")
    op.drop_table("project_technologies")
