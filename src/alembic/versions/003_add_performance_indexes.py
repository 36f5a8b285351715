"""Add project filter and sort indexes

Revision ID: 003
Revises: 002
Create Date: 2025-01-08 00:00:00.000000

"""

from collections.abc import Sequence

from alembic import op

revision: str = "003"
down_revision: str | None = "002"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_index("ix_projects_name", "projects", ["name"], unique=False)
    op.create_index("ix_projects_language", "projects", ["language"], unique=False)
    op.create_index("ix_projects_rating", "projects", ["rating"], unique=False)
    op.create_index("ix_projects_created_at", "projects", ["created_at"], unique=False)
    # Common combination: language filter with a rating bound
    op.create_index(
        "ix_projects_language_rating", "projects", ["language", "rating"], unique=False
    )
    op.create_index("ix_users_name", "users", ["name"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_users_name", table_name="users")
    op.drop_index("ix_projects_language_rating", table_name="projects")
    op.drop_index("ix_projects_created_at", table_name="projects")
    op.drop_index("ix_projects_rating", table_name="projects")
    op.drop_index("ix_projects_language", table_name="projects")
    op.drop_index("ix_projects_name", table_name="projects")
