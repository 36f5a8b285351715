"""Join tables linking projects to technologies and users."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import CheckConstraint, Column, ForeignKey, Uuid
from sqlmodel import Field, SQLModel

from src.app.models.base import utc_now
from src.app.models.enums import ProjectRole


class ProjectTechnology(SQLModel, table=True):
    """Junction table for project-technology associations."""

    __tablename__ = "project_technologies"

    project_id: UUID = Field(
        sa_column=Column(
            Uuid, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True
        )
    )
    technology_id: UUID = Field(
        sa_column=Column(
            Uuid,
            ForeignKey("technologies.id", ondelete="CASCADE"),
            primary_key=True,
            index=True,
        )
    )
    created_at: datetime = Field(default_factory=utc_now)


class ProjectUser(SQLModel, table=True):
    """Junction table for project-user associations, carrying the user's role."""

    __tablename__ = "project_users"
    __table_args__ = (
        CheckConstraint(
            "role IN ('owner', 'contributor', 'viewer')",
            name="ck_project_users_role",
        ),
    )

    project_id: UUID = Field(
        sa_column=Column(
            Uuid, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True
        )
    )
    user_id: UUID = Field(
        sa_column=Column(
            Uuid,
            ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
            index=True,
        )
    )
    role: str = Field(default=ProjectRole.CONTRIBUTOR.value, max_length=20)
    created_at: datetime = Field(default_factory=utc_now)
