"""Project model - the aggregate root of the catalog."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Index
from sqlmodel import Field, SQLModel

from src.app.models.base import utc_now

MIN_RATING = 0.0
MAX_RATING = 5.0


class Project(SQLModel, table=True):
    """Project entity.

    Associations to technologies and users live in separate join tables
    (see models/association.py) and are only written through ProjectService.
    """

    __tablename__ = "projects"
    __table_args__ = (
        CheckConstraint(
            "rating IS NULL OR (rating >= 0.0 AND rating <= 5.0)",
            name="ck_projects_rating_range",
        ),
        Index("ix_projects_language_rating", "language", "rating"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255, index=True)
    description: str = Field(max_length=2000)
    repository_url: str = Field(max_length=2048)
    language: str = Field(max_length=100, index=True)
    rating: float | None = Field(default=None, index=True)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
