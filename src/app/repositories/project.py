"""Repository for Project entity."""

from typing import Any
from uuid import UUID

from sqlmodel import select

from src.app.core.exceptions import NotFoundError, ValidationFailedError
from src.app.models import MAX_RATING, MIN_RATING, Project
from src.app.models.base import utc_now
from src.app.repositories.base import BaseRepository

# Scalar columns a caller may set; id and timestamps are owned by the store
PROJECT_FIELDS = frozenset({"name", "description", "repository_url", "language", "rating"})
REQUIRED_TEXT_FIELDS = ("name", "description", "repository_url", "language")


def check_project_fields(fields: dict[str, Any]) -> None:
    """Enforce column invariants before anything is written.

    Raises:
        ValidationFailedError: On unknown fields, empty required text or a
            rating outside [0.0, 5.0].
    """
    unknown = set(fields) - PROJECT_FIELDS
    if unknown:
        raise ValidationFailedError(f"Unknown project fields: {', '.join(sorted(unknown))}")

    for name in REQUIRED_TEXT_FIELDS:
        if name in fields:
            value = fields[name]
            if value is None or not str(value).strip():
                raise ValidationFailedError(f"Project {name} cannot be empty")

    rating = fields.get("rating")
    if rating is None:
        return
    if isinstance(rating, bool) or not isinstance(rating, int | float):
        raise ValidationFailedError(f"Rating must be a number, got {type(rating).__name__}")
    if not (MIN_RATING <= rating <= MAX_RATING):
        raise ValidationFailedError(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}"
        )


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project rows. Knows nothing about associations."""

    model = Project
    entity_name = "Project"

    async def insert(self, fields: dict[str, Any]) -> Project:
        """Insert a project, assigning id and timestamps."""
        check_project_fields(fields)
        missing = [name for name in REQUIRED_TEXT_FIELDS if name not in fields]
        if missing:
            raise ValidationFailedError(f"Missing project fields: {', '.join(missing)}")

        now = utc_now()
        project = Project(**fields, created_at=now, updated_at=now)
        self.add(project)
        await self.session.flush()
        return project

    async def get_for_update(self, id: UUID) -> Project:
        """Get a project and lock its row until the transaction ends.

        Serializes concurrent writers on the same project so the last commit
        fully determines its association sets. Backends without row locks
        (SQLite) ignore the lock clause.
        """
        result = await self.session.execute(
            select(Project).where(Project.id == id).with_for_update()
        )
        project = result.scalar_one_or_none()
        if project is None:
            raise NotFoundError(self.entity_name, id)
        return project

    async def update_fields(self, id: UUID, fields: dict[str, Any]) -> Project:
        """Update only the supplied scalar fields and refresh updated_at."""
        check_project_fields(fields)
        project = await self.get_for_update(id)
        for name, value in fields.items():
            setattr(project, name, value)
        self.touch(project)
        await self.session.flush()
        return project

    def touch(self, project: Project) -> None:
        """Refresh updated_at (SQLModel has no onupdate callbacks)."""
        project.updated_at = utc_now()

