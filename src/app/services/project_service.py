"""Project aggregate service.

A project together with its technology set and its user/role set is one
unit: every write below touches the projects row and both join tables in a
single transaction, so readers never see a half-applied change.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.logging import get_logger
from src.app.models import Project, ProjectRole, Technology, User
from src.app.repositories import (
    AssociationRepository,
    ProjectQuery,
    ProjectQueryRepository,
    ProjectRepository,
)
from src.app.services.base import TransactionalService

logger = get_logger(__name__)


@dataclass
class ProjectAggregate:
    """A project with its technologies and (user, role) pairs."""

    project: Project
    technologies: list[Technology] = field(default_factory=list)
    users: list[tuple[User, ProjectRole]] = field(default_factory=list)


@dataclass
class ProjectPage:
    """One page of hydrated projects plus the total match count."""

    items: list[ProjectAggregate]
    total: int
    page: int
    page_size: int


class ProjectService(TransactionalService):
    """Create, read, update, delete and list projects with their associations."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        association_repo: AssociationRepository,
        query_repo: ProjectQueryRepository,
        session: AsyncSession,
        operation_timeout: float | None = None,
    ):
        super().__init__(session, operation_timeout)
        self.project_repo = project_repo
        self.association_repo = association_repo
        self.query_repo = query_repo

    async def _load_aggregate(self, project: Project) -> ProjectAggregate:
        technologies = await self.association_repo.list_technologies_for(project.id)
        users = await self.association_repo.list_users_for(project.id)
        return ProjectAggregate(project=project, technologies=technologies, users=users)

    async def create_project(
        self,
        fields: dict[str, Any],
        technology_ids: Sequence[UUID] | None = None,
        user_ids: Sequence[UUID] | None = None,
    ) -> ProjectAggregate:
        """Insert a project and its associations atomically.

        The first user id becomes the owner, the rest contributors.

        Raises:
            ValidationFailedError: Invalid scalar fields.
            NotFoundError: Unknown technology or user id. Nothing is persisted.
        """
        async with self.transaction("create_project"):
            project = await self.project_repo.insert(fields)
            if technology_ids:
                await self.association_repo.replace_technologies(project.id, technology_ids)
            if user_ids:
                await self.association_repo.replace_users(project.id, user_ids)
            aggregate = await self._load_aggregate(project)

        logger.info(
            "Project created",
            project_id=str(project.id),
            technology_count=len(aggregate.technologies),
            user_count=len(aggregate.users),
        )
        return aggregate

    async def update_project(
        self,
        project_id: UUID,
        fields: dict[str, Any],
        technology_ids: Sequence[UUID] | None = None,
        user_ids: Sequence[UUID] | None = None,
    ) -> ProjectAggregate:
        """Apply a partial update to a project and optionally its associations.

        Only keys present in `fields` are written. For the association lists,
        None leaves the current set untouched while an empty list clears it.
        updated_at is refreshed on every call.

        Raises:
            NotFoundError: Unknown project, technology or user id.
            ValidationFailedError: Invalid scalar fields.
        """
        async with self.transaction("update_project"):
            project = await self.project_repo.update_fields(project_id, fields)
            if technology_ids is not None:
                await self.association_repo.replace_technologies(project.id, technology_ids)
            if user_ids is not None:
                await self.association_repo.replace_users(project.id, user_ids)
            aggregate = await self._load_aggregate(project)

        logger.info(
            "Project updated",
            project_id=str(project_id),
            fields=sorted(fields),
            technologies_replaced=technology_ids is not None,
            users_replaced=user_ids is not None,
        )
        return aggregate

    async def get_project_aggregate(self, project_id: UUID) -> ProjectAggregate:
        """Load a project with its technologies and users."""
        async with self.transaction("get_project", commit=False):
            project = await self.project_repo.get(project_id)
            return await self._load_aggregate(project)

    async def delete_project(self, project_id: UUID) -> None:
        """Delete a project and every association row pointing at it."""
        async with self.transaction("delete_project"):
            project = await self.project_repo.get(project_id)
            removed = await self.association_repo.cascade_delete_for_project(project.id)
            await self.project_repo.delete(project)

        logger.info("Project deleted", project_id=str(project_id), associations_removed=removed)

    async def list_projects(self, query: ProjectQuery) -> ProjectPage:
        """Run a filtered listing and hydrate each project on the page.

        Associations are fetched with one query per relation for the whole
        page rather than per project.
        """
        async with self.transaction("list_projects", commit=False):
            projects, total = await self.query_repo.fetch_page(query)
            ids = [project.id for project in projects]
            technologies = await self.association_repo.list_technologies_for_many(ids)
            users = await self.association_repo.list_users_for_many(ids)

        items = [
            ProjectAggregate(
                project=project,
                technologies=technologies.get(project.id, []),
                users=users.get(project.id, []),
            )
            for project in projects
        ]
        return ProjectPage(items=items, total=total, page=query.page, page_size=query.page_size)
