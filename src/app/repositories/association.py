"""Repository for the project-technology and project-user join tables.

Replacement is validate-then-delete-then-insert. All id lookups happen
before the first write, so an unknown id raises NotFoundError while the
existing rows are still intact. Callers run these methods inside the same
transaction as the project write they belong to.
"""

from collections.abc import Iterable, Sequence
from uuid import UUID

from sqlalchemy import case, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.app.core.exceptions import NotFoundError
from src.app.models import ProjectRole, ProjectTechnology, ProjectUser, Technology, User
from src.app.models.base import utc_now


def dedupe_ids(ids: Iterable[UUID]) -> list[UUID]:
    """Collapse repeated ids, keeping the first occurrence and input order."""
    return list(dict.fromkeys(ids))


def assign_roles(user_ids: Sequence[UUID]) -> list[tuple[UUID, ProjectRole]]:
    """First user is the owner, every other user a contributor."""
    return [
        (user_id, ProjectRole.OWNER if index == 0 else ProjectRole.CONTRIBUTOR)
        for index, user_id in enumerate(dedupe_ids(user_ids))
    ]


# Owner sorts before contributor, contributor before viewer
_ROLE_RANK = case(
    {
        ProjectRole.OWNER.value: 0,
        ProjectRole.CONTRIBUTOR.value: 1,
        ProjectRole.VIEWER.value: 2,
    },
    value=ProjectUser.role,
    else_=3,
)


class AssociationRepository:
    """Data access for both join relations of a project."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _require_existing(self, model: type[Technology] | type[User], ids: list[UUID]) -> None:
        if not ids:
            return
        result = await self.session.execute(select(model.id).where(model.id.in_(ids)))
        found = set(result.scalars().all())
        for id in ids:
            if id not in found:
                raise NotFoundError(model.__name__, id)

    async def replace_technologies(
        self, project_id: UUID, technology_ids: Iterable[UUID]
    ) -> list[UUID]:
        """Make the project's technology set exactly `technology_ids`.

        Returns:
            The deduplicated ids that were written.

        Raises:
            NotFoundError: If any technology id is unknown. Nothing is written.
        """
        ids = dedupe_ids(technology_ids)
        await self._require_existing(Technology, ids)

        await self.session.execute(
            delete(ProjectTechnology).where(ProjectTechnology.project_id == project_id)
        )
        now = utc_now()
        self.session.add_all(
            [
                ProjectTechnology(project_id=project_id, technology_id=id, created_at=now)
                for id in ids
            ]
        )
        await self.session.flush()
        return ids

    async def replace_users(
        self, project_id: UUID, ordered_user_ids: Sequence[UUID]
    ) -> list[tuple[UUID, ProjectRole]]:
        """Make the project's user set exactly `ordered_user_ids`.

        The first id becomes owner and the rest contributors. Viewer is never
        assigned here.

        Raises:
            NotFoundError: If any user id is unknown. Nothing is written.
        """
        assignments = assign_roles(ordered_user_ids)
        await self._require_existing(User, [user_id for user_id, _ in assignments])

        await self.session.execute(
            delete(ProjectUser).where(ProjectUser.project_id == project_id)
        )
        now = utc_now()
        self.session.add_all(
            [
                ProjectUser(project_id=project_id, user_id=user_id, role=role.value, created_at=now)
                for user_id, role in assignments
            ]
        )
        await self.session.flush()
        return assignments

    async def list_technologies_for(self, project_id: UUID) -> list[Technology]:
        """Technologies of a project ordered by name, then id."""
        grouped = await self.list_technologies_for_many([project_id])
        return grouped.get(project_id, [])

    async def list_users_for(self, project_id: UUID) -> list[tuple[User, ProjectRole]]:
        """(user, role) pairs of a project: owner first, then by name, then id."""
        grouped = await self.list_users_for_many([project_id])
        return grouped.get(project_id, [])

    async def list_technologies_for_many(
        self, project_ids: Sequence[UUID]
    ) -> dict[UUID, list[Technology]]:
        """Technologies for several projects in a single query."""
        if not project_ids:
            return {}
        result = await self.session.execute(
            select(ProjectTechnology.project_id, Technology)
            .join(Technology, Technology.id == ProjectTechnology.technology_id)
            .where(ProjectTechnology.project_id.in_(project_ids))
            .order_by(Technology.name.asc(), Technology.id.asc())
        )
        grouped: dict[UUID, list[Technology]] = {}
        for project_id, technology in result.all():
            grouped.setdefault(project_id, []).append(technology)
        return grouped

    async def list_users_for_many(
        self, project_ids: Sequence[UUID]
    ) -> dict[UUID, list[tuple[User, ProjectRole]]]:
        """(user, role) pairs for several projects in a single query."""
        if not project_ids:
            return {}
        result = await self.session.execute(
            select(ProjectUser.project_id, User, ProjectUser.role)
            .join(User, User.id == ProjectUser.user_id)
            .where(ProjectUser.project_id.in_(project_ids))
            .order_by(_ROLE_RANK.asc(), User.name.asc(), User.id.asc())
        )
        grouped: dict[UUID, list[tuple[User, ProjectRole]]] = {}
        for project_id, user, role in result.all():
            grouped.setdefault(project_id, []).append((user, ProjectRole(role)))
        return grouped

    async def cascade_delete_for_project(self, project_id: UUID) -> int:
        """Remove every association row of a project. Returns rows removed."""
        technologies = await self.session.execute(
            delete(ProjectTechnology).where(ProjectTechnology.project_id == project_id)
        )
        users = await self.session.execute(
            delete(ProjectUser).where(ProjectUser.project_id == project_id)
        )
        return technologies.rowcount + users.rowcount

    async def cascade_delete_for_technology(self, technology_id: UUID) -> int:
        """Detach a technology from all projects. Returns rows removed."""
        result = await self.session.execute(
            delete(ProjectTechnology).where(ProjectTechnology.technology_id == technology_id)
        )
        return result.rowcount

    async def cascade_delete_for_user(self, user_id: UUID) -> int:
        """Detach a user from all projects. Returns rows removed."""
        result = await self.session.execute(
            delete(ProjectUser).where(ProjectUser.user_id == user_id)
        )
        return result.rowcount
