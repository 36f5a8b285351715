"""Technology catalog service."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.exceptions import ConflictError
from src.app.core.logging import get_logger
from src.app.models import Technology
from src.app.repositories import AssociationRepository, TechnologyRepository
from src.app.services.base import TransactionalService

logger = get_logger(__name__)


class TechnologyService(TransactionalService):
    """Service for technology operations."""

    def __init__(
        self,
        technology_repo: TechnologyRepository,
        association_repo: AssociationRepository,
        session: AsyncSession,
        operation_timeout: float | None = None,
    ):
        super().__init__(session, operation_timeout)
        self.technology_repo = technology_repo
        self.association_repo = association_repo

    async def create_technology(self, name: str, description: str | None = None) -> Technology:
        """Create a technology.

        Raises:
            ConflictError: If a technology with the same name exists.
        """
        async with self.transaction("create_technology"):
            if await self.technology_repo.get_by_name(name) is not None:
                raise ConflictError(f"Technology with name '{name}' already exists")

            technology = Technology(name=name, description=description)
            self.technology_repo.add(technology)
            # Unique constraint on name handles remaining races
            try:
                await self.session.flush()
            except IntegrityError as e:
                raise ConflictError(f"Technology with name '{name}' already exists") from e

        logger.info("Technology created", technology_id=str(technology.id), name=name)
        return technology

    async def list_technologies(self) -> list[Technology]:
        async with self.transaction("list_technologies", commit=False):
            return await self.technology_repo.list_all()

    async def get_technology(self, technology_id: UUID) -> Technology:
        async with self.transaction("get_technology", commit=False):
            return await self.technology_repo.get(technology_id)

    async def delete_technology(self, technology_id: UUID) -> None:
        """Delete a technology, detaching it from every project first."""
        async with self.transaction("delete_technology"):
            technology = await self.technology_repo.get(technology_id)
            detached = await self.association_repo.cascade_delete_for_technology(technology.id)
            await self.technology_repo.delete(technology)

        logger.info(
            "Technology deleted",
            technology_id=str(technology_id),
            projects_detached=detached,
        )
