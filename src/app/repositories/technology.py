"""Repository for Technology entity."""

from sqlmodel import select

from src.app.models import Technology
from src.app.repositories.base import BaseRepository


class TechnologyRepository(BaseRepository[Technology]):
    """Repository for Technology entity."""

    model = Technology
    entity_name = "Technology"

    async def get_by_name(self, name: str) -> Technology | None:
        """Get technology by exact (case-sensitive) name."""
        result = await self.session.execute(select(Technology).where(Technology.name == name))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Technology]:
        """List all technologies ordered by name."""
        result = await self.session.execute(
            select(Technology).order_by(Technology.name.asc(), Technology.id.asc())
        )
        return list(result.scalars().all())
