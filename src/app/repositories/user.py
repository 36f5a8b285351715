"""Repository for User entity."""

from sqlmodel import select

from src.app.models import User
from src.app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User entity."""

    model = User
    entity_name = "User"

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """Check if a user with the given email exists."""
        user = await self.get_by_email(email)
        return user is not None

    async def list_all(self) -> list[User]:
        """List all users ordered by name."""
        result = await self.session.execute(select(User).order_by(User.name.asc(), User.id.asc()))
        return list(result.scalars().all())
