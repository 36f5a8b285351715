"""User directory service."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.exceptions import ConflictError
from src.app.core.logging import get_logger
from src.app.models import User
from src.app.repositories import AssociationRepository, UserRepository
from src.app.services.base import TransactionalService

logger = get_logger(__name__)


class UserService(TransactionalService):
    """User management service."""

    def __init__(
        self,
        user_repo: UserRepository,
        association_repo: AssociationRepository,
        session: AsyncSession,
        operation_timeout: float | None = None,
    ):
        super().__init__(session, operation_timeout)
        self.user_repo = user_repo
        self.association_repo = association_repo

    async def create_user(self, name: str, email: str) -> User:
        """Create a user.

        Raises:
            ConflictError: If the email is already registered.
        """
        async with self.transaction("create_user"):
            if await self.user_repo.exists_by_email(email):
                raise ConflictError(f"User with email '{email}' already exists")

            user = User(name=name, email=email)
            self.user_repo.add(user)
            try:
                await self.session.flush()
            except IntegrityError as e:
                raise ConflictError(f"User with email '{email}' already exists") from e

        logger.info("User created", user_id=str(user.id))
        return user

    async def list_users(self) -> list[User]:
        async with self.transaction("list_users", commit=False):
            return await self.user_repo.list_all()

    async def get_user(self, user_id: UUID) -> User:
        async with self.transaction("get_user", commit=False):
            return await self.user_repo.get(user_id)

    async def delete_user(self, user_id: UUID) -> None:
        """Delete a user, removing them from every project first."""
        async with self.transaction("delete_user"):
            user = await self.user_repo.get(user_id)
            detached = await self.association_repo.cascade_delete_for_user(user.id)
            await self.user_repo.delete(user)

        logger.info("User deleted", user_id=str(user_id), projects_detached=detached)
