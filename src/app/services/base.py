"""Transaction boundary shared by all services."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.config import get_settings
from src.app.core.exceptions import AppError, InternalError
from src.app.core.logging import get_logger

logger = get_logger(__name__)


class TransactionalService:
    """Base for services that own a session's transaction.

    Every operation runs inside `transaction()`: it is bounded by the
    configured timeout, commits on success and rolls back on any error.
    Typed errors propagate unchanged; engine failures and timeouts surface
    as InternalError.
    """

    def __init__(self, session: AsyncSession, operation_timeout: float | None = None):
        self.session = session
        self.operation_timeout = (
            operation_timeout
            if operation_timeout is not None
            else get_settings().database_operation_timeout_seconds
        )

    @asynccontextmanager
    async def transaction(self, operation: str, *, commit: bool = True) -> AsyncGenerator[None]:
        try:
            async with asyncio.timeout(self.operation_timeout):
                yield
                if commit:
                    await self.session.commit()
        except AppError:
            await self.session.rollback()
            raise
        except TimeoutError as e:
            await self.session.rollback()
            logger.error(
                "Database operation timed out",
                operation=operation,
                timeout_seconds=self.operation_timeout,
            )
            raise InternalError(
                f"{operation} timed out after {self.operation_timeout} seconds"
            ) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Database operation failed", operation=operation, error=str(e))
            raise InternalError(f"{operation} failed: database error") from e
        except Exception as e:
            await self.session.rollback()
            logger.error("Unexpected error", operation=operation, error=str(e))
            raise
