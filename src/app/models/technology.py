"""Technology model."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.app.models.base import utc_now


class Technology(SQLModel, table=True):
    """Technology a project can be built with. Names are unique (case-sensitive)."""

    __tablename__ = "technologies"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100, unique=True, index=True)
    description: str | None = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utc_now)
