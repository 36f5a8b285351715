from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.app.models import ProjectRole, User


class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("User name cannot be empty or whitespace only")
        return v


class UserRead(BaseModel):
    id: UUID
    name: str
    email: EmailStr
    created_at: datetime

    model_config = {"from_attributes": True}


class UserWithRole(UserRead):
    """A user as seen from one project, with their role in it."""

    role: ProjectRole

    @classmethod
    def from_pair(cls, user: User, role: ProjectRole) -> "UserWithRole":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            created_at=user.created_at,
            role=role,
        )
