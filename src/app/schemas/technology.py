"""Technology schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class TechnologyCreate(BaseModel):
    """Schema for creating a technology."""

    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Technology name cannot be empty or whitespace only")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                return None
        return v


class TechnologyRead(BaseModel):
    """Schema for reading a technology."""

    id: UUID
    name: str
    description: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
