"""Project schemas for API request/response."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import (
    BaseModel,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationInfo,
    field_validator,
    model_validator,
)

from src.app.schemas.technology import TechnologyRead
from src.app.schemas.user import UserWithRole
from src.app.services import ProjectAggregate

_http_url = TypeAdapter(HttpUrl)

SCALAR_FIELDS = ("name", "description", "repository_url", "language", "rating")


def _validate_repository_url(v: str) -> str:
    v = v.strip()
    # Validate as http(s) but store exactly what the client sent
    _http_url.validate_python(v)
    return v


def _validate_text(v: str, label: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"Project {label} cannot be empty or whitespace only")
    return v


class ProjectCreate(BaseModel):
    """Schema for creating a project.

    `user_ids` is ordered: the first user becomes the project owner.
    """

    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1, max_length=2000)
    repository_url: str = Field(max_length=2048)
    language: str = Field(min_length=1, max_length=100)
    rating: float | None = Field(default=None, ge=0.0, le=5.0, allow_inf_nan=False)
    technology_ids: list[UUID] | None = None
    user_ids: list[UUID] | None = None

    @field_validator("name", "description", "language")
    @classmethod
    def validate_text(cls, v: str, info: ValidationInfo) -> str:
        return _validate_text(v, info.field_name)

    @field_validator("repository_url")
    @classmethod
    def validate_repository_url(cls, v: str) -> str:
        return _validate_repository_url(v)

    def scalar_fields(self) -> dict[str, Any]:
        return self.model_dump(include=set(SCALAR_FIELDS))


class ProjectUpdate(BaseModel):
    """Schema for partially updating a project.

    Omitted fields are left alone. For `technology_ids` and `user_ids`,
    omission (or null) keeps the current set while `[]` clears it. An
    explicit `"rating": null` removes the rating.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1, max_length=2000)
    repository_url: str | None = Field(default=None, max_length=2048)
    language: str | None = Field(default=None, min_length=1, max_length=100)
    rating: float | None = Field(default=None, ge=0.0, le=5.0, allow_inf_nan=False)
    technology_ids: list[UUID] | None = None
    user_ids: list[UUID] | None = None

    @field_validator("name", "description", "language")
    @classmethod
    def validate_text(cls, v: str | None, info: ValidationInfo) -> str | None:
        if v is not None:
            v = _validate_text(v, info.field_name)
        return v

    @field_validator("repository_url")
    @classmethod
    def validate_repository_url(cls, v: str | None) -> str | None:
        if v is not None:
            v = _validate_repository_url(v)
        return v

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "ProjectUpdate":
        for name in ("name", "description", "repository_url", "language"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"Project {name} cannot be null")
        return self

    def scalar_fields(self) -> dict[str, Any]:
        """Only the scalar fields the client actually sent."""
        return self.model_dump(include=set(SCALAR_FIELDS), exclude_unset=True)


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    id: UUID
    name: str
    description: str
    repository_url: str
    language: str
    rating: float | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProjectWithRelations(ProjectRead):
    """A project with its technologies and users (owner first)."""

    technologies: list[TechnologyRead]
    users: list[UserWithRole]

    @classmethod
    def from_aggregate(cls, aggregate: ProjectAggregate) -> "ProjectWithRelations":
        project = ProjectRead.model_validate(aggregate.project)
        return cls(
            **project.model_dump(),
            technologies=[TechnologyRead.model_validate(t) for t in aggregate.technologies],
            users=[UserWithRole.from_pair(user, role) for user, role in aggregate.users],
        )
