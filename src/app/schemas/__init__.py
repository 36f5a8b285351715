from src.app.schemas.pagination import PaginatedResponse, PaginationMetadata
from src.app.schemas.project import (
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
    ProjectWithRelations,
)
from src.app.schemas.technology import TechnologyCreate, TechnologyRead
from src.app.schemas.user import UserCreate, UserRead, UserWithRole

__all__ = [
    # Pagination
    "PaginatedResponse",
    "PaginationMetadata",
    # Project
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    "ProjectWithRelations",
    # Technology
    "TechnologyCreate",
    "TechnologyRead",
    # User
    "UserCreate",
    "UserRead",
    "UserWithRole",
]
