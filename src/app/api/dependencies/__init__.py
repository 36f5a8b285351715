"""FastAPI dependency injection definitions.

Re-exports all dependencies so routers import from one place.
"""

# Database
from src.app.api.dependencies.db import DBSession, get_db_session

# Repositories
from src.app.api.dependencies.repositories import (
    AssociationRepo,
    ProjectQueryRepo,
    ProjectRepo,
    TechnologyRepo,
    UserRepo,
    get_association_repository,
    get_project_query_repository,
    get_project_repository,
    get_technology_repository,
    get_user_repository,
)

# Services
from src.app.api.dependencies.services import (
    ProjectServiceDep,
    TechnologyServiceDep,
    UserServiceDep,
    get_project_service,
    get_technology_service,
    get_user_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Repositories
    "AssociationRepo",
    "ProjectQueryRepo",
    "ProjectRepo",
    "TechnologyRepo",
    "UserRepo",
    "get_association_repository",
    "get_project_query_repository",
    "get_project_repository",
    "get_technology_repository",
    "get_user_repository",
    # Services
    "ProjectServiceDep",
    "TechnologyServiceDep",
    "UserServiceDep",
    "get_project_service",
    "get_technology_service",
    "get_user_service",
]
