"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.app.api.dependencies.db import DBSession
from src.app.api.dependencies.repositories import (
    AssociationRepo,
    ProjectQueryRepo,
    ProjectRepo,
    TechnologyRepo,
    UserRepo,
)
from src.app.services import ProjectService, TechnologyService, UserService


def get_project_service(
    project_repo: ProjectRepo,
    association_repo: AssociationRepo,
    query_repo: ProjectQueryRepo,
    session: DBSession,
) -> ProjectService:
    """Get project service."""
    return ProjectService(project_repo, association_repo, query_repo, session)


def get_technology_service(
    technology_repo: TechnologyRepo,
    association_repo: AssociationRepo,
    session: DBSession,
) -> TechnologyService:
    """Get technology service."""
    return TechnologyService(technology_repo, association_repo, session)


def get_user_service(
    user_repo: UserRepo,
    association_repo: AssociationRepo,
    session: DBSession,
) -> UserService:
    """Get user service."""
    return UserService(user_repo, association_repo, session)


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
TechnologyServiceDep = Annotated[TechnologyService, Depends(get_technology_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
