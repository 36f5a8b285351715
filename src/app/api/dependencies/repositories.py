"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.app.api.dependencies.db import DBSession
from src.app.repositories import (
    AssociationRepository,
    ProjectQueryRepository,
    ProjectRepository,
    TechnologyRepository,
    UserRepository,
)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_technology_repository(session: DBSession) -> TechnologyRepository:
    return TechnologyRepository(session)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_association_repository(session: DBSession) -> AssociationRepository:
    return AssociationRepository(session)


def get_project_query_repository(session: DBSession) -> ProjectQueryRepository:
    return ProjectQueryRepository(session)


ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
TechnologyRepo = Annotated[TechnologyRepository, Depends(get_technology_repository)]
UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
AssociationRepo = Annotated[AssociationRepository, Depends(get_association_repository)]
ProjectQueryRepo = Annotated[ProjectQueryRepository, Depends(get_project_query_repository)]
