from src.app.services.project_service import ProjectAggregate, ProjectPage, ProjectService
from src.app.services.technology_service import TechnologyService
from src.app.services.user_service import UserService

__all__ = [
    "ProjectAggregate",
    "ProjectPage",
    "ProjectService",
    "TechnologyService",
    "UserService",
]
