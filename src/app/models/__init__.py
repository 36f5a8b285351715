"""Model exports.

Import from here: `from src.app.models import Project, Technology`
"""

from src.app.models.association import ProjectTechnology, ProjectUser
from src.app.models.enums import ProjectRole, SortField, SortOrder
from src.app.models.project import MAX_RATING, MIN_RATING, Project
from src.app.models.technology import Technology
from src.app.models.user import User

__all__ = [
    # Enums
    "ProjectRole",
    "SortField",
    "SortOrder",
    # Entities
    "Project",
    "Technology",
    "User",
    # Associations
    "ProjectTechnology",
    "ProjectUser",
    # Constants
    "MAX_RATING",
    "MIN_RATING",
]
