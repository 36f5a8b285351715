"""Repository layer - data access abstraction.

Repositories never commit; the service layer owns transactions.
"""

from src.app.repositories.association import AssociationRepository
from src.app.repositories.base import BaseRepository
from src.app.repositories.project import ProjectRepository
from src.app.repositories.project_query import ProjectQuery, ProjectQueryRepository
from src.app.repositories.technology import TechnologyRepository
from src.app.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    # Entity store
    "ProjectRepository",
    "TechnologyRepository",
    "UserRepository",
    # Associations
    "AssociationRepository",
    # Listing
    "ProjectQuery",
    "ProjectQueryRepository",
]
