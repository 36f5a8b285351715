"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ProjectFactory, TechnologyFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid
from tests.factories.catalog import (
    ProjectFactory,
    TechnologyFactory,
    UserFactory,
    project_fields,
)

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    # Catalog
    "ProjectFactory",
    "TechnologyFactory",
    "UserFactory",
    "project_fields",
]
