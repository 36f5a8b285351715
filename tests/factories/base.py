"""Base factory configuration for polyfactory."""

from uuid import uuid4

from polyfactory.factories.sqlalchemy_factory import SQLAlchemyFactory

from src.app.models.base import utc_now


def generate_uuid():
    """Generate UUID for primary keys."""
    return uuid4()


class BaseFactory(SQLAlchemyFactory):
    """Base factory with common configuration for all models.

    Provides:
    - UUID generation for primary keys
    - Disabled auto-relationship setting (we control relationships manually)
    """

    __is_base_factory__ = True
    __set_relationships__ = False
    __set_foreign_keys__ = False  # We set FK values explicitly
