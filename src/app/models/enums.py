"""Shared enums for models."""

from enum import Enum


class ProjectRole(str, Enum):
    """Role of a user within a project."""

    OWNER = "owner"
    CONTRIBUTOR = "contributor"
    VIEWER = "viewer"


class SortField(str, Enum):
    """Columns a project listing can be sorted by."""

    NAME = "name"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    RATING = "rating"


class SortOrder(str, Enum):
    """Sort direction for project listings."""

    ASC = "asc"
    DESC = "desc"
