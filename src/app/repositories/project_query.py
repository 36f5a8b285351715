"""Filtered, sorted and paginated project reads.

A ProjectQuery is validated on construction. Each optional filter
contributes one independent predicate; the predicates are ANDed and reused
verbatim by the count query so `total` always describes the same result set
as the page.
"""

import math
from dataclasses import dataclass
from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, and_, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.app.core.exceptions import ValidationFailedError
from src.app.models import (
    MAX_RATING,
    MIN_RATING,
    Project,
    ProjectTechnology,
    ProjectUser,
    SortField,
    SortOrder,
    Technology,
)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

SORT_COLUMNS = {
    SortField.NAME: Project.name,
    SortField.CREATED_AT: Project.created_at,
    SortField.UPDATED_AT: Project.updated_at,
    SortField.RATING: Project.rating,
}


E = TypeVar("E", SortField, SortOrder)


def _parse_enum(enum_cls: type[E], value: Any, label: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationFailedError(f"Invalid {label} '{value}'. Allowed: {allowed}") from None


def _check_rating_bound(value: float | None, label: str) -> None:
    if value is None:
        return
    if not math.isfinite(value) or not (MIN_RATING <= value <= MAX_RATING):
        raise ValidationFailedError(
            f"{label} must be between {MIN_RATING} and {MAX_RATING}, got {value}"
        )


@dataclass(frozen=True)
class ProjectQuery:
    """Filter, sort and page options for listing projects.

    Every field is optional; defaults apply only when a field is left out.
    Out-of-range values raise ValidationFailedError instead of being clamped.
    """

    search: str | None = None
    technology: str | None = None
    user_id: UUID | None = None
    min_rating: float | None = None
    max_rating: float | None = None
    language: str | None = None
    sort: SortField = SortField.CREATED_AT
    order: SortOrder = SortOrder.DESC
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    max_page_size: int = MAX_PAGE_SIZE

    def __post_init__(self) -> None:
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "sort", _parse_enum(SortField, self.sort, "sort field"))
        object.__setattr__(self, "order", _parse_enum(SortOrder, self.order, "sort order"))

        if self.page < 1:
            raise ValidationFailedError(f"page must be >= 1, got {self.page}")
        if not (1 <= self.page_size <= self.max_page_size):
            raise ValidationFailedError(
                f"page_size must be between 1 and {self.max_page_size}, got {self.page_size}"
            )

        _check_rating_bound(self.min_rating, "min_rating")
        _check_rating_bound(self.max_rating, "max_rating")
        if (
            self.min_rating is not None
            and self.max_rating is not None
            and self.min_rating > self.max_rating
        ):
            raise ValidationFailedError(
                f"min_rating ({self.min_rating}) cannot exceed max_rating ({self.max_rating})"
            )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def build_predicates(query: ProjectQuery) -> list[ColumnElement[bool]]:
    """Translate the query's filters into a list of SQL predicates."""
    predicates: list[ColumnElement[bool]] = []

    if query.search:
        predicates.append(
            or_(
                Project.name.icontains(query.search, autoescape=True),
                Project.description.icontains(query.search, autoescape=True),
            )
        )

    if query.technology is not None:
        predicates.append(
            select(ProjectTechnology.project_id)
            .join(Technology, Technology.id == ProjectTechnology.technology_id)
            .where(
                ProjectTechnology.project_id == Project.id,
                Technology.name == query.technology,
            )
            .exists()
        )

    if query.user_id is not None:
        predicates.append(
            select(ProjectUser.project_id)
            .where(
                ProjectUser.project_id == Project.id,
                ProjectUser.user_id == query.user_id,
            )
            .exists()
        )

    # NULL compares as unknown, so rated bounds never match unrated projects
    if query.min_rating is not None:
        predicates.append(Project.rating >= query.min_rating)
    if query.max_rating is not None:
        predicates.append(Project.rating <= query.max_rating)

    if query.language is not None:
        predicates.append(Project.language == query.language)

    return predicates


def build_ordering(query: ProjectQuery) -> list[ColumnElement[Any]]:
    """Sort column in the requested direction, NULLs last, id as tie-breaker."""
    column = SORT_COLUMNS[query.sort]
    descending = query.order is SortOrder.DESC
    ordering: list[ColumnElement[Any]] = []
    if query.sort is SortField.RATING:
        ordering.append(Project.rating.is_(None).asc())
    ordering.append(column.desc() if descending else column.asc())
    ordering.append(Project.id.desc() if descending else Project.id.asc())
    return ordering


class ProjectQueryRepository:
    """Runs ProjectQuery reads against the projects table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def fetch_page(self, query: ProjectQuery) -> tuple[list[Project], int]:
        """Return the requested page of projects and the total match count.

        Both statements run in the caller's session, so they share its
        transaction.
        """
        predicates = build_predicates(query)
        where = and_(True, *predicates)

        page_result = await self.session.execute(
            select(Project)
            .where(where)
            .order_by(*build_ordering(query))
            .offset(query.offset)
            .limit(query.page_size)
        )
        items = list(page_result.scalars().all())

        count_result = await self.session.execute(
            select(func.count()).select_from(Project).where(where)
        )
        total = count_result.scalar_one()
        return items, total
