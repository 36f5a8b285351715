"""Project endpoints.

A project is always returned together with its technologies and users.
Writes go through ProjectService so the project row and both association
sets change in one transaction.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Request, Response, status

from src.app.api.dependencies import ProjectServiceDep
from src.app.core.config import get_settings
from src.app.core.rate_limit import limiter, write_rate_limit
from src.app.repositories import ProjectQuery
from src.app.schemas import (
    PaginatedResponse,
    PaginationMetadata,
    ProjectCreate,
    ProjectUpdate,
    ProjectWithRelations,
)

router = APIRouter(prefix="/projects", tags=["projects"])

ERROR_RESPONSES = {
    400: {"description": "Invalid input"},
    404: {"description": "Project, technology or user not found"},
}


@router.get(
    "",
    response_model=PaginatedResponse[ProjectWithRelations],
    summary="List projects",
    description=(
        "List projects with optional filters. Filters combine with AND. "
        "`tech` is accepted as an alias of `technology`."
    ),
    responses={
        200: {"description": "Paginated list of projects"},
        400: {"description": "Invalid filter, sort or page parameters"},
    },
)
async def list_projects(
    service: ProjectServiceDep,
    search: Annotated[
        str | None, Query(description="Case-insensitive substring of name or description")
    ] = None,
    technology: Annotated[str | None, Query(description="Exact technology name")] = None,
    tech: Annotated[str | None, Query(description="Alias of technology")] = None,
    user_id: Annotated[UUID | None, Query(description="Projects this user belongs to")] = None,
    min_rating: Annotated[float | None, Query(description="Minimum rating (0-5)")] = None,
    max_rating: Annotated[float | None, Query(description="Maximum rating (0-5)")] = None,
    language: Annotated[str | None, Query(description="Exact language")] = None,
    sort: Annotated[
        str | None, Query(description="name, created_at, updated_at or rating")
    ] = None,
    order: Annotated[str | None, Query(description="asc or desc")] = None,
    page: Annotated[int | None, Query(description="Page number, starting at 1")] = None,
    page_size: Annotated[int | None, Query(description="Items per page")] = None,
) -> PaginatedResponse[ProjectWithRelations]:
    """List projects matching every supplied filter."""
    settings = get_settings()
    options = {
        "search": search,
        "technology": technology if technology is not None else tech,
        "user_id": user_id,
        "min_rating": min_rating,
        "max_rating": max_rating,
        "language": language,
        "sort": sort,
        "order": order,
        "page": page,
    }
    query = ProjectQuery(
        **{key: value for key, value in options.items() if value is not None},
        page_size=page_size if page_size is not None else settings.default_page_size,
        max_page_size=settings.max_page_size,
    )
    result = await service.list_projects(query)
    return PaginatedResponse(
        items=[ProjectWithRelations.from_aggregate(item) for item in result.items],
        pagination=PaginationMetadata.build(result.page, result.page_size, result.total),
    )


@router.get(
    "/{project_id}",
    response_model=ProjectWithRelations,
    summary="Get project",
    description="Get a project by ID with its technologies and users.",
    responses={
        200: {"description": "Project details"},
        404: {"description": "Project not found"},
    },
)
async def get_project(
    project_id: UUID,
    service: ProjectServiceDep,
) -> ProjectWithRelations:
    """Get a project by ID."""
    aggregate = await service.get_project_aggregate(project_id)
    return ProjectWithRelations.from_aggregate(aggregate)


@router.post(
    "",
    response_model=ProjectWithRelations,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    description=(
        "Create a project with optional technologies and users. "
        "The first user in `user_ids` becomes the owner."
    ),
    responses={201: {"description": "Project created"}, **ERROR_RESPONSES},
)
@limiter.limit(write_rate_limit)
async def create_project(
    request: Request,
    payload: ProjectCreate,
    service: ProjectServiceDep,
) -> ProjectWithRelations:
    """Create a new project."""
    aggregate = await service.create_project(
        payload.scalar_fields(),
        technology_ids=payload.technology_ids,
        user_ids=payload.user_ids,
    )
    return ProjectWithRelations.from_aggregate(aggregate)


async def _update_project(
    project_id: UUID,
    payload: ProjectUpdate,
    service: ProjectServiceDep,
) -> ProjectWithRelations:
    aggregate = await service.update_project(
        project_id,
        payload.scalar_fields(),
        technology_ids=payload.technology_ids,
        user_ids=payload.user_ids,
    )
    return ProjectWithRelations.from_aggregate(aggregate)


@router.patch(
    "/{project_id}",
    response_model=ProjectWithRelations,
    summary="Update project",
    description=(
        "Partially update a project. Omitted fields are unchanged. "
        "An omitted `technology_ids`/`user_ids` keeps the current set; `[]` clears it."
    ),
    responses={200: {"description": "Project updated"}, **ERROR_RESPONSES},
)
@limiter.limit(write_rate_limit)
async def update_project(
    request: Request,
    project_id: UUID,
    payload: ProjectUpdate,
    service: ProjectServiceDep,
) -> ProjectWithRelations:
    """Update an existing project."""
    return await _update_project(project_id, payload, service)


@router.put(
    "/{project_id}",
    response_model=ProjectWithRelations,
    summary="Update project",
    description="Same partial-update semantics as PATCH.",
    responses={200: {"description": "Project updated"}, **ERROR_RESPONSES},
)
@limiter.limit(write_rate_limit)
async def replace_project(
    request: Request,
    project_id: UUID,
    payload: ProjectUpdate,
    service: ProjectServiceDep,
) -> ProjectWithRelations:
    """Update an existing project (PUT alias of PATCH)."""
    return await _update_project(project_id, payload, service)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    description="Delete a project and all of its technology and user associations.",
    responses={
        204: {"description": "Project deleted"},
        404: {"description": "Project not found"},
    },
)
@limiter.limit(write_rate_limit)
async def delete_project(
    request: Request,
    project_id: UUID,
    service: ProjectServiceDep,
) -> Response:
    """Delete a project."""
    await service.delete_project(project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
