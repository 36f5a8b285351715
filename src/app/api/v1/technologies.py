"""Technology endpoints."""

from uuid import UUID

from fastapi import APIRouter, Request, Response, status

from src.app.api.dependencies import TechnologyServiceDep
from src.app.core.rate_limit import limiter, write_rate_limit
from src.app.schemas import TechnologyCreate, TechnologyRead

router = APIRouter(prefix="/technologies", tags=["technologies"])


@router.get(
    "",
    response_model=list[TechnologyRead],
    summary="List technologies",
    description="List all technologies ordered by name.",
)
async def list_technologies(service: TechnologyServiceDep) -> list[TechnologyRead]:
    technologies = await service.list_technologies()
    return [TechnologyRead.model_validate(t) for t in technologies]


@router.get(
    "/{technology_id}",
    response_model=TechnologyRead,
    summary="Get technology",
    responses={
        200: {"description": "Technology details"},
        404: {"description": "Technology not found"},
    },
)
async def get_technology(technology_id: UUID, service: TechnologyServiceDep) -> TechnologyRead:
    technology = await service.get_technology(technology_id)
    return TechnologyRead.model_validate(technology)


@router.post(
    "",
    response_model=TechnologyRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create technology",
    responses={
        201: {"description": "Technology created"},
        409: {"description": "Technology with this name already exists"},
    },
)
@limiter.limit(write_rate_limit)
async def create_technology(
    request: Request,
    payload: TechnologyCreate,
    service: TechnologyServiceDep,
) -> TechnologyRead:
    technology = await service.create_technology(payload.name, payload.description)
    return TechnologyRead.model_validate(technology)


@router.delete(
    "/{technology_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete technology",
    description="Delete a technology. It is removed from every project that used it.",
    responses={
        204: {"description": "Technology deleted"},
        404: {"description": "Technology not found"},
    },
)
@limiter.limit(write_rate_limit)
async def delete_technology(
    request: Request,
    technology_id: UUID,
    service: TechnologyServiceDep,
) -> Response:
    await service.delete_technology(technology_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
