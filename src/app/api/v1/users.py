"""User endpoints."""

from uuid import UUID

from fastapi import APIRouter, Request, Response, status

from src.app.api.dependencies import UserServiceDep
from src.app.core.rate_limit import limiter, write_rate_limit
from src.app.schemas import UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "",
    response_model=list[UserRead],
    summary="List users",
    description="List all users ordered by name.",
)
async def list_users(service: UserServiceDep) -> list[UserRead]:
    users = await service.list_users()
    return [UserRead.model_validate(u) for u in users]


@router.get(
    "/{user_id}",
    response_model=UserRead,
    summary="Get user",
    responses={
        200: {"description": "User details"},
        404: {"description": "User not found"},
    },
)
async def get_user(user_id: UUID, service: UserServiceDep) -> UserRead:
    user = await service.get_user(user_id)
    return UserRead.model_validate(user)


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    responses={
        201: {"description": "User created"},
        409: {"description": "Email already registered"},
    },
)
@limiter.limit(write_rate_limit)
async def create_user(
    request: Request,
    payload: UserCreate,
    service: UserServiceDep,
) -> UserRead:
    user = await service.create_user(payload.name, str(payload.email))
    return UserRead.model_validate(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete user",
    description="Delete a user. They are removed from every project they belonged to.",
    responses={
        204: {"description": "User deleted"},
        404: {"description": "User not found"},
    },
)
@limiter.limit(write_rate_limit)
async def delete_user(
    request: Request,
    user_id: UUID,
    service: UserServiceDep,
) -> Response:
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
