from fastapi import APIRouter

from src.app.api.v1 import projects, technologies, users

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(projects.router)
api_router.include_router(technologies.router)
api_router.include_router(users.router)
