"""Shared helpers for API tests."""

from uuid import UUID

from httpx import AsyncClient


async def create_project_via_api(
    client: AsyncClient,
    technology_ids: list[UUID] | None = None,
    user_ids: list[UUID] | None = None,
    **fields,
) -> dict:
    """POST a project and return the response body."""
    payload = {
        "name": "API Project",
        "description": "Created through the API",
        "repository_url": "https://github.com/example/api-project",
        "language": "Python",
        "rating": 4.0,
        **fields,
    }
    if technology_ids is not None:
        payload["technology_ids"] = [str(id) for id in technology_ids]
    if user_ids is not None:
        payload["user_ids"] = [str(id) for id in user_ids]
    response = await client.post("/api/v1/projects", json=payload)
    assert response.status_code == 201, response.text
    return response.json()
