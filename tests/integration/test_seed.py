"""Tests for the sample catalog loader."""

import pytest
from sqlalchemy import func, select

from src.app.core import seed
from src.app.core.exceptions import ValidationFailedError
from src.app.core.seed import PROJECTS, TECHNOLOGIES, USERS, seed_sample_data
from src.app.models import Project, ProjectRole, ProjectTechnology, Technology, User
from src.app.repositories import ProjectQuery
from src.app.services import ProjectService

pytestmark = pytest.mark.integration


async def _count(session, model) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


async def test_seed_loads_catalog_once(db_session, project_service: ProjectService):
    assert await seed_sample_data(db_session) is True
    assert await seed_sample_data(db_session) is False

    page = await project_service.list_projects(ProjectQuery(page_size=100))
    assert page.total == len(PROJECTS)


async def test_seeded_projects_have_owner_first(db_session, project_service: ProjectService):
    await seed_sample_data(db_session)

    page = await project_service.list_projects(
        ProjectQuery(search="Microservices Template", page_size=100)
    )
    (item,) = page.items
    assert [t.name for t in item.technologies] == ["Docker", "Go", "Kubernetes", "PostgreSQL"]
    owner, role = item.users[0]
    assert (owner.name, role) == ("Diana Prince", ProjectRole.OWNER)
    assert {role for _, role in item.users[1:]} == {ProjectRole.CONTRIBUTOR}


async def test_seed_counts(db_session, technology_service, user_service):
    await seed_sample_data(db_session)

    assert len(await technology_service.list_technologies()) == len(TECHNOLOGIES)
    assert len(await user_service.list_users()) == len(USERS)


async def test_existing_technology_skips_seed(db_session, technology_service):
    await technology_service.create_technology("Rust")

    assert await seed_sample_data(db_session) is False

    assert await _count(db_session, Technology) == 1
    assert await _count(db_session, Project) == 0


async def test_existing_user_skips_seed(db_session, user_service):
    await user_service.create_user("Alice Johnson", "alice.johnson@example.com")

    assert await seed_sample_data(db_session) is False

    assert await _count(db_session, User) == 1


async def test_failed_seed_leaves_nothing_behind(db_session, monkeypatch):
    broken = [*PROJECTS[:2], (*PROJECTS[2][:4], 9.0, *PROJECTS[2][5:])]
    monkeypatch.setattr(seed, "PROJECTS", broken)

    with pytest.raises(ValidationFailedError):
        await seed_sample_data(db_session)

    for model in (Technology, User, Project, ProjectTechnology):
        assert await _count(db_session, model) == 0

    monkeypatch.undo()
    assert await seed_sample_data(db_session) is True
    assert await _count(db_session, Project) == len(PROJECTS)
