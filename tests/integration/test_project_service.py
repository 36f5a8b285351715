"""Tests for ProjectService: transactional create/update/delete with associations."""

import asyncio
from uuid import uuid4

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from src.app.core.exceptions import InternalError, NotFoundError, ValidationFailedError
from src.app.models import Project, ProjectRole, ProjectTechnology, ProjectUser
from src.app.services import ProjectService
from tests.factories import ProjectFactory, project_fields

pytestmark = pytest.mark.integration


async def _count(session, model) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


def _user_roles(aggregate) -> list[tuple[str, ProjectRole]]:
    return [(user.email, role) for user, role in aggregate.users]


class TestCreateProject:
    async def test_create_with_associations(
        self, project_service: ProjectService, make_technology, make_user
    ):
        rust = await make_technology(name="Rust")
        axum = await make_technology(name="Axum")
        alice = await make_user(name="Alice", email="alice@example.com")
        bob = await make_user(name="Bob", email="bob@example.com")

        aggregate = await project_service.create_project(
            project_fields(name="Web API"),
            technology_ids=[rust.id, axum.id],
            user_ids=[bob.id, alice.id],
        )

        assert aggregate.project.name == "Web API"
        assert aggregate.project.created_at == aggregate.project.updated_at
        # Technologies ordered by name
        assert [t.name for t in aggregate.technologies] == ["Axum", "Rust"]
        # First user id is the owner regardless of name order
        assert _user_roles(aggregate) == [
            ("bob@example.com", ProjectRole.OWNER),
            ("alice@example.com", ProjectRole.CONTRIBUTOR),
        ]

    async def test_create_without_associations(self, project_service: ProjectService):
        aggregate = await project_service.create_project(project_fields())

        assert aggregate.technologies == []
        assert aggregate.users == []

    async def test_duplicate_user_ids_collapse_to_first_occurrence(
        self, project_service: ProjectService, make_user
    ):
        u1 = await make_user(name="One", email="one@example.com")
        u2 = await make_user(name="Two", email="two@example.com")

        aggregate = await project_service.create_project(
            project_fields(), user_ids=[u1.id, u2.id, u1.id]
        )

        assert _user_roles(aggregate) == [
            ("one@example.com", ProjectRole.OWNER),
            ("two@example.com", ProjectRole.CONTRIBUTOR),
        ]

    async def test_unknown_technology_persists_nothing(
        self, project_service: ProjectService, db_session, make_technology, make_user
    ):
        known = await make_technology()
        user = await make_user()
        known_id, user_id, missing = known.id, user.id, uuid4()

        with pytest.raises(NotFoundError) as exc_info:
            await project_service.create_project(
                project_fields(), technology_ids=[known_id, missing], user_ids=[user_id]
            )

        assert exc_info.value.entity == "Technology"
        assert exc_info.value.entity_id == missing
        assert await _count(db_session, Project) == 0
        assert await _count(db_session, ProjectTechnology) == 0
        assert await _count(db_session, ProjectUser) == 0

    async def test_unknown_user_persists_nothing(
        self, project_service: ProjectService, db_session, make_technology
    ):
        technology = await make_technology()
        technology_id = technology.id

        with pytest.raises(NotFoundError) as exc_info:
            await project_service.create_project(
                project_fields(), technology_ids=[technology_id], user_ids=[uuid4()]
            )

        assert exc_info.value.entity == "User"
        assert await _count(db_session, Project) == 0
        assert await _count(db_session, ProjectTechnology) == 0

    @pytest.mark.parametrize("rating", [-0.1, 5.1, 42.0])
    async def test_out_of_range_rating_rejected_before_write(
        self, project_service: ProjectService, db_session, rating: float
    ):
        with pytest.raises(ValidationFailedError):
            await project_service.create_project(project_fields(rating=rating))

        assert await _count(db_session, Project) == 0

    async def test_non_numeric_rating_is_a_validation_error(
        self, project_service: ProjectService, db_session
    ):
        with pytest.raises(ValidationFailedError):
            await project_service.create_project(project_fields(rating="excellent"))

        assert await _count(db_session, Project) == 0

    @pytest.mark.parametrize("rating", [0.0, 5.0, None])
    async def test_boundary_ratings_accepted(self, project_service: ProjectService, rating):
        aggregate = await project_service.create_project(project_fields(rating=rating))

        assert aggregate.project.rating == rating

    async def test_missing_required_field_rejected(self, project_service: ProjectService):
        fields = project_fields()
        del fields["language"]

        with pytest.raises(ValidationFailedError):
            await project_service.create_project(fields)


class TestUpdateProject:
    async def test_partial_update_changes_only_supplied_fields(
        self, project_service: ProjectService
    ):
        created = await project_service.create_project(
            project_fields(name="Before", language="Go", rating=2.0)
        )
        project_id = created.project.id

        updated = await project_service.update_project(project_id, {"name": "After"})

        assert updated.project.name == "After"
        assert updated.project.language == "Go"
        assert updated.project.rating == 2.0

    async def test_rating_can_be_cleared(self, project_service: ProjectService):
        created = await project_service.create_project(project_fields(rating=4.5))

        updated = await project_service.update_project(created.project.id, {"rating": None})

        assert updated.project.rating is None

    async def test_replace_technologies(self, project_service: ProjectService, make_technology):
        a = await make_technology(name="A")
        b = await make_technology(name="B")
        c = await make_technology(name="C")
        created = await project_service.create_project(
            project_fields(), technology_ids=[a.id, b.id]
        )

        updated = await project_service.update_project(
            created.project.id, {}, technology_ids=[b.id, c.id]
        )

        assert [t.name for t in updated.technologies] == ["B", "C"]

    async def test_absent_lists_leave_associations_untouched(
        self, project_service: ProjectService, make_technology, make_user
    ):
        technology = await make_technology(name="Kept")
        user = await make_user(email="kept@example.com")
        created = await project_service.create_project(
            project_fields(), technology_ids=[technology.id], user_ids=[user.id]
        )

        updated = await project_service.update_project(
            created.project.id, {"description": "new description"}
        )

        assert [t.name for t in updated.technologies] == ["Kept"]
        assert _user_roles(updated) == [("kept@example.com", ProjectRole.OWNER)]

    async def test_empty_lists_clear_associations(
        self, project_service: ProjectService, make_technology, make_user
    ):
        technology = await make_technology()
        user = await make_user()
        created = await project_service.create_project(
            project_fields(), technology_ids=[technology.id], user_ids=[user.id]
        )

        updated = await project_service.update_project(
            created.project.id, {}, technology_ids=[], user_ids=[]
        )

        assert updated.technologies == []
        assert updated.users == []

    async def test_replacing_users_reassigns_owner(
        self, project_service: ProjectService, make_user
    ):
        u1 = await make_user(email="u1@example.com")
        u2 = await make_user(email="u2@example.com")
        created = await project_service.create_project(project_fields(), user_ids=[u1.id, u2.id])

        updated = await project_service.update_project(
            created.project.id, {}, user_ids=[u2.id, u1.id]
        )

        roles = dict(_user_roles(updated))
        assert roles == {
            "u2@example.com": ProjectRole.OWNER,
            "u1@example.com": ProjectRole.CONTRIBUTOR,
        }
        assert ProjectRole.VIEWER not in roles.values()

    async def test_association_only_update_refreshes_updated_at(
        self, project_service: ProjectService, make_technology
    ):
        technology = await make_technology()
        created = await project_service.create_project(project_fields())
        before = created.project.updated_at
        created_at = created.project.created_at

        await asyncio.sleep(0.01)
        updated = await project_service.update_project(
            created.project.id, {}, technology_ids=[technology.id]
        )

        assert updated.project.updated_at > before
        assert updated.project.created_at == created_at

    async def test_failed_update_rolls_back_everything(
        self, project_service: ProjectService, make_technology, make_user
    ):
        keep = await make_technology(name="Keep")
        user = await make_user(email="owner@example.com")
        created = await project_service.create_project(
            project_fields(name="Original"), technology_ids=[keep.id], user_ids=[user.id]
        )
        project_id, keep_id, user_id = created.project.id, keep.id, user.id

        with pytest.raises(NotFoundError):
            await project_service.update_project(
                project_id,
                {"name": "Changed"},
                technology_ids=[],
                user_ids=[user_id, uuid4()],
            )

        reloaded = await project_service.get_project_aggregate(project_id)
        assert reloaded.project.name == "Original"
        assert [t.id for t in reloaded.technologies] == [keep_id]
        assert [(u.id, role) for u, role in reloaded.users] == [(user_id, ProjectRole.OWNER)]

    async def test_update_missing_project(self, project_service: ProjectService):
        with pytest.raises(NotFoundError) as exc_info:
            await project_service.update_project(uuid4(), {"name": "Nope"})

        assert exc_info.value.entity == "Project"

    async def test_update_rejects_empty_name(self, project_service: ProjectService):
        created = await project_service.create_project(project_fields())

        with pytest.raises(ValidationFailedError):
            await project_service.update_project(created.project.id, {"name": "   "})


class TestReadAndDelete:
    async def test_get_missing_project(self, project_service: ProjectService):
        with pytest.raises(NotFoundError):
            await project_service.get_project_aggregate(uuid4())

    async def test_users_listed_owner_first_then_by_name(
        self, project_service: ProjectService, make_user
    ):
        zed = await make_user(name="Zed", email="zed@example.com")
        amy = await make_user(name="Amy", email="amy@example.com")
        kim = await make_user(name="Kim", email="kim@example.com")

        created = await project_service.create_project(
            project_fields(), user_ids=[zed.id, kim.id, amy.id]
        )

        assert [u.name for u, _ in created.users] == ["Zed", "Amy", "Kim"]

    async def test_delete_cascades_to_associations(
        self, project_service: ProjectService, db_session, make_technology, make_user
    ):
        technology = await make_technology()
        user = await make_user()
        created = await project_service.create_project(
            project_fields(), technology_ids=[technology.id], user_ids=[user.id]
        )
        project_id = created.project.id

        await project_service.delete_project(project_id)

        assert await _count(db_session, Project) == 0
        assert await _count(db_session, ProjectTechnology) == 0
        assert await _count(db_session, ProjectUser) == 0
        with pytest.raises(NotFoundError):
            await project_service.get_project_aggregate(project_id)

    async def test_delete_missing_project(self, project_service: ProjectService):
        with pytest.raises(NotFoundError):
            await project_service.delete_project(uuid4())


class TestStorageConstraints:
    async def test_rating_check_constraint_enforced_by_database(self, db_session):
        db_session.add(ProjectFactory.build(rating=7.5))

        with pytest.raises(IntegrityError):
            await db_session.commit()
        await db_session.rollback()

    async def test_role_check_constraint_enforced_by_database(
        self, db_session, project_service: ProjectService, make_user
    ):
        user = await make_user()
        created = await project_service.create_project(project_fields())
        db_session.add(
            ProjectUser(project_id=created.project.id, user_id=user.id, role="admin")
        )

        with pytest.raises(IntegrityError):
            await db_session.commit()
        await db_session.rollback()


class TestTimeout:
    async def test_timeout_rolls_back_and_raises_internal_error(
        self, db_session, monkeypatch: pytest.MonkeyPatch
    ):
        from src.app.repositories import (
            AssociationRepository,
            ProjectQueryRepository,
            ProjectRepository,
        )

        service = ProjectService(
            ProjectRepository(db_session),
            AssociationRepository(db_session),
            ProjectQueryRepository(db_session),
            db_session,
            operation_timeout=0.05,
        )
        original_replace = service.association_repo.replace_technologies

        async def slow_replace(*args, **kwargs):
            await asyncio.sleep(1)
            return await original_replace(*args, **kwargs)

        monkeypatch.setattr(service.association_repo, "replace_technologies", slow_replace)

        with pytest.raises(InternalError):
            await service.create_project(project_fields(), technology_ids=[uuid4()])

        assert await _count(db_session, Project) == 0
