"""Tests for association id handling and role assignment."""

from uuid import uuid4

import pytest
from hypothesis import given
from hypothesis import strategies as st

from src.app.models import ProjectRole
from src.app.repositories.association import assign_roles, dedupe_ids

pytestmark = pytest.mark.unit


def test_dedupe_keeps_first_occurrence_order():
    a, b, c = uuid4(), uuid4(), uuid4()

    assert dedupe_ids([b, a, b, c, a]) == [b, a, c]


def test_assign_roles_first_is_owner():
    a, b, c = uuid4(), uuid4(), uuid4()

    assert assign_roles([a, b, c]) == [
        (a, ProjectRole.OWNER),
        (b, ProjectRole.CONTRIBUTOR),
        (c, ProjectRole.CONTRIBUTOR),
    ]


def test_assign_roles_empty():
    assert assign_roles([]) == []


def test_repeated_owner_is_not_demoted():
    owner, other = uuid4(), uuid4()

    assert assign_roles([owner, other, owner]) == [
        (owner, ProjectRole.OWNER),
        (other, ProjectRole.CONTRIBUTOR),
    ]


@given(ids=st.lists(st.uuids(), max_size=20))
def test_exactly_one_owner_when_users_present(ids):
    assignments = assign_roles(ids)
    roles = [role for _, role in assignments]

    assert len(assignments) == len(set(ids))
    assert roles.count(ProjectRole.OWNER) == (1 if ids else 0)
    assert ProjectRole.VIEWER not in roles
