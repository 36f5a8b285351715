"""Tests for domain error kinds and their HTTP mapping."""

from uuid import uuid4

import pytest

from src.app.core.exceptions import (
    AppError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationFailedError,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("error", "kind", "status_code"),
    [
        (ValidationFailedError("bad"), "validation", 400),
        (NotFoundError("Project", uuid4()), "not_found", 404),
        (ConflictError("dup"), "conflict", 409),
        (InternalError("boom"), "internal", 500),
    ],
)
def test_kind_and_status(error: AppError, kind: str, status_code: int):
    assert isinstance(error, AppError)
    assert error.kind == kind
    assert error.status_code == status_code


def test_not_found_names_entity_and_id():
    missing = uuid4()

    error = NotFoundError("Technology", missing)

    assert error.message == f"Technology not found with id: {missing}"
    assert error.entity == "Technology"
    assert error.entity_id == missing
    assert str(error) == error.message
