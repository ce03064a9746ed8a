import asyncpg
import pytest

from admin_console.domain.exceptions import (
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
    storage_errors,
)


def _unique(constraint: str) -> asyncpg.UniqueViolationError:
    exc = asyncpg.UniqueViolationError("duplicate key value violates unique constraint")
    exc.constraint_name = constraint
    return exc


def test_unique_violation_maps_constraint_to_message():
    with pytest.raises(ConflictError) as excinfo:
        with storage_errors("Failed to create user", unique_messages={"users_email_key": "Email already exists"}):
            raise _unique("users_email_key")
    assert excinfo.value.detail == "Email already exists"
    assert excinfo.value.status_code == 400


def test_unique_violation_without_mapping_uses_failure_message():
    with pytest.raises(ConflictError) as excinfo:
        with storage_errors("Failed to create group"):
            raise _unique("something_else")
    assert excinfo.value.detail == "Failed to create group"


def test_foreign_key_violation_becomes_not_found_when_reference_named():
    with pytest.raises(NotFoundError) as excinfo:
        with storage_errors("Failed to add", missing_reference="User or group not found"):
            raise asyncpg.ForeignKeyViolationError("fk")
    assert excinfo.value.detail == "User or group not found"
    assert excinfo.value.status_code == 404


def test_foreign_key_violation_without_reference_is_storage_error():
    with pytest.raises(StorageError):
        with storage_errors("Failed to update"):
            raise asyncpg.ForeignKeyViolationError("fk")


@pytest.mark.parametrize(
    "error",
    [asyncpg.PostgresError("boom"), OSError("connection refused"), asyncpg.InterfaceError("closed")],
)
def test_other_failures_are_generic_storage_errors(error):
    with pytest.raises(StorageError) as excinfo:
        with storage_errors("Failed to fetch users"):
            raise error
    assert excinfo.value.status_code == 500
    assert excinfo.value.detail == "Failed to fetch users"


def test_console_errors_pass_through_untouched():
    with pytest.raises(ValidationError) as excinfo:
        with storage_errors("Failed to update user"):
            raise ValidationError("No fields to update")
    assert excinfo.value.detail == "No fields to update"
