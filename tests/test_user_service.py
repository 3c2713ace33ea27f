"""Tests for validation rules and the UserService error mapping."""

import pytest

from user_service.errors import (
    ConflictError,
    ConstraintViolationError,
    DependencyError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from user_service.services import UserService, parse_user_id, trim, validate_user_fields


@pytest.mark.parametrize(
    "name, email, message",
    [
        (None, "ana@example.com", "Name and email are required"),
        ("Ana", None, "Name and email are required"),
        ("Ana", "", "Name and email are required"),
        ("Ana", " \t ", "Name and email cannot be empty"),
        ("Ana", "a" * 39 + "@example.com", "Name and email must not exceed 50 characters"),
        ("Ana", "ana@@example.com", "Invalid email format"),
        ("Ana", "ana@example.com\n", "Invalid email format"),
        ("Ana", " ana@example.com", "Invalid email format"),
    ],
)
def test_validate_user_fields_rejects(name, email, message):
    with pytest.raises(ValidationError) as exc_info:
        validate_user_fields(name, email)
    assert exc_info.value.message == message
    assert exc_info.value.http_status == 400


def test_validate_user_fields_trims_name():
    assert validate_user_fields("  Ana ", "ana@example.com") == ("Ana", "ana@example.com")


def test_validate_user_fields_rejects_padded_email():
    with pytest.raises(ValidationError) as exc_info:
        validate_user_fields("Ana", "ana@example.com ")
    assert exc_info.value.message == "Invalid email format"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  Ana\t", "Ana"),
        ("\ufeffAna\ufeff", "Ana"),
        (" \ufeff\u3000Ana Maria \ufeff ", "Ana Maria"),
        ("\ufeff", ""),
    ],
)
def test_trim_strips_whitespace_and_byte_order_mark(raw, expected):
    assert trim(raw) == expected


def test_byte_order_mark_only_name_is_empty():
    with pytest.raises(ValidationError) as exc_info:
        validate_user_fields("\ufeff", "ana@example.com")
    assert exc_info.value.message == "Name and email cannot be empty"


def test_length_is_checked_before_trimming():
    # 49 characters of name plus two spaces is 51 before trimming
    with pytest.raises(ValidationError):
        validate_user_fields(" " + "n" * 49 + " ", "ana@example.com")


def test_first_failure_wins():
    with pytest.raises(ValidationError) as exc_info:
        validate_user_fields("   ", "x" * 60)
    assert exc_info.value.message == "Name and email cannot be empty"


@pytest.mark.parametrize("raw, expected", [("1", 1), (" 42 ", 42), ("-3", -3), ("+7", 7)])
def test_parse_user_id(raw, expected):
    assert parse_user_id(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "abc", "1.5", "1e3", "1_000", "0x10"])
def test_parse_user_id_rejects(raw):
    with pytest.raises(ValidationError) as exc_info:
        parse_user_id(raw)
    assert exc_info.value.message == "Valid user ID is required"


@pytest.mark.asyncio
async def test_create_user_maps_constraint_violation(repository):
    service = UserService(repository=repository)
    await service.create_user("Ana", "ana@example.com")

    with pytest.raises(ConflictError) as exc_info:
        await service.create_user("Other", "ana@example.com")
    assert exc_info.value.http_status == 409
    assert isinstance(exc_info.value.__cause__, ConstraintViolationError)


@pytest.mark.asyncio
async def test_storage_error_becomes_dependency_error(repository):
    service = UserService(repository=repository)
    cause = StorageError("connection reset")
    repository.fail_with = cause

    with pytest.raises(DependencyError) as exc_info:
        await service.list_users()
    assert exc_info.value.message == "Internal server error"
    assert exc_info.value.__cause__ is cause

    with pytest.raises(DependencyError):
        await service.check_database()


@pytest.mark.asyncio
async def test_update_and_delete_missing_user(repository):
    service = UserService(repository=repository)

    with pytest.raises(NotFoundError):
        await service.update_user("5", "Ana", "ana@example.com")
    with pytest.raises(NotFoundError):
        await service.delete_user("5")


@pytest.mark.asyncio
async def test_non_positive_ids_skip_storage(repository):
    service = UserService(repository=repository)

    with pytest.raises(NotFoundError):
        await service.delete_user("0")
    with pytest.raises(NotFoundError):
        await service.update_user("-1", "Ana", "ana@example.com")
    assert service.repository.calls == []


@pytest.mark.asyncio
async def test_validation_happens_before_storage(repository):
    service = UserService(repository=repository)

    with pytest.raises(ValidationError):
        await service.create_user("Ana", "bad")
    with pytest.raises(ValidationError):
        await service.update_user("1", "", "ana@example.com")
    assert repository.calls == []


@pytest.mark.asyncio
async def test_delete_is_idempotent_in_effect(repository):
    service = UserService(repository=repository)
    user = await service.create_user("Ana", "ana@example.com")

    await service.delete_user(str(user.id))
    with pytest.raises(NotFoundError):
        await service.delete_user(str(user.id))
    assert await service.list_users() == []
