from __future__ import annotations

import pytest

from tms_console.domain.errors import (
    DomainError,
    DuplicateEntityError,
    ErrorKind,
    ServerError,
    ValidationError,
    error_kind,
    find_domain_error,
    is_domain_error,
)


def test_validation_error_joins_server_messages() -> None:
    err = ValidationError(["A required", "B invalid"])

    assert err.user_message == "Unexpected server response: A required; B invalid"
    assert err.developer_message == "Validation error"
    assert err.validation_messages == ["A required", "B invalid"]
    assert err.kind is ErrorKind.VALIDATION


def test_validation_error_with_no_messages_keeps_prefix() -> None:
    err = ValidationError([])

    assert err.user_message == "Unexpected server response: "


def test_duplicate_and_server_errors_carry_fixed_developer_message() -> None:
    dup = DuplicateEntityError("Tenant already exists")
    server = ServerError()

    assert dup.developer_message == "Duplicate entity error"
    assert dup.user_message == "Tenant already exists"
    assert server.developer_message == "Server error"
    assert server.user_message is None
    assert str(server) == "Server error"


def test_generic_domain_error_has_generic_kind() -> None:
    err = DomainError("boom", "Something went wrong")

    assert error_kind(err) is ErrorKind.GENERIC
    assert is_domain_error(err)


def test_unrelated_exceptions_are_unclassified() -> None:
    assert error_kind(RuntimeError("x")) is ErrorKind.UNCLASSIFIED
    assert error_kind(None) is ErrorKind.UNCLASSIFIED
    assert not is_domain_error(KeyError("k"))


def test_kind_survives_chaining() -> None:
    with pytest.raises(RuntimeError) as info:
        try:
            raise DuplicateEntityError("dup")
        except DuplicateEntityError as exc:
            raise RuntimeError("wrapped") from exc

    wrapped = info.value
    assert error_kind(wrapped) is ErrorKind.DUPLICATE
    assert is_domain_error(wrapped, ErrorKind.DUPLICATE)
    assert not is_domain_error(wrapped, ErrorKind.SERVER)
    assert isinstance(find_domain_error(wrapped), DuplicateEntityError)


def test_kind_is_read_from_attribute_not_class() -> None:
    class ForeignError(Exception):
        kind = "server"

    assert error_kind(ForeignError()) is ErrorKind.SERVER


def test_repr_mentions_kind_and_messages() -> None:
    text = repr(ServerError("Try again later"))

    assert "ServerError" in text
    assert "'server'" in text
    assert "Try again later" in text


def test_error_raised_while_handling_domain_error_keeps_own_kind() -> None:
    with pytest.raises(TimeoutError) as info:
        try:
            raise DuplicateEntityError("Tenant 'Payments' already exists")
        except DuplicateEntityError:
            raise TimeoutError("reload timed out")

    assert isinstance(info.value.__context__, DuplicateEntityError)
    assert error_kind(info.value) is ErrorKind.UNCLASSIFIED
    assert find_domain_error(info.value) is None


def test_raise_from_none_ends_the_chain() -> None:
    with pytest.raises(RuntimeError) as info:
        try:
            raise DuplicateEntityError("dup")
        except DuplicateEntityError:
            raise RuntimeError("bug") from None

    assert error_kind(info.value) is ErrorKind.UNCLASSIFIED
    assert not is_domain_error(info.value)
