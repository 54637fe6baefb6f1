from __future__ import annotations

from tms_console.adapters.api_errors import ApiTimeoutError
from tms_console.domain.errors import (
    DomainError,
    DuplicateEntityError,
    ErrorKind,
    ServerError,
    ValidationError,
)
from tms_console.usecases.error_mapping import (
    GENERIC_DOMAIN_MESSAGE,
    UNCLASSIFIED_MESSAGE,
    describe_failure,
)


def test_server_error_message_is_shown_verbatim() -> None:
    failure = describe_failure(ServerError("Try again later"), operation="Add tenant")

    assert failure.kind is ErrorKind.SERVER
    assert failure.title == "Add tenant failed"
    assert failure.message == "Try again later"
    assert failure.classified


def test_validation_error_exposes_server_messages() -> None:
    failure = describe_failure(ValidationError(["name is required"]), operation="Add group")

    assert failure.message == "Unexpected server response: name is required"


def test_domain_error_without_user_message_uses_generic_text() -> None:
    assert describe_failure(DuplicateEntityError(), operation="x").message == GENERIC_DOMAIN_MESSAGE
    assert describe_failure(DomainError("dev only", "  "), operation="x").message == GENERIC_DOMAIN_MESSAGE


def test_unclassified_errors_never_leak_details() -> None:
    failure = describe_failure(ApiTimeoutError("Timeout contacting http://api"), operation="Fetch tenants")

    assert failure.kind is ErrorKind.UNCLASSIFIED
    assert not failure.classified
    assert failure.message == UNCLASSIFIED_MESSAGE
    assert "http://api" not in failure.message


def test_wrapped_domain_error_is_still_classified() -> None:
    try:
        try:
            raise DuplicateEntityError("Group name taken")
        except DuplicateEntityError as exc:
            raise RuntimeError("callback failed") from exc
    except RuntimeError as wrapped:
        failure = describe_failure(wrapped, operation="Add group")

    assert failure.kind is ErrorKind.DUPLICATE
    assert failure.message == "Group name taken"


def test_blank_operation_gets_plain_error_title() -> None:
    assert describe_failure(ServerError(), operation=" ").title == "Error"
