"""The error taxonomy exported by common.utils."""

import pytest

import common.utils as utils
from common.utils import (
    ConflictException,
    DuplicateEmailException,
    InvalidCredentialsException,
    InvalidTokenException,
    NotAuthorizedException,
    NotFoundException,
    ServiceUnavailableException,
    ValidationException,
)


@pytest.mark.parametrize("exc,status,code", [
    (ValidationException(), 422, "VALIDATION_ERROR"),
    (DuplicateEmailException(), 409, "DUPLICATE_EMAIL"),
    (InvalidCredentialsException(), 401, "INVALID_CREDENTIALS"),
    (NotAuthorizedException(), 401, "NOT_AUTHORIZED"),
    (InvalidTokenException(), 401, "INVALID_TOKEN"),
    (NotFoundException(), 404, "NOT_FOUND"),
    (ConflictException(), 409, "CONFLICT"),
    (ServiceUnavailableException(), 503, "SERVICE_UNAVAILABLE"),
])
def test_status_and_code(exc, status, code):
    assert exc.status_code == status
    assert exc.code == code


def test_unauthorized_responses_ask_for_bearer():
    assert NotAuthorizedException().headers == {"WWW-Authenticate": "Bearer"}


def test_only_raised_kinds_are_exported():
    exported = {name for name in utils.__all__ if name.endswith("Exception")}

    assert exported == {
        "APIException",
        "UnauthorizedException",
        "NotAuthorizedException",
        "InvalidTokenException",
        "InvalidCredentialsException",
        "NotFoundException",
        "ConflictException",
        "DuplicateEmailException",
        "ValidationException",
        "ServiceUnavailableException",
    }
