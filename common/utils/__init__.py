"""
Utilities module - Common helpers for API responses, exceptions, and passwords.
"""

from common.utils.responses import success_response, error_response, paginated_response
from common.utils.exceptions import (
    APIException,
    UnauthorizedException,
    NotAuthorizedException,
    InvalidTokenException,
    InvalidCredentialsException,
    NotFoundException,
    ConflictException,
    DuplicateEmailException,
    ValidationException,
    ServiceUnavailableException,
)
from common.utils.password import hash_password, verify_password, validate_password

__all__ = [
    "success_response",
    "error_response",
    "paginated_response",
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
    "hash_password",
    "verify_password",
    "validate_password",
]
