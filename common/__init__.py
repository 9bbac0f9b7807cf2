"""
Common library for reusable infrastructure components.

This package holds the project-agnostic pieces of the API:

- database: Async MongoDB connection with Motor
- auth: Token providers (JWT)
- utils: Standard responses, exceptions, password hashing
- config: Base settings class
"""

from common.database import MongoDB
from common.auth import AuthProvider, JWTAuth
from common.utils import (
    success_response,
    error_response,
    APIException,
    UnauthorizedException,
    NotFoundException,
    ValidationException,
    hash_password,
    verify_password,
    validate_password,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "MongoDB",
    # Auth
    "AuthProvider",
    "JWTAuth",
    # Utils
    "success_response",
    "error_response",
    "APIException",
    "UnauthorizedException",
    "NotFoundException",
    "ValidationException",
    "hash_password",
    "verify_password",
    "validate_password",
    # Config
    "BaseAppSettings",
]
