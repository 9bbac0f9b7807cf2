"""
Custom HTTP exceptions with error codes.

Extends FastAPI's HTTPException with standardized error codes
for consistent API error responses.

Example:
    from common.utils import NotFoundException

    @router.get("/stories/{story_id}")
    async def get_story(story_id: str):
        story = await collection.find_one({"_id": ObjectId(story_id)})
        if not story:
            raise NotFoundException("Story not found", code="STORY_NOT_FOUND")
        return success_response(story)
"""

from typing import Optional, Any, Dict
from fastapi import HTTPException


class APIException(HTTPException):
    """
    Base API exception with error code support.

    The detail is always a dict with "message" and "code" so the
    exception handlers can render the standard error envelope.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Create an API exception.

        Args:
            status_code: HTTP status code
            message: Human-readable error message
            code: Machine-readable error code
            details: Additional error details
            headers: Optional response headers
        """
        detail: Dict[str, Any] = {"message": message}

        if code:
            detail["code"] = code

        if details is not None:
            detail["details"] = details

        self.message = message
        self.code = code

        super().__init__(
            status_code=status_code,
            detail=detail,
            headers=headers,
        )


class UnauthorizedException(APIException):
    """401 Unauthorized - Missing or invalid authentication."""

    def __init__(
        self,
        message: str = "Unauthorized",
        code: str = "UNAUTHORIZED",
        details: Optional[Any] = None,
    ):
        super().__init__(401, message, code, details, headers={"WWW-Authenticate": "Bearer"})


class NotAuthorizedException(UnauthorizedException):
    """401 - No usable bearer token on a protected request."""

    def __init__(
        self,
        message: str = "Not Authorized. Please login again.",
        code: str = "NOT_AUTHORIZED",
    ):
        super().__init__(message, code)


class InvalidTokenException(UnauthorizedException):
    """
    401 - Token failed verification.

    Bad signature, malformed structure, expiry and missing claims all
    share this one message.
    """

    def __init__(
        self,
        message: str = "Invalid token. Please login again.",
        code: str = "INVALID_TOKEN",
    ):
        super().__init__(message, code)


class InvalidCredentialsException(UnauthorizedException):
    """401 - Login rejected. Never says which part was wrong."""

    def __init__(
        self,
        message: str = "Invalid email or password",
        code: str = "INVALID_CREDENTIALS",
    ):
        super().__init__(message, code)


class NotFoundException(APIException):
    """404 Not Found - Resource doesn't exist."""

    def __init__(
        self,
        message: str = "Not found",
        code: str = "NOT_FOUND",
        details: Optional[Any] = None,
    ):
        super().__init__(404, message, code, details)


class ConflictException(APIException):
    """409 Conflict - Resource already exists or state conflict."""

    def __init__(
        self,
        message: str = "Conflict",
        code: str = "CONFLICT",
        details: Optional[Any] = None,
    ):
        super().__init__(409, message, code, details)


class DuplicateEmailException(ConflictException):
    """409 - An account with this email already exists."""

    def __init__(
        self,
        message: str = "Admin with this email already exists",
        code: str = "DUPLICATE_EMAIL",
    ):
        super().__init__(message, code)


class ValidationException(APIException):
    """422 Validation Error - Request validation failed."""

    def __init__(
        self,
        message: str = "Validation error",
        code: str = "VALIDATION_ERROR",
        details: Optional[Any] = None,
        errors: Optional[list] = None,
    ):
        detail_info = details
        if errors:
            detail_info = {"errors": errors, **(details or {})}
        super().__init__(422, message, code, detail_info)


class ServiceUnavailableException(APIException):
    """503 Service Unavailable - An upstream dependency failed."""

    def __init__(
        self,
        message: str = "Service unavailable",
        code: str = "SERVICE_UNAVAILABLE",
        retry_after: Optional[int] = None,
    ):
        headers = {}
        if retry_after:
            headers["Retry-After"] = str(retry_after)

        super().__init__(
            status_code=503,
            message=message,
            code=code,
            details={"retryAfter": retry_after} if retry_after else None,
            headers=headers if headers else None,
        )
