"""
Authentication middleware for protected routes.

Verifies bearer tokens and attaches the admin identity to requests.
"""

import logging
from typing import Optional

from fastapi import Request

from common.auth.base import AuthProvider
from common.utils.exceptions import InvalidTokenException, NotAuthorizedException
from irisehub.services.auth.identity import AdminIdentity

logger = logging.getLogger(__name__)


class AuthMiddleware:
    """
    Middleware that validates the admin token and attaches identity to request.
    """

    def __init__(self, auth_provider: AuthProvider):
        """
        Initialize AuthMiddleware.

        Args:
            auth_provider: For token verification
        """
        self._auth = auth_provider

    async def require_admin(self, request: Request) -> AdminIdentity:
        """
        Validate request carries a valid admin token.

        Args:
            request: HTTP request object

        Returns:
            AdminIdentity attached to request

        Raises:
            NotAuthorizedException: No usable Authorization header
            InvalidTokenException: Token failed verification or has no subject

        Side Effects:
            - Attaches identity to request.state.admin
        """
        token = self._extract_token(request)

        if not token:
            logger.info(f"Rejected {request.url.path}: missing bearer token")
            raise NotAuthorizedException()

        claims = self._auth.verify_token(token)

        if not claims.get("sub"):
            logger.warning(f"Rejected {request.url.path}: token without subject")
            raise InvalidTokenException()

        admin = AdminIdentity.from_claims(claims)
        request.state.admin = admin

        return admin

    def _extract_token(self, request: Request) -> Optional[str]:
        """
        Extract bearer token from Authorization header.

        Args:
            request: HTTP request object

        Returns:
            Token string if present and valid format, None otherwise

        Expected format: "Authorization: Bearer <token>"
        """
        auth_header = request.headers.get("Authorization")

        if not auth_header:
            return None

        parts = auth_header.split()

        if len(parts) != 2:
            return None

        scheme, token = parts

        if scheme.lower() != "bearer":
            return None

        return token
