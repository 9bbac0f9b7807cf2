"""
Abstract token provider interface.

Defines the contract for issuing and verifying identity tokens, so the
auth gate and login flow do not depend on a particular token format.

Example:
    from common.auth import AuthProvider, JWTAuth

    def get_auth_provider(settings) -> AuthProvider:
        return JWTAuth(secret=settings.JWT_SECRET)
"""

from abc import ABC, abstractmethod
from typing import Dict, Any


class AuthProvider(ABC):
    """
    Abstract token provider.

    Implementations must reject any token they cannot fully trust.
    """

    @abstractmethod
    def create_token(
        self,
        subject_id: str,
        **claims: Any,
    ) -> str:
        """
        Create an identity token for a subject.

        Args:
            subject_id: The subject's ID (stored as "sub")
            **claims: Additional claims to include in the token

        Returns:
            The signed token string
        """

    @abstractmethod
    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify an identity token.

        Args:
            token: The token to verify

        Returns:
            Dictionary containing decoded token claims

        Raises:
            InvalidTokenException: If token is malformed, tampered with, or expired
        """
