"""
JWT authentication provider.

Stateless HS256 tokens with a fixed lifetime. There is no revocation
list: rotating the secret invalidates every outstanding token.

Example:
    auth = JWTAuth(secret="your-secret-key", token_expire_hours=24)

    token = auth.create_token(admin_id, name="Jo", email="jo@x.com", role="admin")

    claims = auth.verify_token(token)
    print(claims["sub"])  # admin_id
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Any

from jose import jwt, JWTError, ExpiredSignatureError

from common.auth.base import AuthProvider
from common.utils.exceptions import InvalidTokenException

logger = logging.getLogger(__name__)


class JWTAuth(AuthProvider):
    """
    JWT token provider.

    The secret and lifetime are fixed at construction.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        token_expire_hours: int = 24,
    ):
        """
        Initialize JWT auth provider.

        Args:
            secret: Secret key for JWT signing
            algorithm: JWT algorithm (default: HS256)
            token_expire_hours: Absolute token lifetime from issuance
        """
        if not secret:
            raise ValueError("JWT secret must not be empty")

        self._secret = secret
        self.algorithm = algorithm
        self.token_expire = timedelta(hours=token_expire_hours)

    def create_token(
        self,
        subject_id: str,
        **claims: Any,
    ) -> str:
        """Create a signed JWT for the subject."""
        now = datetime.now(timezone.utc)
        payload = {
            **claims,
            "sub": str(subject_id),
            "iat": now,
            "exp": now + self.token_expire,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a JWT.

        Expiry, signature and format failures raise the same exception;
        only the log line tells them apart.
        """
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
            )
        except ExpiredSignatureError:
            logger.info("Rejected expired token")
            raise InvalidTokenException()
        except JWTError as e:
            logger.warning(f"Rejected invalid token: {e}")
            raise InvalidTokenException()
