"""
Admin login flows.

Two entry points issue the same kind of token:
- super-admin: name/email matched against configuration
- admin: email/password checked against the credential store
"""

import hmac
import logging
from typing import Dict, Any, TYPE_CHECKING

from common.auth.base import AuthProvider
from common.utils.exceptions import InvalidCredentialsException
from common.utils.password import verify_password
from irisehub.config import SuperAdminCredentials
from irisehub.services.auth.identity import SUPER_ADMIN_ID, ROLE_ADMIN, ROLE_SUPER_ADMIN

if TYPE_CHECKING:
    from irisehub.services.admin.admin_service import AdminService

logger = logging.getLogger(__name__)


def _equals(provided: Any, expected: str) -> bool:
    if not isinstance(provided, str) or not expected:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


class LoginService:
    """
    Verifies login credentials and mints identity tokens.
    """

    def __init__(
        self,
        auth_provider: AuthProvider,
        admin_service: "AdminService",
        super_admin: SuperAdminCredentials,
    ):
        """
        Initialize LoginService.

        Args:
            auth_provider: Token issuer
            admin_service: Credential store
            super_admin: Configured super-admin name/email pair
        """
        self._auth = auth_provider
        self._admin_service = admin_service
        self._super_admin = super_admin

    async def super_admin_login(self, name: str, email: str) -> Dict[str, Any]:
        """
        Log in the configured super-admin.

        Both values must match exactly; a mismatch never says which one.

        Returns:
            dict with token and admin

        Raises:
            InvalidCredentialsException: Name or email does not match
        """
        name_ok = _equals(name, self._super_admin.name)
        email_ok = _equals(email, self._super_admin.email)

        if not (name_ok and email_ok):
            logger.warning("Super admin login rejected")
            raise InvalidCredentialsException(message="Invalid name or email")

        admin = {
            "id": SUPER_ADMIN_ID,
            "name": self._super_admin.name,
            "email": self._super_admin.email,
            "role": ROLE_SUPER_ADMIN,
        }
        token = self._auth.create_token(
            SUPER_ADMIN_ID,
            name=admin["name"],
            email=admin["email"],
            role=ROLE_SUPER_ADMIN,
        )

        logger.info("Super admin logged in")
        return {"token": token, "admin": admin}

    async def admin_login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Log in a persisted admin.

        Unknown, inactive and wrong-password logins all raise the same
        exception.

        Returns:
            dict with token and admin

        Raises:
            InvalidCredentialsException: Credentials rejected
        """
        admin = await self._admin_service.find_active_by_email(email)

        if not admin or not verify_password(password or "", admin.get("passwordHash", "")):
            logger.warning("Admin login rejected")
            raise InvalidCredentialsException()

        await self._admin_service.record_login(admin["_id"])

        admin_id = str(admin["_id"])
        role = admin.get("role", ROLE_ADMIN)
        token = self._auth.create_token(
            admin_id,
            name=admin.get("name", ""),
            email=admin.get("email", ""),
            role=role,
        )

        logger.info(f"Admin {admin_id} logged in")
        return {
            "token": token,
            "admin": {
                "id": admin_id,
                "name": admin.get("name"),
                "email": admin.get("email"),
                "role": role,
            },
        }
