"""
Admin account service.

Credential store for persisted admins. Admins are soft-deleted by
clearing isActive and are never removed from the collection.
"""

import logging
from typing import Optional, List, Dict, Any

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from common.database import parse_object_id, utcnow
from common.utils.exceptions import (
    DuplicateEmailException,
    ValidationException,
)
from common.utils.password import hash_password, validate_password
from irisehub.services.auth.identity import ADMIN_ROLES, ROLE_ADMIN
from irisehub.services.validation import require_email, require_min_length

logger = logging.getLogger(__name__)


class AdminService:
    """
    Manages persisted admin accounts.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize AdminService.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._admins_collection = db["admins"]

    async def ensure_indexes(self) -> None:
        """Create the unique email index."""
        await self._admins_collection.create_index("email", unique=True)

    async def find_active_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """
        Look up an active admin by email.

        The returned raw document includes passwordHash and must only be
        used for credential verification.

        Args:
            email: Admin email

        Returns:
            Raw admin document or None
        """
        if not email:
            return None

        return await self._admins_collection.find_one({
            "email": str(email).strip().lower(),
            "isActive": True,
        })

    async def get_by_id(self, admin_id: str) -> Optional[Dict[str, Any]]:
        """
        Get admin by ID.

        Args:
            admin_id: Admin ID

        Returns:
            Admin dict or None
        """
        oid = parse_object_id(admin_id)
        if oid is None:
            return None

        admin = await self._admins_collection.find_one({"_id": oid})
        return self._format_admin(admin) if admin else None

    async def list_active(self) -> List[Dict[str, Any]]:
        """
        List all active admins, newest first.

        Returns:
            List of admin dicts
        """
        cursor = self._admins_collection.find({"isActive": True})
        cursor = cursor.sort("createdAt", -1)

        admins = await cursor.to_list(length=500)
        return [self._format_admin(a) for a in admins]

    async def create(
        self,
        name: str,
        email: str,
        password: str,
        role: str = ROLE_ADMIN,
    ) -> Dict[str, Any]:
        """
        Create a new admin.

        Args:
            name: Display name (at least 2 characters)
            email: Unique email address
            password: Raw password (at least 6 characters, hashed before storage)
            role: Admin role

        Returns:
            Created admin dict

        Raises:
            ValidationException: Invalid name, email, password or role
            DuplicateEmailException: Email already in use
        """
        name = require_min_length(name, 2, "Name must be at least 2 characters")
        email = require_email(email)

        is_valid, errors = validate_password(password or "", min_length=6)
        if not is_valid:
            raise ValidationException(message=errors[0], code="INVALID_PASSWORD")

        role = self._validate_role(role)

        if await self._admins_collection.find_one({"email": email}):
            raise DuplicateEmailException()

        now = utcnow()
        admin_doc = {
            "name": name,
            "email": email,
            "passwordHash": hash_password(password),
            "role": role,
            "isActive": True,
            "lastLogin": None,
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            result = await self._admins_collection.insert_one(admin_doc)
        except DuplicateKeyError:
            raise DuplicateEmailException()

        admin_doc["_id"] = result.inserted_id

        logger.info(f"Created admin {result.inserted_id} with role {role}")
        return self._format_admin(admin_doc)

    async def update(
        self,
        admin_id: str,
        fields: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """
        Update admin profile fields.

        Only name, email and role can change here.

        Args:
            admin_id: Admin ID
            fields: Fields to update (None values are ignored)

        Returns:
            Updated admin dict or None if not found
        """
        oid = parse_object_id(admin_id)
        if oid is None:
            return None

        updates: Dict[str, Any] = {}

        if fields.get("name") is not None:
            updates["name"] = require_min_length(
                fields["name"], 2, "Name must be at least 2 characters"
            )

        if fields.get("email") is not None:
            email = require_email(fields["email"])
            clash = await self._admins_collection.find_one({
                "email": email,
                "_id": {"$ne": oid},
            })
            if clash:
                raise DuplicateEmailException()
            updates["email"] = email

        if fields.get("role") is not None:
            updates["role"] = self._validate_role(fields["role"])

        if not updates:
            return await self.get_by_id(admin_id)

        updates["updatedAt"] = utcnow()

        try:
            admin = await self._admins_collection.find_one_and_update(
                {"_id": oid},
                {"$set": updates},
                return_document=True,
            )
        except DuplicateKeyError:
            raise DuplicateEmailException()

        if admin:
            logger.info(f"Updated admin {admin_id}: {sorted(updates)}")
        return self._format_admin(admin) if admin else None

    async def soft_delete(self, admin_id: str) -> Optional[Dict[str, Any]]:
        """
        Deactivate an admin.

        Args:
            admin_id: Admin ID

        Returns:
            Deactivated admin dict or None if not found
        """
        oid = parse_object_id(admin_id)
        if oid is None:
            return None

        admin = await self._admins_collection.find_one_and_update(
            {"_id": oid},
            {"$set": {"isActive": False, "updatedAt": utcnow()}},
            return_document=True,
        )

        if admin:
            logger.info(f"Deactivated admin {admin_id}")
        return self._format_admin(admin) if admin else None

    async def record_login(self, admin_id) -> None:
        """Stamp lastLogin after a successful login."""
        now = utcnow()
        await self._admins_collection.update_one(
            {"_id": admin_id},
            {"$set": {"lastLogin": now, "updatedAt": now}},
        )

    async def get_names_by_ids(self, admin_ids: List[Any]) -> Dict[str, Dict[str, Any]]:
        """
        Resolve admin ids to {id, name, email} for display.

        Deactivated admins are included; missing ones are skipped.
        """
        oids = [oid for oid in (parse_object_id(a) for a in admin_ids) if oid is not None]
        if not oids:
            return {}

        cursor = self._admins_collection.find(
            {"_id": {"$in": oids}},
            {"name": 1, "email": 1},
        )
        admins = await cursor.to_list(length=len(oids))

        return {
            str(a["_id"]): {"id": str(a["_id"]), "name": a.get("name"), "email": a.get("email")}
            for a in admins
        }

    def _validate_role(self, role: Optional[str]) -> str:
        role = (role or ROLE_ADMIN).strip()
        if role not in ADMIN_ROLES:
            raise ValidationException(
                message=f"Invalid role. Must be one of: {', '.join(ADMIN_ROLES)}",
                code="INVALID_ROLE",
            )
        return role

    def _format_admin(self, admin: Dict[str, Any]) -> Dict[str, Any]:
        """Format admin for response. Never includes the password hash."""
        return {
            "id": str(admin["_id"]),
            "name": admin.get("name"),
            "email": admin.get("email"),
            "role": admin.get("role", ROLE_ADMIN),
            "isActive": admin.get("isActive", True),
            "lastLogin": admin.get("lastLogin"),
            "createdAt": admin.get("createdAt"),
            "updatedAt": admin.get("updatedAt"),
        }
