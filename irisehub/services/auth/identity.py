"""
Admin identity types.

The super-admin is defined by configuration and has no database record.
Its token subject is the SUPER_ADMIN_ID sentinel; every other subject is
a persisted admin's ObjectId.
"""

from dataclasses import dataclass
from typing import Any, Dict, Union

from bson import ObjectId

from common.database import parse_object_id

SUPER_ADMIN_ID = "super_admin"

ROLE_ADMIN = "admin"
ROLE_SUPER_ADMIN = "super_admin"
ADMIN_ROLES = (ROLE_ADMIN, ROLE_SUPER_ADMIN)


@dataclass(frozen=True)
class SuperAdminReviewer:
    """The configured super-admin."""


@dataclass(frozen=True)
class AdminReviewer:
    """A persisted admin account."""
    admin_id: ObjectId


ReviewerIdentity = Union[SuperAdminReviewer, AdminReviewer]


@dataclass(frozen=True)
class AdminIdentity:
    """Identity decoded from a verified token."""
    id: str
    name: str
    email: str
    role: str

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "AdminIdentity":
        return cls(
            id=str(claims["sub"]),
            name=claims.get("name") or "",
            email=claims.get("email") or "",
            role=claims.get("role") or ROLE_ADMIN,
        )

    @property
    def is_super_admin(self) -> bool:
        return self.id == SUPER_ADMIN_ID

    @property
    def reviewer(self) -> ReviewerIdentity:
        """
        Resolve the identity for moderation attribution.

        Anything that is not a well-formed ObjectId (the sentinel included)
        is treated as the super-admin and is never written to approvedBy.
        """
        admin_id = None if self.is_super_admin else parse_object_id(self.id)
        if admin_id is None:
            return SuperAdminReviewer()
        return AdminReviewer(admin_id=admin_id)

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
        }
