"""
Auth services.

LoginService lives in irisehub.services.auth.login_service and is not
re-exported here: the admin service imports the identity types from this
package.
"""

from irisehub.services.auth.identity import (
    ADMIN_ROLES,
    ROLE_ADMIN,
    ROLE_SUPER_ADMIN,
    SUPER_ADMIN_ID,
    AdminIdentity,
    AdminReviewer,
    ReviewerIdentity,
    SuperAdminReviewer,
)

__all__ = [
    "ADMIN_ROLES",
    "ROLE_ADMIN",
    "ROLE_SUPER_ADMIN",
    "SUPER_ADMIN_ID",
    "AdminIdentity",
    "AdminReviewer",
    "ReviewerIdentity",
    "SuperAdminReviewer",
]
