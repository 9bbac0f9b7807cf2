"""
iRiseHub Middleware.

All middleware components are imported here.
"""

from irisehub.middleware.auth import AuthMiddleware

__all__ = [
    "AuthMiddleware",
]
