"""
Pydantic models for admin and login request validation.

Field rules (lengths, email format) are enforced by the services so the
same messages apply to every caller; these models only shape the body.
"""

from typing import Optional
from pydantic import BaseModel


# ─────────────────────────────────────────────────────────────────
# Login Models
# ─────────────────────────────────────────────────────────────────

class SuperAdminLoginRequest(BaseModel):
    """Super-admin login with the configured name and email."""
    name: Optional[str] = None
    email: Optional[str] = None


class AdminLoginRequest(BaseModel):
    """Admin login with email and password."""
    email: Optional[str] = None
    password: Optional[str] = None


# ─────────────────────────────────────────────────────────────────
# Admin Management Models
# ─────────────────────────────────────────────────────────────────

class CreateAdminRequest(BaseModel):
    """Request to create an admin."""
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class UpdateAdminRequest(BaseModel):
    """Request to update an admin. Omitted fields are unchanged."""
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
