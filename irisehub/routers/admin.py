"""
FastAPI router for Admin endpoints.

Provides super-admin and admin login plus admin account management.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from common.utils import NotFoundException, success_response
from irisehub.dependencies import (
    require_admin,
    get_admin_service,
    get_login_service,
)
from irisehub.services.admin.admin_service import AdminService
from irisehub.services.auth.identity import AdminIdentity
from irisehub.services.auth.login_service import LoginService
from irisehub.schemas.admin import (
    SuperAdminLoginRequest,
    AdminLoginRequest,
    CreateAdminRequest,
    UpdateAdminRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


# ─────────────────────────────────────────────────────────────────
# Login Endpoints
# ─────────────────────────────────────────────────────────────────

@router.post("/super-login")
async def super_admin_login(
    body: SuperAdminLoginRequest,
    login_service: Annotated[LoginService, Depends(get_login_service)],
):
    """Log in the configured super-admin."""
    result = await login_service.super_admin_login(body.name, body.email)
    return success_response(message="Super Admin login successful", **result)


@router.post("/login")
async def admin_login(
    body: AdminLoginRequest,
    login_service: Annotated[LoginService, Depends(get_login_service)],
):
    """Log in an admin with email and password."""
    result = await login_service.admin_login(body.email, body.password)
    return success_response(message="Login successful", **result)


@router.get("/me")
async def get_current_admin(
    admin: Annotated[AdminIdentity, Depends(require_admin)],
):
    """Get the identity carried by the current token."""
    return success_response(admin.to_dict())


# ─────────────────────────────────────────────────────────────────
# Admin Management Endpoints
# ─────────────────────────────────────────────────────────────────

@router.post("/create")
async def create_admin(
    body: CreateAdminRequest,
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    admin_service: Annotated[AdminService, Depends(get_admin_service)],
):
    """Create a new admin account."""
    created = await admin_service.create(
        name=body.name,
        email=body.email,
        password=body.password,
        role=body.role,
    )
    logger.info(f"Admin {created['id']} created by {admin.id}")
    return success_response(message="Admin created successfully! ✅", admin=created)


@router.get("/all")
async def get_all_admins(
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    admin_service: Annotated[AdminService, Depends(get_admin_service)],
):
    """List active admins, newest first."""
    admins = await admin_service.list_active()
    return success_response(admins)


@router.get("/single/{admin_id}")
async def get_admin(
    admin_id: str,
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    admin_service: Annotated[AdminService, Depends(get_admin_service)],
):
    """Get one admin by ID."""
    found = await admin_service.get_by_id(admin_id)
    if not found:
        raise NotFoundException("Admin not found", code="ADMIN_NOT_FOUND")
    return success_response(found)


@router.put("/{admin_id}")
async def update_admin(
    admin_id: str,
    body: UpdateAdminRequest,
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    admin_service: Annotated[AdminService, Depends(get_admin_service)],
):
    """Update an admin's name, email or role."""
    updated = await admin_service.update(admin_id, body.model_dump(exclude_none=True))
    if not updated:
        raise NotFoundException("Admin not found", code="ADMIN_NOT_FOUND")
    return success_response(updated, message="Admin updated successfully")


@router.delete("/{admin_id}")
async def delete_admin(
    admin_id: str,
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    admin_service: Annotated[AdminService, Depends(get_admin_service)],
):
    """Deactivate an admin. The record is kept."""
    deleted = await admin_service.soft_delete(admin_id)
    if not deleted:
        raise NotFoundException("Admin not found", code="ADMIN_NOT_FOUND")
    return success_response(message="Admin deleted successfully")
