"""
FastAPI router for event booking endpoints.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from common.utils import paginated_response, success_response
from irisehub.dependencies import require_admin, get_booking_service
from irisehub.schemas.booking import CreateBookingRequest, UpdateBookingStatusRequest
from irisehub.services.auth.identity import AdminIdentity
from irisehub.services.bookings.booking_service import BookingService
from irisehub.services.pagination import normalize_page

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["bookings"])


# ─────────────────────────────────────────────────────────────────
# Public Endpoints
# ─────────────────────────────────────────────────────────────────

@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_booking(
    body: CreateBookingRequest,
    booking_service: Annotated[BookingService, Depends(get_booking_service)],
):
    """Register for an event."""
    booking = await booking_service.create(body.model_dump())
    return success_response(booking, message="Event registration successful!")


@router.get("/event/{event_id}")
async def get_event_bookings(
    event_id: str,
    booking_service: Annotated[BookingService, Depends(get_booking_service)],
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
):
    """List bookings for one event."""
    page, limit = normalize_page(page, limit)
    items, total = await booking_service.list_by_event(event_id, page=page, limit=limit)
    return paginated_response(items, total, page=page, limit=limit)


# ─────────────────────────────────────────────────────────────────
# Admin Endpoints
# ─────────────────────────────────────────────────────────────────

@router.get("/")
async def get_all_bookings(
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    booking_service: Annotated[BookingService, Depends(get_booking_service)],
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
):
    """List all bookings, most recent first."""
    page, limit = normalize_page(page, limit)
    items, total = await booking_service.list(page=page, limit=limit)
    return paginated_response(items, total, page=page, limit=limit)


@router.get("/stats")
async def get_booking_stats(
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    booking_service: Annotated[BookingService, Depends(get_booking_service)],
):
    """Booking totals per status and per month."""
    stats = await booking_service.stats()
    return success_response(stats)


@router.patch("/{booking_id}/status")
async def update_booking_status(
    booking_id: str,
    body: UpdateBookingStatusRequest,
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    booking_service: Annotated[BookingService, Depends(get_booking_service)],
):
    """Set a booking to pending, confirmed or cancelled."""
    booking = await booking_service.update_status(booking_id, body.status)
    return success_response(booking, message="Booking status updated successfully")


@router.delete("/{booking_id}")
async def delete_booking(
    booking_id: str,
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    booking_service: Annotated[BookingService, Depends(get_booking_service)],
):
    """Delete a booking."""
    await booking_service.delete(booking_id)
    return success_response(message="Booking deleted successfully")
