"""
FastAPI router for Event endpoints.

Public listing by type, admin authoring with optional image upload.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from common.utils import paginated_response, success_response
from irisehub.dependencies import require_admin, get_event_service
from irisehub.routers.uploads import read_image
from irisehub.services.auth.identity import AdminIdentity
from irisehub.services.events.event_service import EventService
from irisehub.services.pagination import normalize_page

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["events"])


# ─────────────────────────────────────────────────────────────────
# Public Endpoints
# ─────────────────────────────────────────────────────────────────

@router.get("/")
async def get_all_events(
    event_service: Annotated[EventService, Depends(get_event_service)],
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
):
    """List all events, newest first."""
    page, limit = normalize_page(page, limit)
    items, total = await event_service.list(page=page, limit=limit)
    return paginated_response(items, total, page=page, limit=limit)


@router.get("/type/{event_type}")
async def get_events_by_type(
    event_type: str,
    event_service: Annotated[EventService, Depends(get_event_service)],
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
):
    """List published events by type (coming-soon or past)."""
    page, limit = normalize_page(page, limit)
    items, total = await event_service.list_by_type(event_type, page=page, limit=limit)
    return paginated_response(items, total, page=page, limit=limit)


@router.get("/{event_id}")
async def get_event(
    event_id: str,
    event_service: Annotated[EventService, Depends(get_event_service)],
):
    """Get one event. Counts a view."""
    event = await event_service.get_by_id(event_id)
    return success_response(event)


# ─────────────────────────────────────────────────────────────────
# Admin Endpoints
# ─────────────────────────────────────────────────────────────────

@router.post("/add")
async def add_event(
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    event_service: Annotated[EventService, Depends(get_event_service)],
    title: Optional[str] = Form(default=None),
    shortDescription: Optional[str] = Form(default=None),
    fullDescription: Optional[str] = Form(default=None),
    author: Optional[str] = Form(default=None),
    type: Optional[str] = Form(default=None),
    youtubeLink: Optional[str] = Form(default=None),
    eventDate: Optional[str] = Form(default=None),
    eventTime: Optional[str] = Form(default=None),
    location: Optional[str] = Form(default=None),
    speakerType: Optional[str] = Form(default=None),
    speakers: Optional[str] = Form(default=None),
    image: Optional[UploadFile] = File(default=None),
):
    """
    Create an event. Accepts multipart/form-data.

    speakers may be a JSON array or a comma/newline separated list.
    """
    event = await event_service.create(
        {
            "title": title,
            "shortDescription": shortDescription,
            "fullDescription": fullDescription,
            "author": author,
            "type": type,
            "youtubeLink": youtubeLink,
            "eventDate": eventDate,
            "eventTime": eventTime,
            "location": location,
            "speakerType": speakerType,
            "speakers": speakers,
        },
        image=await read_image(image),
    )
    return success_response(event, message="Event created successfully! ✅")


@router.put("/{event_id}")
async def update_event(
    event_id: str,
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    event_service: Annotated[EventService, Depends(get_event_service)],
    title: Optional[str] = Form(default=None),
    shortDescription: Optional[str] = Form(default=None),
    fullDescription: Optional[str] = Form(default=None),
    author: Optional[str] = Form(default=None),
    type: Optional[str] = Form(default=None),
    youtubeLink: Optional[str] = Form(default=None),
    eventDate: Optional[str] = Form(default=None),
    eventTime: Optional[str] = Form(default=None),
    location: Optional[str] = Form(default=None),
    speakerType: Optional[str] = Form(default=None),
    speakers: Optional[str] = Form(default=None),
    image: Optional[UploadFile] = File(default=None),
):
    """Update an event. Omitted fields are unchanged."""
    event = await event_service.update(
        event_id,
        {
            "title": title,
            "shortDescription": shortDescription,
            "fullDescription": fullDescription,
            "author": author,
            "type": type,
            "youtubeLink": youtubeLink,
            "eventDate": eventDate,
            "eventTime": eventTime,
            "location": location,
            "speakerType": speakerType,
            "speakers": speakers,
        },
        image=await read_image(image),
    )
    return success_response(event, message="Event updated successfully! ✅")


@router.delete("/{event_id}")
async def delete_event(
    event_id: str,
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    event_service: Annotated[EventService, Depends(get_event_service)],
):
    """Delete an event."""
    await event_service.delete(event_id)
    return success_response(message="Event deleted successfully! ✅")


@router.patch("/{event_id}/toggle-publish")
async def toggle_event_publish(
    event_id: str,
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    event_service: Annotated[EventService, Depends(get_event_service)],
):
    """Publish or unpublish an event."""
    event = await event_service.toggle_publish(event_id)
    state = "published" if event["isPublished"] else "unpublished"
    return success_response(event, message=f"Event {state} successfully! ✅")
