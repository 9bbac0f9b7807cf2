"""
FastAPI router for success story endpoints.

Public submission and display, admin moderation.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from common.utils import paginated_response, success_response
from irisehub.dependencies import require_admin, get_story_service
from irisehub.routers.uploads import read_image
from irisehub.schemas.story import RejectStoryRequest
from irisehub.services.auth.identity import AdminIdentity
from irisehub.services.pagination import normalize_page
from irisehub.services.stories.story_service import StoryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stories", tags=["stories"])


# ─────────────────────────────────────────────────────────────────
# Public Endpoints
# ─────────────────────────────────────────────────────────────────

@router.post("/submit")
async def submit_story(
    story_service: Annotated[StoryService, Depends(get_story_service)],
    name: Optional[str] = Form(default=None),
    number: Optional[str] = Form(default=None),
    email: Optional[str] = Form(default=None),
    storyTitle: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    image: Optional[UploadFile] = File(default=None),
):
    """Submit a story for review. Accepts multipart/form-data."""
    story = await story_service.submit(
        {
            "name": name,
            "number": number,
            "email": email,
            "storyTitle": storyTitle,
            "description": description,
        },
        image=await read_image(image),
    )
    return success_response(
        story,
        message="Story submitted successfully! It will be reviewed by admin.",
    )


@router.get("/approved")
async def get_approved_stories(
    story_service: Annotated[StoryService, Depends(get_story_service)],
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
):
    """List approved stories for public display."""
    page, limit = normalize_page(page, limit, default_limit=10)
    stories, total = await story_service.get_approved(page=page, limit=limit)
    return paginated_response(stories, total, page=page, limit=limit)


@router.get("/approved/{story_id}")
async def get_approved_story(
    story_id: str,
    story_service: Annotated[StoryService, Depends(get_story_service)],
):
    """Get one approved story."""
    story = await story_service.get_approved_by_id(story_id)
    return success_response(story)


# ─────────────────────────────────────────────────────────────────
# Moderation Endpoints
# ─────────────────────────────────────────────────────────────────

@router.get("/all")
async def get_all_stories(
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    story_service: Annotated[StoryService, Depends(get_story_service)],
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    status: Optional[str] = Query(None),
):
    """List every story for moderation, optionally filtered by status."""
    page, limit = normalize_page(page, limit, default_limit=100)
    stories, total = await story_service.get_all(page=page, limit=limit, status=status)
    return paginated_response(stories, total, page=page, limit=limit)


@router.patch("/{story_id}/approve")
async def approve_story(
    story_id: str,
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    story_service: Annotated[StoryService, Depends(get_story_service)],
):
    """Approve a story."""
    story = await story_service.approve(story_id, admin.reviewer)
    return success_response(story, message="Story approved successfully")


@router.patch("/{story_id}/reject")
async def reject_story(
    story_id: str,
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    story_service: Annotated[StoryService, Depends(get_story_service)],
    body: Optional[RejectStoryRequest] = None,
):
    """Reject a story with an optional reason."""
    reason = body.rejectedReason if body else None
    story = await story_service.reject(story_id, reason)
    return success_response(story, message="Story rejected successfully")


@router.delete("/{story_id}")
async def delete_story(
    story_id: str,
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    story_service: Annotated[StoryService, Depends(get_story_service)],
):
    """Permanently delete a story."""
    await story_service.delete(story_id)
    logger.info(f"Story {story_id} deleted by {admin.id}")
    return success_response(message="Story deleted successfully")
