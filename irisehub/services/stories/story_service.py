"""
Success story service.

Public submission plus the moderation lifecycle:

    pending -> approved | rejected
    approved <-> rejected

Re-approving or re-rejecting is allowed and refreshes the transition
fields. Each transition is one atomic find_one_and_update; concurrent
moderation of the same story is last-write-wins.
"""

import logging
from typing import Optional, List, Dict, Any, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase

from common.database import parse_object_id, utcnow
from common.utils.exceptions import (
    NotFoundException,
    ServiceUnavailableException,
    ValidationException,
)
from irisehub.services.admin.admin_service import AdminService
from irisehub.services.auth.identity import AdminReviewer, ReviewerIdentity
from irisehub.services.media.media_service import FOLDER_STORIES, MediaService, UploadedImage
from irisehub.services.pagination import fetch_page
from irisehub.services.validation import clean, require_email, require_min_length

logger = logging.getLogger(__name__)


STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"
STORY_STATUSES = [STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED]

DEFAULT_REJECTED_REASON = "Story does not meet our guidelines"

# Never leaves the service on public endpoints
PRIVATE_FIELDS = {"number": 0, "email": 0, "rejectedReason": 0, "approvedBy": 0}


class StoryService:
    """
    Manages community success stories and their moderation.
    """

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        admin_service: AdminService,
        media_service: Optional[MediaService] = None,
    ):
        """
        Initialize StoryService.

        Args:
            db: MongoDB database connection
            admin_service: Used to resolve approvedBy for admin listings
            media_service: Image uploads for submissions (optional)
        """
        self._db = db
        self._stories_collection = db["stories"]
        self._admin_service = admin_service
        self._media_service = media_service

    async def ensure_indexes(self) -> None:
        await self._stories_collection.create_index([("status", 1), ("createdAt", -1)])
        await self._stories_collection.create_index([("status", 1), ("approvedAt", -1)])

    # =========================================================================
    # Public
    # =========================================================================

    async def submit(
        self,
        fields: Dict[str, Any],
        image: Optional[UploadedImage] = None,
    ) -> Dict[str, Any]:
        """
        Submit a new story for review.

        A failed image upload does not block the submission; the story is
        saved without an image.

        Args:
            fields: name, number, email, storyTitle, description
            image: Optional uploaded image

        Returns:
            Created story dict (status pending)
        """
        name = require_min_length(fields.get("name"), 2, "Name must be at least 2 characters")
        number = require_min_length(fields.get("number"), 5, "Phone number is required")
        email = require_email(fields.get("email"), "Valid email is required")
        story_title = require_min_length(
            fields.get("storyTitle"), 3, "Story title must be at least 3 characters"
        )
        description = require_min_length(
            fields.get("description"), 10, "Description must be at least 10 characters"
        )

        image_url = None
        if image is not None and self._media_service is not None:
            try:
                image_url = await self._media_service.upload_image(
                    image.data, image.content_type, FOLDER_STORIES
                )
            except (ValidationException, ServiceUnavailableException) as e:
                logger.warning(f"Story image not uploaded, saving without it: {e.message}")

        now = utcnow()
        story_doc = {
            "name": name,
            "number": number,
            "email": email,
            "storyTitle": story_title,
            "description": description,
            "image": image_url,
            "video": None,
            "status": STATUS_PENDING,
            "rejectedReason": None,
            "approvedBy": None,
            "approvedAt": None,
            "views": 0,
            "createdAt": now,
            "updatedAt": now,
        }

        result = await self._stories_collection.insert_one(story_doc)
        story_doc["_id"] = result.inserted_id

        logger.info(f"Story submitted: {result.inserted_id} (image: {bool(image_url)})")
        return self._format_story(story_doc)

    async def get_approved(
        self,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        Get approved stories for public display, most recently approved first.

        Returns:
            (stories, total approved)
        """
        stories, total = await fetch_page(
            self._stories_collection,
            {"status": STATUS_APPROVED},
            [("approvedAt", -1), ("createdAt", -1)],
            page,
            limit,
            projection=PRIVATE_FIELDS,
        )
        return [self._format_story(s, public=True) for s in stories], total

    async def get_approved_by_id(self, story_id: str) -> Dict[str, Any]:
        """
        Get one approved story for public display.

        Pending and rejected stories are reported as not found.
        """
        oid = parse_object_id(story_id)
        story = None
        if oid is not None:
            story = await self._stories_collection.find_one({"_id": oid}, PRIVATE_FIELDS)

        if not story or story.get("status") != STATUS_APPROVED:
            raise NotFoundException("Story not found", code="STORY_NOT_FOUND")

        return self._format_story(story, public=True)

    # =========================================================================
    # Admin
    # =========================================================================

    async def get_all(
        self,
        page: int = 1,
        limit: int = 100,
        status: Optional[str] = None,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        Get every story for moderation, newest first.

        approvedBy is resolved to {id, name, email} when the admin record
        still exists.

        Args:
            page: Page number
            limit: Page size
            status: Optional status filter

        Returns:
            (stories, total matching)
        """
        query: Dict[str, Any] = {}
        if status:
            if status not in STORY_STATUSES:
                raise ValidationException(
                    message=f"Invalid status. Must be one of: {', '.join(STORY_STATUSES)}",
                    code="INVALID_STATUS"
                )
            query["status"] = status

        stories, total = await fetch_page(
            self._stories_collection, query, [("createdAt", -1)], page, limit
        )

        reviewer_ids = {s["approvedBy"] for s in stories if s.get("approvedBy")}
        reviewers = await self._admin_service.get_names_by_ids(list(reviewer_ids))

        formatted = []
        for story in stories:
            item = self._format_story(story)
            if story.get("approvedBy"):
                item["approvedBy"] = reviewers.get(str(story["approvedBy"]))
            formatted.append(item)

        return formatted, total

    async def approve(self, story_id: str, reviewer: ReviewerIdentity) -> Dict[str, Any]:
        """
        Approve a story.

        approvedBy is recorded only for a persisted admin reviewer; the
        configured super-admin leaves it null.

        Raises:
            NotFoundException: Unknown or malformed story id
        """
        approved_by = reviewer.admin_id if isinstance(reviewer, AdminReviewer) else None

        now = utcnow()
        story = await self._transition(story_id, {
            "status": STATUS_APPROVED,
            "approvedBy": approved_by,
            "approvedAt": now,
            "rejectedReason": None,
            "updatedAt": now,
        })

        logger.info(f"Story {story_id} approved (by admin: {approved_by is not None})")
        return story

    async def reject(self, story_id: str, reason: Optional[str] = None) -> Dict[str, Any]:
        """
        Reject a story.

        Raises:
            NotFoundException: Unknown or malformed story id
        """
        story = await self._transition(story_id, {
            "status": STATUS_REJECTED,
            "rejectedReason": clean(reason) or DEFAULT_REJECTED_REASON,
            "approvedBy": None,
            "approvedAt": None,
            "updatedAt": utcnow(),
        })

        logger.info(f"Story {story_id} rejected")
        return story

    async def delete(self, story_id: str) -> None:
        """
        Permanently delete a story.

        Raises:
            NotFoundException: Unknown or malformed story id
        """
        oid = parse_object_id(story_id)
        deleted = 0
        if oid is not None:
            result = await self._stories_collection.delete_one({"_id": oid})
            deleted = result.deleted_count

        if not deleted:
            raise NotFoundException("Story not found", code="STORY_NOT_FOUND")

        logger.info(f"Story {story_id} deleted")

    async def _transition(self, story_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        oid = parse_object_id(story_id)
        story = None
        if oid is not None:
            story = await self._stories_collection.find_one_and_update(
                {"_id": oid},
                {"$set": updates},
                return_document=True,
            )

        if not story:
            raise NotFoundException("Story not found", code="STORY_NOT_FOUND")

        return self._format_story(story)

    def _format_story(self, story: Dict[str, Any], public: bool = False) -> Dict[str, Any]:
        """Format story for response."""
        result = {
            "id": str(story["_id"]),
            "name": story.get("name"),
            "storyTitle": story.get("storyTitle"),
            "description": story.get("description"),
            "image": story.get("image"),
            "video": story.get("video"),
            "status": story.get("status", STATUS_PENDING),
            "approvedAt": story.get("approvedAt"),
            "views": story.get("views", 0),
            "createdAt": story.get("createdAt"),
            "updatedAt": story.get("updatedAt"),
        }

        if not public:
            approved_by = story.get("approvedBy")
            result.update({
                "number": story.get("number"),
                "email": story.get("email"),
                "rejectedReason": story.get("rejectedReason"),
                "approvedBy": str(approved_by) if approved_by else None,
            })

        return result
