"""
Event service.

Manages events with their speakers, schedule and publish state.
"""

import json
import logging
import re
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase

from common.database import parse_object_id, utcnow
from common.utils.exceptions import NotFoundException, ValidationException
from irisehub.services.media.media_service import FOLDER_EVENTS, MediaService, UploadedImage
from irisehub.services.pagination import fetch_page
from irisehub.services.validation import clean, clean_optional, require_min_length

logger = logging.getLogger(__name__)


TYPE_COMING_SOON = "Coming Soon"
TYPE_PAST = "Past Event"
EVENT_TYPES = [TYPE_COMING_SOON, TYPE_PAST]

# URL slug -> stored type
TYPE_SLUGS = {
    "coming-soon": TYPE_COMING_SOON,
    "past": TYPE_PAST,
    "past-event": TYPE_PAST,
}

SPEAKER_SINGLE = "single"
SPEAKER_MULTIPLE = "multiple"


def parse_speakers(raw: Any) -> List[str]:
    """
    Parse the speakers form value.

    Accepts a list, a JSON array string, or a comma/newline separated
    string. Anything else yields an empty list.
    """
    if not raw:
        return []

    if isinstance(raw, (list, tuple)):
        return [str(s) for s in raw]

    if not isinstance(raw, str):
        return []

    text = raw.strip()
    if not text:
        return []

    try:
        parsed = json.loads(text)
    except ValueError:
        parsed = None

    if isinstance(parsed, list):
        return [str(s) for s in parsed]

    return [name.strip() for name in re.split(r"[\n,]", text) if name.strip()]


def normalize_speakers(raw: Any, speaker_type: str = SPEAKER_SINGLE) -> List[str]:
    """Drop names shorter than 2 characters; single events keep only the first."""
    cleaned = [name.strip() for name in parse_speakers(raw)]
    cleaned = [name for name in cleaned if len(name) >= 2]

    if speaker_type == SPEAKER_SINGLE:
        return cleaned[:1]

    return cleaned


def normalize_speaker_type(value: Any) -> str:
    return SPEAKER_MULTIPLE if clean(value) == SPEAKER_MULTIPLE else SPEAKER_SINGLE


def parse_event_date(value: Any) -> Optional[datetime]:
    """Parse an ISO date/datetime string. Naive values are taken as UTC."""
    if value is None or isinstance(value, datetime):
        return value

    text = clean(value)
    if not text:
        return None

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationException(message="Invalid event date", code="INVALID_DATE")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class EventService:
    """
    Manages events.
    """

    def __init__(self, db: AsyncIOMotorDatabase, media_service: MediaService):
        """
        Initialize EventService.

        Args:
            db: MongoDB database connection
            media_service: Image uploads
        """
        self._db = db
        self._events_collection = db["events"]
        self._media_service = media_service

    async def ensure_indexes(self) -> None:
        await self._events_collection.create_index([("type", 1), ("isPublished", 1)])
        await self._events_collection.create_index([("createdAt", -1)])

    async def exists(self, event_id: Any) -> bool:
        oid = parse_object_id(event_id)
        if oid is None:
            return False
        return await self._events_collection.count_documents({"_id": oid}, limit=1) > 0

    async def get_summaries(self, event_ids: List[Any]) -> Dict[str, Dict[str, Any]]:
        """Resolve event ids to {id, title, eventDate, location} for bookings."""
        oids = [oid for oid in (parse_object_id(e) for e in event_ids) if oid is not None]
        if not oids:
            return {}

        cursor = self._events_collection.find(
            {"_id": {"$in": oids}},
            {"title": 1, "eventDate": 1, "location": 1},
        )
        events = await cursor.to_list(length=len(oids))

        return {
            str(e["_id"]): {
                "id": str(e["_id"]),
                "title": e.get("title"),
                "eventDate": e.get("eventDate"),
                "location": e.get("location"),
            }
            for e in events
        }

    async def create(
        self,
        fields: Dict[str, Any],
        image: Optional[UploadedImage] = None,
    ) -> Dict[str, Any]:
        """
        Create a published event.

        Args:
            fields: title, shortDescription, fullDescription, author,
                speakerType, speakers, and optional type, youtubeLink,
                eventDate, eventTime, location
            image: Optional uploaded image

        Returns:
            Created event dict
        """
        title = require_min_length(fields.get("title"), 3, "Title must be at least 3 characters")
        short_description = require_min_length(
            fields.get("shortDescription"), 10, "Short description must be at least 10 characters"
        )
        full_description = require_min_length(
            fields.get("fullDescription"), 10, "Full description must be at least 10 characters"
        )
        author = require_min_length(
            fields.get("author"), 2, "Author name must be at least 2 characters"
        )

        speaker_type = normalize_speaker_type(fields.get("speakerType"))
        speakers = normalize_speakers(fields.get("speakers"), speaker_type)
        if not speakers:
            raise ValidationException(message="Please provide at least one speaker name")

        event_type = self._validate_type(fields.get("type") or TYPE_COMING_SOON)
        event_date = parse_event_date(fields.get("eventDate"))

        image_url = None
        if image is not None:
            image_url = await self._media_service.upload_image(
                image.data, image.content_type, FOLDER_EVENTS
            )

        now = utcnow()
        event_doc = {
            "title": title,
            "shortDescription": short_description,
            "fullDescription": full_description,
            "author": author,
            "type": event_type,
            "youtubeLink": clean_optional(fields.get("youtubeLink")),
            "eventDate": event_date,
            "eventTime": clean_optional(fields.get("eventTime")),
            "location": clean_optional(fields.get("location")),
            "speakerType": speaker_type,
            "speakers": speakers,
            "image": image_url,
            "isPublished": True,
            "publishedAt": now,
            "views": 0,
            "likes": 0,
            "createdAt": now,
            "updatedAt": now,
        }

        result = await self._events_collection.insert_one(event_doc)
        event_doc["_id"] = result.inserted_id

        logger.info(f"Created event {result.inserted_id} ({event_type}, {len(speakers)} speakers)")
        return self._format_event(event_doc)

    async def list(self, page: int = 1, limit: int = 10) -> Tuple[List[Dict[str, Any]], int]:
        """List all events, newest first."""
        items, total = await fetch_page(
            self._events_collection, {}, [("createdAt", -1)], page, limit
        )
        return [self._format_event(e) for e in items], total

    async def list_by_type(
        self,
        type_slug: str,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        List published events of one type, newest first.

        Args:
            type_slug: "coming-soon" or "past"
        """
        event_type = TYPE_SLUGS.get(clean(type_slug).lower())
        if event_type is None:
            raise ValidationException(
                message="Event type must be coming-soon or past",
                code="INVALID_EVENT_TYPE"
            )

        items, total = await fetch_page(
            self._events_collection,
            {"isPublished": True, "type": event_type},
            [("createdAt", -1)],
            page,
            limit,
        )
        return [self._format_event(e) for e in items], total

    async def get_by_id(self, event_id: str) -> Dict[str, Any]:
        """
        Get an event and count the view.

        Raises:
            NotFoundException: Unknown or malformed id
        """
        event = await self._find_and_update(event_id, {"$inc": {"views": 1}})
        return self._format_event(event)

    async def update(
        self,
        event_id: str,
        fields: Dict[str, Any],
        image: Optional[UploadedImage] = None,
    ) -> Dict[str, Any]:
        """
        Update an event.

        Only fields that are present are changed. Optional text fields
        (youtubeLink, eventTime, location) are cleared by an empty value.
        When speakers are given they are re-normalized with the effective
        speakerType and must not end up empty.

        Raises:
            NotFoundException: Unknown or malformed id
        """
        updates: Dict[str, Any] = {}

        checks = {
            "title": (3, "Title must be at least 3 characters"),
            "shortDescription": (10, "Short description must be at least 10 characters"),
            "fullDescription": (10, "Full description must be at least 10 characters"),
            "author": (2, "Author name must be at least 2 characters"),
        }
        for field, (min_length, message) in checks.items():
            if clean(fields.get(field)):
                updates[field] = require_min_length(fields[field], min_length, message)

        if clean(fields.get("type")):
            updates["type"] = self._validate_type(fields["type"])

        for field in ("youtubeLink", "eventTime", "location"):
            if fields.get(field) is not None:
                updates[field] = clean_optional(fields[field])

        if fields.get("eventDate") is not None:
            updates["eventDate"] = parse_event_date(fields["eventDate"])

        if fields.get("speakers") is not None or fields.get("speakerType") is not None:
            speaker_type = normalize_speaker_type(fields.get("speakerType"))
            speakers = normalize_speakers(fields.get("speakers"), speaker_type)
            if not speakers:
                raise ValidationException(message="Please provide at least one speaker name")
            updates["speakerType"] = speaker_type
            updates["speakers"] = speakers

        if image is not None:
            updates["image"] = await self._media_service.upload_image(
                image.data, image.content_type, FOLDER_EVENTS
            )

        updates["updatedAt"] = utcnow()

        event = await self._find_and_update(event_id, {"$set": updates})

        logger.info(f"Updated event {event_id}")
        return self._format_event(event)

    async def delete(self, event_id: str) -> None:
        """
        Delete an event.

        Raises:
            NotFoundException: Unknown or malformed id
        """
        oid = parse_object_id(event_id)
        deleted = 0
        if oid is not None:
            result = await self._events_collection.delete_one({"_id": oid})
            deleted = result.deleted_count

        if not deleted:
            raise NotFoundException("Event not found", code="EVENT_NOT_FOUND")

        logger.info(f"Deleted event {event_id}")

    async def toggle_publish(self, event_id: str) -> Dict[str, Any]:
        """Flip isPublished and set or clear publishedAt to match."""
        now = utcnow()
        event = await self._find_and_update(event_id, [
            {"$set": {
                "isPublished": {"$not": [{"$ifNull": ["$isPublished", False]}]},
                "updatedAt": now,
            }},
            {"$set": {
                "publishedAt": {"$cond": ["$isPublished", now, None]},
            }},
        ])

        logger.info(f"Event {event_id} published={event.get('isPublished')}")
        return self._format_event(event)

    def _validate_type(self, value: Any) -> str:
        event_type = clean(value)
        if event_type not in EVENT_TYPES:
            event_type = TYPE_SLUGS.get(event_type.lower(), event_type)
        if event_type not in EVENT_TYPES:
            raise ValidationException(
                message=f"Invalid event type. Must be one of: {', '.join(EVENT_TYPES)}",
                code="INVALID_EVENT_TYPE"
            )
        return event_type

    async def _find_and_update(self, event_id: str, update) -> Dict[str, Any]:
        oid = parse_object_id(event_id)
        event = None
        if oid is not None:
            event = await self._events_collection.find_one_and_update(
                {"_id": oid},
                update,
                return_document=True,
            )

        if not event:
            raise NotFoundException("Event not found", code="EVENT_NOT_FOUND")

        return event

    def _format_event(self, event: Dict[str, Any]) -> Dict[str, Any]:
        """Format event for response."""
        return {
            "id": str(event["_id"]),
            "title": event.get("title"),
            "shortDescription": event.get("shortDescription"),
            "fullDescription": event.get("fullDescription"),
            "image": event.get("image"),
            "type": event.get("type", TYPE_COMING_SOON),
            "youtubeLink": event.get("youtubeLink"),
            "author": event.get("author"),
            "speakerType": event.get("speakerType", SPEAKER_SINGLE),
            "speakers": event.get("speakers", []),
            "eventDate": event.get("eventDate"),
            "eventTime": event.get("eventTime"),
            "location": event.get("location"),
            "isPublished": event.get("isPublished", False),
            "publishedAt": event.get("publishedAt"),
            "views": event.get("views", 0),
            "likes": event.get("likes", 0),
            "createdAt": event.get("createdAt"),
            "updatedAt": event.get("updatedAt"),
        }
