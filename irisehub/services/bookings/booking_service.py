"""
Event booking service.

Public event registration plus admin management. A person (by email)
can register for a given event only once.
"""

import logging
import re
from typing import Optional, List, Dict, Any, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from common.database import parse_object_id, utcnow
from common.utils.exceptions import (
    ConflictException,
    NotFoundException,
    ValidationException,
)
from irisehub.services.events.event_service import EventService
from irisehub.services.pagination import fetch_page
from irisehub.services.validation import clean, require_choice, require_email, require_min_length

logger = logging.getLogger(__name__)


BOOKING_STATUSES = ["pending", "confirmed", "cancelled"]
GENDERS = ["male", "female"]
EMPLOYMENT_STATUSES = ["employed", "unemployed"]

REQUIRED_FIELDS = [
    "eventId", "fullName", "email", "location", "mobileNumber",
    "gender", "educationBackground", "employmentStatus", "expectation",
]

MOBILE_PATTERN = re.compile(r"^\+?[1-9]\d{0,15}$")

STATS_MONTHS = 6


def months_ago(months: int):
    """Same day and time, `months` calendar months back (day clamped to 28)."""
    now = utcnow()
    month_index = now.year * 12 + (now.month - 1) - months
    year, month = divmod(month_index, 12)
    return now.replace(year=year, month=month + 1, day=min(now.day, 28))


class BookingService:
    """
    Manages event registrations.
    """

    def __init__(self, db: AsyncIOMotorDatabase, event_service: EventService):
        """
        Initialize BookingService.

        Args:
            db: MongoDB database connection
            event_service: Used to check and describe booked events
        """
        self._db = db
        self._bookings_collection = db["bookings"]
        self._event_service = event_service

    async def ensure_indexes(self) -> None:
        await self._bookings_collection.create_index(
            [("eventId", 1), ("email", 1)], unique=True
        )
        await self._bookings_collection.create_index([("bookingDate", -1)])

    async def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        Register for an event.

        Args:
            fields: eventId, fullName, email, location, mobileNumber, gender,
                educationBackground, employmentStatus, expectation

        Returns:
            Created booking dict with the event summary

        Raises:
            ValidationException: Missing or invalid field
            NotFoundException: Event does not exist
            ConflictException: Already registered for this event
        """
        if any(not clean(fields.get(f)) for f in REQUIRED_FIELDS):
            raise ValidationException(message="All required fields must be provided")

        gender = require_choice(fields["gender"], GENDERS, "Gender must be male or female")
        employment_status = require_choice(
            fields["employmentStatus"], EMPLOYMENT_STATUSES,
            "Employment status must be employed or unemployed"
        )
        education = require_min_length(
            fields["educationBackground"], 2, "Education background must be at least 2 characters"
        )
        expectation = require_min_length(
            fields["expectation"], 5, "Expectation must be at least 5 characters"
        )
        full_name = require_min_length(
            fields["fullName"], 2, "Full name must be at least 2 characters"
        )
        location = require_min_length(
            fields["location"], 2, "Location must be at least 2 characters"
        )
        email = require_email(fields["email"], "Please enter a valid email")

        mobile_number = clean(fields["mobileNumber"])
        if not MOBILE_PATTERN.match(mobile_number):
            raise ValidationException(message="Please enter a valid mobile number")

        event_id = parse_object_id(clean(fields["eventId"]))
        if event_id is None or not await self._event_service.exists(event_id):
            raise NotFoundException("Event not found", code="EVENT_NOT_FOUND")

        if await self._bookings_collection.find_one({"eventId": event_id, "email": email}):
            raise ConflictException(
                "You have already registered for this event", code="ALREADY_REGISTERED"
            )

        now = utcnow()
        booking_doc = {
            "eventId": event_id,
            "fullName": full_name,
            "email": email,
            "location": location,
            "mobileNumber": mobile_number,
            "gender": gender,
            "educationBackground": education,
            "employmentStatus": employment_status,
            "expectation": expectation,
            "status": "pending",
            "bookingDate": now,
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            result = await self._bookings_collection.insert_one(booking_doc)
        except DuplicateKeyError:
            raise ConflictException(
                "You have already registered for this event", code="ALREADY_REGISTERED"
            )

        booking_doc["_id"] = result.inserted_id

        logger.info(f"Booking {result.inserted_id} created for event {event_id}")
        return (await self._with_events([booking_doc]))[0]

    async def list(self, page: int = 1, limit: int = 10) -> Tuple[List[Dict[str, Any]], int]:
        """List all bookings, most recent first."""
        items, total = await fetch_page(
            self._bookings_collection, {}, [("bookingDate", -1)], page, limit
        )
        return await self._with_events(items), total

    async def list_by_event(
        self,
        event_id: str,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        List bookings for one event, most recent first.

        A malformed event id matches nothing.
        """
        oid = parse_object_id(event_id)
        if oid is None:
            return [], 0

        items, total = await fetch_page(
            self._bookings_collection, {"eventId": oid}, [("bookingDate", -1)], page, limit
        )
        return await self._with_events(items), total

    async def update_status(self, booking_id: str, status: Optional[str]) -> Dict[str, Any]:
        """
        Change booking status.

        Raises:
            ValidationException: Unknown status
            NotFoundException: Unknown or malformed id
        """
        if status not in BOOKING_STATUSES:
            raise ValidationException(
                message="Invalid status. Must be pending, confirmed, or cancelled",
                code="INVALID_STATUS"
            )

        oid = parse_object_id(booking_id)
        booking = None
        if oid is not None:
            booking = await self._bookings_collection.find_one_and_update(
                {"_id": oid},
                {"$set": {"status": status, "updatedAt": utcnow()}},
                return_document=True,
            )

        if not booking:
            raise NotFoundException("Booking not found", code="BOOKING_NOT_FOUND")

        logger.info(f"Booking {booking_id} status -> {status}")
        return (await self._with_events([booking]))[0]

    async def delete(self, booking_id: str) -> None:
        """
        Delete a booking.

        Raises:
            NotFoundException: Unknown or malformed id
        """
        oid = parse_object_id(booking_id)
        deleted = 0
        if oid is not None:
            result = await self._bookings_collection.delete_one({"_id": oid})
            deleted = result.deleted_count

        if not deleted:
            raise NotFoundException("Booking not found", code="BOOKING_NOT_FOUND")

        logger.info(f"Booking {booking_id} deleted")

    async def stats(self) -> Dict[str, Any]:
        """
        Booking totals per status plus monthly counts for the last six months.

        Returns:
            dict with totalBookings, pendingBookings, confirmedBookings,
            cancelledBookings and monthlyBookings [{year, month, count}]
        """
        counts = {}
        for status in BOOKING_STATUSES:
            counts[status] = await self._bookings_collection.count_documents({"status": status})
        total = await self._bookings_collection.count_documents({})

        cursor = self._bookings_collection.aggregate([
            {"$match": {"bookingDate": {"$gte": months_ago(STATS_MONTHS)}}},
            {"$group": {
                "_id": {
                    "year": {"$year": "$bookingDate"},
                    "month": {"$month": "$bookingDate"},
                },
                "count": {"$sum": 1},
            }},
            {"$sort": {"_id.year": 1, "_id.month": 1}},
        ])
        monthly = await cursor.to_list(length=None)

        return {
            "totalBookings": total,
            "pendingBookings": counts["pending"],
            "confirmedBookings": counts["confirmed"],
            "cancelledBookings": counts["cancelled"],
            "monthlyBookings": [
                {"year": m["_id"]["year"], "month": m["_id"]["month"], "count": m["count"]}
                for m in monthly
            ],
        }

    async def _with_events(self, bookings: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Format bookings with eventId replaced by the event summary."""
        events = await self._event_service.get_summaries(
            list({b["eventId"] for b in bookings if b.get("eventId")})
        )
        return [self._format_booking(b, events.get(str(b.get("eventId")))) for b in bookings]

    def _format_booking(
        self,
        booking: Dict[str, Any],
        event: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Format booking for response."""
        return {
            "id": str(booking["_id"]),
            "eventId": str(booking["eventId"]) if booking.get("eventId") else None,
            "event": event,
            "fullName": booking.get("fullName"),
            "email": booking.get("email"),
            "location": booking.get("location"),
            "mobileNumber": booking.get("mobileNumber"),
            "gender": booking.get("gender"),
            "educationBackground": booking.get("educationBackground"),
            "employmentStatus": booking.get("employmentStatus"),
            "expectation": booking.get("expectation"),
            "status": booking.get("status", "pending"),
            "bookingDate": booking.get("bookingDate"),
            "createdAt": booking.get("createdAt"),
            "updatedAt": booking.get("updatedAt"),
        }
