"""Booking services."""

from irisehub.services.bookings.booking_service import BookingService

__all__ = [
    "BookingService",
]
