"""
Pydantic models for booking requests.
"""

from typing import Optional
from pydantic import BaseModel


class CreateBookingRequest(BaseModel):
    """Public event registration."""
    eventId: Optional[str] = None
    fullName: Optional[str] = None
    email: Optional[str] = None
    location: Optional[str] = None
    mobileNumber: Optional[str] = None
    gender: Optional[str] = None
    educationBackground: Optional[str] = None
    employmentStatus: Optional[str] = None
    expectation: Optional[str] = None


class UpdateBookingStatusRequest(BaseModel):
    """Request to change a booking's status."""
    status: Optional[str] = None
