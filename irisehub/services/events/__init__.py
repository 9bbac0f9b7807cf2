"""Event services."""

from irisehub.services.events.event_service import EventService

__all__ = [
    "EventService",
]
