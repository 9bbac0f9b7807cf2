"""
iRiseHub API Routers.

All routers are imported here for easy access.
"""

from irisehub.routers.admin import router as admin_router
from irisehub.routers.stories import router as stories_router
from irisehub.routers.news import router as news_router
from irisehub.routers.events import router as events_router
from irisehub.routers.bookings import router as bookings_router

__all__ = [
    "admin_router",
    "stories_router",
    "news_router",
    "events_router",
    "bookings_router",
]
