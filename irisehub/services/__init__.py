"""
iRiseHub Services.

All service classes organized by feature.
"""

# Admin and auth services
from irisehub.services.admin.admin_service import AdminService
from irisehub.services.auth.login_service import LoginService

# Media services
from irisehub.services.media.media_service import MediaService

# Content services
from irisehub.services.stories.story_service import StoryService
from irisehub.services.news.news_service import NewsService
from irisehub.services.events.event_service import EventService
from irisehub.services.bookings.booking_service import BookingService

__all__ = [
    "AdminService",
    "LoginService",
    "MediaService",
    "StoryService",
    "NewsService",
    "EventService",
    "BookingService",
]
