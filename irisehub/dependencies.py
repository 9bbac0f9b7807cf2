"""
FastAPI dependencies for iRiseHub application.

Provides dependency injection for all services.
"""

from typing import Annotated, Optional

from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.auth import AuthProvider, JWTAuth
from irisehub.config import Settings

# Auth services
from irisehub.middleware.auth import AuthMiddleware
from irisehub.services.auth.identity import AdminIdentity
from irisehub.services.auth.login_service import LoginService

# Admin services
from irisehub.services.admin.admin_service import AdminService

# Media services
from irisehub.services.media.media_service import MediaService

# Content services
from irisehub.services.stories.story_service import StoryService
from irisehub.services.news.news_service import NewsService
from irisehub.services.events.event_service import EventService
from irisehub.services.bookings.booking_service import BookingService


# ─────────────────────────────────────────────────────────────────
# Service instances (initialized at startup)
# ─────────────────────────────────────────────────────────────────

# Auth
_auth_provider: Optional[AuthProvider] = None
_auth_middleware: Optional[AuthMiddleware] = None
_login_service: Optional[LoginService] = None

# Admin
_admin_service: Optional[AdminService] = None

# Media
_media_service: Optional[MediaService] = None

# Content
_story_service: Optional[StoryService] = None
_news_service: Optional[NewsService] = None
_event_service: Optional[EventService] = None
_booking_service: Optional[BookingService] = None


# ─────────────────────────────────────────────────────────────────
# Initialization functions
# ─────────────────────────────────────────────────────────────────

def init_auth_services(db: AsyncIOMotorDatabase, settings: Settings) -> None:
    """Initialize admin and auth services."""
    global _auth_provider, _auth_middleware, _login_service, _admin_service

    _auth_provider = JWTAuth(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        token_expire_hours=settings.JWT_EXPIRE_HOURS,
    )
    _auth_middleware = AuthMiddleware(auth_provider=_auth_provider)

    _admin_service = AdminService(db=db)
    _login_service = LoginService(
        auth_provider=_auth_provider,
        admin_service=_admin_service,
        super_admin=settings.get_super_admin(),
    )


def init_media_services(settings: Settings) -> None:
    """Initialize media services."""
    global _media_service

    _media_service = MediaService(
        config=settings.get_cloudinary_config(),
        max_upload_bytes=settings.MAX_UPLOAD_BYTES,
    )


def init_content_services(db: AsyncIOMotorDatabase) -> None:
    """Initialize story, news, event and booking services."""
    global _story_service, _news_service, _event_service, _booking_service

    _story_service = StoryService(
        db=db,
        admin_service=_admin_service,
        media_service=_media_service,
    )
    _news_service = NewsService(db=db, media_service=_media_service)
    _event_service = EventService(db=db, media_service=_media_service)
    _booking_service = BookingService(db=db, event_service=_event_service)


def init_all_services(db: AsyncIOMotorDatabase, settings: Settings) -> None:
    """
    Initialize all services at application startup.

    Args:
        db: MongoDB database connection
        settings: Validated application settings
    """
    init_auth_services(db, settings)
    init_media_services(settings)
    init_content_services(db)


async def ensure_indexes() -> None:
    """Create collection indexes. Safe to run on every startup."""
    await get_admin_service().ensure_indexes()
    await get_story_service().ensure_indexes()
    await get_news_service().ensure_indexes()
    await get_event_service().ensure_indexes()
    await get_booking_service().ensure_indexes()


# ─────────────────────────────────────────────────────────────────
# Auth getters
# ─────────────────────────────────────────────────────────────────

def get_auth_provider() -> AuthProvider:
    """Get token provider."""
    if _auth_provider is None:
        raise RuntimeError("Auth services not initialized.")
    return _auth_provider


def get_auth_middleware() -> AuthMiddleware:
    """Get auth middleware instance."""
    if _auth_middleware is None:
        raise RuntimeError("Auth services not initialized.")
    return _auth_middleware


def get_login_service() -> LoginService:
    """Get login service instance."""
    if _login_service is None:
        raise RuntimeError("Auth services not initialized.")
    return _login_service


async def require_admin(
    request: Request,
    auth_middleware: Annotated[AuthMiddleware, Depends(get_auth_middleware)]
) -> AdminIdentity:
    """Dependency that requires an admin token."""
    return await auth_middleware.require_admin(request)


# ─────────────────────────────────────────────────────────────────
# Service getters
# ─────────────────────────────────────────────────────────────────

def get_admin_service() -> AdminService:
    """Get admin service instance."""
    if _admin_service is None:
        raise RuntimeError("Auth services not initialized.")
    return _admin_service


def get_media_service() -> MediaService:
    """Get media service instance."""
    if _media_service is None:
        raise RuntimeError("Media services not initialized.")
    return _media_service


def get_story_service() -> StoryService:
    """Get story service instance."""
    if _story_service is None:
        raise RuntimeError("Content services not initialized.")
    return _story_service


def get_news_service() -> NewsService:
    """Get news service instance."""
    if _news_service is None:
        raise RuntimeError("Content services not initialized.")
    return _news_service


def get_event_service() -> EventService:
    """Get event service instance."""
    if _event_service is None:
        raise RuntimeError("Content services not initialized.")
    return _event_service


def get_booking_service() -> BookingService:
    """Get booking service instance."""
    if _booking_service is None:
        raise RuntimeError("Content services not initialized.")
    return _booking_service
