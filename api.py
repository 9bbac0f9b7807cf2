"""
iRiseHub FastAPI Application

Main entry point for the iRiseHub content API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Common library imports
from common.database import MongoDB
from common.utils import APIException, error_response, success_response

# App-specific imports
from irisehub.config import settings

# Import routers
from irisehub.routers import (
    admin_router,
    stories_router,
    news_router,
    events_router,
    bookings_router,
)

# Import service initialization
from irisehub.dependencies import init_all_services, ensure_indexes

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


# =============================================================================
# Database Instance
# =============================================================================
db = MongoDB()


# =============================================================================
# Application Lifespan
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown tasks like database connections
    and service initialization.
    """
    # Startup
    logger.info("Starting iRiseHub API...")

    settings.validate_required()

    await db.connect(
        uri=settings.MONGODB_URI,
        database_name=settings.MONGODB_DATABASE,
    )

    init_all_services(db=db.db, settings=settings)
    await ensure_indexes()
    logger.info("All services initialized successfully!")

    if not settings.get_super_admin().is_configured:
        logger.warning("ADMIN_NAME/ADMIN_EMAIL not set; super admin login is disabled")
    if not settings.get_cloudinary_config().is_configured:
        logger.warning("Cloudinary not configured; image uploads will fail")

    logger.info("iRiseHub API started successfully!")

    yield

    # Shutdown
    logger.info("Shutting down iRiseHub API...")
    await db.disconnect()
    logger.info("iRiseHub API shut down complete.")


# =============================================================================
# FastAPI Application
# =============================================================================
app = FastAPI(
    title="iRiseHub API",
    description="Content management API for events, news, success stories and bookings",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.is_development() else None,
    redoc_url="/redoc" if settings.is_development() else None,
)

# =============================================================================
# CORS Middleware
# =============================================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Render service errors in the standard error envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.message, code=exc.code),
        headers=exc.headers,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unknown routes, wrong methods and other framework HTTP errors."""
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(message, code="NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR"),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report the first invalid field of a malformed request."""
    errors = exc.errors()
    message = "Invalid request"

    if errors:
        first = errors[0]
        ctx_error = (first.get("ctx") or {}).get("error")
        message = str(ctx_error) if ctx_error else first.get("msg", message)
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        if field and not ctx_error:
            message = f"{field}: {message}"

    return JSONResponse(
        status_code=422,
        content=error_response(message, code="VALIDATION_ERROR"),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Log unexpected failures; only development responses carry the cause."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    message = str(exc) if settings.is_development() else "Something went wrong!"
    return JSONResponse(
        status_code=500,
        content=error_response(message, code="INTERNAL_ERROR"),
    )


# =============================================================================
# Include Routers (all under /api prefix)
# =============================================================================
API_PREFIX = "/api"

app.include_router(admin_router, prefix=API_PREFIX, tags=["Admin"])
app.include_router(stories_router, prefix=API_PREFIX, tags=["Stories"])
app.include_router(news_router, prefix=API_PREFIX, tags=["News"])
app.include_router(events_router, prefix=API_PREFIX, tags=["Events"])
app.include_router(bookings_router, prefix=API_PREFIX, tags=["Bookings"])


# =============================================================================
# Health Check Endpoints
# =============================================================================
@app.get("/", tags=["Health"])
async def root():
    """API Working."""
    return success_response(message="iRiseHub API Working")


@app.get(f"{API_PREFIX}/health", tags=["Health"])
async def health():
    """
    Health check endpoint.

    Returns the status of the API and database connection.
    """
    return success_response({
        "status": "ok",
        "version": VERSION,
        "database": db.is_connected,
    })


# =============================================================================
# Run with Uvicorn
# =============================================================================
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
    )
