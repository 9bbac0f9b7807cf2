"""
FastAPI router for News endpoints.

Public reading, admin authoring with optional image upload.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from common.utils import paginated_response, success_response
from irisehub.dependencies import require_admin, get_news_service
from irisehub.routers.uploads import read_image
from irisehub.services.auth.identity import AdminIdentity
from irisehub.services.news.news_service import NewsService
from irisehub.services.pagination import normalize_page

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/news", tags=["news"])


@router.get("/")
async def get_all_news(
    news_service: Annotated[NewsService, Depends(get_news_service)],
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
):
    """List news articles, newest first."""
    page, limit = normalize_page(page, limit)
    items, total = await news_service.list(page=page, limit=limit)
    return paginated_response(items, total, page=page, limit=limit)


@router.get("/{news_id}")
async def get_news(
    news_id: str,
    news_service: Annotated[NewsService, Depends(get_news_service)],
):
    """Get one news article. Counts a view."""
    news = await news_service.get_by_id(news_id)
    return success_response(news)


@router.post("/add")
async def add_news(
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    news_service: Annotated[NewsService, Depends(get_news_service)],
    title: Optional[str] = Form(default=None),
    shortDescription: Optional[str] = Form(default=None),
    fullDescription: Optional[str] = Form(default=None),
    author: Optional[str] = Form(default=None),
    imageUrl: Optional[str] = Form(default=None),
    image: Optional[UploadFile] = File(default=None),
):
    """Create a news article. Accepts multipart/form-data."""
    news = await news_service.create(
        {
            "title": title,
            "shortDescription": shortDescription,
            "fullDescription": fullDescription,
            "author": author,
            "imageUrl": imageUrl,
        },
        image=await read_image(image),
    )
    return success_response(news, message="News created successfully! ✅")


@router.put("/{news_id}")
async def update_news(
    news_id: str,
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    news_service: Annotated[NewsService, Depends(get_news_service)],
    title: Optional[str] = Form(default=None),
    shortDescription: Optional[str] = Form(default=None),
    fullDescription: Optional[str] = Form(default=None),
    author: Optional[str] = Form(default=None),
    imageUrl: Optional[str] = Form(default=None),
    image: Optional[UploadFile] = File(default=None),
):
    """Update a news article. Blank fields are left unchanged."""
    news = await news_service.update(
        news_id,
        {
            "title": title,
            "shortDescription": shortDescription,
            "fullDescription": fullDescription,
            "author": author,
            "imageUrl": imageUrl,
        },
        image=await read_image(image),
    )
    return success_response(news, message="News updated successfully! ✅")


@router.delete("/{news_id}")
async def delete_news(
    news_id: str,
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    news_service: Annotated[NewsService, Depends(get_news_service)],
):
    """Delete a news article."""
    await news_service.delete(news_id)
    return success_response(message="News deleted successfully! ✅")


@router.patch("/{news_id}/toggle-publish")
async def toggle_news_publish(
    news_id: str,
    admin: Annotated[AdminIdentity, Depends(require_admin)],
    news_service: Annotated[NewsService, Depends(get_news_service)],
):
    """Publish or unpublish a news article."""
    news = await news_service.toggle_publish(news_id)
    state = "published" if news["isPublished"] else "unpublished"
    return success_response(news, message=f"News {state} successfully! ✅")
