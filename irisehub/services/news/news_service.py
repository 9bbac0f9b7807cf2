"""
News service.

Manages news articles. Articles are published on creation and can be
toggled between published and unpublished.
"""

import logging
from typing import Optional, List, Dict, Any, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase

from common.database import parse_object_id, utcnow
from common.utils.exceptions import NotFoundException
from irisehub.services.media.media_service import FOLDER_NEWS, MediaService, UploadedImage
from irisehub.services.pagination import fetch_page
from irisehub.services.validation import clean, clean_optional, require_min_length

logger = logging.getLogger(__name__)


DEFAULT_AUTHOR = "Admin"


class NewsService:
    """
    Manages news articles.
    """

    def __init__(self, db: AsyncIOMotorDatabase, media_service: MediaService):
        """
        Initialize NewsService.

        Args:
            db: MongoDB database connection
            media_service: Image uploads
        """
        self._db = db
        self._news_collection = db["news"]
        self._media_service = media_service

    async def ensure_indexes(self) -> None:
        await self._news_collection.create_index("isPublished")
        await self._news_collection.create_index([("createdAt", -1)])

    async def create(
        self,
        fields: Dict[str, Any],
        image: Optional[UploadedImage] = None,
    ) -> Dict[str, Any]:
        """
        Create a published news article.

        Args:
            fields: title, shortDescription, fullDescription, author?, imageUrl?
            image: Optional uploaded image (wins over imageUrl)

        Returns:
            Created news dict
        """
        title = require_min_length(fields.get("title"), 3, "Title must be at least 3 characters")
        short_description = require_min_length(
            fields.get("shortDescription"), 10, "Short description must be at least 10 characters"
        )
        full_description = require_min_length(
            fields.get("fullDescription"), 10, "Full description must be at least 10 characters"
        )

        author = clean(fields.get("author"))
        if len(author) < 2:
            author = DEFAULT_AUTHOR

        image_url = clean_optional(fields.get("imageUrl"))
        if image is not None:
            image_url = await self._media_service.upload_image(
                image.data, image.content_type, FOLDER_NEWS
            )

        now = utcnow()
        news_doc = {
            "title": title,
            "shortDescription": short_description,
            "fullDescription": full_description,
            "author": author,
            "image": image_url,
            "isPublished": True,
            "publishedAt": now,
            "views": 0,
            "likes": 0,
            "createdAt": now,
            "updatedAt": now,
        }

        result = await self._news_collection.insert_one(news_doc)
        news_doc["_id"] = result.inserted_id

        logger.info(f"Created news article: {result.inserted_id}")
        return self._format_news(news_doc)

    async def list(self, page: int = 1, limit: int = 10) -> Tuple[List[Dict[str, Any]], int]:
        """
        List news articles, newest first.

        Returns:
            (articles, total)
        """
        items, total = await fetch_page(
            self._news_collection, {}, [("createdAt", -1)], page, limit
        )
        return [self._format_news(n) for n in items], total

    async def get_by_id(self, news_id: str) -> Dict[str, Any]:
        """
        Get a news article and count the view.

        Raises:
            NotFoundException: Unknown or malformed id
        """
        news = await self._find_and_update(news_id, {"$inc": {"views": 1}})
        return self._format_news(news)

    async def update(
        self,
        news_id: str,
        fields: Dict[str, Any],
        image: Optional[UploadedImage] = None,
    ) -> Dict[str, Any]:
        """
        Update a news article.

        Blank text fields are left unchanged. imageUrl, when present,
        replaces the image (an empty value clears it); an uploaded image
        wins over imageUrl.

        Raises:
            NotFoundException: Unknown or malformed id
        """
        updates: Dict[str, Any] = {}

        for field in ("title", "shortDescription", "fullDescription", "author"):
            value = clean(fields.get(field))
            if value:
                updates[field] = value

        if "imageUrl" in fields and fields["imageUrl"] is not None:
            updates["image"] = clean_optional(fields["imageUrl"])

        if image is not None:
            updates["image"] = await self._media_service.upload_image(
                image.data, image.content_type, FOLDER_NEWS
            )

        updates["updatedAt"] = utcnow()

        news = await self._find_and_update(news_id, {"$set": updates})

        logger.info(f"Updated news article {news_id}")
        return self._format_news(news)

    async def delete(self, news_id: str) -> None:
        """
        Delete a news article.

        Raises:
            NotFoundException: Unknown or malformed id
        """
        oid = parse_object_id(news_id)
        deleted = 0
        if oid is not None:
            result = await self._news_collection.delete_one({"_id": oid})
            deleted = result.deleted_count

        if not deleted:
            raise NotFoundException("News not found", code="NEWS_NOT_FOUND")

        logger.info(f"Deleted news article {news_id}")

    async def toggle_publish(self, news_id: str) -> Dict[str, Any]:
        """
        Flip isPublished, setting publishedAt when publishing and clearing
        it when unpublishing.

        Raises:
            NotFoundException: Unknown or malformed id
        """
        now = utcnow()
        news = await self._find_and_update(news_id, [
            {"$set": {
                "isPublished": {"$not": [{"$ifNull": ["$isPublished", False]}]},
                "updatedAt": now,
            }},
            {"$set": {
                "publishedAt": {"$cond": ["$isPublished", now, None]},
            }},
        ])

        logger.info(f"News {news_id} published={news.get('isPublished')}")
        return self._format_news(news)

    async def _find_and_update(self, news_id: str, update) -> Dict[str, Any]:
        oid = parse_object_id(news_id)
        news = None
        if oid is not None:
            news = await self._news_collection.find_one_and_update(
                {"_id": oid},
                update,
                return_document=True,
            )

        if not news:
            raise NotFoundException("News not found", code="NEWS_NOT_FOUND")

        return news

    def _format_news(self, news: Dict[str, Any]) -> Dict[str, Any]:
        """Format news article for response."""
        return {
            "id": str(news["_id"]),
            "title": news.get("title"),
            "shortDescription": news.get("shortDescription"),
            "fullDescription": news.get("fullDescription"),
            "image": news.get("image"),
            "author": news.get("author", DEFAULT_AUTHOR),
            "isPublished": news.get("isPublished", False),
            "publishedAt": news.get("publishedAt"),
            "views": news.get("views", 0),
            "likes": news.get("likes", 0),
            "createdAt": news.get("createdAt"),
            "updatedAt": news.get("updatedAt"),
        }
