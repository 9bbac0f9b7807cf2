"""News services."""

from irisehub.services.news.news_service import NewsService

__all__ = [
    "NewsService",
]
