"""
Standard API response helpers.

Every endpoint answers with the same envelope:

    {"success": bool, "message"?: str, "data"?: ..., "error"?: str}

Example:
    from common.utils import success_response, error_response

    @router.get("/news/{news_id}")
    async def get_news(news_id: str):
        news = await news_service.get_by_id(news_id)
        return success_response(news)

    # In an exception handler
    JSONResponse(status_code=404, content=error_response("News not found", code="NEWS_NOT_FOUND"))
"""

import math
from typing import Any, Optional, Dict


def success_response(
    data: Any = None,
    message: Optional[str] = None,
    **extra: Any,
) -> Dict[str, Any]:
    """
    Create a standard success response.

    Args:
        data: The response data (can be dict, list, or any serializable type)
        message: Optional success message
        **extra: Additional top-level keys (e.g. token, admin)

    Returns:
        Dictionary with success=True and optional data/message
    """
    response: Dict[str, Any] = {"success": True}

    if message:
        response["message"] = message

    if data is not None:
        response["data"] = data

    response.update(extra)
    return response


def error_response(
    message: str,
    code: Optional[str] = None,
    details: Optional[Any] = None,
) -> Dict[str, Any]:
    """
    Create a standard error response.

    Args:
        message: Human-readable error message
        code: Machine-readable error code (e.g., "STORY_NOT_FOUND")
        details: Additional error details

    Returns:
        Dictionary with success=False, message and error code
    """
    response: Dict[str, Any] = {"success": False, "message": message}

    if code:
        response["error"] = code

    if details is not None:
        response["details"] = details

    return response


def paginated_response(
    items: list,
    total: int,
    page: int = 1,
    limit: int = 10,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a paginated success response.

    Args:
        items: List of items for current page
        total: Total number of items across all pages
        page: Current page number (1-indexed)
        limit: Items per page
        message: Optional success message

    Returns:
        Dictionary with success=True, paginated data, and pagination metadata
    """
    total_pages = math.ceil(total / limit) if limit > 0 else 0

    response: Dict[str, Any] = {
        "success": True,
        "data": items,
        "pagination": {
            "currentPage": page,
            "totalPages": total_pages,
            "totalItems": total,
            "itemsPerPage": limit,
            "hasNextPage": page < total_pages,
            "hasPreviousPage": page > 1,
        },
    }

    if message:
        response["message"] = message

    return response
