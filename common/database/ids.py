"""
ObjectId and timestamp helpers shared by all collections.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId


def utcnow() -> datetime:
    """Get current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


def parse_object_id(value: Any) -> Optional[ObjectId]:
    """
    Convert a path/body id into an ObjectId.

    Returns None for anything that is not a 24-hex id, so callers can
    treat malformed ids exactly like missing documents.
    """
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value) and len(value) == 24:
        return ObjectId(value)
    return None
