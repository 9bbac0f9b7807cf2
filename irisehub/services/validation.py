"""
Input checks shared by the content services.

Each helper raises ValidationException with the user-facing message
before any database access happens.
"""

import re
from typing import Any, Optional

from common.utils.exceptions import ValidationException

EMAIL_PATTERN = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*\.\w{2,3}$")


def clean(value: Any) -> str:
    """Strip a form/body value, treating None and non-strings as empty."""
    if value is None:
        return ""
    return str(value).strip()


def clean_optional(value: Any) -> Optional[str]:
    """Strip a value and collapse empty results to None."""
    cleaned = clean(value)
    return cleaned or None


def is_valid_email(email: Any) -> bool:
    return bool(email) and EMAIL_PATTERN.match(clean(email)) is not None


def require_min_length(value: Any, min_length: int, message: str) -> str:
    """Return the stripped value or raise when it is too short."""
    cleaned = clean(value)
    if len(cleaned) < min_length:
        raise ValidationException(message=message)
    return cleaned


def require_email(value: Any, message: str = "Please enter a valid email address") -> str:
    """Return the normalized (stripped, lower-cased) email or raise."""
    if not is_valid_email(value):
        raise ValidationException(message=message, code="INVALID_EMAIL")
    return clean(value).lower()


def require_choice(value: Any, choices, message: str) -> str:
    """Return the lower-cased value when it is one of choices, else raise."""
    normalized = clean(value).lower()
    if normalized not in choices:
        raise ValidationException(message=message)
    return normalized
