"""
Pydantic models for story moderation requests.
"""

from typing import Optional
from pydantic import BaseModel, Field


class RejectStoryRequest(BaseModel):
    """Request to reject a story."""
    rejectedReason: Optional[str] = Field(default=None, max_length=1000)
