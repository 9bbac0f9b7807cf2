"""Story services."""

from irisehub.services.stories.story_service import StoryService

__all__ = [
    "StoryService",
]
