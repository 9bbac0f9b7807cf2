"""Media services."""

from irisehub.services.media.media_service import MediaService, UploadedImage

__all__ = [
    "MediaService",
    "UploadedImage",
]
