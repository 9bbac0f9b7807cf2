"""
Multipart upload helpers shared by the content routers.
"""

from typing import Optional

from fastapi import UploadFile

from common.utils.exceptions import ValidationException
from irisehub.config import settings
from irisehub.services.media.media_service import UploadedImage


def _too_large() -> ValidationException:
    return ValidationException(message="File too large", code="FILE_TOO_LARGE")


async def read_image(
    file: Optional[UploadFile],
    max_bytes: Optional[int] = None,
) -> Optional[UploadedImage]:
    """
    Read an optional image field.

    Browsers send an empty part for an untouched file input, which is
    treated the same as no file. At most max_bytes + 1 bytes are read so
    an oversized upload is rejected without buffering all of it.

    Raises:
        ValidationException: File larger than max_bytes
    """
    if file is None or not file.filename:
        return None

    limit = settings.MAX_UPLOAD_BYTES if max_bytes is None else max_bytes

    if file.size is not None and file.size > limit:
        raise _too_large()

    data = await file.read(limit + 1)
    if len(data) > limit:
        raise _too_large()

    if not data:
        return None

    return UploadedImage(data=data, content_type=file.content_type, filename=file.filename)
