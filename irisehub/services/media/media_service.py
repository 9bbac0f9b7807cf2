"""
Image upload service using the Cloudinary upload API.

Images are sent as base64 data URIs in a signed upload request and the
hosted secure_url is returned.
"""

import base64
import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Optional, Dict, Any

import httpx

from common.utils.exceptions import ServiceUnavailableException, ValidationException
from irisehub.config import CloudinaryConfig

logger = logging.getLogger(__name__)


FOLDER_STORIES = "stories"
FOLDER_NEWS = "news"
FOLDER_EVENTS = "events"


@dataclass(frozen=True)
class UploadedImage:
    """An image file received in a multipart request."""
    data: bytes
    content_type: Optional[str]
    filename: Optional[str] = None


class MediaService:
    """
    Uploads images to Cloudinary.
    """

    def __init__(
        self,
        config: CloudinaryConfig,
        max_upload_bytes: int = 20 * 1024 * 1024,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize MediaService.

        Args:
            config: Cloudinary credentials and base folder
            max_upload_bytes: Largest accepted upload
            transport: Optional httpx transport (used by tests)
        """
        self._config = config
        self._max_upload_bytes = max_upload_bytes
        self._transport = transport
        self._base_url = "https://api.cloudinary.com/v1_1"

    @property
    def is_configured(self) -> bool:
        return self._config.is_configured

    async def upload_image(
        self,
        data: bytes,
        content_type: Optional[str],
        folder: str,
    ) -> str:
        """
        Upload an image.

        Args:
            data: Raw file bytes
            content_type: MIME type reported by the client
            folder: Sub-folder under the configured base folder

        Returns:
            Hosted secure URL

        Raises:
            ValidationException: Not an image, empty or too large
            ServiceUnavailableException: Cloudinary missing or failing
        """
        if not content_type or not content_type.startswith("image/"):
            raise ValidationException(
                message="Only image files are allowed!",
                code="INVALID_FILE_TYPE"
            )

        if not data:
            raise ValidationException(
                message="Uploaded file is empty",
                code="EMPTY_FILE"
            )

        if len(data) > self._max_upload_bytes:
            raise ValidationException(
                message="File too large",
                code="FILE_TOO_LARGE"
            )

        encoded = base64.b64encode(data).decode("ascii")
        result = await self._call_cloudinary_api(
            file=f"data:{content_type};base64,{encoded}",
            folder=f"{self._config.base_folder}/{folder}",
        )

        url = result.get("secure_url")
        if not url:
            logger.error("Cloudinary response missing secure_url")
            raise ServiceUnavailableException(
                message="Failed to upload image",
                code="UPLOAD_FAILED"
            )

        logger.info(f"Uploaded image to {folder} ({len(data)} bytes)")
        return url

    def _sign(self, params: Dict[str, Any]) -> str:
        """
        Build the upload signature.

        Parameters are sorted by name, joined as key=value pairs with '&'
        and suffixed with the API secret before SHA-1 hashing.
        """
        to_sign = "&".join(f"{k}={params[k]}" for k in sorted(params))
        return hashlib.sha1(f"{to_sign}{self._config.api_secret}".encode()).hexdigest()

    async def _call_cloudinary_api(self, file: str, folder: str) -> Dict[str, Any]:
        """
        Call the Cloudinary image upload endpoint.

        Args:
            file: Data URI of the image
            folder: Target folder

        Returns:
            API response dict
        """
        if not self.is_configured:
            raise ServiceUnavailableException(
                message="Image upload is not configured",
                code="UPLOAD_FAILED"
            )

        signed = {"folder": folder, "timestamp": int(time.time())}
        form = {
            **signed,
            "file": file,
            "api_key": self._config.api_key,
            "signature": self._sign(signed),
        }

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    f"{self._base_url}/{self._config.cloud_name}/image/upload",
                    data=form,
                    timeout=60.0
                )

                if response.status_code != 200:
                    logger.error(
                        f"Cloudinary API error: {response.status_code} - {response.text}"
                    )
                    raise ServiceUnavailableException(
                        message="Failed to upload image",
                        code="UPLOAD_FAILED"
                    )

                return response.json()

        except httpx.RequestError as e:
            logger.error(f"Cloudinary request error: {e}")
            raise ServiceUnavailableException(
                message="Failed to connect to image host",
                code="UPLOAD_FAILED"
            )
