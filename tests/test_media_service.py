"""Unit tests for MediaService (Cloudinary uploads)."""

import hashlib
import pytest
from urllib.parse import parse_qs

import httpx

from common.utils.exceptions import ServiceUnavailableException, ValidationException
from irisehub.config import CloudinaryConfig
from irisehub.services.media.media_service import MediaService


def make_service(config, handler, **kwargs):
    return MediaService(config, transport=httpx.MockTransport(handler), **kwargs)


# ─────────────────────────────────────────────────────────────────
# Signed upload
# ─────────────────────────────────────────────────────────────────


class TestUploadImage:
    @pytest.mark.asyncio
    async def test_signed_upload_returns_secure_url(self, cloudinary_config):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["form"] = {k: v[0] for k, v in parse_qs(request.content.decode()).items()}
            return httpx.Response(200, json={"secure_url": "https://res.cloudinary.com/demo/x.png"})

        service = make_service(cloudinary_config, handler)

        url = await service.upload_image(b"\x89PNG", "image/png", "stories")

        assert url == "https://res.cloudinary.com/demo/x.png"
        assert seen["url"] == "https://api.cloudinary.com/v1_1/demo-cloud/image/upload"

        form = seen["form"]
        assert form["folder"] == "irisehub/stories"
        assert form["api_key"] == "123456"
        assert form["file"].startswith("data:image/png;base64,")
        expected = hashlib.sha1(
            f"folder=irisehub/stories&timestamp={form['timestamp']}shhh".encode()
        ).hexdigest()
        assert form["signature"] == expected

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content_type", [None, "application/pdf", "text/plain"])
    async def test_non_image_rejected(self, cloudinary_config, content_type):
        service = make_service(cloudinary_config, lambda request: httpx.Response(500))

        with pytest.raises(ValidationException) as exc_info:
            await service.upload_image(b"data", content_type, "news")

        assert exc_info.value.message == "Only image files are allowed!"

    @pytest.mark.asyncio
    async def test_empty_file_rejected(self, cloudinary_config):
        service = make_service(cloudinary_config, lambda request: httpx.Response(500))

        with pytest.raises(ValidationException) as exc_info:
            await service.upload_image(b"", "image/png", "news")

        assert exc_info.value.code == "EMPTY_FILE"

    @pytest.mark.asyncio
    async def test_oversized_file_rejected(self, cloudinary_config):
        service = make_service(
            cloudinary_config, lambda request: httpx.Response(500), max_upload_bytes=4
        )

        with pytest.raises(ValidationException) as exc_info:
            await service.upload_image(b"12345", "image/png", "news")

        assert exc_info.value.code == "FILE_TOO_LARGE"


# ─────────────────────────────────────────────────────────────────
# Failure modes
# ─────────────────────────────────────────────────────────────────


class TestUploadFailures:
    @pytest.mark.asyncio
    async def test_unconfigured(self):
        service = make_service(
            CloudinaryConfig(cloud_name="", api_key="", api_secret=""),
            lambda request: httpx.Response(200, json={}),
        )

        assert service.is_configured is False
        with pytest.raises(ServiceUnavailableException) as exc_info:
            await service.upload_image(b"\x89PNG", "image/png", "events")

        assert exc_info.value.message == "Image upload is not configured"

    @pytest.mark.asyncio
    async def test_api_error(self, cloudinary_config):
        service = make_service(
            cloudinary_config, lambda request: httpx.Response(401, json={"error": "bad key"})
        )

        with pytest.raises(ServiceUnavailableException) as exc_info:
            await service.upload_image(b"\x89PNG", "image/png", "events")

        assert exc_info.value.message == "Failed to upload image"
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_missing_secure_url(self, cloudinary_config):
        service = make_service(cloudinary_config, lambda request: httpx.Response(200, json={}))

        with pytest.raises(ServiceUnavailableException):
            await service.upload_image(b"\x89PNG", "image/png", "events")

    @pytest.mark.asyncio
    async def test_connection_error(self, cloudinary_config):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        service = make_service(cloudinary_config, handler)

        with pytest.raises(ServiceUnavailableException) as exc_info:
            await service.upload_image(b"\x89PNG", "image/png", "events")

        assert exc_info.value.message == "Failed to connect to image host"
