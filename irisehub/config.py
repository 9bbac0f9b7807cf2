"""
iRiseHub application settings.

Extends the base settings with iRiseHub-specific configuration.
"""

from dataclasses import dataclass
from typing import Optional

from common.config import BaseAppSettings


@dataclass(frozen=True)
class SuperAdminCredentials:
    """The configured super-admin name/email pair."""
    name: str
    email: str

    @property
    def is_configured(self) -> bool:
        return bool(self.name) and bool(self.email)


@dataclass(frozen=True)
class CloudinaryConfig:
    """Credentials for the Cloudinary upload API."""
    cloud_name: str
    api_key: str
    api_secret: str
    base_folder: str = "irisehub"

    @property
    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)


class Settings(BaseAppSettings):
    """iRiseHub-specific settings."""

    # ==========================================================================
    # Super Admin (not stored in the database)
    # ==========================================================================
    ADMIN_NAME: Optional[str] = None
    ADMIN_EMAIL: Optional[str] = None

    # ==========================================================================
    # Cloudinary
    # ==========================================================================
    CLOUDINARY_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_SECRET_KEY: Optional[str] = None
    CLOUDINARY_FOLDER: str = "irisehub"

    # Upload limit for images (20MB)
    MAX_UPLOAD_BYTES: int = 20 * 1024 * 1024

    def get_super_admin(self) -> SuperAdminCredentials:
        """Build the immutable super-admin credentials."""
        return SuperAdminCredentials(
            name=self.ADMIN_NAME or "",
            email=self.ADMIN_EMAIL or "",
        )

    def get_cloudinary_config(self) -> CloudinaryConfig:
        """Build the immutable Cloudinary configuration."""
        return CloudinaryConfig(
            cloud_name=self.CLOUDINARY_NAME or "",
            api_key=self.CLOUDINARY_API_KEY or "",
            api_secret=self.CLOUDINARY_SECRET_KEY or "",
            base_folder=self.CLOUDINARY_FOLDER,
        )


# Global settings instance
settings = Settings()
