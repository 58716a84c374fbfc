from dataclasses import dataclass
from typing import Protocol

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from app.core.config import Settings
from app.core.exceptions import StorageError
from app.core.logging_config import get_logger

logger = get_logger("event")


@dataclass(frozen=True)
class StoredAsset:
    url: str
    public_id: str


class AssetStore(Protocol):
    def upload(self, image_bytes: bytes, filename: str | None = None) -> StoredAsset: ...

    def delete(self, public_id: str) -> bool: ...


class CloudinaryAssetStore:
    """Uploads and removes event images on Cloudinary."""

    def __init__(self, settings: Settings):
        self.folder = settings.cloudinary_folder
        cloudinary.config(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            secure=True,
        )

    def upload(self, image_bytes: bytes, filename: str | None = None) -> StoredAsset:
        try:
            result = cloudinary.uploader.upload(
                image_bytes,
                folder=self.folder,
                resource_type="image",
                format="jpg",          # force output as JPG
                quality="90"
            )
        except CloudinaryError as e:
            logger.error(f"Cloudinary upload error ({filename}): {e}")
            raise StorageError("Failed to upload image")

        url = result.get("secure_url")
        public_id = result.get("public_id")
        if not url or not public_id:
            logger.error(f"Cloudinary upload returned no asset for {filename}")
            raise StorageError("Failed to upload image")

        return StoredAsset(url=url, public_id=public_id)

    def delete(self, public_id: str) -> bool:
        """Remove an asset. A missing asset counts as deleted."""
        if not public_id:
            return True
        try:
            result = cloudinary.uploader.destroy(public_id, invalidate=True)
        except CloudinaryError as e:
            logger.error(f"Cloudinary delete error ({public_id}): {e}")
            return False

        status = result.get("result")
        if status not in ("ok", "not found"):
            logger.warning(f"Cloudinary delete of {public_id} returned {status}")
            return False
        return True
