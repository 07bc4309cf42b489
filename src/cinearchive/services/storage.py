"""Image storage: public URL resolution and uploads to the object store."""

import logging
import re
import time

import httpx

from cinearchive.config import settings
from cinearchive.errors import StorageError

logger = logging.getLogger(__name__)


def public_object_url(object_name: str, bucket: str | None = None) -> str:
    """Public URL of an object in the storage bucket."""
    bucket = bucket or settings.storage_bucket
    base = settings.storage_url.rstrip("/")
    return f"{base}/storage/v1/object/public/{bucket}/{object_name.lstrip('/')}"


def resolve_image_url(image_ref: str | None) -> str:
    """
    Map a stored image reference to something an <img> tag can display.

    Args:
        image_ref: Full URL, site-relative path, bare object key, or None

    Returns:
        Displayable URL; the placeholder image when there is no reference
    """
    if image_ref is None or not image_ref.strip():
        return settings.placeholder_image_url

    image_ref = image_ref.strip()
    if image_ref.startswith(("http://", "https://", "/")):
        return image_ref

    return public_object_url(image_ref)


def build_object_name(filename: str, now: float | None = None) -> str:
    """
    Unique object name for an upload: ``<epoch millis>-<filename>``.

    Whitespace runs in the filename become single hyphens.
    """
    millis = int((time.time() if now is None else now) * 1000)
    safe = re.sub(r"\s+", "-", filename.strip()) or "image"
    return f"{millis}-{safe}"


class StorageClient:
    """Client for a Supabase-style storage REST API."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        bucket: str | None = None,
    ) -> None:
        """
        Initialize storage client.

        Args:
            base_url: Storage service root (uses settings if not provided)
            api_key: Service key sent as bearer token (uses settings if not provided)
            bucket: Target bucket (uses settings if not provided)
        """
        self.base_url = (base_url or settings.storage_url).rstrip("/")
        self.api_key = api_key or settings.storage_key
        self.bucket = bucket or settings.storage_bucket
        if not self.base_url:
            logger.warning("Storage URL not configured")

    async def upload(
        self,
        filename: str,
        content: bytes,
        content_type: str | None = None,
    ) -> str:
        """
        Upload an image and return its public URL.

        Existing objects with the same name are overwritten.

        Raises:
            StorageError: if storage is not configured or the upload fails
        """
        if not self.base_url:
            raise StorageError("Storage URL not configured")

        object_name = build_object_name(filename)
        headers = {
            "cache-control": f"max-age={settings.storage_cache_control}",
            "content-type": content_type or "application/octet-stream",
            "x-upsert": "true",
        }
        if self.api_key:
            headers["authorization"] = f"Bearer {self.api_key}"

        try:
            async with httpx.AsyncClient(timeout=settings.storage_timeout) as client:
                response = await client.post(
                    f"{self.base_url}/storage/v1/object/{self.bucket}/{object_name}",
                    content=content,
                    headers=headers,
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Image upload failed for {object_name!r}: {e}")
            raise StorageError(str(e)) from e

        logger.info(f"Uploaded image {object_name!r} to bucket {self.bucket!r}")
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{object_name}"
