"""Image uploads to Cloudinary.

Only the durable ``secure_url`` and the ``public_id`` are persisted; the
public id is what lets us clean up an image once it's replaced or its post is
deleted. Cleanup is best effort: failures are logged and never surface to the
caller.
"""
import logging
import time
from typing import NamedTuple, Optional
from urllib.parse import urljoin

import cloudinary
from cloudinary import uploader
from cloudinary.exceptions import Error as CloudinaryError
from fastapi import UploadFile

from weblog.core.config import Settings, get_settings
from weblog.core.errors import UpstreamFailure, field_error


class StoredImage(NamedTuple):
    url: str
    public_id: str


def configure(settings: Settings):
    cloudinary.config(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
        secure=True,
    )


configure(get_settings())


async def upload_image(
    image: UploadFile,
    field: str,
    folder: str,
    public_id_prefix: str,
    settings: Optional[Settings] = None,
) -> StoredImage:
    settings = settings or get_settings()

    if not image.content_type or not image.content_type.startswith("image/"):
        raise field_error(field, "Only images (JPEG, PNG, GIF, WebP) are allowed!")

    await image.seek(0)
    data = await image.read()
    if not data:
        raise field_error(field, "No file provided")
    if len(data) > settings.max_image_size:
        max_mb = settings.max_image_size // (1024 * 1024)
        raise field_error(field, f"File too large (max {max_mb}MB)")

    try:
        upload_result = uploader.upload(
            data,
            folder=folder,
            public_id=f"{public_id_prefix}_{int(time.time())}",
            resource_type="image",
            overwrite=True,
            quality="auto:good",
        )
    except CloudinaryError as e:
        logging.error(f"Cloudinary Error: {str(e)}")
        raise UpstreamFailure("Image upload failed")

    return StoredImage(url=upload_result["secure_url"], public_id=upload_result["public_id"])


def destroy_image(public_id: Optional[str]) -> bool:
    """Best-effort delete; returns whether the store accepted the request."""
    if not public_id:
        return False
    try:
        uploader.destroy(public_id)
        return True
    except CloudinaryError as e:
        logging.error(f"Cloudinary delete error: {str(e)}")
    except Exception as e:
        logging.error(f"Unexpected error deleting image {public_id}: {str(e)}", exc_info=True)
    return False


def absolute_media_url(url: Optional[str], base_url: Optional[str] = None) -> Optional[str]:
    """Pass absolute URLs through; join relative paths with the media base URL."""
    if not url:
        return url
    if url.startswith("http"):
        return url
    if base_url is None:
        base_url = get_settings().media_base_url
    if not base_url:
        return url
    return urljoin(base_url.rstrip("/") + "/", url.lstrip("/"))
