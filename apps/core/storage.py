"""
Blob storage for uploaded images.

Files are written to the default Django storage under
``<bucket>/<owner_id>/<prefix><timestamp>.<ext>``. Upload failures propagate;
deletion is best effort because a stale file must never fail the request
that replaced it.
"""

import logging
import os
import time
from uuid import UUID

from django.core.files.storage import default_storage
from django.core.files.uploadedfile import UploadedFile

logger = logging.getLogger(__name__)


def build_object_name(*, bucket: str, owner_id: UUID, filename: str, prefix: str = '') -> str:
    extension = os.path.splitext(filename)[1].lstrip('.').lower() or 'bin'
    timestamp = int(time.time() * 1000)
    return f"{bucket}/{owner_id}/{prefix}{timestamp}.{extension}"


def upload_image(*, bucket: str, owner_id: UUID, file: UploadedFile, prefix: str = '') -> str:
    """
    Store an uploaded image and return its public URL.

    Args:
        bucket: Top-level storage directory (profile pictures, group images)
        owner_id: User or group owning the image
        file: Uploaded file
        prefix: Optional filename prefix

    Returns:
        Public URL of the stored file
    """
    name = build_object_name(bucket=bucket, owner_id=owner_id, filename=file.name, prefix=prefix)
    saved_name = default_storage.save(name, file)
    logger.info("Uploaded %s", saved_name)
    return default_storage.url(saved_name)


def object_name_from_url(*, bucket: str, url: str) -> str:
    marker = f"/{bucket}/"
    if marker not in url:
        raise ValueError(f"URL {url} does not point into bucket {bucket}")
    return bucket + '/' + url.split(marker, 1)[1]


def delete_image(*, bucket: str, url: str) -> None:
    """Delete a previously uploaded image. Failures are logged, never raised."""
    if not url:
        return
    try:
        default_storage.delete(object_name_from_url(bucket=bucket, url=url))
    except Exception:
        logger.warning("Failed to delete %s from %s", url, bucket, exc_info=True)
