import logging
import os
import secrets

from django.conf import settings
from django.core.files.storage import FileSystemStorage

from catalog.exceptions import ImageUploadError

logger = logging.getLogger(__name__)


def get_upload_storage():
    return FileSystemStorage(
        location=settings.UPLOAD_ROOT, base_url=settings.UPLOAD_URL
    )


def save_product_image(upload):
    """Store an uploaded product image under a random name and return its public path."""
    if upload.size > settings.MAX_UPLOAD_SIZE:
        raise ImageUploadError("file size exceeds maximum allowed size of 5MB")

    content_type = getattr(upload, "content_type", "") or ""
    if not content_type.startswith("image/"):
        raise ImageUploadError("file must be an image")

    _, ext = os.path.splitext(upload.name or "")
    filename = secrets.token_hex(16) + ext.lower()

    storage = get_upload_storage()
    saved_name = storage.save(filename, upload)
    logger.info(f"[Catalog] Stored product image {saved_name}")
    return storage.url(saved_name)


def delete_product_image(image_path):
    """Remove a previously uploaded image; images outside the upload folder are left alone."""
    if not image_path or "/uploads/" not in image_path:
        return

    name = os.path.basename(image_path)
    storage = get_upload_storage()
    try:
        storage.delete(name)
    except OSError as e:
        logger.warning(f"[Catalog] Could not remove image {name}: {e}")
