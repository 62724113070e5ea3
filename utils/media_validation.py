"""Validation helpers for uploaded image content."""

import logging
from typing import Optional

from fastapi import Request, UploadFile
from starlette.datastructures import UploadFile as StarletteUploadFile

from models.analysis_result import DEFAULT_MIME_TYPE, UploadedImage

LOGGER = logging.getLogger(__name__)

IMAGE_FIELD = "image"

ALLOWED_IMAGE_TYPES = {
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
}


def normalize_mime_type(content_type: Optional[str]) -> str:
    """Return the bare, lower-cased media type, or the JPEG default when absent.

    Types outside `ALLOWED_IMAGE_TYPES` are passed through with a warning so
    the provider can accept or reject them.
    """
    if not content_type:
        return DEFAULT_MIME_TYPE
    mime_type = content_type.lower().split(";", 1)[0].strip()
    if not mime_type:
        return DEFAULT_MIME_TYPE
    if mime_type not in ALLOWED_IMAGE_TYPES:
        LOGGER.warning("Uploaded image has unsupported content type: %s", content_type)
    return mime_type


async def read_uploaded_image(image_file: Optional[UploadFile]) -> Optional[UploadedImage]:
    """Read an upload into an `UploadedImage`, or None when nothing usable was sent."""
    if image_file is None:
        return None
    content = await image_file.read()
    if not content:
        return None
    return UploadedImage(
        content=content,
        mime_type=normalize_mime_type(image_file.content_type),
        filename=image_file.filename,
    )


async def first_image_upload(request: Request) -> Optional[UploadFile]:
    """Return the first `image` part of the multipart form, or None.

    Repeated `image` parts are ignored after the first; a non-file first part
    counts as no upload.
    """
    form = await request.form()
    parts = form.getlist(IMAGE_FIELD)
    if not parts or not isinstance(parts[0], StarletteUploadFile):
        return None
    return parts[0]
