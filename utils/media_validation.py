"""Validation helpers for uploaded product images."""

import io

from fastapi import HTTPException, UploadFile
from PIL import Image, UnidentifiedImageError

ALLOWED_IMAGE_TYPES = {
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/webp",
}

_PIL_FORMAT_TO_MIME = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "WEBP": "image/webp",
}


def sniff_image_type(content: bytes) -> str | None:
    """Return the MIME type Pillow detects for `content`, if supported."""
    try:
        with Image.open(io.BytesIO(content)) as img:
            return _PIL_FORMAT_TO_MIME.get(img.format or "")
    except (UnidentifiedImageError, OSError):
        return None


def resolve_image_type(image_file: UploadFile, content: bytes = b"") -> str:
    """Return a normalized, supported MIME type for an uploaded image.

    The declared content type wins when present. Uploads without one are
    sniffed from their bytes.
    """
    if image_file.content_type and image_file.content_type != "application/octet-stream":
        content_type = image_file.content_type.lower().split(";", 1)[0].strip()
        if content_type not in ALLOWED_IMAGE_TYPES:
            raise HTTPException(
                status_code=415,
                detail=f"Unsupported image content type: {image_file.content_type}. Use PNG, JPG, or WEBP.",
            )
        return "image/jpeg" if content_type == "image/jpg" else content_type

    sniffed = sniff_image_type(content) if content else None
    if sniffed is None:
        raise HTTPException(status_code=415, detail="Unsupported or missing image content type.")
    return sniffed
