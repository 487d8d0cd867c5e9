"""Convert uploaded images into base64 text for the model APIs."""

from __future__ import annotations

import asyncio
import base64
import logging
import re
from typing import Callable, Optional

from fastapi import UploadFile

from models.design_models import EncodedImage, SourceImage
from services.generation.errors import ReadError

LOGGER = logging.getLogger(__name__)

_DATA_URL_PREFIX = re.compile(r"^data:[^;,]*(;[^,]*)?;base64,", re.IGNORECASE)


def strip_data_url_prefix(text: str) -> str:
    """Remove a leading `data:<mime>;base64,` prefix if present."""
    return _DATA_URL_PREFIX.sub("", text.strip(), count=1)


def to_data_url(data: str, mime_type: str) -> str:
    """Wrap base64 text in a data URL."""
    return f"data:{mime_type};base64,{strip_data_url_prefix(data)}"


def _b64encode(content: bytes) -> str:
    return base64.b64encode(content).decode("ascii")


async def encode_image(image: SourceImage) -> EncodedImage:
    """Return the base64 encoding of `image` with its MIME type unchanged.

    Raises:
        ReadError: If the image content is missing or not bytes-like.
    """
    content = getattr(image, "content", None)
    if not content:
        raise ReadError()
    try:
        data = await asyncio.to_thread(_b64encode, content)
    except (TypeError, ValueError) as exc:
        LOGGER.error("Unable to encode source image: %s", exc)
        raise ReadError() from exc
    return EncodedImage(data=data, mime_type=image.mime_type)


async def read_upload(
    upload: UploadFile,
    resolve_type: Optional[Callable[[UploadFile, bytes], str]] = None,
) -> SourceImage:
    """Read an uploaded file into a `SourceImage`.

    Args:
        upload: The multipart upload to read.
        resolve_type: Optional hook returning the MIME type from the upload and
            its bytes. Defaults to the declared content type.

    Raises:
        ReadError: If the upload cannot be read or is empty.
    """
    try:
        content = await upload.read()
    except Exception as exc:  # pylint: disable=broad-exception-caught
        LOGGER.error("Failed to read upload %s: %s", upload.filename, exc)
        raise ReadError() from exc
    if not content:
        raise ReadError("Uploaded image is empty.")

    if resolve_type is not None:
        mime_type = resolve_type(upload, content)
    else:
        mime_type = upload.content_type or "application/octet-stream"
    return SourceImage(content=content, mime_type=mime_type, filename=upload.filename)
