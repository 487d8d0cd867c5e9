from __future__ import annotations

import io

import pytest
from fastapi import HTTPException, UploadFile
from starlette.datastructures import Headers

from conftest import make_png_bytes
from utils.media_validation import resolve_image_type, sniff_image_type


def _upload(content_type: str | None) -> UploadFile:
    headers = Headers({"content-type": content_type}) if content_type else None
    return UploadFile(file=io.BytesIO(b""), filename="product", headers=headers)


class TestResolveImageType:
    @pytest.mark.parametrize(
        "declared, expected",
        [("image/png", "image/png"), ("image/JPEG", "image/jpeg"), ("image/jpg", "image/jpeg"), ("image/webp", "image/webp")],
    )
    def test_supported_declared_types(self, declared: str, expected: str) -> None:
        assert resolve_image_type(_upload(declared)) == expected

    def test_unsupported_declared_type(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            resolve_image_type(_upload("image/gif"))
        assert exc_info.value.status_code == 415

    def test_sniffs_when_type_missing(self) -> None:
        assert resolve_image_type(_upload(None), make_png_bytes()) == "image/png"

    def test_unrecognized_bytes_rejected(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            resolve_image_type(_upload(None), b"not an image")
        assert exc_info.value.status_code == 415


def test_sniff_image_type_returns_none_for_garbage() -> None:
    assert sniff_image_type(b"\x00\x01\x02") is None
