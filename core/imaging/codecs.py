# Path: core/imaging/codecs.py
# Purpose: Convert between raw image bytes, PIL images, and data URLs.
# Layer: core/imaging.
# Details: Data URLs are the displayable form stored in profiles and generated images.

from __future__ import annotations

import base64
import binascii
import io
from typing import Tuple

from PIL import Image


def to_data_url(data: bytes, mime_type: str = "image/png") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_url(url: str) -> Tuple[bytes, str]:
    """Split a base64 data URL into its payload bytes and mime type."""

    header, sep, payload = url.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise ValueError("Expected a base64 data URL.")
    mime_type = header[len("data:") : -len(";base64")] or "application/octet-stream"
    try:
        return base64.b64decode(payload, validate=True), mime_type
    except binascii.Error as exc:
        raise ValueError("Data URL payload is not valid base64.") from exc


def encode_png(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def image_to_data_url(image: Image.Image) -> str:
    return to_data_url(encode_png(image), "image/png")
