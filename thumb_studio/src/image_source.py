"""Background image payloads: file reading, data URLs and decoding."""
from __future__ import annotations

import asyncio
import base64
import binascii
import io
from pathlib import Path
from typing import Union

from PIL import Image

ImagePayload = Union[bytes, str]

DATA_URL_PREFIX = "data:"


def load_image_payload(path: Path) -> bytes:
    if not path.exists():
        raise FileNotFoundError(f"Background image not found: {path}")
    return path.read_bytes()


def payload_to_data_url(payload: bytes, mime: str = "image/png") -> str:
    encoded = base64.b64encode(payload).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def payload_from_data_url(data_url: str) -> bytes:
    """Return the raw bytes embedded in a ``data:...;base64,`` URL."""
    if not data_url.startswith(DATA_URL_PREFIX) or "," not in data_url:
        raise ValueError("Not a data URL")
    header, body = data_url.split(",", 1)
    if not header.endswith(";base64"):
        raise ValueError("Only base64 data URLs are supported")
    try:
        return base64.b64decode(body, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Malformed base64 payload: {exc}") from exc


def _payload_bytes(payload: ImagePayload) -> bytes:
    if isinstance(payload, str):
        return payload_from_data_url(payload)
    return bytes(payload)


async def decode_image(payload: ImagePayload) -> Image.Image:
    """Decode an encoded still image into an RGBA bitmap.

    Yields to the event loop before decoding so a render request always
    suspends here. Raises ``OSError`` (Pillow's ``UnidentifiedImageError``)
    or ``ValueError`` when the payload cannot be decoded, including images
    over Pillow's pixel limit.
    """
    await asyncio.sleep(0)
    raw = _payload_bytes(payload)
    try:
        with Image.open(io.BytesIO(raw)) as img:
            img.load()
            return img.convert("RGBA")
    except Image.DecompressionBombError as exc:
        raise ValueError(f"Image too large to decode: {exc}") from exc
