"""Image loading, canvas allocation and JPEG encoding.

Decoding goes through Pillow with pillow-heif registered for HEIC/HEIF input.
EXIF orientation is applied on load so the photo is drawn the way viewers
display it. Custom logos may come from bytes, a local path or an http(s) URL.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any

from PIL import Image, ImageOps
from loguru import logger
from pillow_heif import register_heif_opener
import requests

from core.errors import EncodingError, ImageDecodeError, SurfaceAcquisitionError

register_heif_opener()

JPEG_QUALITY = 95  # 0.95 on the 0..1 scale
DEFAULT_FETCH_TIMEOUT = 10.0

_DECODE_ERRORS = (OSError, ValueError, Image.DecompressionBombError)


def decode_image_bytes(data: bytes, what: str = "source") -> Image.Image:
    """Decode `data` into a fully loaded, orientation-corrected image.

    Raises:
        ImageDecodeError: The bytes are not a decodable image.
    """
    if not data:
        raise ImageDecodeError(what, "no data")
    try:
        with Image.open(io.BytesIO(data)) as opened:
            opened.load()
            image = ImageOps.exif_transpose(opened)
    except _DECODE_ERRORS as ex:
        logger.debug("Decode failed for {} image: {}", what, ex)
        raise ImageDecodeError(what, str(ex)) from ex
    return image


def _read_path(path: str | Path, what: str) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as ex:
        raise ImageDecodeError(what, f"cannot read {path}: {ex}") from ex


def _fetch_url(url: str, timeout: float) -> bytes:
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as ex:
        logger.warning("Logo fetch failed for {}: {}", url, ex)
        raise ImageDecodeError("logo", f"cannot fetch {url}: {ex}") from ex
    return resp.content


def load_source(source: Any) -> tuple[Image.Image, bool]:
    """Return (image, owned) for a source given as image, bytes or path.

    `owned` is True when the image was opened here and must be closed by the
    caller once rendering is done; caller-supplied images are never closed.
    """
    if isinstance(source, Image.Image):
        return source, False
    if isinstance(source, (bytes, bytearray, memoryview)):
        return decode_image_bytes(bytes(source), "source"), True
    if isinstance(source, (str, Path)):
        return decode_image_bytes(_read_path(source, "source"), "source"), True
    raise ImageDecodeError("source", f"unsupported source type {type(source).__name__}")


def load_logo(
    source: Any, timeout: float = DEFAULT_FETCH_TIMEOUT
) -> tuple[Image.Image | None, bool]:
    """Resolve a custom logo reference to (image, owned); (None, False) when absent."""
    if source is None:
        return None, False
    if isinstance(source, Image.Image):
        return source, False
    if isinstance(source, (bytes, bytearray, memoryview)):
        return decode_image_bytes(bytes(source), "logo"), True
    if isinstance(source, str) and source.lower().startswith(("http://", "https://")):
        return decode_image_bytes(_fetch_url(source, timeout), "logo"), True
    if isinstance(source, (str, Path)):
        return decode_image_bytes(_read_path(source, "logo"), "logo"), True
    raise ImageDecodeError("logo", f"unsupported logo type {type(source).__name__}")


def new_canvas(width: int, height: int, color: str) -> Image.Image:
    """Allocate an RGB drawing surface.

    Raises:
        SurfaceAcquisitionError: Invalid or oversized dimensions, or allocation failure.
    """
    limit = Image.MAX_IMAGE_PIXELS
    if width <= 0 or height <= 0:
        raise SurfaceAcquisitionError(width, height, "non-positive size")
    if limit and width * height > 2 * limit:
        raise SurfaceAcquisitionError(width, height, f"exceeds {2 * limit} pixels")
    try:
        return Image.new("RGB", (width, height), color)
    except (ValueError, MemoryError) as ex:
        raise SurfaceAcquisitionError(width, height, str(ex)) from ex


def encode_jpeg(image: Image.Image, quality: int = JPEG_QUALITY) -> bytes:
    """Encode `image` as JPEG at a fixed quality.

    Raises:
        EncodingError: The encoder failed or produced no bytes.
    """
    buf = io.BytesIO()
    try:
        rgb = image if image.mode == "RGB" else image.convert("RGB")
        rgb.save(buf, "JPEG", quality=quality)
    except (OSError, ValueError) as ex:
        raise EncodingError(f"JPEG encoding failed: {ex}") from ex
    data = buf.getvalue()
    if not data:
        raise EncodingError("JPEG encoder produced no output")
    return data
