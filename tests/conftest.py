"""Shared fixtures: in-memory photos with and without EXIF."""

from datetime import date
import io
import sys

from PIL import Image
from PIL.TiffImagePlugin import IFDRational
from loguru import logger
import pytest

from infrastructure.exif_reader import MetadataExtractor
from infrastructure.fonts import FontProvider

TAG_MAKE = 0x010F
TAG_MODEL = 0x0110
TAG_DATETIME = 0x0132
TAG_ARTIST = 0x013B
TAG_EXPOSURE_TIME = 0x829A
TAG_FNUMBER = 0x829D
TAG_ISO = 0x8827
TAG_DATETIME_ORIGINAL = 0x9003
TAG_SHUTTER_SPEED_VALUE = 0x9201
TAG_APERTURE_VALUE = 0x9202
TAG_FOCAL_LENGTH = 0x920A
TAG_LENS_MODEL = 0xA434

FIXED_TODAY = date(2024, 3, 9)

SONY_TAGS = {
    TAG_MAKE: "Sony",
    TAG_MODEL: "ILCE-7M4",
    TAG_EXPOSURE_TIME: IFDRational(1, 250),
    TAG_FNUMBER: IFDRational(14, 10),
    TAG_ISO: 160,
    TAG_DATETIME_ORIGINAL: "2023:09:19 14:30:00",
    TAG_FOCAL_LENGTH: IFDRational(354, 10),
    TAG_LENS_MODEL: "Sony FE 35mm F1.4 GM",
    TAG_ARTIST: "Ana Lima",
}


def encode_photo(
    size: tuple[int, int] = (120, 80),
    color: tuple[int, ...] = (200, 30, 30),
    fmt: str = "JPEG",
    mode: str = "RGB",
    tags: dict | None = None,
) -> bytes:
    """Encode a solid-colour image, optionally carrying EXIF `tags` (IFD0)."""
    img = Image.new(mode, size, color)
    buf = io.BytesIO()
    kwargs = {}
    if tags:
        exif = Image.Exif()
        for tag_id, value in tags.items():
            exif[tag_id] = value
        kwargs["exif"] = exif.tobytes()
    img.save(buf, fmt, **kwargs)
    return buf.getvalue()


@pytest.fixture
def sony_jpeg() -> bytes:
    return encode_photo(tags=SONY_TAGS)


@pytest.fixture
def extractor() -> MetadataExtractor:
    return MetadataExtractor(today=lambda: FIXED_TODAY)


@pytest.fixture
def fonts() -> FontProvider:
    return FontProvider()


@pytest.fixture
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)
