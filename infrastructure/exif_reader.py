"""EXIF extraction into display-ready `MetadataRecord` values.

Tags are read with Pillow from IFD0 and the Exif sub-IFD and looked up by
name. Each logical field tries a list of candidate tags; the first usable one
wins. Extraction never raises: on any failure the default record is returned
together with a status message.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
import io
from typing import Any

from PIL import ExifTags, Image
from loguru import logger
from pillow_heif import register_heif_opener

from core.errors import MetadataParseError
from core.models import (
    DEFAULT_APERTURE,
    DEFAULT_FOCAL_LENGTH,
    DEFAULT_ISO,
    DEFAULT_MAKE,
    DEFAULT_MODEL,
    DEFAULT_SHUTTER,
    MetadataRecord,
    join_settings,
    today_display_date,
)
from core.services.interfaces import IMetadataExtractor
from infrastructure.utils import (
    apex_to_exposure_time,
    apex_to_f_number,
    clean_lens_model,
    format_aperture,
    format_date,
    format_focal_length,
    format_iso,
    format_lens_specification,
    format_shutter_speed,
    to_float,
    to_text,
)

register_heif_opener()

NO_TAGS_MESSAGE = "No EXIF metadata found"
READ_FAILED_MESSAGE = "Could not read EXIF data"


def read_exif_tags(data: bytes) -> dict[str, Any]:
    """Return a name -> value dictionary merged from IFD0 and the Exif IFD.

    Raises:
        MetadataParseError: `data` is not an image Pillow can open.
    """
    try:
        with Image.open(io.BytesIO(data)) as im:
            exif = im.getexif()
            tags: dict[str, Any] = {
                ExifTags.TAGS.get(tag_id, str(tag_id)): value for tag_id, value in exif.items()
            }
            for tag_id, value in exif.get_ifd(ExifTags.IFD.Exif).items():
                tags[ExifTags.TAGS.get(tag_id, str(tag_id))] = value
    except (OSError, ValueError, Image.DecompressionBombError) as ex:
        raise MetadataParseError(f"{READ_FAILED_MESSAGE}: {ex}") from ex
    return tags


def _text(tags: dict[str, Any], *names: str) -> str:
    for name in names:
        text = to_text(tags.get(name))
        if text:
            return text
    return ""


def _number(tags: dict[str, Any], *names: str) -> float | None:
    for name in names:
        value = to_float(tags.get(name))
        if value is not None:
            return value
    return None


def _lens(tags: dict[str, Any]) -> str:
    text = _text(tags, "LensModel", "Lens")
    if text:
        return text
    for name in ("LensSpecification", "LensInfo"):
        if tags.get(name) is not None:
            return format_lens_specification(tags[name])
    return ""


def build_record(tags: dict[str, Any], today: date | None = None) -> MetadataRecord:
    """Normalize a tag dictionary into a `MetadataRecord` with per-field defaults."""
    make = _text(tags, "Make")
    model = _text(tags, "Model")

    focal = _number(tags, "FocalLength", "FocalLengthIn35mmFilm")
    focal_length = format_focal_length(focal) if focal else DEFAULT_FOCAL_LENGTH

    f_number = _number(tags, "FNumber")
    if not f_number:
        apex = _number(tags, "ApertureValue")
        f_number = apex_to_f_number(apex) if apex is not None else None
    aperture = format_aperture(f_number) if f_number else DEFAULT_APERTURE

    exposure = _number(tags, "ExposureTime")
    if not exposure:
        apex = _number(tags, "ShutterSpeedValue")
        exposure = apex_to_exposure_time(apex) if apex is not None else None
    shutter = format_shutter_speed(exposure) if exposure and exposure > 0 else DEFAULT_SHUTTER

    iso_value = _number(tags, "ISOSpeedRatings", "ISO", "PhotographicSensitivity")
    iso = format_iso(iso_value) if iso_value else DEFAULT_ISO

    date_raw = _text(tags, "DateTimeOriginal", "DateTime", "DateTimeDigitized", "CreateDate")
    display_date = format_date(date_raw) or today_display_date(today)

    lens = clean_lens_model(_lens(tags), make) or focal_length

    return MetadataRecord(
        make=make or DEFAULT_MAKE,
        model=model or DEFAULT_MODEL,
        lens=lens,
        focal_length=focal_length,
        aperture=aperture,
        shutter=shutter,
        iso=iso,
        date=display_date,
        settings=join_settings(focal_length, aperture, shutter, iso),
        photographer=_text(tags, "Artist"),
    )


class MetadataExtractor(IMetadataExtractor):
    """Extract display metadata from raw image bytes without ever raising."""

    def __init__(self, today: Callable[[], date] | None = None) -> None:
        self._today = today or date.today
        self.last_error: str | None = None

    def parse(self, data: bytes) -> tuple[MetadataRecord, str | None]:
        """Return (record, error); `error` is None when tags were read."""
        today = self._today()
        try:
            tags = read_exif_tags(data)
            if not tags:
                raise MetadataParseError(NO_TAGS_MESSAGE)
            record, error = build_record(tags, today), None
        except MetadataParseError as ex:
            logger.warning("EXIF parsing error: {}", ex)
            record, error = MetadataRecord.default(today), str(ex)
        except Exception as ex:  # pylint: disable=broad-exception-caught
            logger.error("EXIF parsing error: {}", ex)
            record, error = MetadataRecord.default(today), f"{READ_FAILED_MESSAGE}: {ex}"
        self.last_error = error
        return record, error

    def extract(self, data: bytes) -> MetadataRecord:
        """Return the metadata record for `data` (defaults on failure)."""
        return self.parse(data)[0]
