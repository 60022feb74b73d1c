"""Utilities for EXIF value conversion and display formatting.

This module centralizes how raw tag values become display strings so the
extractor and the session editor share one behavior. Conversions are
best-effort: helpers return `None` (or pass input through) instead of raising.
"""

from __future__ import annotations

import math
import re
from typing import Any

from core.layout import round_half_up

_EXIF_DATE_RE = re.compile(r"(\d{4}):(\d{2}):(\d{2})")
_ISO_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
_FRACTION_RE = re.compile(r"\s*(\d+(?:\.\d+)?)\s*/\s*(\d+(?:\.\d+)?)")
_LEADING_NUMBER_RE = re.compile(r"\s*(-?\d+(?:\.\d+)?)")
_EXTENSION_RE = re.compile(r"\.[^.]+$")
_FOCAL_RANGE_RE = re.compile(r"(\d+(?:-\d+)?mm)", re.IGNORECASE)
# An "F" directly followed by the focal range (e.g. "EF 24-70mm") is not an aperture.
_APERTURE_RE = re.compile(r"[fF]\s?/?\s?(\d+(?:\.\d+)?(?:-\d+(?:\.\d+)?)?)(?![\d.\-]*\s?mm)")

MAX_LENS_LENGTH = 25


def to_float(value: Any) -> float | None:
    """Convert an EXIF value (rational, number, numeric string, 1-tuple) to float."""
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return to_float(value[0]) if value else None
    if isinstance(value, bytes):
        value = to_text(value)
    try:
        result = float(value)
    except (TypeError, ValueError):
        text = str(value)
        fraction = _FRACTION_RE.match(text)
        if fraction:
            den = float(fraction.group(2))
            return float(fraction.group(1)) / den if den else None
        match = _LEADING_NUMBER_RE.match(text)
        if not match:
            return None
        result = float(match.group(1))
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def to_text(value: Any) -> str:
    """Decode an EXIF value to a stripped string ('' when unusable)."""
    if value is None:
        return ""
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    return str(value).replace("\x00", "").strip()


def apex_to_exposure_time(apex: float) -> float:
    """APEX shutter speed value to seconds."""
    return 2.0 ** (-apex)


def apex_to_f_number(apex: float) -> float:
    """APEX aperture value to an f-number."""
    return 2.0 ** (apex / 2.0)


def format_focal_length(value: float) -> str:
    """35.4 -> "35mm"."""
    return f"{round_half_up(value)}mm"


def _format_number(value: float) -> str:
    text = str(int(value)) if value % 1 == 0 else f"{value:.1f}"
    return re.sub(r"\.0$", "", text)


def format_aperture(value: float) -> str:
    """2.8 -> "f/2.8", 4.0 -> "f/4"."""
    return f"f/{_format_number(value)}"


def format_shutter_speed(value: float) -> str:
    """0.004 -> "1/250s", 2 -> "2s"."""
    if value >= 1:
        return f"{round_half_up(value)}s"
    return f"1/{round_half_up(1 / value)}s"


def format_iso(value: float) -> str:
    return f"ISO{round_half_up(value)}"


def format_date(value: str) -> str:
    """Normalize EXIF ("2023:09:19 14:30:00") or ISO ("2024-01-05") dates to "YYYY.MM.DD".

    Anything else is returned unchanged.
    """
    if not value:
        return ""
    match = _EXIF_DATE_RE.search(value) or _ISO_DATE_RE.search(value)
    if match:
        return f"{match.group(1)}.{match.group(2)}.{match.group(3)}"
    return value


def format_lens_specification(values: Any) -> str:
    """Render a (min focal, max focal, min F, max F) tuple as "24-70mm f/2.8"."""
    if not isinstance(values, (list, tuple)) or len(values) != 4:
        return to_text(values)
    min_focal, max_focal, min_f, max_f = (to_float(v) for v in values)
    if not min_focal:
        return ""
    text = format_focal_length(min_focal)
    if max_focal and round_half_up(max_focal) != round_half_up(min_focal):
        text = f"{round_half_up(min_focal)}-{format_focal_length(max_focal)}"
    if min_f:
        aperture = _format_number(min_f)
        if max_f and _format_number(max_f) != aperture:
            aperture = f"{aperture}-{_format_number(max_f)}"
        text += f" f/{aperture}"
    return text


def clean_lens_model(lens: str, make: str) -> str:
    """Strip a repeated camera make from `lens` and shorten very long names.

    "Sony FE 35mm F1.4 GM" with make "Sony" -> "FE 35mm F1.4 GM". Names longer
    than 25 characters collapse to "<focal> f/<aperture>" when a focal length
    can be found.
    """
    if not lens:
        return ""

    cleaned = lens
    for variant in (make, make.upper(), make.lower()):
        if cleaned.startswith(variant + " "):
            cleaned = cleaned[len(variant) + 1 :]

    cleaned = cleaned.strip()
    if len(cleaned) > MAX_LENS_LENGTH:
        focal_match = _FOCAL_RANGE_RE.search(cleaned)
        if focal_match:
            short = focal_match.group(1)
            aperture_match = _APERTURE_RE.search(cleaned)
            if aperture_match:
                short += f" f/{aperture_match.group(1)}"
            return short

    return cleaned


def framed_filename(original_name: str) -> str:
    """Download name for a framed photo, e.g. IMG_0001.HEIC -> IMG_0001_framed.jpg."""
    stem = _EXTENSION_RE.sub("", original_name)
    return f"{stem}_framed.jpg"
