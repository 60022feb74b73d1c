"""Core domain models for photo metadata and frame rendering."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import date
from enum import Enum
from typing import Any

SETTINGS_FIELDS: tuple[str, ...] = ("focal_length", "aperture", "shutter", "iso")

DEFAULT_MAKE = "Camera"
DEFAULT_MODEL = "Model"
DEFAULT_FOCAL_LENGTH = "50mm"
DEFAULT_APERTURE = "f/2.8"
DEFAULT_SHUTTER = "1/125s"
DEFAULT_ISO = "ISO400"


def join_settings(focal_length: str, aperture: str, shutter: str, iso: str) -> str:
    """Build the combined settings line, e.g. ``"35mm f/1.4 1/250s ISO160"``."""
    return f"{focal_length} {aperture} {shutter} {iso}"


def today_display_date(today: date | None = None) -> str:
    """Return `today` (defaults to the current date) as ``YYYY.MM.DD``."""
    return (today or date.today()).strftime("%Y.%m.%d")


@dataclass(frozen=True)
class MetadataRecord:
    """Display-ready camera metadata for one photo.

    `settings` is derived from the four exposure fields and is rebuilt by
    `edit` whenever one of them changes.
    """

    make: str
    model: str
    lens: str
    focal_length: str
    aperture: str
    shutter: str
    iso: str
    date: str
    settings: str
    photographer: str = ""
    location: str = ""

    @classmethod
    def default(cls, today: date | None = None) -> MetadataRecord:
        """Record used when a photo carries no readable metadata."""
        return cls(
            make=DEFAULT_MAKE,
            model=DEFAULT_MODEL,
            lens=DEFAULT_FOCAL_LENGTH,
            focal_length=DEFAULT_FOCAL_LENGTH,
            aperture=DEFAULT_APERTURE,
            shutter=DEFAULT_SHUTTER,
            iso=DEFAULT_ISO,
            date=today_display_date(today),
            settings=join_settings(
                DEFAULT_FOCAL_LENGTH, DEFAULT_APERTURE, DEFAULT_SHUTTER, DEFAULT_ISO
            ),
        )

    def edit(self, field_name: str, value: str) -> MetadataRecord:
        """Return a copy with `field_name` set to `value`.

        Raises:
            ValueError: Unknown field, or an attempt to edit `settings` directly.
        """
        if field_name == "settings":
            raise ValueError("settings is derived and cannot be edited directly")
        if field_name not in {f.name for f in fields(self)}:
            raise ValueError(f"Unknown metadata field: {field_name}")
        updated = replace(self, **{field_name: value})
        if field_name in SETTINGS_FIELDS:
            settings = join_settings(
                updated.focal_length, updated.aperture, updated.shutter, updated.iso
            )
            updated = replace(updated, settings=settings)
        return updated

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


class FrameStyle(str, Enum):
    """Available frame templates."""

    CLASSIC = "classic"
    ELEGANT = "elegant"
    CINEMATIC = "cinematic"
    BADGE = "badge"
    INSTA = "insta"


@dataclass(frozen=True)
class FrameConfig:
    """Display information for a frame style."""

    style: FrameStyle
    name: str
    description: str


FRAME_CONFIGS: list[FrameConfig] = [
    FrameConfig(FrameStyle.CLASSIC, "Classic", "Minimalist Leica style"),
    FrameConfig(FrameStyle.ELEGANT, "Elegant", "Hasselblad centered"),
    FrameConfig(FrameStyle.CINEMATIC, "Cinematic", "Dark overlay text"),
    FrameConfig(FrameStyle.BADGE, "Badge", "Yellow badge style"),
    FrameConfig(FrameStyle.INSTA, "Passe-partout", "White border all around"),
]


@dataclass(frozen=True)
class FrameOptions:
    """Render-time logo configuration.

    Attributes:
        brand_id: Catalog brand id, "custom" or "none".
        custom_logo_source: Bytes, file path or http(s) URL of a caller-owned
            logo; only read when `brand_id` is "custom".
        show_logo: Master switch for logo rendering.
    """

    brand_id: str = "none"
    custom_logo_source: Any | None = None
    show_logo: bool = True

    @property
    def wants_logo(self) -> bool:
        """True when a logo should be drawn for these options."""
        return self.show_logo and self.brand_id != "none"


@dataclass(frozen=True)
class CanvasGeometry:
    """Output canvas layout computed for one render."""

    image_width: int
    image_height: int
    canvas_width: int
    canvas_height: int
    image_x: int
    image_y: int
    bar_height: int
