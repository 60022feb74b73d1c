"""Canvas geometry and per-style layout tables.

Every frame style shares the same render phases (background, photo, logo,
text). What differs is described here as data: anchor points, font sizes and
colours, expressed in *style units*. For styles with a bar or band below the
photo the unit is the bar height and offsets are measured down from the top of
the bar. For the overlay style the unit is the image width and offsets are
measured from a baseline one inset above the bottom of the photo.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import math

from core.models import CanvasGeometry, FrameStyle, MetadataRecord

FRAME_BAR_RATIO = 0.12  # bar height as a fraction of image height
PADDING_RATIO = 0.04  # insta border as a fraction of image width
INSTA_BAND_RATIO = 0.10  # insta text band as a fraction of image height
EDGE_INSET_RATIO = 0.03
GRADIENT_HEIGHT_RATIO = 0.25
GRADIENT_MAX_OPACITY = 0.7

ALIGN_LEFT = "left"
ALIGN_CENTER = "center"
ALIGN_RIGHT = "right"


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def compute_geometry(width: int, height: int, style: FrameStyle | str) -> CanvasGeometry:
    """Compute canvas size and photo placement for a `width` x `height` source.

    Raises:
        ValueError: Non-positive dimensions or unknown style.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image size: {width}x{height}")
    style = FrameStyle(style)

    if style is FrameStyle.CINEMATIC:
        return CanvasGeometry(width, height, width, height, 0, 0, 0)

    if style is FrameStyle.INSTA:
        padding = round_half_up(width * PADDING_RATIO)
        band = round_half_up(height * INSTA_BAND_RATIO)
        return CanvasGeometry(
            image_width=width,
            image_height=height,
            canvas_width=width + padding * 2,
            canvas_height=height + padding * 2 + band,
            image_x=padding,
            image_y=padding,
            bar_height=band,
        )

    bar = round_half_up(height * FRAME_BAR_RATIO)
    return CanvasGeometry(width, height, width, height + bar, 0, 0, bar)


# Text content builders


def field_text(name: str) -> Callable[[MetadataRecord], str]:
    return lambda record: getattr(record, name)


def upper_field_text(name: str) -> Callable[[MetadataRecord], str]:
    return lambda record: getattr(record, name).upper()


def date_line(record: MetadataRecord) -> str:
    """Date and location joined by a middle dot; either may be missing."""
    return " · ".join(part for part in (record.date, record.location) if part)


def credit_text(prefix: str) -> Callable[[MetadataRecord], str]:
    """Photographer credit with `prefix`, empty when no photographer is set."""
    return lambda record: f"{prefix} {record.photographer}" if record.photographer else ""


def model_and_settings(record: MetadataRecord) -> str:
    return f"{record.model}  |  {record.settings}"


@dataclass(frozen=True)
class TextSlot:
    """One line of text in a style.

    Attributes:
        content: Builds the string from the record; empty strings are skipped.
        align: Horizontal alignment against the content box.
        y: Baseline offset in style units.
        size: Font size in style units.
        color: Fill colour (``#RRGGBB`` or ``#RRGGBBAA``).
        font_role: Key into the font configuration.
        tracking: Extra letter spacing in em.
        hide_with_logo: Skip the slot when a logo is drawn (the logo replaces it).
        after_logo: Start after the leading logo/decoration instead of the inset.
    """

    content: Callable[[MetadataRecord], str]
    align: str
    y: float
    size: float
    color: str
    font_role: str = "regular"
    tracking: float = 0.0
    hide_with_logo: bool = False
    after_logo: bool = False


@dataclass(frozen=True)
class LogoSlot:
    """Where the brand mark goes; `y` is its vertical centre."""

    align: str
    y: float
    size: float


@dataclass(frozen=True)
class Decoration:
    """Fixed style ornament drawn only when no logo is shown."""

    kind: str  # "circle" | "rect"
    color: str
    align: str
    y: float
    size: float


@dataclass(frozen=True)
class StyleLayout:
    """Complete declarative description of one frame style."""

    style: FrameStyle
    background: str | None
    overlay: bool
    inset_ratio: float
    logo: LogoSlot
    texts: tuple[TextSlot, ...]
    decorations: tuple[Decoration, ...] = ()
    bottom_gradient: bool = False

    def inset(self, geometry: CanvasGeometry) -> int:
        return round_half_up(geometry.image_width * self.inset_ratio)

    def origin(self, geometry: CanvasGeometry) -> tuple[float, float]:
        """Return (origin_y, unit) used to resolve slot offsets and sizes."""
        if self.overlay:
            return geometry.image_height - self.inset(geometry), float(geometry.image_width)
        return geometry.image_y + geometry.image_height, float(geometry.bar_height)

    def anchor_x(self, geometry: CanvasGeometry, align: str) -> float:
        """X coordinate for `align` within the photo's horizontal extent."""
        if align == ALIGN_LEFT:
            return geometry.image_x + self.inset(geometry)
        if align == ALIGN_RIGHT:
            return geometry.image_x + geometry.image_width - self.inset(geometry)
        return geometry.canvas_width / 2


WHITE = "#FFFFFF"
DARK = "#333333"
MUTED = "#888888"
FAINT_WHITE = "#FFFFFFB3"  # 70% opaque white

STYLE_LAYOUTS: dict[FrameStyle, StyleLayout] = {
    FrameStyle.CLASSIC: StyleLayout(
        style=FrameStyle.CLASSIC,
        background=WHITE,
        overlay=False,
        inset_ratio=EDGE_INSET_RATIO,
        logo=LogoSlot(ALIGN_LEFT, 0.5, 0.4),
        decorations=(Decoration("circle", "#E21B24", ALIGN_LEFT, 0.5, 0.4),),
        texts=(
            TextSlot(
                field_text("model"), ALIGN_LEFT, 0.45, 0.18, DARK, "semibold", after_logo=True
            ),
            TextSlot(field_text("settings"), ALIGN_LEFT, 0.72, 0.14, MUTED, after_logo=True),
            TextSlot(field_text("lens"), ALIGN_RIGHT, 0.45, 0.14, DARK, "medium"),
            TextSlot(date_line, ALIGN_RIGHT, 0.72, 0.14, MUTED),
            TextSlot(credit_text("©"), ALIGN_CENTER, 0.6, 0.12, "#AAAAAA"),
        ),
    ),
    FrameStyle.ELEGANT: StyleLayout(
        style=FrameStyle.ELEGANT,
        background=WHITE,
        overlay=False,
        inset_ratio=EDGE_INSET_RATIO,
        logo=LogoSlot(ALIGN_CENTER, 0.3, 0.34),
        texts=(
            TextSlot(
                upper_field_text("make"),
                ALIGN_CENTER,
                0.42,
                0.28,
                DARK,
                "serif_italic",
                tracking=0.2,
                hide_with_logo=True,
            ),
            TextSlot(model_and_settings, ALIGN_CENTER, 0.65, 0.14, MUTED),
            TextSlot(date_line, ALIGN_CENTER, 0.85, 0.119, "#AAAAAA"),
            TextSlot(credit_text("by"), ALIGN_RIGHT, 0.85, 0.119, "#AAAAAA"),
        ),
    ),
    FrameStyle.CINEMATIC: StyleLayout(
        style=FrameStyle.CINEMATIC,
        background=None,
        overlay=True,
        inset_ratio=EDGE_INSET_RATIO,
        logo=LogoSlot(ALIGN_LEFT, -0.085, 0.04),
        bottom_gradient=True,
        texts=(
            TextSlot(date_line, ALIGN_LEFT, -0.0375, 0.018, FAINT_WHITE),
            TextSlot(field_text("make"), ALIGN_LEFT, 0.0, 0.025, WHITE, "medium"),
            TextSlot(field_text("settings"), ALIGN_RIGHT, -0.0375, 0.025, WHITE, "mono"),
            TextSlot(field_text("lens"), ALIGN_RIGHT, 0.0, 0.018, FAINT_WHITE),
            TextSlot(credit_text("©"), ALIGN_RIGHT, -0.075, 0.018, FAINT_WHITE),
        ),
    ),
    FrameStyle.BADGE: StyleLayout(
        style=FrameStyle.BADGE,
        background=WHITE,
        overlay=False,
        inset_ratio=EDGE_INSET_RATIO,
        logo=LogoSlot(ALIGN_CENTER, 0.29, 0.28),
        decorations=(Decoration("rect", "#FFCC00", ALIGN_CENTER, 0.29, 0.28),),
        texts=(
            TextSlot(field_text("settings"), ALIGN_CENTER, 0.65, 0.2, DARK, "mono_bold"),
            TextSlot(date_line, ALIGN_CENTER, 0.85, 0.12, MUTED),
            TextSlot(credit_text("©"), ALIGN_RIGHT, 0.85, 0.12, MUTED),
        ),
    ),
    FrameStyle.INSTA: StyleLayout(
        style=FrameStyle.INSTA,
        background=WHITE,
        overlay=False,
        inset_ratio=0.0,
        logo=LogoSlot(ALIGN_CENTER, 0.3, 0.35),
        texts=(
            TextSlot(
                upper_field_text("make"),
                ALIGN_CENTER,
                0.35,
                0.25,
                DARK,
                "semibold",
                tracking=0.15,
                hide_with_logo=True,
            ),
            TextSlot(field_text("settings"), ALIGN_CENTER, 0.6, 0.2, "#666666", "mono"),
            TextSlot(date_line, ALIGN_CENTER, 0.82, 0.15, "#999999"),
            TextSlot(credit_text("by"), ALIGN_RIGHT, 0.82, 0.15, "#999999"),
        ),
    ),
}


def get_layout(style: FrameStyle | str) -> StyleLayout:
    """Layout table for `style`; raises ValueError for unknown styles."""
    return STYLE_LAYOUTS[FrameStyle(style)]
