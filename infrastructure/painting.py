"""Drawing primitives shared by the compositor and brand mark renderer.

Text attributes travel with each call as an immutable `TextStyle`; drawing
never changes state on the context, so one routine cannot leak alignment or
font settings into the next.
"""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image, ImageDraw

from infrastructure.fonts import FontProvider, FontType

_H_ANCHOR = {"left": "l", "center": "m", "right": "r"}
_V_ANCHOR = {"alphabetic": "s", "middle": "m"}


@dataclass(frozen=True)
class TextStyle:
    """How one piece of text is drawn.

    Attributes:
        font_role: Font role resolved through the `FontProvider`.
        size: Font size in pixels.
        color: Fill colour, ``#RRGGBB`` or ``#RRGGBBAA``.
        align: "left", "center" or "right" relative to x.
        baseline: "alphabetic" or "middle" relative to y.
        tracking: Extra space between letters in em.
    """

    font_role: str
    size: int
    color: str
    align: str = "left"
    baseline: str = "alphabetic"
    tracking: float = 0.0

    @property
    def anchor(self) -> str:
        return _H_ANCHOR[self.align] + _V_ANCHOR[self.baseline]


@dataclass(frozen=True)
class PaintContext:
    """A canvas with a blending draw handle and the fonts to use on it."""

    canvas: Image.Image
    draw: ImageDraw.ImageDraw
    fonts: FontProvider

    @classmethod
    def for_canvas(cls, canvas: Image.Image, fonts: FontProvider) -> PaintContext:
        return cls(canvas=canvas, draw=ImageDraw.Draw(canvas, "RGBA"), fonts=fonts)

    def font(self, style: TextStyle) -> FontType:
        return self.fonts.get(style.font_role, style.size)


def text_width(ctx: PaintContext, text: str, style: TextStyle) -> float:
    """Advance width of `text` including letter tracking."""
    font = ctx.font(style)
    if not style.tracking:
        return font.getlength(text)
    spacing = style.tracking * style.size
    return sum(font.getlength(ch) for ch in text) + spacing * max(0, len(text) - 1)


def draw_text(ctx: PaintContext, text: str, x: float, y: float, style: TextStyle) -> None:
    """Draw `text` anchored at (x, y) according to `style`."""
    if not text:
        return
    font = ctx.font(style)
    if not style.tracking:
        ctx.draw.text((x, y), text, font=font, fill=style.color, anchor=style.anchor)
        return

    width = text_width(ctx, text, style)
    if style.align == "center":
        cursor = x - width / 2
    elif style.align == "right":
        cursor = x - width
    else:
        cursor = x
    anchor = "l" + _V_ANCHOR[style.baseline]
    spacing = style.tracking * style.size
    for ch in text:
        ctx.draw.text((cursor, y), ch, font=font, fill=style.color, anchor=anchor)
        cursor += font.getlength(ch) + spacing


def draw_shape(
    ctx: PaintContext, kind: str, color: str, cx: float, cy: float, width: float, height: float
) -> None:
    """Fill a circle/ellipse or rectangle centred at (cx, cy)."""
    box = [cx - width / 2, cy - height / 2, cx + width / 2, cy + height / 2]
    if kind == "circle":
        ctx.draw.ellipse(box, fill=color)
    elif kind == "rect":
        ctx.draw.rectangle(box, fill=color)
    else:
        raise ValueError(f"Unknown shape kind: {kind}")


def fit_within(size: tuple[int, int], box: float) -> tuple[int, int]:
    """Scale (w, h) to fit a `box` x `box` square without distortion."""
    w, h = size
    if w <= 0 or h <= 0:
        return 0, 0
    aspect = w / h
    if aspect > 1:
        fitted = (box, box / aspect)
    else:
        fitted = (box * aspect, box)
    return max(1, round(fitted[0])), max(1, round(fitted[1]))


def paste_fitted(ctx: PaintContext, image: Image.Image, cx: float, cy: float, box: float) -> None:
    """Paste `image` scaled into a `box` square centred at (cx, cy), keeping alpha."""
    dw, dh = fit_within(image.size, box)
    if not dw or not dh:
        return
    scaled = image.convert("RGBA").resize((dw, dh), Image.Resampling.LANCZOS)
    ctx.canvas.paste(scaled, (round(cx - dw / 2), round(cy - dh / 2)), scaled)
