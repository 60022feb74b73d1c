"""Frame composition: photo + metadata + style -> framed JPEG.

One render routine serves every style. Per-style differences come from the
layout tables in `core.layout`; the only style-specific code paths are the
cinematic bottom gradient and the insta border (handled by geometry).
"""

from __future__ import annotations

import asyncio
from typing import Any

from PIL import Image
from loguru import logger

from core.brands import BRAND_CUSTOM
from core.layout import (
    ALIGN_LEFT,
    ALIGN_RIGHT,
    GRADIENT_HEIGHT_RATIO,
    GRADIENT_MAX_OPACITY,
    StyleLayout,
    compute_geometry,
    get_layout,
    round_half_up,
)
from core.models import CanvasGeometry, FrameOptions, FrameStyle, MetadataRecord
from core.services.interfaces import IBrandRenderer
from infrastructure.brand_assets import BrandAssetRenderer
from infrastructure.fonts import FontProvider
from infrastructure.image_service import (
    DEFAULT_FETCH_TIMEOUT,
    encode_jpeg,
    load_logo,
    load_source,
    new_canvas,
)
from infrastructure.painting import PaintContext, TextStyle, draw_shape, draw_text

UNDERLAY_COLOR = "#000000"


def _centre_for(align: str, x: float, width: float) -> float:
    """Centre x of an element of `width` anchored at `x` with `align`."""
    if align == ALIGN_LEFT:
        return x + width / 2
    if align == ALIGN_RIGHT:
        return x - width / 2
    return x


def _paste_source(canvas: Image.Image, image: Image.Image, geometry: CanvasGeometry) -> None:
    position = (geometry.image_x, geometry.image_y)
    if image.mode == "RGB":
        canvas.paste(image, position)
        return
    rgba = image.convert("RGBA")
    canvas.paste(rgba, position, rgba)


def _draw_bottom_gradient(canvas: Image.Image, geometry: CanvasGeometry) -> None:
    """Darken the bottom quarter of the photo from transparent to 70% black."""
    height = round_half_up(geometry.image_height * GRADIENT_HEIGHT_RATIO)
    if height <= 0:
        return
    top = geometry.image_y + geometry.image_height - height
    ramp = Image.linear_gradient("L").resize((geometry.image_width, height))
    mask = ramp.point(lambda v: round_half_up(v * GRADIENT_MAX_OPACITY))
    box = (geometry.image_x, top, geometry.image_x + geometry.image_width, top + height)
    canvas.paste((0, 0, 0), box, mask)


class FrameCompositor:
    """Compose framed photos.

    `render` draws synchronously onto a fresh canvas; `compose` is the async
    entry point that decodes inputs first and returns encoded JPEG bytes.
    """

    def __init__(
        self,
        fonts: FontProvider | None = None,
        brand_renderer: IBrandRenderer | None = None,
        settings: object | None = None,
    ) -> None:
        self._fonts = fonts or FontProvider(settings)
        self._brands = brand_renderer or BrandAssetRenderer()
        self._fetch_timeout = DEFAULT_FETCH_TIMEOUT
        if settings is not None:
            try:
                raw = settings.get("logo.fetch_timeout", DEFAULT_FETCH_TIMEOUT)
                self._fetch_timeout = float(raw or DEFAULT_FETCH_TIMEOUT)
            except (TypeError, ValueError):
                self._fetch_timeout = DEFAULT_FETCH_TIMEOUT

    async def compose(
        self,
        source: Any,
        metadata: MetadataRecord,
        style: FrameStyle | str,
        options: FrameOptions | None = None,
    ) -> bytes:
        """Decode `source` (and a custom logo), render and encode as JPEG.

        Raises:
            ValueError: Unknown style.
            ImageDecodeError: Source or logo could not be loaded.
            SurfaceAcquisitionError: Canvas could not be allocated.
            EncodingError: JPEG encoding failed.
        """
        style = FrameStyle(style)
        options = options or FrameOptions()
        image, owns_image = await asyncio.to_thread(load_source, source)
        logo: Image.Image | None = None
        owns_logo = False
        try:
            if options.wants_logo and options.brand_id == BRAND_CUSTOM:
                logo, owns_logo = await asyncio.to_thread(
                    load_logo, options.custom_logo_source, self._fetch_timeout
                )
            canvas = self.render(image, metadata, style, options, logo)
            data = encode_jpeg(canvas)
        finally:
            if owns_image:
                image.close()
            if owns_logo and logo is not None:
                logo.close()
        logger.info(
            "Composed {} frame {}x{} -> {} bytes",
            style.value,
            canvas.width,
            canvas.height,
            len(data),
        )
        return data

    def render(
        self,
        image: Image.Image,
        metadata: MetadataRecord,
        style: FrameStyle | str,
        options: FrameOptions | None = None,
        logo: Image.Image | None = None,
    ) -> Image.Image:
        """Draw the framed photo and return the canvas (RGB)."""
        options = options or FrameOptions()
        layout = get_layout(style)
        geometry = compute_geometry(image.width, image.height, layout.style)
        canvas = new_canvas(
            geometry.canvas_width, geometry.canvas_height, layout.background or UNDERLAY_COLOR
        )
        ctx = PaintContext.for_canvas(canvas, self._fonts)

        _paste_source(canvas, image, geometry)
        if layout.bottom_gradient:
            _draw_bottom_gradient(canvas, geometry)

        origin_y, unit = layout.origin(geometry)
        logo_width = self._draw_logo(ctx, layout, geometry, origin_y, unit, options, logo)
        lead = logo_width or self._draw_decorations(ctx, layout, geometry, origin_y, unit)
        self._draw_texts(ctx, layout, geometry, origin_y, unit, metadata, logo_width > 0, lead)
        return canvas

    def _draw_logo(
        self,
        ctx: PaintContext,
        layout: StyleLayout,
        geometry: CanvasGeometry,
        origin_y: float,
        unit: float,
        options: FrameOptions,
        logo: Image.Image | None,
    ) -> float:
        """Draw the brand mark when enabled; return its width (0 when nothing drawn)."""
        if not options.wants_logo:
            return 0.0
        slot = layout.logo
        size = slot.size * unit
        width = self._brands.measure(ctx, options.brand_id, size, logo)
        if width <= 0:
            return 0.0
        x = _centre_for(slot.align, layout.anchor_x(geometry, slot.align), width)
        self._brands.draw(ctx, options.brand_id, x, origin_y + slot.y * unit, size, logo)
        return width

    def _draw_decorations(
        self,
        ctx: PaintContext,
        layout: StyleLayout,
        geometry: CanvasGeometry,
        origin_y: float,
        unit: float,
    ) -> float:
        """Draw style ornaments; return the width taken at the left edge."""
        lead = 0.0
        for deco in layout.decorations:
            size = deco.size * unit
            x = _centre_for(deco.align, layout.anchor_x(geometry, deco.align), size)
            draw_shape(ctx, deco.kind, deco.color, x, origin_y + deco.y * unit, size, size)
            if deco.align == ALIGN_LEFT:
                lead = max(lead, size)
        return lead

    def _draw_texts(
        self,
        ctx: PaintContext,
        layout: StyleLayout,
        geometry: CanvasGeometry,
        origin_y: float,
        unit: float,
        metadata: MetadataRecord,
        logo_drawn: bool,
        lead: float,
    ) -> None:
        for slot in layout.texts:
            if slot.hide_with_logo and logo_drawn:
                continue
            text = slot.content(metadata)
            if not text:
                continue
            x = layout.anchor_x(geometry, slot.align)
            if slot.after_logo and lead:
                x += lead + layout.inset(geometry)
            style = TextStyle(
                font_role=slot.font_role,
                size=max(1, round_half_up(slot.size * unit)),
                color=slot.color,
                align=slot.align,
                tracking=slot.tracking,
            )
            draw_text(ctx, text, x, origin_y + slot.y * unit, style)
