"""Render catalog brand marks and custom logos onto a paint context."""

from __future__ import annotations

from typing import Any

from loguru import logger

from core.brands import BRAND_CUSTOM, BRAND_NONE, BrandMark, get_brand
from core.services.interfaces import IBrandRenderer
from infrastructure.painting import (
    PaintContext,
    TextStyle,
    draw_shape,
    draw_text,
    fit_within,
    paste_fitted,
    text_width,
)


def _label_style(mark: BrandMark, size: float) -> TextStyle:
    return TextStyle(
        font_role=mark.font_role,
        size=max(1, round(size * mark.text_ratio)),
        color=mark.fill,
        align="center",
        baseline="middle",
        tracking=mark.tracking,
    )


class BrandAssetRenderer(IBrandRenderer):
    """Draws brand marks described by `core.brands.BRAND_CATALOG`."""

    def measure(
        self, ctx: PaintContext, brand_id: str, size: float, custom_logo: Any = None
    ) -> float:
        if brand_id == BRAND_NONE:
            return 0.0
        if brand_id == BRAND_CUSTOM:
            return float(fit_within(custom_logo.size, size)[0]) if custom_logo is not None else 0.0
        mark = get_brand(brand_id)
        if mark is None:
            return 0.0
        label = text_width(ctx, mark.label, _label_style(mark, size)) if mark.label else 0.0
        shape = mark.shape.width * size if mark.shape else 0.0
        return max(label, shape)

    def draw(
        self,
        ctx: PaintContext,
        brand_id: str,
        x: float,
        y: float,
        size: float,
        custom_logo: Any = None,
    ) -> None:
        if brand_id == BRAND_NONE:
            return
        if brand_id == BRAND_CUSTOM:
            if custom_logo is None:
                logger.warning("Custom brand selected without a logo image; nothing drawn")
                return
            paste_fitted(ctx, custom_logo, x, y, size)
            return

        mark = get_brand(brand_id)
        if mark is None:
            logger.warning("Unknown brand id: {}", brand_id)
            return
        if mark.shape is not None:
            draw_shape(
                ctx,
                mark.shape.kind,
                mark.shape.color,
                x,
                y,
                mark.shape.width * size,
                mark.shape.height * size,
            )
        if mark.label:
            draw_text(ctx, mark.label, x, y + mark.text_dy * size, _label_style(mark, size))
