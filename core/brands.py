"""Brand mark catalog.

Each camera/phone manufacturer is described as data: a label drawn in a font
role and colour, optionally on top of one background shape. Renderers look the
mark up by brand id, so adding a brand only means adding a catalog entry.
"""

from __future__ import annotations

from dataclasses import dataclass

BRAND_NONE = "none"
BRAND_CUSTOM = "custom"


@dataclass(frozen=True)
class BrandShape:
    """Background primitive; sizes are multiples of the requested mark size."""

    kind: str  # "circle" | "rect"
    color: str
    width: float
    height: float


@dataclass(frozen=True)
class BrandMark:
    """Renderable description of one brand."""

    brand_id: str
    name: str
    color: str | None = None
    label: str = ""
    font_role: str = "semibold"
    text_ratio: float = 0.5
    text_color: str | None = None
    shape: BrandShape | None = None
    text_dy: float = 0.0
    tracking: float = 0.0

    @property
    def fill(self) -> str:
        """Colour used for the label text."""
        return self.text_color or self.color or "#333333"


def _wordmark(brand_id: str, name: str, color: str) -> BrandMark:
    return BrandMark(brand_id=brand_id, name=name, color=color, label=name.upper())


BRAND_CATALOG: dict[str, BrandMark] = {
    mark.brand_id: mark
    for mark in (
        BrandMark(BRAND_NONE, "None"),
        BrandMark(BRAND_CUSTOM, "Custom"),
        BrandMark(
            "leica",
            "Leica",
            color="#E21B24",
            label="Leica",
            font_role="serif_italic",
            text_ratio=0.35,
            text_color="#FFFFFF",
            shape=BrandShape("circle", "#E21B24", 0.9, 0.9),
            text_dy=0.05,
        ),
        BrandMark(
            "hasselblad",
            "Hasselblad",
            color="#000000",
            label="HASSELBLAD",
            font_role="regular",
            text_color="#333333",
            tracking=0.08,
        ),
        BrandMark("sony", "Sony", "#000000", "SONY", font_role="bold", text_ratio=0.7),
        BrandMark("canon", "Canon", "#BC0024", "Canon", font_role="serif", text_ratio=0.7),
        BrandMark(
            "nikon",
            "Nikon",
            color="#FFCC00",
            label="Nikon",
            font_role="bold",
            text_ratio=0.4,
            text_color="#000000",
            shape=BrandShape("rect", "#FFCC00", 2.0, 0.6),
        ),
        BrandMark("fujifilm", "Fujifilm", "#ED1A3A", "FUJIFILM", font_role="bold"),
        BrandMark("panasonic", "Panasonic", "#0F58A8", "LUMIX", font_role="bold"),
        _wordmark("olympus", "Olympus", "#08326B"),
        _wordmark("pentax", "Pentax", "#000000"),
        _wordmark("samsung", "Samsung", "#1428A0"),
        BrandMark("apple", "Apple", "#000000", "iPhone", font_role="regular"),
        _wordmark("google", "Google Pixel", "#4285F4"),
        _wordmark("xiaomi", "Xiaomi", "#FF6700"),
        _wordmark("huawei", "Huawei", "#CF0A2C"),
        _wordmark("oppo", "Oppo", "#1BA784"),
        _wordmark("vivo", "Vivo", "#415FFF"),
        _wordmark("oneplus", "OnePlus", "#EB0028"),
        _wordmark("dji", "DJI", "#000000"),
        _wordmark("gopro", "GoPro", "#00A8E8"),
        _wordmark("ricoh", "Ricoh", "#CC0000"),
        _wordmark("sigma", "Sigma", "#000000"),
    )
}


def get_brand(brand_id: str) -> BrandMark | None:
    """Return the catalog entry for `brand_id`, or None when unknown."""
    return BRAND_CATALOG.get(brand_id)


def search_brands(query: str) -> list[BrandMark]:
    """Catalog entries whose display name contains `query` (case-insensitive)."""
    needle = query.strip().lower()
    return [mark for mark in BRAND_CATALOG.values() if needle in mark.name.lower()]
