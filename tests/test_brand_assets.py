"""Tests for the brand catalog and brand mark renderer."""

from PIL import Image, ImageChops
import pytest

from core.brands import BRAND_CATALOG, BRAND_CUSTOM, BRAND_NONE, get_brand, search_brands
from infrastructure.brand_assets import BrandAssetRenderer
from infrastructure.painting import PaintContext, fit_within

DRAWABLE = sorted(set(BRAND_CATALOG) - {BRAND_NONE, BRAND_CUSTOM})


@pytest.fixture
def ctx(fonts) -> PaintContext:
    return PaintContext.for_canvas(Image.new("RGB", (300, 120), "#FFFFFF"), fonts)


@pytest.fixture
def renderer() -> BrandAssetRenderer:
    return BrandAssetRenderer()


def is_blank(ctx: PaintContext) -> bool:
    blank = Image.new("RGB", ctx.canvas.size, "#FFFFFF")
    return ImageChops.difference(ctx.canvas, blank).getbbox() is None


class TestCatalog:
    """Catalog lookup and search."""

    def test_lookup(self):
        assert get_brand("leica").name == "Leica"
        assert get_brand("minolta") is None

    def test_search_is_case_insensitive(self):
        assert [m.brand_id for m in search_brands("PIXEL")] == ["google"]
        assert {m.brand_id for m in search_brands("on")} >= {"sony", "canon", "nikon"}

    def test_empty_query_lists_everything(self):
        assert len(search_brands("  ")) == len(BRAND_CATALOG)

    def test_wordmarks_are_uppercase(self):
        assert get_brand("olympus").label == "OLYMPUS"
        assert get_brand("google").label == "GOOGLE PIXEL"


class TestBrandAssetRenderer:
    """Measuring and drawing marks."""

    @pytest.mark.parametrize("brand_id", DRAWABLE)
    def test_every_brand_draws_something(self, ctx, renderer, brand_id):
        assert renderer.measure(ctx, brand_id, 40) > 0
        renderer.draw(ctx, brand_id, 150, 60, 40)
        assert not is_blank(ctx)

    @pytest.mark.parametrize("brand_id", [BRAND_NONE, BRAND_CUSTOM, "minolta"])
    def test_nothing_to_draw(self, ctx, renderer, brand_id):
        assert renderer.measure(ctx, brand_id, 40) == 0
        renderer.draw(ctx, brand_id, 150, 60, 40)
        assert is_blank(ctx)

    def test_shape_sets_minimum_width(self, ctx, renderer):
        assert renderer.measure(ctx, "nikon", 40) >= 80
        assert renderer.measure(ctx, "leica", 40) >= 36

    def test_leica_circle_is_red(self, ctx, renderer):
        renderer.draw(ctx, "leica", 150, 60, 40)
        # top of the 36px circle, clear of the label
        assert ctx.canvas.getpixel((150, 45)) == (226, 27, 36)

    def test_custom_logo(self, ctx, renderer):
        logo = Image.new("RGBA", (50, 100), (0, 0, 255, 255))
        assert renderer.measure(ctx, BRAND_CUSTOM, 40, logo) == 20
        renderer.draw(ctx, BRAND_CUSTOM, 150, 60, 40, logo)
        assert ctx.canvas.getpixel((150, 60)) == (0, 0, 255)
        assert ctx.canvas.getpixel((165, 60)) == (255, 255, 255)

    def test_transparent_logo_keeps_background(self, ctx, renderer):
        logo = Image.new("RGBA", (40, 40), (0, 0, 0, 0))
        renderer.draw(ctx, BRAND_CUSTOM, 150, 60, 40, logo)
        assert is_blank(ctx)


class TestFitWithin:
    """Aspect-preserving logo scaling."""

    @pytest.mark.parametrize(
        "size,box,expected",
        [((200, 100), 50, (50, 25)), ((100, 200), 50, (25, 50)), ((10, 10), 50, (50, 50))],
    )
    def test_fit(self, size, box, expected):
        assert fit_within(size, box) == expected

    def test_degenerate(self):
        assert fit_within((0, 10), 50) == (0, 0)
