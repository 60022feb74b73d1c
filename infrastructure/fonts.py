"""Font loading with a per-(role, size) cache.

Font files are configured per role under the ``fonts`` settings key. Roles
without a usable file fall back to the ``regular`` file and finally to
Pillow's bundled scalable default font.
"""

from __future__ import annotations

import os

from PIL import ImageFont
from loguru import logger

FONT_ROLES: tuple[str, ...] = (
    "regular",
    "medium",
    "semibold",
    "bold",
    "serif",
    "serif_italic",
    "mono",
    "mono_bold",
)

FontType = ImageFont.FreeTypeFont | ImageFont.ImageFont


class FontProvider:
    """Resolve font roles to Pillow fonts, loading each (role, size) once."""

    def __init__(self, settings: object | None = None) -> None:
        self._paths: dict[str, str] = {}
        if settings is not None:
            for role in FONT_ROLES:
                raw = settings.get(f"fonts.{role}", "")
                if isinstance(raw, str) and raw:
                    self._paths[role] = os.path.expandvars(os.path.expanduser(raw))
        self._cache: dict[tuple[str, int], FontType] = {}

    def get(self, role: str, size: int) -> FontType:
        """Return the font for `role` at `size` pixels (minimum 1)."""
        size = max(1, int(size))
        key = (role, size)
        font = self._cache.get(key)
        if font is None:
            font = self._load(role, size)
            self._cache[key] = font
        return font

    def _load(self, role: str, size: int) -> FontType:
        for path in (self._paths.get(role), self._paths.get("regular")):
            if not path:
                continue
            if not os.path.isfile(path):
                logger.warning("Font file for role {} not found: {}", role, path)
                continue
            try:
                return ImageFont.truetype(path, size)
            except OSError as ex:
                logger.warning("Could not load font {} for role {}: {}", path, role, ex)
        return ImageFont.load_default(size)
