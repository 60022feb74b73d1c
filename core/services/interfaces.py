"""Core service interfaces and shared data structures.

This module defines the seams between the session layer and the imaging
infrastructure: metadata extraction, brand mark rendering and export results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from core.models import MetadataRecord


@dataclass
class ExportResult:
    """Outcome of an export (download) request.

    Attributes:
        filename: Suggested download name, e.g. ``IMG_0001_framed.jpg``.
        data: Encoded JPEG bytes, or None when the export failed.
        error: Human-readable failure reason.
    """

    filename: str
    data: bytes | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.data is not None and self.error is None


class IMetadataExtractor:
    """Interface for turning raw image bytes into a `MetadataRecord`."""

    def parse(self, data: bytes) -> tuple[MetadataRecord, str | None]:
        """Return (record, error). Never raises; `error` is None on success."""
        raise NotImplementedError


class IBrandRenderer:
    """Interface for drawing brand marks onto a paint context."""

    def measure(self, ctx: Any, brand_id: str, size: float, custom_logo: Any = None) -> float:
        """Width in pixels the mark would occupy when drawn at `size`."""
        raise NotImplementedError

    def draw(
        self,
        ctx: Any,
        brand_id: str,
        x: float,
        y: float,
        size: float,
        custom_logo: Any = None,
    ) -> None:
        """Draw the mark for `brand_id` centred at (`x`, `y`)."""
        raise NotImplementedError
