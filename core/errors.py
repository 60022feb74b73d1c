"""Error types raised by metadata extraction and frame composition."""

from __future__ import annotations


class FrameError(Exception):
    """Base class for all ExifFrame errors."""


class MetadataParseError(FrameError):
    """Raw bytes could not be parsed or carry no usable tags.

    Recovered inside the extractor; callers only ever see the status string.
    """


class ImageDecodeError(FrameError):
    """Source photo or custom logo could not be fetched or decoded.

    Attributes:
        what: Which input failed ("source" or "logo").
    """

    def __init__(self, what: str, reason: str) -> None:
        self.what = what
        self.reason = reason
        super().__init__(f"Failed to load {what} image: {reason}")


class SurfaceAcquisitionError(FrameError):
    """Drawing surface could not be allocated for the requested geometry."""

    def __init__(self, width: int, height: int, reason: str) -> None:
        self.width = width
        self.height = height
        super().__init__(f"Could not allocate {width}x{height} canvas: {reason}")


class EncodingError(FrameError):
    """Final JPEG encoding failed or produced no output."""
