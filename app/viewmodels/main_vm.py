"""ViewModel for one framing session: load, edit, choose a style, export."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any

from loguru import logger

from core.brands import BRAND_CUSTOM, BRAND_NONE, get_brand
from core.errors import FrameError
from core.models import FrameOptions, FrameStyle, MetadataRecord
from core.services.interfaces import ExportResult, IMetadataExtractor
from infrastructure.utils import framed_filename


class MainVM:
    """Main session view-model.

    Holds the loaded photo bytes, the editable metadata record and the frame
    choices, and mediates between the extractor and the compositor. A failed
    export never touches this state, so the user can adjust and retry.
    """

    def __init__(self, extractor: IMetadataExtractor, compositor: Any) -> None:
        """Create a MainVM.

        Args:
            extractor: Object with `parse(data) -> (record, error)`.
            compositor: Object with async `compose(source, record, style, options)`.
        """
        self._extractor = extractor
        self._compositor = compositor
        self.record: MetadataRecord | None = None
        self.style: FrameStyle = FrameStyle.CLASSIC
        self.options = FrameOptions()
        self.notice: str | None = None
        self._source_name: str | None = None
        self._source_data: bytes | None = None

    @property
    def has_photo(self) -> bool:
        return self._source_data is not None

    @property
    def source_name(self) -> str | None:
        return self._source_name

    def load_photo(self, name: str, data: bytes) -> MetadataRecord:
        """Load a photo and extract its metadata (defaults when unreadable)."""
        record, error = self._extractor.parse(data)
        self._source_name = Path(name).name
        self._source_data = data
        self.record = record
        if error:
            self.notice = f"Could not read EXIF data from {self._source_name}; using defaults"
        else:
            self.notice = f"Extracted metadata from {self._source_name}"
        logger.info("Loaded {} ({} bytes), extraction error: {}", name, len(data), error)
        return record

    def update_field(self, field_name: str, value: str) -> MetadataRecord:
        """Edit one metadata field; `settings` follows the exposure fields."""
        if self.record is None:
            raise RuntimeError("No photo loaded")
        self.record = self.record.edit(field_name, value)
        return self.record

    def select_style(self, style: FrameStyle | str) -> None:
        self.style = FrameStyle(style)

    def set_brand(self, brand_id: str) -> None:
        if get_brand(brand_id) is None:
            raise ValueError(f"Unknown brand id: {brand_id}")
        self.options = replace(self.options, brand_id=brand_id)

    def set_custom_logo(self, source: Any) -> None:
        """Use `source` (bytes, path or URL) as the logo and select the custom brand."""
        self.options = replace(self.options, brand_id=BRAND_CUSTOM, custom_logo_source=source)

    def clear_custom_logo(self) -> None:
        brand_id = BRAND_NONE if self.options.brand_id == BRAND_CUSTOM else self.options.brand_id
        self.options = replace(self.options, brand_id=brand_id, custom_logo_source=None)

    def set_show_logo(self, show: bool) -> None:
        self.options = replace(self.options, show_logo=bool(show))

    async def export(self) -> ExportResult:
        """Render the current session to JPEG bytes for download."""
        if self._source_data is None or self.record is None or self._source_name is None:
            raise RuntimeError("No photo loaded")
        filename = framed_filename(self._source_name)
        try:
            data = await self._compositor.compose(
                self._source_data, self.record, self.style, self.options
            )
        except FrameError as ex:
            logger.error("Download error for {}: {}", self._source_name, ex)
            self.notice = "Download failed: could not generate the framed image"
            return ExportResult(filename=filename, error=str(ex))
        self.notice = "Download complete"
        return ExportResult(filename=filename, data=data)
