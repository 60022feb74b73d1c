"""Tests for the metadata record and frame option models."""

from dataclasses import FrozenInstanceError
from datetime import date

import pytest

from core.models import FRAME_CONFIGS, FrameOptions, FrameStyle, MetadataRecord


@pytest.fixture
def record() -> MetadataRecord:
    return MetadataRecord.default(date(2024, 3, 9))


class TestMetadataRecord:
    """Default record and editing."""

    def test_default_record(self, record):
        assert record.make == "Camera"
        assert record.model == "Model"
        assert record.lens == "50mm"
        assert record.focal_length == "50mm"
        assert record.aperture == "f/2.8"
        assert record.shutter == "1/125s"
        assert record.iso == "ISO400"
        assert record.date == "2024.03.09"
        assert record.settings == "50mm f/2.8 1/125s ISO400"
        assert record.photographer == ""
        assert record.location == ""

    def test_edit_exposure_field_rebuilds_settings(self, record):
        edited = record.edit("aperture", "f/1.8")
        assert edited.aperture == "f/1.8"
        assert edited.settings == "50mm f/1.8 1/125s ISO400"

    def test_edit_other_field_keeps_settings(self, record):
        edited = record.edit("make", "Leica").edit("location", "Lisbon")
        assert edited.make == "Leica"
        assert edited.location == "Lisbon"
        assert edited.settings == record.settings

    def test_settings_always_matches_exposure_fields(self, record):
        edited = record
        for name, value in [
            ("focal_length", "85mm"),
            ("shutter", "1/1000s"),
            ("iso", "ISO100"),
            ("model", "M11"),
        ]:
            edited = edited.edit(name, value)
            expected = f"{edited.focal_length} {edited.aperture} {edited.shutter} {edited.iso}"
            assert edited.settings == expected

    def test_edit_does_not_mutate_original(self, record):
        record.edit("iso", "ISO3200")
        assert record.iso == "ISO400"

    def test_settings_not_directly_editable(self, record):
        with pytest.raises(ValueError):
            record.edit("settings", "anything")

    def test_unknown_field(self, record):
        with pytest.raises(ValueError, match="Unknown metadata field"):
            record.edit("exposure_bias", "+1")

    def test_frozen(self, record):
        with pytest.raises(FrozenInstanceError):
            record.make = "Nikon"  # type: ignore[misc]

    def test_to_dict(self, record):
        data = record.to_dict()
        assert data["settings"] == record.settings
        assert set(data) >= {"make", "model", "lens", "date", "photographer", "location"}


class TestFrameOptions:
    """Logo switches and style catalog."""

    def test_wants_logo(self):
        assert not FrameOptions().wants_logo
        assert FrameOptions(brand_id="leica").wants_logo
        assert not FrameOptions(brand_id="leica", show_logo=False).wants_logo

    def test_every_style_has_a_config(self):
        assert {config.style for config in FRAME_CONFIGS} == set(FrameStyle)

    def test_style_from_string(self):
        assert FrameStyle("insta") is FrameStyle.INSTA
        with pytest.raises(ValueError):
            FrameStyle("polaroid")
