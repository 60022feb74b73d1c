"""Tests for EXIF value conversion and display formatting."""

import pytest

from infrastructure.utils import (
    apex_to_exposure_time,
    apex_to_f_number,
    clean_lens_model,
    format_aperture,
    format_date,
    format_focal_length,
    format_iso,
    format_lens_specification,
    format_shutter_speed,
    framed_filename,
    to_float,
    to_text,
)


class TestFormatting:
    """Display formatting of numeric EXIF values."""

    @pytest.mark.parametrize(
        "value,expected",
        [(1, "1s"), (2.4, "2s"), (2.5, "3s"), (0.004, "1/250s"), (0.00826, "1/121s")],
    )
    def test_shutter_speed(self, value, expected):
        assert format_shutter_speed(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [(2.8, "f/2.8"), (4.0, "f/4"), (1.4, "f/1.4"), (16, "f/16"), (5.6, "f/5.6")],
    )
    def test_aperture(self, value, expected):
        assert format_aperture(value) == expected

    def test_focal_length_rounds_to_nearest(self):
        assert format_focal_length(35.4) == "35mm"
        assert format_focal_length(35.5) == "36mm"

    def test_iso(self):
        assert format_iso(160) == "ISO160"
        assert format_iso(99.6) == "ISO100"

    def test_apex_conversions(self):
        assert apex_to_exposure_time(8) == pytest.approx(1 / 256)
        assert format_aperture(apex_to_f_number(3)) == "f/2.8"


class TestFormatDate:
    """Date normalization to YYYY.MM.DD."""

    def test_exif_format(self):
        assert format_date("2023:09:19 14:30:00") == "2023.09.19"

    def test_iso_format(self):
        assert format_date("2024-01-05") == "2024.01.05"

    def test_unknown_format_passes_through(self):
        assert format_date("19/09/2023") == "19/09/2023"

    def test_empty(self):
        assert format_date("") == ""


class TestCleanLensModel:
    """Lens name cleanup."""

    def test_strips_make_prefix(self):
        assert clean_lens_model("Sony FE 35mm F1.4 GM", "Sony") == "FE 35mm F1.4 GM"

    def test_strips_uppercase_make_prefix(self):
        assert clean_lens_model("SONY FE 35mm F1.4 GM", "Sony") == "FE 35mm F1.4 GM"

    def test_long_name_shortened_to_focal_and_aperture(self):
        lens = "Sony FE 24-70mm F2.8 GM II OSS Lens"
        assert clean_lens_model(lens, "Sony") == "24-70mm f/2.8"

    def test_mount_letter_is_not_taken_as_aperture(self):
        lens = "Canon EF 24-70mm f/2.8L II USM Lens"
        assert clean_lens_model(lens, "Canon") == "24-70mm f/2.8"

    def test_long_name_without_focal_is_kept(self):
        lens = "Some Very Long Vintage Manual Lens Name"
        assert clean_lens_model(lens, "Sony") == lens

    def test_long_name_without_aperture(self):
        lens = "Zoom Lens 18-135mm Image Stabilized"
        assert clean_lens_model(lens, "Canon") == "18-135mm"

    def test_empty(self):
        assert clean_lens_model("", "Sony") == ""


class TestConversions:
    """Raw tag value conversion."""

    def test_to_float(self):
        assert to_float("1/250") == pytest.approx(0.004)
        assert to_float(b"12") == 12.0
        assert to_float((100, 200)) == 100.0
        assert to_float("35 mm") == 35.0
        assert to_float(None) is None
        assert to_float("abc") is None
        assert to_float(float("nan")) is None

    def test_to_text(self):
        assert to_text(b"Sony\x00\x00 ") == "Sony"
        assert to_text(None) == ""

    def test_lens_specification(self):
        assert format_lens_specification((24.0, 70.0, 2.8, 2.8)) == "24-70mm f/2.8"
        assert format_lens_specification((35.0, 35.0, 1.4, 1.4)) == "35mm f/1.4"
        assert format_lens_specification((18.0, 55.0, 3.5, 5.6)) == "18-55mm f/3.5-5.6"
        assert format_lens_specification((0.0, 0.0, 0.0, 0.0)) == ""


class TestFramedFilename:
    """Download file naming."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("IMG_0001.HEIC", "IMG_0001_framed.jpg"),
            ("my.photo.jpeg", "my.photo_framed.jpg"),
            ("scan", "scan_framed.jpg"),
        ],
    )
    def test_framed_filename(self, name, expected):
        assert framed_filename(name) == expected
