"""Tests for settings, logging, fonts and service wiring."""

import json

from PIL import ImageFont
from loguru import logger
import pytest

from app.bootstrap import create_main_vm
from app.viewmodels.main_vm import MainVM
from infrastructure.fonts import FontProvider
from infrastructure.logging import find_latest_log_file, init_logging
from infrastructure.settings import JsonSettings


def write_settings(path, data: dict) -> str:
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestJsonSettings:
    """Dotted-key settings over built-in defaults."""

    def test_defaults_without_file(self):
        settings = JsonSettings()
        assert settings.path is None
        assert settings.get("logging.level") == "INFO"
        assert settings.get("logo.fetch_timeout") == 10

    def test_file_overrides_are_merged(self, tmp_path):
        path = write_settings(tmp_path / "settings.json", {"logging": {"level": "DEBUG"}})
        settings = JsonSettings(path)

        assert settings.get("logging.level") == "DEBUG"
        assert settings.get("logging.dir") is None
        assert settings.get("fonts.regular") == ""

    def test_missing_key_default(self):
        assert JsonSettings().get("fonts.display", "fallback") == "fallback"
        assert JsonSettings().get("logging.level.extra") is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            JsonSettings(tmp_path / "nope.json")


class TestLogging:
    """Rotating file sink setup."""

    def test_init_logging_creates_log_file(self, tmp_path, restore_logger):
        log_dir = init_logging(str(tmp_path / "logs"), "debug")
        logger.info("hello")
        logger.complete()

        assert log_dir.is_dir()
        latest = find_latest_log_file(str(log_dir))
        assert latest is not None
        assert latest.name.startswith("app_")

    def test_find_latest_in_missing_dir(self, tmp_path):
        assert find_latest_log_file(str(tmp_path / "missing")) is None


class TestFontProvider:
    """Font role resolution."""

    def test_fallback_to_default_font(self):
        font = FontProvider().get("serif_italic", 24)
        assert isinstance(font, (ImageFont.FreeTypeFont, ImageFont.ImageFont))
        assert font.getlength("Leica") > 0

    def test_cache(self):
        fonts = FontProvider()
        assert fonts.get("mono", 12) is fonts.get("mono", 12)
        assert fonts.get("mono", 12) is not fonts.get("mono", 13)

    def test_missing_font_file_falls_back(self, tmp_path):
        path = write_settings(
            tmp_path / "settings.json", {"fonts": {"bold": str(tmp_path / "missing.ttf")}}
        )
        font = FontProvider(JsonSettings(path)).get("bold", 16)
        assert font.getlength("SONY") > 0

    def test_size_is_at_least_one(self):
        fonts = FontProvider()
        assert fonts.get("regular", 0) is fonts.get("regular", 1)


class TestBootstrap:
    """Service wiring from a settings file."""

    def test_create_main_vm(self, tmp_path, restore_logger):
        path = write_settings(
            tmp_path / "settings.json",
            {"logging": {"dir": str(tmp_path / "logs"), "level": "INFO"}},
        )
        vm = create_main_vm(path)

        assert isinstance(vm, MainVM)
        assert not vm.has_photo
        assert (tmp_path / "logs").is_dir()
