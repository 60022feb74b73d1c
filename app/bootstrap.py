"""Wire settings, logging and services into a ready-to-use session."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from app.viewmodels.main_vm import MainVM
from infrastructure.compositor import FrameCompositor
from infrastructure.exif_reader import MetadataExtractor
from infrastructure.fonts import FontProvider
from infrastructure.logging import init_logging
from infrastructure.settings import JsonSettings

BASE_DIR = Path(__file__).resolve().parent.parent


def create_main_vm(settings_path: str | Path | None = None) -> MainVM:
    """Build a `MainVM` from ``settings.json`` (repo root by default)."""
    if settings_path is None:
        default_path = BASE_DIR / "settings.json"
        settings_path = default_path if default_path.exists() else None
    settings = JsonSettings(settings_path)
    log_dir = init_logging(settings.get("logging.dir"), settings.get("logging.level", "INFO"))
    logger.info("Settings: {} | logs: {}", settings.path or "<defaults>", log_dir)

    fonts = FontProvider(settings)
    compositor = FrameCompositor(fonts=fonts, settings=settings)
    return MainVM(MetadataExtractor(), compositor)
