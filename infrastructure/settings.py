"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

DEFAULT_SETTINGS: dict[str, Any] = {
    "logging": {"dir": None, "level": "INFO"},
    "fonts": {
        "regular": "",
        "medium": "",
        "semibold": "",
        "bold": "",
        "serif": "",
        "serif_italic": "",
        "mono": "",
        "mono_bold": "",
    },
    "logo": {"fetch_timeout": 10},
}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access.

    Values from the file are layered over `DEFAULT_SETTINGS`, so a partial file
    (or no file at all) still answers every known key.
    """

    def __init__(self, settings_path: str | Path | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(DEFAULT_SETTINGS)
        self._path = Path(settings_path) if settings_path is not None else None
        if self._path is None:
            return
        if not self._path.exists():
            raise FileNotFoundError(f"settings.json not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as f:
            loaded = json.load(f)
        if isinstance(loaded, dict):
            _merge(self._data, loaded)

    @property
    def path(self) -> Path | None:
        return self._path

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node
