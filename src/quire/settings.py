"""Engine settings with JSON file loading.

Files use camelCase keys::

    {"maxColumnWidth": 2, "keepTextBlocks": false, "restyleOnEdit": true}

Values set to ``null`` (or missing) fall back to the defaults.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from quire.errors import SettingsError
from quire.utils import MAX_COLUMN_WIDTH

logger = logging.getLogger(__name__)


def _settings_defaults() -> dict[str, Any]:
    """Default settings values."""
    return {
        "maxColumnWidth": MAX_COLUMN_WIDTH,
        "keepTextBlocks": False,
        "restyleOnEdit": True,
    }


# --- Deep merge ---


def deep_merge_settings(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge overrides into base settings.

    ``None`` overrides are skipped; nested dicts merge, anything else replaces.
    """
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge_settings(result[key], value)
        else:
            result[key] = value
    return result


def _load_from_file(path: str) -> tuple[dict[str, Any], Exception | None]:
    """Load settings from a JSON file. Returns (settings, error)."""
    if not os.path.exists(path):
        return {}, None
    try:
        content = Path(path).read_text(encoding="utf-8")
        settings = json.loads(content)
    except (OSError, json.JSONDecodeError) as e:
        return {}, e
    if not isinstance(settings, dict):
        return {}, SettingsError(f"{path}: expected a JSON object")
    return settings, None


# --- EngineSettings ---


@dataclass
class EngineSettings:
    """Tunables of the editing engine.

    ``max_column_width`` caps grapheme widths in normalized-column arithmetic;
    ``keep_text_blocks`` keeps non-table markdown blocks as text blocks;
    ``restyle_on_edit`` re-runs the style annotator after every edit.
    """

    max_column_width: int = MAX_COLUMN_WIDTH
    keep_text_blocks: bool = False
    restyle_on_edit: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.max_column_width, bool) or not isinstance(self.max_column_width, int):
            raise SettingsError(f"maxColumnWidth must be an integer, got {self.max_column_width!r}")
        if self.max_column_width < 1:
            raise SettingsError(f"maxColumnWidth must be at least 1, got {self.max_column_width}")

    # --- Factory methods ---

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EngineSettings:
        merged = deep_merge_settings(_settings_defaults(), data)
        return cls(
            max_column_width=merged["maxColumnWidth"],
            keep_text_blocks=bool(merged["keepTextBlocks"]),
            restyle_on_edit=bool(merged["restyleOnEdit"]),
        )

    @classmethod
    def in_memory(cls, settings: dict[str, Any] | None = None) -> EngineSettings:
        """Create settings from a camelCase dict, for tests and embedding."""
        return cls.from_dict(settings or {})

    @classmethod
    def load(cls, path: str, overrides: dict[str, Any] | None = None) -> tuple[EngineSettings, Exception | None]:
        """Load *path*, apply *overrides* on top, and report any load error.

        A missing file is not an error. An unreadable or malformed file is
        logged and the defaults are used in its place.
        """
        data, error = _load_from_file(path)
        if error is not None:
            logger.warning("failed to load settings from %s: %s", path, error)
        return cls.from_dict(deep_merge_settings(data, overrides or {})), error

    def to_dict(self) -> dict[str, Any]:
        return {
            "maxColumnWidth": self.max_column_width,
            "keepTextBlocks": self.keep_text_blocks,
            "restyleOnEdit": self.restyle_on_edit,
        }
