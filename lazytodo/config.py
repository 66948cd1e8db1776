"""Persistent JSON config helpers.

Stores the preferred view mode, extra excluded directory names, and the
preview highlight style. All access is defensive: malformed or missing config
falls back safely. The TODO index itself is never persisted.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .view_model import DEFAULT_VIEW_MODE, VIEW_MODES

APP_NAME = "lazytodo"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON, ignoring write failures."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def load_view_mode() -> str:
    value = load_config().get("view_mode")
    return value if isinstance(value, str) and value in VIEW_MODES else DEFAULT_VIEW_MODE


def save_view_mode(mode: str) -> None:
    if mode not in VIEW_MODES:
        return
    config = load_config()
    config["view_mode"] = mode
    save_config(config)


def load_extra_excludes() -> tuple[str, ...]:
    """Load extra directory names to prune; non-string or blank entries are dropped."""
    value = load_config().get("exclude_dirs")
    if not isinstance(value, list):
        return ()
    names: list[str] = []
    for item in value:
        if not isinstance(item, str):
            continue
        stripped = item.strip().strip("/")
        if stripped and stripped not in names:
            names.append(stripped)
    return tuple(names)


def load_style() -> str | None:
    """Load persisted pygments style name, returning ``None`` when unset/invalid."""
    value = load_config().get("style")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None
