# journal_api/storage.py
"""
journal_api/storage.py

Key/value string storage for the client session, with the same semantics as
browser localStorage: get_item / set_item / remove_item on plain strings.

MemoryStorage is what every Streamlit browser session gets: one store per
visitor, like localStorage is per browser. JsonFileStorage keeps the entries
in a small JSON file for single-user command-line runs (tools/smoke_check.py).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class MemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


# ============================================================
# JSON file backend
# ============================================================

def _load_json(path: Path, default):
    if not path.exists():
        return default
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable session file %s: %s", path, e)
        return default
    if not isinstance(data, dict):
        logger.warning("Ignoring session file %s: expected a JSON object", path)
        return default
    return data


def _save_json(path: Path, obj) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2)


class JsonFileStorage:
    """A file belongs to one user. Never point two sessions at the same path."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def get_item(self, key: str) -> Optional[str]:
        value = _load_json(self.path, {}).get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        items = _load_json(self.path, {})
        items[key] = value
        _save_json(self.path, items)

    def remove_item(self, key: str) -> None:
        items = _load_json(self.path, {})
        if key in items:
            del items[key]
            _save_json(self.path, items)
