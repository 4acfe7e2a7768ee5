"""
Preference storage for InstaFilter.

This module handles the persistence of small application preferences,
such as the filter usage counter, in a JSON key-value file.

Every write goes straight to disk so values survive a process restart.
A missing or unreadable file is treated as an empty store.

Classes:
    PreferenceStore: JSON-backed key-value store

Functions:
    get_preferences_dir: Get (and create) the preferences directory
    default_preferences_path: Path of the preferences file under a base dir
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from IF_Libs.constants import PREFERENCES_DIR_NAME, PREFERENCES_FILE_NAME

logger = logging.getLogger(__name__)


def get_preferences_dir(base_dir: Path) -> Path:
    preferences_dir = Path(base_dir) / PREFERENCES_DIR_NAME
    preferences_dir.mkdir(parents=True, exist_ok=True)
    return preferences_dir


def default_preferences_path(base_dir: Optional[Path] = None) -> Path:
    """
    Get the preferences file path.

    Args:
        base_dir: Directory holding the preferences folder (default: home dir)

    Returns:
        Path to the preferences JSON file
    """
    if base_dir is None:
        base_dir = Path.home()
    return get_preferences_dir(base_dir) / PREFERENCES_FILE_NAME


class PreferenceStore:
    """
    Key-value preferences persisted to a JSON file.

    Example:
        >>> store = PreferenceStore(default_preferences_path())
        >>> store.set("filterCount", 3)
        >>> store.get_int("filterCount")
        3
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._values: Dict[str, Any] = self._load()

    def _load(self) -> Dict[str, Any]:
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable preferences file {self.path}: {e}")
            return {}

        if not isinstance(payload, dict):
            logger.warning(f"Ignoring preferences file {self.path}: expected a JSON object")
            return {}

        return payload

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._values, indent=2, sort_keys=True), encoding="utf-8")

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(str(key), default)

    def get_int(self, key: str, default: int = 0) -> int:
        """
        Read a value as an integer.

        Returns:
            The stored value, or ``default`` if missing or not numeric
        """
        value = self._values.get(str(key))
        if value is None or isinstance(value, bool):
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def set(self, key: str, value: Any) -> None:
        """
        Store a JSON-serializable value and write the file.

        Raises:
            ValueError: If key is empty
            TypeError: If value is not JSON-serializable
        """
        key = str(key).strip()
        if not key:
            raise ValueError("key cannot be empty")
        json.dumps(value)

        self._values[key] = value
        self._save()

    def remove(self, key: str) -> bool:
        key = str(key)
        if key not in self._values:
            return False
        del self._values[key]
        self._save()
        return True

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._values)
