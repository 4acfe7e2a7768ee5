"""
PrefStoreLib - Preference storage

This module persists application preferences, such as the filter usage
counter, across restarts.
"""

from IF_Libs.PrefStoreLib.preference_store import (
    PreferenceStore,
    default_preferences_path,
    get_preferences_dir,
)

__all__ = [
    "PreferenceStore",
    "default_preferences_path",
    "get_preferences_dir",
]
