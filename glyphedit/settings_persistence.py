"""Settings persistence for per-document editor state.

Each document remembers where the cursor was when it was last saved, so
reopening it puts the cursor back in the same place. Settings are stored in
an OS-appropriate location and survive application restarts.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .position import Location

logger = logging.getLogger(__name__)

LINE_INDEX = "line_index"
GRAPHEME_INDEX = "grapheme_index"


class SettingsPersistence:
    """Manages persistent storage of per-document settings.

    Settings are stored in a JSON file in the user's config directory,
    indexed by the absolute path of the document being edited.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = config_dir or Path(platformdirs.user_config_dir("glyphedit"))
        self._settings_file = self._config_dir / "settings.json"
        self._settings_cache: Optional[Dict[str, Dict[str, Any]]] = None

    def _ensure_config_dir(self) -> None:
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def _load_all_settings(self) -> Dict[str, Dict[str, Any]]:
        """Load all settings from disk, or an empty dict if there are none."""
        if self._settings_cache is not None:
            return self._settings_cache

        if not self._settings_file.exists():
            self._settings_cache = {}
            return self._settings_cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            self._settings_cache = {}
            return self._settings_cache

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}
        self._settings_cache = data
        return self._settings_cache

    def _save_all_settings(self, settings: Dict[str, Dict[str, Any]]) -> bool:
        """Save all settings to disk atomically (temp file + rename)."""
        self._ensure_config_dir()
        temp_file = self._settings_file.with_suffix('.tmp')

        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            temp_file.replace(self._settings_file)
            self._settings_cache = settings
            return True
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

    def load_settings(self, document_path: Optional[str]) -> Dict[str, Any]:
        """Load settings for a specific document.

        Returns:
            Dictionary of settings for the document. Empty dict if no settings
            exist or document_path is None.
        """
        if document_path is None:
            return {}

        abs_path = os.path.abspath(document_path)
        doc_settings = self._load_all_settings().get(abs_path, {})
        if not isinstance(doc_settings, dict):
            logger.warning(f"Settings for {abs_path} are not a dict, ignoring")
            return {}
        return {
            key: value for key, value in doc_settings.items()
            if self.validate_setting(key, value)
        }

    def save_settings(self, document_path: Optional[str], settings: Dict[str, Any]) -> bool:
        """Save settings for a specific document.

        Returns:
            True if save was successful, False otherwise.
        """
        if document_path is None:
            return False

        abs_path = os.path.abspath(document_path)
        all_settings = dict(self._load_all_settings())
        all_settings[abs_path] = settings
        return self._save_all_settings(all_settings)

    def validate_setting(self, key: str, value: Any) -> bool:
        if key in (LINE_INDEX, GRAPHEME_INDEX):
            # bool is an int subclass but never a valid index
            return isinstance(value, int) and not isinstance(value, bool) and value >= 0
        # Unknown settings are considered valid (forward compatibility)
        return True

    def load_location(self, document_path: Optional[str]) -> Optional[Location]:
        """Return the remembered cursor location for a document, if any."""
        settings = self.load_settings(document_path)
        if LINE_INDEX not in settings or GRAPHEME_INDEX not in settings:
            return None
        return Location(settings[LINE_INDEX], settings[GRAPHEME_INDEX])

    def save_location(self, document_path: Optional[str], location: Location) -> bool:
        settings = self.load_settings(document_path)
        settings[LINE_INDEX] = location.line_index
        settings[GRAPHEME_INDEX] = location.grapheme_index
        return self.save_settings(document_path, settings)

    def clear_cache(self) -> None:
        """Clear the in-memory cache of settings."""
        self._settings_cache = None


# Global instance
_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Get the global settings persistence instance."""
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
