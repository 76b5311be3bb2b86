"""
Plain JSON settings document, kept apart from the encrypted vault.
"""

import json
import logging
import os
from typing import Any, Dict

from . import config
from .utils import atomic_write

logger = logging.getLogger(__name__)


def _normalize(settings: Dict[str, Any]) -> Dict[str, Any]:
    result = dict(config.DEFAULT_SETTINGS)
    result.update(settings)

    if result.get('theme') not in config.THEMES:
        result['theme'] = config.DEFAULT_THEME

    clear_time = result.get('clipboardClearTime')
    try:
        clear_time = int(clear_time)
    except (TypeError, ValueError, OverflowError):
        clear_time = config.CLIPBOARD_CLEAR_TIME_DEFAULT_SECONDS
    result['clipboardClearTime'] = max(clear_time, 0)
    return result


class SettingsManager:
    """Reads and writes the settings document as a whole."""

    def __init__(self, filepath: str):
        self.filepath = filepath

    def load(self) -> Dict[str, Any]:
        """
        Load settings merged over the defaults.
        Falls back to the defaults if the file is missing or unreadable.
        """
        if not os.path.exists(self.filepath):
            return dict(config.DEFAULT_SETTINGS)
        try:
            with open(self.filepath, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading settings {self.filepath}: {e}")
            return dict(config.DEFAULT_SETTINGS)
        if not isinstance(data, dict):
            logger.error(f"Settings file {self.filepath} does not hold an object")
            return dict(config.DEFAULT_SETTINGS)
        return _normalize(data)

    def save(self, settings: Dict[str, Any]) -> bool:
        try:
            with atomic_write(self.filepath) as f:
                json.dump(_normalize(settings), f, indent=2)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving settings {self.filepath}: {e}")
            return False
        return True

    def get(self, key: str, default: Any = None) -> Any:
        return self.load().get(key, default)
