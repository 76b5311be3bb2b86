"""
Request/response surface used by the UI layer.

Nothing here raises to the caller: failures are logged and reported as False,
an empty list or an empty string. Calls are serialized so each vault mutation
completes its load-modify-save before the next one starts.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

from . import generator
from .clipboard import Clipboard, ClipboardClearScheduler
from .errors import PasscryptionError, ValidationError
from .settings import SettingsManager
from .storage import StorageManager

logger = logging.getLogger(__name__)


class PasscryptionAPI:
    """Vault operations exposed to the UI."""

    def __init__(self, store: StorageManager, settings: SettingsManager, clipboard: Clipboard,
                 scheduler: Optional[ClipboardClearScheduler] = None):
        self.store = store
        self.settings = settings
        self.clipboard = clipboard
        self.scheduler = scheduler or ClipboardClearScheduler(clipboard)
        self._lock = threading.Lock()

    def get_passwords(self) -> List[Dict[str, Any]]:
        with self._lock:
            try:
                return [r.to_dict() for r in self.store.load()]
            except PasscryptionError as e:
                logger.error(f"Could not load passwords: {e}")
                return []

    def search_passwords(self, term: str) -> List[Dict[str, Any]]:
        with self._lock:
            try:
                return [r.to_dict() for r in self.store.search(term)]
            except PasscryptionError as e:
                logger.error(f"Could not search passwords: {e}")
                return []

    def save_password(self, entry: Dict[str, Any]) -> bool:
        if not isinstance(entry, dict):
            logger.warning(f"Rejected new entry of type {type(entry).__name__}")
            return False
        with self._lock:
            try:
                self.store.create(entry)
            except ValidationError as e:
                logger.warning(f"Rejected new entry: {e}")
                return False
            except PasscryptionError as e:
                logger.error(f"Could not save entry: {e}")
                return False
            return True

    def update_password(self, entry: Dict[str, Any]) -> bool:
        if not isinstance(entry, dict):
            logger.warning(f"Rejected update of type {type(entry).__name__}")
            return False
        record_id = entry.get('id')
        if not record_id:
            logger.warning("Update requested without an id")
            return False
        changes = {k: v for k, v in entry.items() if k != 'id'}
        with self._lock:
            try:
                return self.store.update(record_id, changes)
            except ValidationError as e:
                logger.warning(f"Rejected update of {record_id}: {e}")
                return False
            except PasscryptionError as e:
                logger.error(f"Could not update entry {record_id}: {e}")
                return False

    def delete_password(self, record_id: str) -> bool:
        with self._lock:
            try:
                return self.store.delete(record_id)
            except PasscryptionError as e:
                logger.error(f"Could not delete entry {record_id}: {e}")
                return False

    def generate_password(self, options: Optional[Dict[str, Any]] = None) -> str:
        try:
            return generator.generate(generator.GeneratorConfig.from_options(options or {}))
        except PasscryptionError as e:
            logger.warning(f"Password generation rejected: {e}")
            return ""

    def copy_to_clipboard(self, text: str) -> bool:
        try:
            self.scheduler.copy(text, self.settings.get('clipboardClearTime', 0))
        except Exception as e:
            logger.error(f"Could not copy to clipboard: {e}", exc_info=True)
            return False
        return True

    def get_settings(self) -> Dict[str, Any]:
        return self.settings.load()

    def save_settings(self, settings: Dict[str, Any]) -> bool:
        return self.settings.save(settings)
