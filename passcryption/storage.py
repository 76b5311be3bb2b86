"""
Encrypted storage of credential records.

The vault is a single file holding the AES-GCM encrypted JSON list of every
record. Every mutation loads the whole list, changes it and writes it back in
full. A StorageManager serializes its own calls, but two processes (or two
managers) pointed at the same file can still overwrite each other's changes;
the last save wins.
"""

import datetime
import filecmp
import json
import logging
import os
import shutil
import threading
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from . import config
from .crypto import CryptoManager
from .errors import DecryptionError, ParseError, PersistenceError, ValidationError
from .keys import KeyProvider, MachineKeyProvider
from .utils import atomic_write

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('site', 'password')
EDITABLE_FIELDS = ('site', 'username', 'email', 'password', 'notes')
PROTECTED_FIELDS = ('id', 'createdAt', 'updatedAt')


def _now() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


@dataclass
class CredentialRecord:
    """Represents a single credential entry."""
    id: str
    site: str
    password: str
    username: str = ""
    email: str = ""
    notes: str = ""
    created_at: str = ""
    updated_at: Optional[str] = None
    # Keys this version does not know about, kept so a save never drops them
    extras: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = dict(self.extras)
        data.update({
            'id': self.id,
            'site': self.site,
            'username': self.username,
            'email': self.email,
            'password': self.password,
            'notes': self.notes,
            'createdAt': self.created_at,
        })
        if self.updated_at is not None:
            data['updatedAt'] = self.updated_at
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CredentialRecord':
        """
        Create from dictionary.

        Raises:
            ParseError: If the entry is not an object or has no string id
        """
        if not isinstance(data, dict):
            raise ParseError(f"Record must be an object, got {type(data).__name__}")
        if not isinstance(data.get('id'), str) or not data['id']:
            raise ParseError("Record has no id")
        known = set(EDITABLE_FIELDS) | set(PROTECTED_FIELDS)
        return cls(
            id=data['id'],
            site=str(data.get('site') or ""),
            password=str(data.get('password') or ""),
            username=str(data.get('username') or ""),
            email=str(data.get('email') or ""),
            notes=str(data.get('notes') or ""),
            created_at=str(data.get('createdAt') or ""),
            updated_at=data.get('updatedAt'),
            extras={k: v for k, v in data.items() if k not in known},
        )


def serialize_records(records: List[CredentialRecord]) -> bytes:
    return json.dumps([r.to_dict() for r in records]).encode('utf-8')


def parse_records(plaintext: bytes) -> List[CredentialRecord]:
    """Parse decrypted vault content into records, raising ParseError on any mismatch."""
    try:
        data = json.loads(plaintext.decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ParseError(f"Vault content is not JSON: {e}") from e
    if not isinstance(data, list):
        raise ParseError(f"Vault content must be a list, got {type(data).__name__}")
    records = [CredentialRecord.from_dict(item) for item in data]

    seen = set()
    for record in records:
        if record.id in seen:
            logger.warning(f"Duplicate record id {record.id} in vault; updates will only reach the first one")
        seen.add(record.id)
    return records


class VaultFile:
    """File backend holding the encrypted vault text."""

    def __init__(self, filepath: str):
        self.filepath = filepath

    def exists(self) -> bool:
        return os.path.exists(self.filepath)

    def read_text(self) -> str:
        with open(self.filepath, 'r', encoding='utf-8') as f:
            return f.read()

    def write_text(self, text: str) -> None:
        with atomic_write(self.filepath) as f:
            f.write(text)

    def quarantine(self) -> Optional[str]:
        """
        Copy the current file aside so a later save cannot destroy it.

        Copies go to <vault>.corrupt, then <vault>.corrupt.1, .2 and so on;
        earlier copies are never overwritten. If one of them already holds the
        same bytes, that copy is reused.
        """
        base = self.filepath + config.CORRUPT_SUFFIX
        target = base
        counter = 0
        try:
            while os.path.exists(target):
                if filecmp.cmp(self.filepath, target, shallow=False):
                    return target
                counter += 1
                target = f"{base}.{counter}"
            shutil.copy2(self.filepath, target)
        except OSError as e:
            logger.error(f"Could not set aside unreadable vault {self.filepath}: {e}")
            return None
        return target

    def __repr__(self) -> str:
        return f"VaultFile({self.filepath!r})"


class StorageManager:
    """Manages encrypted storage of credential records."""

    def __init__(self, backend: VaultFile, key_provider: Optional[KeyProvider] = None,
                 crypto: Optional[CryptoManager] = None):
        """
        Initialize storage manager.

        Args:
            backend: Persistence collaborator for the encrypted vault text
            key_provider: Source of the encryption key, machine-derived by default
            crypto: Cipher implementation
        """
        self.backend = backend
        self.key_provider = key_provider or MachineKeyProvider()
        self.crypto = crypto or CryptoManager()
        self._lock = threading.RLock()

    def load(self) -> List[CredentialRecord]:
        """
        Read every record from the vault.

        Returns:
            The stored records, or an empty list if the vault is missing or unreadable
        """
        with self._lock:
            if not self.backend.exists():
                return []
            try:
                text = self.backend.read_text()
                plaintext = self.crypto.decrypt(text, self.key_provider.get_key())
                return parse_records(plaintext)
            except (DecryptionError, ParseError, OSError, UnicodeDecodeError) as e:
                logger.error(f"Vault {self.backend!r} is unreadable, treating it as empty: {e}")
                copy = self.backend.quarantine()
                if copy:
                    logger.warning(f"Unreadable vault copied to {copy}")
                return []

    def save(self, records: List[CredentialRecord]) -> bool:
        """
        Encrypt and atomically write the full record list.

        Returns:
            True if saved, False if encryption or writing failed
        """
        with self._lock:
            try:
                text = self.crypto.encrypt(serialize_records(records), self.key_provider.get_key())
                self.backend.write_text(text)
            except Exception as e:
                logger.error(f"Error saving vault {self.backend!r}: {e}", exc_info=True)
                return False
            return True

    def create(self, entry: Dict[str, Any]) -> CredentialRecord:
        """
        Add a new record.

        Args:
            entry: Field values; "site" and "password" are required

        Raises:
            ValidationError: If a required field is missing or blank
            PersistenceError: If the vault could not be saved
        """
        missing = [name for name in REQUIRED_FIELDS if _is_blank(entry.get(name))]
        if missing:
            raise ValidationError(f"Missing required field(s): {', '.join(missing)}")

        with self._lock:
            records = self.load()
            record = CredentialRecord(
                id=str(uuid.uuid4()),
                site=entry['site'],
                password=entry['password'],
                username=entry.get('username') or "",
                email=entry.get('email') or "",
                notes=entry.get('notes') or "",
                created_at=_now(),
                extras={k: v for k, v in entry.items()
                        if k not in EDITABLE_FIELDS and k not in PROTECTED_FIELDS},
            )
            records.append(record)
            if not self.save(records):
                raise PersistenceError(f"Could not save vault {self.backend!r}")
            logger.info(f"Created record {record.id}")
            return record

    def update(self, record_id: str, entry: Dict[str, Any]) -> bool:
        """
        Shallow-merge new field values into an existing record.

        Returns:
            False if no record has this id or the save failed

        Raises:
            ValidationError: If the update would blank "site" or "password"
        """
        for name in REQUIRED_FIELDS:
            if name in entry and _is_blank(entry[name]):
                raise ValidationError(f"Field '{name}' cannot be empty")

        with self._lock:
            records = self.load()
            for record in records:
                if record.id == record_id:
                    break
            else:
                logger.info(f"Update skipped, no record {record_id}")
                return False

            for key, value in entry.items():
                if key in PROTECTED_FIELDS:
                    continue
                if key in EDITABLE_FIELDS:
                    setattr(record, key, "" if value is None else str(value))
                else:
                    record.extras[key] = value
            record.updated_at = _now()
            return self.save(records)

    def delete(self, record_id: str) -> bool:
        """Remove a record. Deleting an unknown id still rewrites the vault and succeeds."""
        with self._lock:
            records = self.load()
            remaining = [r for r in records if r.id != record_id]
            if len(remaining) == len(records):
                logger.info(f"Delete found no record {record_id}")
            return self.save(remaining)

    def get(self, record_id: str) -> Optional[CredentialRecord]:
        for record in self.load():
            if record.id == record_id:
                return record
        return None

    def search(self, term: str) -> List[CredentialRecord]:
        """Case-insensitive match of term against site, username and email."""
        records = self.load()
        needle = (term or "").strip().lower()
        if not needle:
            return records
        return [
            r for r in records
            if needle in r.site.lower() or needle in r.username.lower() or needle in r.email.lower()
        ]

    def create_backup(self, destination: str) -> bool:
        """Copy the encrypted vault file to destination."""
        with self._lock:
            if not self.backend.exists():
                logger.warning("No vault file to back up")
                return False
            try:
                shutil.copy2(self.backend.filepath, destination)
            except OSError as e:
                logger.error(f"Failed to create backup at {destination}: {e}")
                return False
            logger.info(f"Vault backed up to {destination}")
            return True
