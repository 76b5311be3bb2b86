"""
Vault key derivation.

The key is derived from machine identifiers rather than a master password.
Anything able to read the host name and user name of this account can rebuild
it, so it only protects the vault file once copied off the machine. Other key
sources can be plugged in by implementing KeyProvider.
"""

import getpass
import socket

from cryptography.hazmat.primitives import hashes

from . import config
from .errors import KeyDerivationError


def _machine_identifier() -> str:
    try:
        host = socket.gethostname()
        user = getpass.getuser()
    except (OSError, KeyError) as e:
        raise KeyDerivationError(f"Cannot read machine identifiers: {e}") from e
    if not host or not user:
        raise KeyDerivationError("Host name or user name is empty")
    return f"{host}-{user}-{config.KEY_LABEL}"


def derive_key() -> bytes:
    """
    Derive the vault key from the host name, the user name and the app label.

    Returns:
        32-byte key (SHA-256 digest of the combined identifier)

    Raises:
        KeyDerivationError: If the identifiers cannot be obtained
    """
    digest = hashes.Hash(hashes.SHA256())
    digest.update(_machine_identifier().encode('utf-8'))
    return digest.finalize()


class KeyProvider:
    """Source of the key the record store encrypts with."""

    def get_key(self) -> bytes:
        raise NotImplementedError


class MachineKeyProvider(KeyProvider):
    """Derives the key from local machine identifiers on every call."""

    def get_key(self) -> bytes:
        return derive_key()


class StaticKeyProvider(KeyProvider):
    """Hands out a fixed key."""

    def __init__(self, key: bytes):
        if len(key) != config.KEY_SIZE:
            raise ValueError(f"Key must be {config.KEY_SIZE} bytes, got {len(key)}")
        self._key = bytes(key)

    def get_key(self) -> bytes:
        return self._key

    def __repr__(self) -> str:
        return "StaticKeyProvider(key=<hidden>)"
