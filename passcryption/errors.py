"""
Exception types raised by the vault core.

Only ValidationError and PersistenceError normally reach a caller of the
record store; the others are raised by the lower layers and recovered from
before they leave the core.
"""


class PasscryptionError(Exception):
    """Base class for every error raised by the vault core."""


class ValidationError(PasscryptionError):
    """A credential record is missing a required field."""


class DecryptionError(PasscryptionError):
    """Ciphertext is malformed, was produced under another key, or was tampered with."""


class ParseError(PasscryptionError):
    """Decrypted vault content is not a valid record list."""


class PersistenceError(PasscryptionError):
    """The vault could not be written to disk."""


class InvalidConfigError(PasscryptionError):
    """A password generator configuration cannot produce a password."""


class KeyDerivationError(PasscryptionError):
    """The machine identifiers needed to derive the vault key are unavailable."""
