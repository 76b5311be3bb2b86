"""
Cryptographic operations for the vault.

The whole record set is encrypted as one AES-256-GCM message. The nonce and
tag travel with the ciphertext in a base64 text envelope so the vault file is
self-contained.
"""

import base64
import binascii
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from . import config
from .errors import DecryptionError


class CryptoManager:
    """Handles encryption and decryption of the vault payload."""

    MAGIC = config.VAULT_MAGIC
    KEY_SIZE = config.KEY_SIZE
    NONCE_SIZE = config.NONCE_SIZE
    TAG_SIZE = config.TAG_SIZE
    HEADER_SIZE = len(MAGIC) + NONCE_SIZE + TAG_SIZE

    def __init__(self):
        """Initialize the crypto manager."""
        self.backend = default_backend()

    def encrypt(self, plaintext: bytes, key: bytes) -> str:
        """
        Encrypt data using AES-256-GCM.

        Args:
            plaintext: Data to encrypt
            key: 32-byte encryption key

        Returns:
            Base64 text of MAGIC | nonce | tag | ciphertext
        """
        if len(key) != self.KEY_SIZE:
            raise ValueError(f"Key must be {self.KEY_SIZE} bytes, got {len(key)}")

        nonce = os.urandom(self.NONCE_SIZE)
        cipher = Cipher(
            algorithms.AES(key),
            modes.GCM(nonce),
            backend=self.backend
        )
        encryptor = cipher.encryptor()
        encryptor.authenticate_additional_data(self.MAGIC)
        ciphertext = encryptor.update(plaintext) + encryptor.finalize()
        envelope = self.MAGIC + nonce + encryptor.tag + ciphertext
        return base64.b64encode(envelope).decode('ascii')

    def decrypt(self, ciphertext: str, key: bytes) -> bytes:
        """
        Decrypt an envelope produced by encrypt().

        Args:
            ciphertext: Base64 envelope text
            key: 32-byte encryption key

        Returns:
            Decrypted plaintext

        Raises:
            DecryptionError: If the envelope is malformed, the key is wrong
                or the authentication tag does not verify
        """
        if len(key) != self.KEY_SIZE:
            raise DecryptionError(f"Key must be {self.KEY_SIZE} bytes, got {len(key)}")

        try:
            text = ciphertext.strip()
            envelope = base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError, AttributeError) as e:
            raise DecryptionError(f"Envelope is not valid base64: {e}") from e
        # Unused trailing bits would let two different texts decode alike
        if base64.b64encode(envelope).decode('ascii') != text:
            raise DecryptionError("Envelope is not canonical base64")

        if len(envelope) < self.HEADER_SIZE:
            raise DecryptionError(f"Envelope too short ({len(envelope)} bytes)")
        magic_end = len(self.MAGIC)
        nonce_end = magic_end + self.NONCE_SIZE
        if envelope[:magic_end] != self.MAGIC:
            raise DecryptionError("Envelope magic bytes mismatch")
        nonce = envelope[magic_end:nonce_end]
        tag = envelope[nonce_end:self.HEADER_SIZE]
        body = envelope[self.HEADER_SIZE:]

        cipher = Cipher(
            algorithms.AES(key),
            modes.GCM(nonce, tag),
            backend=self.backend
        )
        decryptor = cipher.decryptor()
        decryptor.authenticate_additional_data(self.MAGIC)
        try:
            return decryptor.update(body) + decryptor.finalize()
        except InvalidTag as e:
            raise DecryptionError("Authentication failed: wrong key or tampered data") from e


_default_manager = CryptoManager()


def encrypt(plaintext: bytes, key: bytes) -> str:
    return _default_manager.encrypt(plaintext, key)


def decrypt(ciphertext: str, key: bytes) -> bytes:
    return _default_manager.decrypt(ciphertext, key)
