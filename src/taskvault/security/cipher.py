"""
Field-level encryption for TaskVault
Encrypts single text fields with AES-256-GCM and serializes them as
hex(nonce):hex(tag):hex(ciphertext)
"""
import os
from dataclasses import dataclass

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..utils.errors import ConfigurationError, DecryptionError

NONCE_SIZE = 12
TAG_SIZE = 16
KEY_SIZE = 32
ENVELOPE_SEPARATOR = ":"


@dataclass(frozen=True)
class CipherKey:
    """Immutable 256-bit key for FieldCipher"""
    value: bytes

    def __post_init__(self) -> None:
        if len(self.value) != KEY_SIZE:
            raise ConfigurationError(f"Encryption key must be {KEY_SIZE} bytes, got {len(self.value)}")

    @classmethod
    def from_hex(cls, secret: str) -> "CipherKey":
        """Build a key from a 64-character hex string."""
        try:
            raw = bytes.fromhex(secret)
        except ValueError as e:
            raise ConfigurationError("Encryption key must be a hex string") from e
        return cls(raw)

    def __repr__(self) -> str:
        return "CipherKey(<redacted>)"


class FieldCipher:
    """
    Authenticated encryption for a single text field.

    A fresh random nonce is drawn for every call to encrypt(), so the same
    plaintext never produces the same envelope twice.
    """

    def __init__(self, key: CipherKey):
        self._aesgcm = AESGCM(key.value)

    def encrypt(self, plaintext: str) -> str:
        nonce = os.urandom(NONCE_SIZE)
        sealed = self._aesgcm.encrypt(nonce, plaintext.encode("utf-8"), None)
        # AESGCM appends the tag to the ciphertext
        ciphertext, tag = sealed[:-TAG_SIZE], sealed[-TAG_SIZE:]
        return ENVELOPE_SEPARATOR.join((nonce.hex(), tag.hex(), ciphertext.hex()))

    def decrypt(self, envelope: str) -> str:
        """
        Recover the plaintext of an envelope.

        Returns an empty string when the envelope is missing any of its three
        parts. Raises DecryptionError when the parts are present but the tag
        does not verify or the hex is malformed.
        """
        parts = envelope.split(ENVELOPE_SEPARATOR) if envelope else []
        if len(parts) < 3 or not all(parts[:3]):
            return ""
        nonce_hex, tag_hex, ciphertext_hex = parts[:3]

        try:
            nonce = bytes.fromhex(nonce_hex)
            tag = bytes.fromhex(tag_hex)
            ciphertext = bytes.fromhex(ciphertext_hex)
            plaintext = self._aesgcm.decrypt(nonce, ciphertext + tag, None)
            return plaintext.decode("utf-8")
        except (InvalidTag, ValueError) as e:
            raise DecryptionError() from e
