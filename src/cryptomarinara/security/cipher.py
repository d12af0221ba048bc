"""AES-256-GCM cipher bound to a single 32-byte key.

Ciphertext layout:
- 12 bytes: random nonce
- N bytes: AES-GCM ciphertext (same length as the plaintext)
- 16 bytes: GCM authentication tag

The layout is opaque to callers: whatever :meth:`Cipher.encrypt` produces,
:meth:`Cipher.decrypt` consumes. The key is held in a private buffer owned
by the instance; nothing is kept at module level.
"""
from __future__ import annotations

import logging
import os
from typing import Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..core.exceptions import (
    AuthenticationError,
    CipherWipedError,
    EncryptionError,
    KeyLengthError,
    KeystoreError,
)
from ..core.hexcodec import decode_hex, encode_hex
from .kdf import derive_key
from .keystore import assess_keyring_backend, load_key, save_key


KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16

logger = logging.getLogger(__name__)


def generate_key() -> bytes:
    return os.urandom(KEY_SIZE)


class Cipher:
    """
    Symmetric encrypt/decrypt helper around a single 256-bit key.

    Construct with :meth:`from_hex_string` or :meth:`from_bytes` (or
    :meth:`generate`, :meth:`from_password`, :meth:`from_keyring`). The key
    is copied into a buffer owned by the instance, so the caller may reuse
    or mutate its own buffer afterwards.

    Instances carry no state besides the key and are safe to share between
    threads. :meth:`wipe` zeroes the key; a wiped cipher refuses all
    operations.
    """

    def __init__(self, key: bytes):
        if isinstance(key, str):
            raise TypeError("key must be bytes-like, not str; use Cipher.from_hex_string for hex keys")
        if len(key) != KEY_SIZE:
            raise KeyLengthError(KEY_SIZE, len(key))
        self._key = bytearray(key)
        self._wiped = False

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_hex_string(cls, s: str) -> "Cipher":
        """Build a cipher from a 64-character hex key (either case)."""
        return cls(decode_hex(s))

    @classmethod
    def from_bytes(cls, b: bytes) -> "Cipher":
        """Build a cipher from a raw 32-byte key; the bytes are copied."""
        return cls(b)

    @classmethod
    def generate(cls) -> "Cipher":
        """Build a cipher over a fresh random key."""
        return cls(generate_key())

    @classmethod
    def from_password(cls, password: Union[bytes, str], salt: bytes, **kdf_params) -> "Cipher":
        """
        Build a cipher whose key is derived from ``password`` with Argon2id.

        ``kdf_params`` are passed to :func:`derive_key` (``time_cost``,
        ``memory_cost``, ``parallelism``). The caller is responsible for
        storing the salt and parameters for future derivations.
        """
        return cls(derive_key(password, salt, **kdf_params))

    @classmethod
    def from_keyring(cls, service: str, account: str) -> "Cipher":
        """Build a cipher from a key stored in the OS keystore."""
        key = load_key(service, account)
        if key is None:
            raise KeystoreError(f"no key found in OS keystore for {service}/{account}")
        logger.debug("loaded cipher key from keyring for %s/%s", service, account)
        return cls(key)

    # ------------------------------------------------------------------
    # Encryption
    # ------------------------------------------------------------------

    def encrypt(self, plaintext: bytes) -> bytes:
        """
        Encrypt ``plaintext`` and return ``nonce || ciphertext || tag``.

        A fresh random nonce is drawn per call, so encrypting the same
        plaintext twice yields different outputs.
        """
        aead = self._aead()
        try:
            nonce = os.urandom(NONCE_SIZE)
            sealed = aead.encrypt(nonce, plaintext, None)
        except (OSError, OverflowError) as e:
            raise EncryptionError(f"encryption failed: {e}") from e
        return nonce + sealed

    def encrypt_string(self, plaintext: str) -> bytes:
        # surrogatepass: any str is encodable, lone surrogates included
        return self.encrypt(plaintext.encode("utf-8", "surrogatepass"))

    def encrypt_to_hex_string(self, plaintext: Union[bytes, str]) -> str:
        """Encrypt and hex-encode; the inverse of :meth:`decrypt_hex_string`."""
        if isinstance(plaintext, str):
            return encode_hex(self.encrypt_string(plaintext))
        return encode_hex(self.encrypt(plaintext))

    # ------------------------------------------------------------------
    # Decryption
    # ------------------------------------------------------------------

    def decrypt(self, ciphertext: bytes) -> bytes:
        """
        Decrypt output of :meth:`encrypt`.

        Raises :class:`AuthenticationError` if the input is too short to
        hold a nonce or fails tag verification.
        """
        aead = self._aead()
        if len(ciphertext) < NONCE_SIZE:
            raise AuthenticationError("malformed ciphertext")

        nonce, sealed = ciphertext[:NONCE_SIZE], ciphertext[NONCE_SIZE:]
        try:
            return aead.decrypt(nonce, sealed, None)
        except InvalidTag as e:
            raise AuthenticationError("message authentication failed") from e

    def decrypt_hex_string(self, ciphertext: str) -> bytes:
        """Hex-decode ``ciphertext`` and decrypt it."""
        return self.decrypt(decode_hex(ciphertext))

    # ------------------------------------------------------------------
    # Key handling
    # ------------------------------------------------------------------

    def key_hex(self) -> str:
        """Return the key as lowercase hex, e.g. to persist a generated key."""
        self._require_key()
        return encode_hex(self._key)

    def save_to_keyring(self, service: str, account: str, force: bool = False) -> None:
        """
        Persist the key in the OS keystore under (service, account).

        Backends that look insecure (plaintext files and the like) are
        refused unless ``force`` is set.
        """
        self._require_key()
        if not force:
            secure, msg = assess_keyring_backend()
            if not secure:
                raise KeystoreError(
                    f"refusing to persist key to OS keystore: {msg}; "
                    "pass force=True to override if you understand the risk"
                )
        save_key(service, account, bytes(self._key))

    @property
    def wiped(self) -> bool:
        return self._wiped

    def wipe(self) -> None:
        """Zero the key buffer in place (best-effort) and disable the cipher."""
        for i in range(len(self._key)):
            self._key[i] = 0
        self._wiped = True
        logger.debug("cipher key wiped")

    def _require_key(self) -> None:
        if self._wiped:
            raise CipherWipedError("cipher key has been wiped")

    def _aead(self) -> AESGCM:
        self._require_key()
        return AESGCM(bytes(self._key))

    def __enter__(self) -> "Cipher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.wipe()

    def __repr__(self) -> str:
        return f"<Cipher aes-256-gcm wiped={self._wiped}>"
