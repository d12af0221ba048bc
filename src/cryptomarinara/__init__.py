"""cryptomarinara: a small AES-256-GCM helper bound to a single 32-byte key.

Usage::

    from cryptomarinara import Cipher

    cipher = Cipher.from_hex_string(key_hex)
    blob = cipher.encrypt_string("secret")
    assert cipher.decrypt(blob) == b"secret"
"""

from .core.exceptions import (
    CryptoMarinaraError,
    DecodeError,
    KeyLengthError,
    EncryptionError,
    AuthenticationError,
    CipherWipedError,
    KeystoreError,
    ConfigurationError,
)
from .core.hexcodec import decode_hex, encode_hex
from .core.logging_config import configure_logging, set_package_log_level
from .security import Cipher, generate_key, derive_key, generate_salt, KEY_SIZE
from .config import Settings, load_settings, cipher_from_env

__version__ = "0.1.0"

__all__ = [
    "Cipher",
    "generate_key",
    "derive_key",
    "generate_salt",
    "KEY_SIZE",
    "decode_hex",
    "encode_hex",
    "configure_logging",
    "set_package_log_level",
    "Settings",
    "load_settings",
    "cipher_from_env",
    "CryptoMarinaraError",
    "DecodeError",
    "KeyLengthError",
    "EncryptionError",
    "AuthenticationError",
    "CipherWipedError",
    "KeystoreError",
    "ConfigurationError",
]
