"""Security helpers: the AES-GCM cipher, key derivation and keystore access.

This package provides:
- the Cipher wrapper around AES-256-GCM (nonce || ciphertext || tag)
- random key generation
- Argon2id-based key derivation from passwords
- optional OS keystore persistence via keyring
"""

from .kdf import generate_salt, derive_key, kdf_params_to_dict, kdf_params_from_dict
from .cipher import Cipher, generate_key, KEY_SIZE, NONCE_SIZE, TAG_SIZE
from .keystore import save_key, load_key, delete_key, assess_keyring_backend

__all__ = [
    "Cipher",
    "generate_key",
    "KEY_SIZE",
    "NONCE_SIZE",
    "TAG_SIZE",
    "generate_salt",
    "derive_key",
    "kdf_params_to_dict",
    "kdf_params_from_dict",
    "save_key",
    "load_key",
    "delete_key",
    "assess_keyring_backend",
]
