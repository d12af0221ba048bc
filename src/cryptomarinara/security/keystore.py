"""OS keystore integration using keyring for optional cipher key storage.

Keys are stored base64-encoded under a service/account pair. Use this only
for opt-in convenience storage; do not assume keyring provides
hardware-backed security on all platforms.
"""
import base64
import binascii
import logging
from typing import Optional, Tuple

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from ..core.exceptions import KeystoreError


logger = logging.getLogger(__name__)

INSECURE_BACKEND_MARKERS = ("Plaintext", "Uncrypted", "Simple", "File")
KNOWN_BACKEND_MARKERS = ("Win", "Keychain", "SecretService", "KWallet")


def save_key(service: str, account: str, key_bytes: bytes) -> None:
    """Persist ``key_bytes`` in the OS keystore under (service, account)."""
    secret = base64.b64encode(bytes(key_bytes)).decode("ascii")
    try:
        keyring.set_password(service, account, secret)
    except KeyringError as e:
        raise KeystoreError(f"failed to store key for {service}/{account}: {e}") from e
    logger.debug("stored key in keyring for %s/%s", service, account)


def load_key(service: str, account: str) -> Optional[bytes]:
    """Load a key from the OS keystore; returns raw bytes or None when absent.

    A stored value that is not valid base64 raises :class:`KeystoreError`.
    """
    try:
        secret = keyring.get_password(service, account)
    except KeyringError as e:
        raise KeystoreError(f"failed to read key for {service}/{account}: {e}") from e
    if secret is None:
        return None
    try:
        return base64.b64decode(secret, validate=True)
    except binascii.Error as e:
        raise KeystoreError(f"stored key for {service}/{account} is not valid base64") from e


def delete_key(service: str, account: str) -> bool:
    """Remove the key from the OS keystore. Returns False if nothing was stored."""
    try:
        keyring.delete_password(service, account)
    except PasswordDeleteError:
        logger.debug("no key in keyring for %s/%s", service, account)
        return False
    except KeyringError as e:
        raise KeystoreError(f"failed to delete key for {service}/{account}: {e}") from e
    return True


def _classify_backend(name: str, priority: Optional[float]) -> Tuple[bool, str]:
    # order matters: a known platform name with priority <= 0 is still unusable
    if any(tok in name for tok in INSECURE_BACKEND_MARKERS):
        return False, f"insecure backend detected: {name}"
    if priority is not None and priority <= 0:
        return False, f"no suitable secure keyring backend available (priority={priority}, backend={name})"
    if any(tok in name for tok in KNOWN_BACKEND_MARKERS):
        return True, f"backend looks acceptable: {name} (priority={priority})"
    return True, f"unknown backend '{name}', treat with caution (priority={priority})"


def assess_keyring_backend() -> Tuple[bool, str]:
    """Return (is_secure, message) for the active keyring backend.

    Used by :meth:`Cipher.save_to_keyring` before writing key material.
    Name and priority heuristics only; a backend that cannot be resolved
    counts as insecure.
    """
    try:
        backend = keyring.get_keyring()
    except Exception as e:
        return False, f"failed to get keyring backend: {e}"
    return _classify_backend(backend.__class__.__name__, getattr(backend, "priority", None))
