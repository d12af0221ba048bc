"""
Unit tests for the keystore module.
"""

import base64
import pytest
from unittest.mock import MagicMock, patch

import keyring
from keyring.backends import fail
from keyring.errors import KeyringError, NoKeyringError, PasswordDeleteError

from cryptomarinara.core.exceptions import KeystoreError
from cryptomarinara.security import keystore


# ==============================================================================
# Fixtures
# ==============================================================================

@pytest.fixture
def mock_keyring_lib():
    """Patches the keyring module within cryptomarinara.security.keystore."""
    with patch("cryptomarinara.security.keystore.keyring", autospec=True) as mock_lib:
        yield mock_lib


def _backend(name, priority=1):
    backend = MagicMock()
    backend.__class__.__name__ = name
    backend.priority = priority
    return backend


# ==============================================================================
# Tests: save_key / load_key
# ==============================================================================

def test_save_key_encodes_and_stores(mock_keyring_lib):
    key_bytes = b"\x01\x02\x03\x04"

    keystore.save_key("cryptomarinara_test", "alice", key_bytes)

    mock_keyring_lib.set_password.assert_called_once_with(
        "cryptomarinara_test", "alice", base64.b64encode(key_bytes).decode("ascii")
    )


def test_save_key_wraps_backend_error(mock_keyring_lib):
    mock_keyring_lib.set_password.side_effect = KeyringError("locked")

    with pytest.raises(KeystoreError, match="failed to store key"):
        keystore.save_key("svc", "usr", b"key")


def test_load_key_returns_bytes(mock_keyring_lib):
    original_key = b"secret_bytes"
    mock_keyring_lib.get_password.return_value = base64.b64encode(original_key).decode("ascii")

    assert keystore.load_key("svc", "usr") == original_key
    mock_keyring_lib.get_password.assert_called_once_with("svc", "usr")


def test_load_key_returns_none_if_missing(mock_keyring_lib):
    mock_keyring_lib.get_password.return_value = None

    assert keystore.load_key("svc", "usr") is None


def test_load_key_raises_on_corrupt_data(mock_keyring_lib):
    mock_keyring_lib.get_password.return_value = "NotValidBase64!!!"

    with pytest.raises(KeystoreError, match="not valid base64"):
        keystore.load_key("svc", "usr")


def test_load_key_wraps_backend_error(mock_keyring_lib):
    mock_keyring_lib.get_password.side_effect = KeyringError("dbus down")

    with pytest.raises(KeystoreError, match="failed to read key"):
        keystore.load_key("svc", "usr")


# ==============================================================================
# Tests: delete_key
# ==============================================================================

def test_delete_key_calls_backend(mock_keyring_lib):
    assert keystore.delete_key("svc", "usr") is True
    mock_keyring_lib.delete_password.assert_called_once_with("svc", "usr")


def test_delete_key_missing_entry(mock_keyring_lib):
    mock_keyring_lib.delete_password.side_effect = PasswordDeleteError("not found")

    assert keystore.delete_key("svc", "usr") is False


# ==============================================================================
# Tests: assess_keyring_backend
# ==============================================================================

def test_assess_backend_handles_exception(mock_keyring_lib):
    mock_keyring_lib.get_keyring.side_effect = Exception("DBus error")

    is_secure, msg = keystore.assess_keyring_backend()
    assert is_secure is False
    assert "failed to get keyring backend" in msg


def test_assess_backend_insecure_names(mock_keyring_lib):
    mock_keyring_lib.get_keyring.return_value = _backend("SimplePlaintextKeyring")

    is_secure, msg = keystore.assess_keyring_backend()
    assert is_secure is False
    assert "insecure backend detected" in msg


def test_assess_backend_low_priority(mock_keyring_lib):
    mock_keyring_lib.get_keyring.return_value = _backend("SomeGenericBackend", priority=0)

    is_secure, msg = keystore.assess_keyring_backend()
    assert is_secure is False
    assert "no suitable secure keyring backend" in msg


@pytest.mark.parametrize(
    "name", ["KeychainKeyring", "WindowsWinVaultKeyring", "SecretServiceKeyring", "KWallet"]
)
def test_assess_backend_secure_names(mock_keyring_lib, name):
    mock_keyring_lib.get_keyring.return_value = _backend(name)

    is_secure, msg = keystore.assess_keyring_backend()
    assert is_secure is True
    assert "looks acceptable" in msg


def test_assess_backend_unknown_but_high_priority(mock_keyring_lib):
    mock_keyring_lib.get_keyring.return_value = _backend("SuperSecureHardwareKeyring", priority=5)

    is_secure, msg = keystore.assess_keyring_backend()
    assert is_secure is True
    assert "unknown backend" in msg


def test_delete_key_wraps_backend_error(mock_keyring_lib):
    mock_keyring_lib.delete_password.side_effect = NoKeyringError("no backend")

    with pytest.raises(KeystoreError, match="failed to delete key for svc/usr"):
        keystore.delete_key("svc", "usr")


def test_delete_key_with_fail_backend():
    """The real 'fail' backend raises NoKeyringError, surfaced as KeystoreError."""
    previous = keyring.get_keyring()
    keyring.set_keyring(fail.Keyring())
    try:
        with pytest.raises(KeystoreError):
            keystore.delete_key("svc", "acct")
    finally:
        keyring.set_keyring(previous)
