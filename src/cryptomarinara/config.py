"""Environment-driven configuration for building a Cipher.

Recognised variables:

- ``CRYPTOMARINARA_KEY_HEX``: the 256-bit key as 64 hex characters
- ``CRYPTOMARINARA_KEYRING_SERVICE`` / ``CRYPTOMARINARA_KEYRING_ACCOUNT``:
  where to find the key in the OS keystore when no hex key is set
- ``CRYPTOMARINARA_LOG_LEVEL``: level of the ``cryptomarinara`` logger
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from typing import Mapping, Optional

from .core.exceptions import ConfigurationError
from .core.logging_config import set_package_log_level
from .security.cipher import Cipher


ENV_KEY_HEX = "CRYPTOMARINARA_KEY_HEX"
ENV_KEYRING_SERVICE = "CRYPTOMARINARA_KEYRING_SERVICE"
ENV_KEYRING_ACCOUNT = "CRYPTOMARINARA_KEYRING_ACCOUNT"
ENV_LOG_LEVEL = "CRYPTOMARINARA_LOG_LEVEL"

logger = logging.getLogger(__name__)


@dataclass(frozen=True, repr=False)
class Settings:
    """Key source and logging level read from the environment."""

    key_hex: Optional[str] = None
    keyring_service: Optional[str] = None
    keyring_account: Optional[str] = None
    log_level: str = "WARNING"

    def __repr__(self) -> str:
        # never echo the key itself
        key = "<set>" if self.key_hex else None
        return (
            f"Settings(key_hex={key}, keyring_service={self.keyring_service!r}, "
            f"keyring_account={self.keyring_account!r}, log_level={self.log_level!r})"
        )


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Read settings from ``environ`` (defaults to ``os.environ``).

    Empty values count as unset. A keyring service without an account, or
    the reverse, and unknown log levels raise :class:`ConfigurationError`.
    """
    env = os.environ if environ is None else environ

    key_hex = env.get(ENV_KEY_HEX) or None
    service = env.get(ENV_KEYRING_SERVICE) or None
    account = env.get(ENV_KEYRING_ACCOUNT) or None
    log_level = (env.get(ENV_LOG_LEVEL) or "WARNING").upper()

    if (service is None) != (account is None):
        raise ConfigurationError(
            f"{ENV_KEYRING_SERVICE} and {ENV_KEYRING_ACCOUNT} must be set together"
        )
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"unknown log level in {ENV_LOG_LEVEL}: {log_level!r}")

    return Settings(
        key_hex=key_hex.strip() if key_hex else None,
        keyring_service=service,
        keyring_account=account,
        log_level=log_level,
    )


def cipher_from_settings(settings: Settings) -> Cipher:
    # hex key wins over keyring when both are configured
    if settings.key_hex:
        logger.debug("using cipher key from %s", ENV_KEY_HEX)
        return Cipher.from_hex_string(settings.key_hex)
    if settings.keyring_service and settings.keyring_account:
        return Cipher.from_keyring(settings.keyring_service, settings.keyring_account)
    raise ConfigurationError(
        f"no key configured: set {ENV_KEY_HEX} or "
        f"{ENV_KEYRING_SERVICE} and {ENV_KEYRING_ACCOUNT}"
    )


def cipher_from_env(environ: Optional[Mapping[str, str]] = None) -> Cipher:
    """Build a Cipher from the environment, applying the package log level."""
    settings = load_settings(environ)
    set_package_log_level(settings.log_level)
    return cipher_from_settings(settings)
