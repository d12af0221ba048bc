"""Argon2id key derivation for password-based ciphers.

Derived keys are only reproducible with the same salt and cost parameters,
so :func:`kdf_params_to_dict` / :func:`kdf_params_from_dict` give callers a
JSON-friendly form to persist alongside their ciphertext.
"""
import os
from typing import Any, Dict, Mapping, Tuple, Union

from argon2.low_level import Type, hash_secret_raw

from ..core.hexcodec import decode_hex


KDF_ALGORITHM = "argon2id"
MIN_SALT_LENGTH = 8

DEFAULT_TIME_COST = 3
DEFAULT_MEMORY_COST = 65536  # KiB
DEFAULT_PARALLELISM = 1


def generate_salt(length: int = 16) -> bytes:
    """Return a cryptographically secure random salt."""
    return os.urandom(length)


def derive_key(
    password: Union[bytes, str],
    salt: bytes,
    time_cost: int = DEFAULT_TIME_COST,
    memory_cost: int = DEFAULT_MEMORY_COST,
    parallelism: int = DEFAULT_PARALLELISM,
    key_len: int = 32,
) -> bytes:
    """
    Derive raw key bytes from ``password`` with Argon2id.
    String passwords are UTF-8 encoded first.
    """
    if isinstance(password, str):
        password = password.encode("utf-8")
    if len(salt) < MIN_SALT_LENGTH:
        raise ValueError(f"salt must be at least {MIN_SALT_LENGTH} bytes, got {len(salt)}")

    return hash_secret_raw(
        secret=password,
        salt=salt,
        time_cost=time_cost,
        memory_cost=memory_cost,
        parallelism=parallelism,
        hash_len=key_len,
        type=Type.ID,
    )


def kdf_params_to_dict(salt: bytes, time_cost: int, memory_cost: int, parallelism: int) -> Dict[str, Any]:
    return {
        "algo": KDF_ALGORITHM,
        "salt": salt.hex(),
        "time": time_cost,
        "memory": memory_cost,
        "parallelism": parallelism,
    }


def kdf_params_from_dict(params: Mapping[str, Any]) -> Tuple[bytes, Dict[str, int]]:
    """
    Inverse of :func:`kdf_params_to_dict`.

    Returns ``(salt, kwargs)`` where ``kwargs`` can be passed straight to
    :func:`derive_key` or :meth:`Cipher.from_password`. Missing cost fields
    fall back to the defaults. A missing, non-hex or too-short salt raises
    :class:`ValueError` (:class:`DecodeError` for bad hex).
    """
    algo = params.get("algo", KDF_ALGORITHM)
    if algo != KDF_ALGORITHM:
        raise ValueError(f"unsupported kdf algorithm: {algo!r}")

    if not params.get("salt"):
        raise ValueError("kdf params missing salt")
    salt = decode_hex(params["salt"])
    if len(salt) < MIN_SALT_LENGTH:
        raise ValueError(f"salt must be at least {MIN_SALT_LENGTH} bytes, got {len(salt)}")
    kwargs = {
        "time_cost": int(params.get("time", DEFAULT_TIME_COST)),
        "memory_cost": int(params.get("memory", DEFAULT_MEMORY_COST)),
        "parallelism": int(params.get("parallelism", DEFAULT_PARALLELISM)),
    }
    return salt, kwargs
