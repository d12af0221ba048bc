""" Strict hex codec for keys and transport-friendly ciphertext. """

import binascii
import string
from typing import Union

from .exceptions import DecodeError


HEX_DIGITS = frozenset(string.hexdigits)


def decode_hex(text: Union[str, bytes]) -> bytes:
    """Decode ``text`` as hexadecimal, accepting either case.

    Unlike :meth:`bytes.fromhex` no whitespace is tolerated. The first
    non-hex character is reported with its code point and position; this is
    checked before the length so that ``"x"`` names the bad character rather
    than complaining about odd length.
    """
    if isinstance(text, (bytes, bytearray, memoryview)):
        # one character per byte so positions line up with the raw input
        text = bytes(text).decode("latin-1")

    for position, ch in enumerate(text):
        if ch not in HEX_DIGITS:
            raise DecodeError(f"invalid byte: U+{ord(ch):04X} {ch!r} at position {position}")

    if len(text) % 2:
        raise DecodeError("odd length hex string")

    return binascii.unhexlify(text)


def encode_hex(data: bytes) -> str:
    # lowercase, no separators
    return binascii.hexlify(bytes(data)).decode("ascii")
