"""
Exceptions for cryptomarinara
Every error the library raises derives from CryptoMarinaraError so callers
have a single catch-all.
"""


class CryptoMarinaraError(Exception):
    # general container for errors
    pass


class DecodeError(CryptoMarinaraError, ValueError):
    # raised when hex input contains a non-hex character or has odd length
    pass


class KeyLengthError(CryptoMarinaraError, ValueError):
    # raised when key material is not exactly KEY_SIZE bytes

    def __init__(self, expected: int, actual: int):
        super().__init__(f"incorrect key byte length: expected {expected} got {actual}")
        self.expected = expected
        self.actual = actual


class EncryptionError(CryptoMarinaraError):
    # raised when the AEAD primitive fails while sealing
    pass


class AuthenticationError(CryptoMarinaraError):
    # raised when ciphertext is malformed or fails tag verification
    pass


class CipherWipedError(CryptoMarinaraError):
    # raised on use of a cipher whose key was wiped
    pass


class KeystoreError(CryptoMarinaraError):
    # raised when the OS keystore is unavailable, refused, or empty
    pass


class ConfigurationError(CryptoMarinaraError):
    # raised when environment configuration is missing or inconsistent
    pass
