"""
Errors raised by siv_crypto.

Size problems are ValueErrors, like the rest of the stack. Authentication
failures are cryptography.exceptions.InvalidTag, so callers that already
catch InvalidTag from AES-GCM or ChaCha20-Poly1305 keep working.
"""

from cryptography.exceptions import InvalidTag


class SivError(Exception):
    """Base class for every AES-SIV failure."""


class InvalidKeySize(SivError, ValueError):
    """Key material is not twice a supported AES key size."""


class InvalidCiphertext(SivError, ValueError):
    """Ciphertext is shorter than the 16-byte synthetic IV."""


class AuthenticationFailed(SivError, InvalidTag):
    """
    Recomputed synthetic IV does not match the received one.

    Raised identically for a corrupted ciphertext, a wrong key and wrong
    associated data.
    """
