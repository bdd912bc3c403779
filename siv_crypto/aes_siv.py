"""
AES-SIV — Deterministic Authenticated Encryption (RFC 5297)
===========================================================
Synthetic-IV mode: the IV is not random, it is S2V (an AES-CMAC chain)
computed over the associated data and the plaintext. Encrypting the same
(key, aad, plaintext) twice gives the same ciphertext, and reusing inputs
never breaks confidentiality beyond revealing that equality.

The IV doubles as the authentication tag. Decryption runs CTR first,
recomputes S2V over the recovered plaintext and only releases it if the
IV matches.

Key:    512 bits (64 bytes) = K1 (CMAC, 32) || K2 (AES-CTR, 32)
IV:     128 bits (16 bytes), also the tag

Bundle format: iv(16) || ciphertext   (ciphertext same length as plaintext)

Dependencies: cryptography >= 41.0
"""

import hmac
import logging
import os
from typing import Optional, Sequence

from .errors import AuthenticationFailed, InvalidCiphertext
from .stages.ctr import ctr_transform
from .stages.keysplit import is_valid_key_size, split_key
from .stages.s2v import BLOCK_SIZE, s2v

logger = logging.getLogger(__name__)


def constant_time_equals(a: bytes, b: bytes) -> bool:
    """Timing-safe comparison; looks at every byte before answering."""
    return hmac.compare_digest(a, b)


class AesSivCipher:
    """AES-SIV deterministic AEAD with two AES-256 sub-keys."""

    KEY_SIZE = 64   # 2 x AES-256
    IV_SIZE  = BLOCK_SIZE

    def __init__(self, key: bytes):
        """
        Split `key` into K1/K2 once. Raises InvalidKeySize unless the key
        is exactly 64 bytes.
        """
        keys = split_key(key)
        self._mac_key = keys.mac_key
        self._enc_key = keys.enc_key
        logger.debug(f"AesSivCipher ready | key={len(key)}B")

    @staticmethod
    def is_valid_key_size_in_bytes(size: int) -> bool:
        return is_valid_key_size(size)

    @staticmethod
    def generate_key() -> bytes:
        return os.urandom(AesSivCipher.KEY_SIZE)

    # -- single associated-data field -----------------------------------------

    def encrypt_deterministically(self, plaintext: bytes,
                                  aad: Optional[bytes] = None) -> bytes:
        """
        Encrypt with one associated-data field.
        aad=None is the same as aad=b"".
        Returns: iv(16) || ciphertext
        """
        return self._seal(plaintext, [_as_bytes(aad)])

    def decrypt_deterministically(self, ciphertext: bytes,
                                  aad: Optional[bytes] = None) -> bytes:
        """
        Decrypt and verify. Raises InvalidCiphertext if shorter than the
        IV, AuthenticationFailed on any mismatch.
        """
        return self._open(ciphertext, [_as_bytes(aad)])

    # -- list of associated-data fields ---------------------------------------

    def encrypt(self, plaintext: bytes,
                associated_data: Optional[Sequence[bytes]] = None) -> bytes:
        """
        Encrypt with an ordered list of associated-data fields.
        None (or []) means no associated data at all, which is NOT the same
        as a single empty field.
        """
        return self._seal(plaintext, _as_list(associated_data))

    def decrypt(self, ciphertext: bytes,
                associated_data: Optional[Sequence[bytes]] = None) -> bytes:
        """Inverse of encrypt(); same errors as decrypt_deterministically()."""
        return self._open(ciphertext, _as_list(associated_data))

    # -------------------------------------------------------------------------

    def _seal(self, plaintext: bytes, associated_data: list) -> bytes:
        plaintext = _as_bytes(plaintext)
        iv = s2v(self._mac_key, associated_data + [plaintext])
        ct = ctr_transform(self._enc_key, iv, plaintext)
        logger.debug(f"Encrypt: ad={len(associated_data)} pt={len(plaintext)}B")
        return iv + ct

    def _open(self, ciphertext: bytes, associated_data: list) -> bytes:
        ciphertext = _as_bytes(ciphertext)
        if len(ciphertext) < self.IV_SIZE:
            raise InvalidCiphertext(
                f"Ciphertext too short: needs at least {self.IV_SIZE} bytes."
            )
        iv        = ciphertext[:self.IV_SIZE]
        plaintext = ctr_transform(self._enc_key, iv, ciphertext[self.IV_SIZE:])
        expected  = s2v(self._mac_key, associated_data + [plaintext])
        if not constant_time_equals(expected, iv):
            logger.debug("Decrypt: authentication failed")
            raise AuthenticationFailed("AES-SIV authentication failed.")
        logger.debug(f"Decrypt: ad={len(associated_data)} pt={len(plaintext)}B")
        return plaintext

    def __repr__(self):
        return f"AesSivCipher(AES-SIV-CMAC-{self.KEY_SIZE * 8})"


def _as_bytes(data) -> bytes:
    # bytes-like only; int and str raise TypeError
    return b"" if data is None else memoryview(data).tobytes()


def _as_list(associated_data) -> list:
    if associated_data is None:
        return []
    if isinstance(associated_data, (bytes, bytearray, memoryview)):
        raise TypeError("associated_data must be a sequence of byte strings.")
    return [_as_bytes(a) for a in associated_data]
