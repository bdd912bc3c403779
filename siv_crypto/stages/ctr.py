"""
Stage 3 — CTR
=============
AES-CTR keyed with K2, started at the masked synthetic IV.

RFC 5297 clears bit 63 and bit 31 of the IV before using it as the
counter (Q = V & 1^64 || 0 || 1^31 || 0 || 1^31), so implementations that
only increment the low 32 or 64 bits of the counter agree with those that
increment all 128. In bytes: the top bit of byte 8 and of byte 12.

Counter mode is symmetric; ctr_transform both encrypts and decrypts.

Dependencies: cryptography >= 41.0
"""

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .s2v import BLOCK_SIZE

_IV_MASK = bytes.fromhex("ffffffffffffffff7fffffff7fffffff")


def mask_iv(iv: bytes) -> bytes:
    """Synthetic IV -> initial counter block Q."""
    if len(iv) != BLOCK_SIZE:
        raise ValueError(f"Synthetic IV must be {BLOCK_SIZE} bytes.")
    return bytes(v & m for v, m in zip(iv, _IV_MASK))


def ctr_transform(enc_key: bytes, iv: bytes, data: bytes) -> bytes:
    """XOR `data` with the AES-CTR keystream E(K2, Q), E(K2, Q+1), ..."""
    encryptor = Cipher(algorithms.AES(enc_key), modes.CTR(mask_iv(iv))).encryptor()
    return encryptor.update(data) + encryptor.finalize()
