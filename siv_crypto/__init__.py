"""
siv_crypto — Deterministic AES-SIV
==================================
RFC 5297 synthetic-IV authenticated encryption on top of `cryptography`.

Stages:
    1  KEY SPLIT  — 64-byte key -> K1 (CMAC) || K2 (AES-CTR)
    2  S2V        — AES-CMAC chain with GF(2^128) doubling -> synthetic IV
    3  CTR        — AES-CTR from the masked IV

    AesSivCipher  — encrypt / decrypt, tamper detection

License: Apache 2.0
"""

__version__  = "1.0.0"

from .errors            import SivError, InvalidKeySize, InvalidCiphertext, AuthenticationFailed
from .stages.keysplit   import SivKeys, split_key, is_valid_key_size
from .stages.s2v        import s2v, dbl
from .aes_siv           import AesSivCipher

__all__ = [
    "AesSivCipher",
    "s2v",
    "dbl",
    "split_key",
    "is_valid_key_size",
    "SivKeys",
    "SivError",
    "InvalidKeySize",
    "InvalidCiphertext",
    "AuthenticationFailed",
]
