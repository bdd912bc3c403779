"""
Stage 1 — KEY SPLIT
===================
AES-SIV takes one key and uses it as two: the first half keys the S2V
CMAC (K1), the second half keys AES-CTR (K2).

Supported configuration: two AES-256 keys, 64 bytes total.
"""

from typing import NamedTuple

from ..errors import InvalidKeySize

SUB_KEY_SIZES = (32,)   # AES-256 only


class SivKeys(NamedTuple):
    """K1 / K2 pair. Lives only inside the cipher that derived it."""
    mac_key: bytes   # K1: S2V / CMAC
    enc_key: bytes   # K2: CTR


def is_valid_key_size(size: int) -> bool:
    """True iff `size` bytes is exactly twice a supported sub-key size."""
    return size % 2 == 0 and size // 2 in SUB_KEY_SIZES


def split_key(key: bytes) -> SivKeys:
    """Split 64 bytes of key material into (K1, K2). Raises InvalidKeySize."""
    if key is None or not is_valid_key_size(len(key)):
        size = 0 if key is None else len(key)
        raise InvalidKeySize(
            f"AES-SIV key must be {', '.join(str(2 * s) for s in SUB_KEY_SIZES)} "
            f"bytes, got {size}."
        )
    key  = bytes(key)
    half = len(key) // 2
    return SivKeys(mac_key=key[:half], enc_key=key[half:])
