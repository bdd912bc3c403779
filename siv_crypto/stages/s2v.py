"""
Stage 2 — S2V (String-to-Vector)
================================
RFC 5297 section 2.4. Turns an ordered list of byte strings into one
128-bit value with AES-CMAC, doubling the running value in GF(2^128)
between components.

    D = CMAC(K, 0^128)
    for S_i in S_1 .. S_n-1:
        D = dbl(D) xor CMAC(K, S_i)
    if len(S_n) >= 16:  T = S_n xorend D
    else:               T = dbl(D) xor pad(S_n)
    return CMAC(K, T)

The last component is the message; the others are associated data.
The result is the synthetic IV.

Dependencies: cryptography >= 41.0
"""

from typing import Sequence

from cryptography.hazmat.primitives import cmac
from cryptography.hazmat.primitives.ciphers import algorithms

BLOCK_SIZE  = 16
ZERO_BLOCK  = bytes(BLOCK_SIZE)
ONE_BLOCK   = bytes(BLOCK_SIZE - 1) + b"\x01"
R128        = 0x87    # x^128 = x^7 + x^2 + x + 1
MAX_STRINGS = 127     # RFC 5297: at most 126 AD components plus the message


def _cmac(key: bytes, data: bytes) -> bytes:
    # Fresh context per MAC; CMAC objects are single-use.
    c = cmac.CMAC(algorithms.AES(key))
    c.update(data)
    return c.finalize()


def xor_bytes(a: bytes, b: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(a, b))


def xorend(a: bytes, b: bytes) -> bytes:
    """XOR `b` into the rightmost len(b) bytes of `a`."""
    split = len(a) - len(b)
    return a[:split] + xor_bytes(a[split:], b)


def dbl(block: bytes) -> bytes:
    """
    Multiply a 16-byte block by x in GF(2^128).

    Big-endian one-bit left shift; if the bit shifted out of the top was
    set, the low byte is XORed with 0x87. The reduction is applied with a
    mask rather than a branch.
    """
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"dbl() needs a {BLOCK_SIZE}-byte block.")
    out   = bytearray(BLOCK_SIZE)
    carry = 0
    for i in range(BLOCK_SIZE - 1, -1, -1):
        b      = block[i]
        out[i] = ((b << 1) | carry) & 0xFF
        carry  = b >> 7
    out[-1] ^= R128 & (-carry & 0xFF)
    return bytes(out)


def pad(data: bytes) -> bytes:
    """ISO/IEC 7816-4 style padding of a short final block: data || 0x80 || 0x00..."""
    if len(data) >= BLOCK_SIZE:
        raise ValueError("pad() is only defined for inputs shorter than one block.")
    return data + b"\x80" + bytes(BLOCK_SIZE - len(data) - 1)


def s2v(mac_key: bytes, strings: Sequence[bytes]) -> bytes:
    """
    S2V over `strings` keyed with `mac_key` (K1).

    `strings` is the associated data followed by the message. With no
    associated data the message is the only, and therefore final,
    component. An empty list yields CMAC(K1, 0^127 || 1).
    """
    if len(strings) > MAX_STRINGS:
        raise ValueError(f"S2V accepts at most {MAX_STRINGS} components.")
    if not strings:
        return _cmac(mac_key, ONE_BLOCK)

    d = _cmac(mac_key, ZERO_BLOCK)
    for s in strings[:-1]:
        d = xor_bytes(dbl(d), _cmac(mac_key, memoryview(s).tobytes()))

    last = memoryview(strings[-1]).tobytes()
    if len(last) >= BLOCK_SIZE:
        t = xorend(last, d)
    else:
        t = xor_bytes(dbl(d), pad(last))
    return _cmac(mac_key, t)
