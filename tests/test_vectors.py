"""
siv_crypto — Known-answer vectors
=================================
Fixed (key, aad, msg, ct, result) tuples in the Wycheproof layout.

    valid / acceptable  encrypt must reproduce ct; decrypt must return msg
    invalid             encrypt must NOT reproduce ct; decrypt must fail

Keys AesSivCipher supports (64 bytes) run through the cipher. Other key
sizes, such as the RFC 5297 two-AES-128 vector, run through the stages
composed by hand with the same split (first half K1, second half K2).

Run with:  python -m pytest tests/ -v
       or:  python tests/test_vectors.py
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from siv_crypto                 import AesSivCipher, AuthenticationFailed, InvalidCiphertext
from siv_crypto.aes_siv         import constant_time_equals
from siv_crypto.stages.ctr      import ctr_transform
from siv_crypto.stages.s2v      import s2v

RFC_KEY = ("fffefdfcfbfaf9f8f7f6f5f4f3f2f1f0"
           "f0f1f2f3f4f5f6f7f8f9fafbfcfdfeff")
RFC_AAD = "101112131415161718191a1b1c1d1e1f2021222324252627"
RFC_MSG = "112233445566778899aabbccddee"
RFC_CT  = "85632d07c6e8f37f950acd320a2ecc93" "40c02b9690c4dc04daef7f6afe5c"

KEY_512 = ("000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f"
           "00112233445566778899aabbccddeefff0f1f2f3f4f5f6f7f8f9fafbfcfdfeff")
AAD     = "4164646974696f6e616c2064617461"                   # "Additional data"
MSG     = "536f6d65206461746120746f20656e63727970742e"       # "Some data to encrypt."

# TODO: add the 512-bit "valid" cases from Wycheproof aes_siv_cmac_test.json.
VECTORS = [
    # tcId, comment, key, aad, msg, ct, result
    (1, "RFC 5297 A.1",
     RFC_KEY, RFC_AAD, RFC_MSG, RFC_CT, "valid"),
    (2, "RFC 5297 A.1, last ciphertext bit flipped",
     RFC_KEY, RFC_AAD, RFC_MSG, RFC_CT[:-2] + "5d", "invalid"),
    (3, "RFC 5297 A.1, first IV bit flipped",
     RFC_KEY, RFC_AAD, RFC_MSG, "05" + RFC_CT[2:], "invalid"),
    (4, "RFC 5297 A.1, IV with bits 63 and 31 cleared",
     RFC_KEY, RFC_AAD, RFC_MSG,
     "85632d07c6e8f37f150acd320a2ecc93" "40c02b9690c4dc04daef7f6afe5c", "invalid"),
    (5, "all-zero IV",
     KEY_512, AAD, MSG, "00" * 16 + MSG, "invalid"),
    (6, "ciphertext produced under another key",
     KEY_512, RFC_AAD, RFC_MSG, RFC_CT, "invalid"),
    (7, "empty message, forged IV",
     KEY_512, "", "", "ff" * 16, "invalid"),
    (8, "ciphertext shorter than the IV",
     KEY_512, AAD, "", "00" * 15, "invalid"),
    (9, "IV only, message dropped",
     KEY_512, AAD, MSG, "00112233445566778899aabbccddeeff", "invalid"),
]


class _StagedSiv:
    """AES-SIV from the stage functions, for key sizes the cipher does not take."""

    def __init__(self, key: bytes):
        half = len(key) // 2
        self._k1, self._k2 = key[:half], key[half:]

    def encrypt_deterministically(self, msg: bytes, aad: bytes) -> bytes:
        iv = s2v(self._k1, [aad, msg])
        return iv + ctr_transform(self._k2, iv, msg)

    def decrypt_deterministically(self, ct: bytes, aad: bytes) -> bytes:
        if len(ct) < 16:
            raise InvalidCiphertext("Ciphertext too short.")
        msg = ctr_transform(self._k2, ct[:16], ct[16:])
        if not constant_time_equals(s2v(self._k1, [aad, msg]), ct[:16]):
            raise AuthenticationFailed("AES-SIV authentication failed.")
        return msg


def _cipher_for(key: bytes):
    if AesSivCipher.is_valid_key_size_in_bytes(len(key)):
        return AesSivCipher(key)
    return _StagedSiv(key)


def _ids(v):
    return f"tc{v[0]}-{v[6]}"

# ── Encryption ───────────────────────────────────────────────────────────────
@pytest.mark.parametrize("vector", VECTORS, ids=_ids)
def test_vector_encrypt(vector):
    tc_id, comment, key, aad, msg, ct, result = vector
    cipher    = _cipher_for(bytes.fromhex(key))
    encrypted = cipher.encrypt_deterministically(bytes.fromhex(msg), bytes.fromhex(aad))
    if result in ("valid", "acceptable"):
        assert encrypted.hex() == ct, f"incorrect encryption: {tc_id} {comment}"
    else:
        assert encrypted.hex() != ct, f"invalid encryption: {tc_id} {comment}"

# ── Decryption ───────────────────────────────────────────────────────────────
@pytest.mark.parametrize("vector", VECTORS, ids=_ids)
def test_vector_decrypt(vector):
    tc_id, comment, key, aad, msg, ct, result = vector
    cipher = _cipher_for(bytes.fromhex(key))
    try:
        decrypted = cipher.decrypt_deterministically(bytes.fromhex(ct), bytes.fromhex(aad))
    except (AuthenticationFailed, InvalidCiphertext):
        assert result != "valid", f"failed to decrypt: {tc_id} {comment}"
    else:
        assert result != "invalid", f"decrypted invalid ciphertext: {tc_id}"
        assert decrypted.hex() == msg, f"incorrect decryption: {tc_id} {comment}"

def test_vectors_cover_the_cipher_key_size():
    assert any(AesSivCipher.is_valid_key_size_in_bytes(len(v[2]) // 2) for v in VECTORS)
    assert any(v[6] == "invalid" for v in VECTORS)

# ── run directly ─────────────────────────────────────────────────────────────
if __name__ == "__main__":
    from _runner import run_table
    tests = []
    for v in VECTORS:
        tests.append((f"tc{v[0]} encrypt ({v[6]})", lambda v=v: test_vector_encrypt(v)))
        tests.append((f"tc{v[0]} decrypt ({v[6]})", lambda v=v: test_vector_decrypt(v)))
    tests.append(("Vector table covers 64-byte keys", test_vectors_cover_the_cipher_key_size))
    sys.exit(1 if run_table("siv_crypto — Known-answer vectors", tests) else 0)
