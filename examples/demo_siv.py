"""
siv_crypto — Live Demo: Deterministic AES-SIV
==============================================
Run:  python examples/demo_siv.py

Encrypts a record twice, shows the ciphertexts are identical, decrypts it,
then flips one bit and shows the tamper being caught.
"""

import sys, os, time
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from siv_crypto import AesSivCipher, AuthenticationFailed

LINE = "═" * 70
MSG  = b"Some data to encrypt."
AAD  = b"Additional data"

def header(step, name):
    print(f"\n{LINE}")
    print(f"  Step {step} — {name}")
    print(LINE)

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")

# ─────────────────────────────────────────────────────────────────────────────
print(f"\n{LINE}")
print("  siv_crypto — AES-SIV Demo")
print(LINE)
print(f"  Message: {MSG.decode()}")
print(f"  AAD:     {AAD.decode()}\n")

cipher = AesSivCipher(AesSivCipher.generate_key())

# ── STEP 1 ───────────────────────────────────────────────────────────────────
header(1, "ENCRYPT — synthetic IV, no nonce")
t0  = time.perf_counter()
ct1 = cipher.encrypt_deterministically(MSG, AAD)
ct2 = cipher.encrypt_deterministically(MSG, AAD)
elapsed = time.perf_counter() - t0
ok("Key size",      "512 bits (2 x AES-256)")
ok("Bundle size",   f"{len(ct1)} bytes (iv=16 + data)")
ok("Synthetic IV",  ct1[:16].hex())
ok("Deterministic", str(ct1 == ct2))
ok("Two encrypts",  f"{elapsed*1000:.2f} ms")

# ── STEP 2 ───────────────────────────────────────────────────────────────────
header(2, "DECRYPT — recompute S2V, compare IV")
pt = cipher.decrypt_deterministically(ct1, AAD)
ok("Decrypted", pt.decode())

# ── STEP 3 ───────────────────────────────────────────────────────────────────
header(3, "TAMPER — flip one bit")
bad = bytearray(ct1)
bad[len(bad) // 2] ^= 0x01
try:
    cipher.decrypt_deterministically(bytes(bad), AAD)
    print("  ✗  Tampered ciphertext accepted!")
    sys.exit(1)
except AuthenticationFailed:
    ok("Tamper detected", "AuthenticationFailed")

try:
    cipher.decrypt_deterministically(ct1, b"Other data")
    print("  ✗  Wrong AAD accepted!")
    sys.exit(1)
except AuthenticationFailed:
    ok("Wrong AAD detected", "AuthenticationFailed")

print(f"\n{LINE}")
print("  All steps: PASSED")
print(f"{LINE}\n")
