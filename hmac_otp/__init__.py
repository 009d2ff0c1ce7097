"""
hmac_otp package
================

Stateless one-time tokens: 16 random bytes plus their HMAC-SHA256 tag,
handed out as a 96-character lowercase hex string.

──────────────────────────────────────────────
Core algorithm
──────────────────────────────────────────────
- generate(key):
  R = 16 bytes from os.urandom
  M = HMAC-SHA256(key, R)
  token = hex(R) + hex(M)

- verify(key, token):
  length/hex checks first (malformed -> False, never an exception),
  then recompute HMAC-SHA256(key, R) and compare with hmac.compare_digest.

No server-side state is kept. A valid token can be replayed for as long as
the key lives; callers that need single use must remember seen nonces.

──────────────────────────────────────────────
Quick example
──────────────────────────────────────────────
>>> from hmac_otp import generate, verify
>>> key = b"supersecretkey123"
>>> token = generate(key)
>>> len(token)
96
>>> verify(key, token)
True
"""

from hmac_otp.otp_core import (
    EntropyError,
    compute_tag,
    constant_time_equals,
    decode_token,
    draw_nonce,
    encode_token,
    generate,
    verify,
)

__version__ = "0.1.0"

__all__ = [
    "EntropyError",
    "compute_tag",
    "constant_time_equals",
    "decode_token",
    "draw_nonce",
    "encode_token",
    "generate",
    "verify",
]
