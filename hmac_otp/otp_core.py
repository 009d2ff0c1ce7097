"""
otp_core.py — Core library for nonce-based HMAC-SHA256 one-time tokens.

Goal:
- Pure functions only, so the CLI and the REST API call the same code.
- No argparse, no Flask, no file or environment access here.

Token layout (96 lowercase hex characters):
    hex(R) || hex(HMAC-SHA256(key, R))
    R = 16 random bytes, tag = 32 bytes

Security notes:
- Tags are compared with hmac.compare_digest, never with ==.
- verify() answers True/False only; it never tells the caller why a token failed.
- There is no replay protection: a captured valid token stays valid for as long
  as the key does. Callers that need single use must track nonces themselves.
"""

from typing import Callable, Optional, Tuple
import binascii
import hashlib
import hmac
import logging
import os

logger = logging.getLogger(__name__)

# --- Config / constants ----------------------------------------------------
NONCE_BYTES = 16            # 128-bit random R
TAG_BYTES = 32              # HMAC-SHA256 output
TOKEN_HEX_LENGTH = (NONCE_BYTES + TAG_BYTES) * 2
KEY_ENV_VAR = "HMAC_OTP_KEY"
KEY_FILE = "otp_key.txt"

RandomSource = Callable[[int], bytes]


class EntropyError(RuntimeError):
    """The secure random source failed; no token can be produced."""


# --- Key / entropy helpers -------------------------------------------------
def _check_key(key) -> None:
    if not isinstance(key, (bytes, bytearray)):
        raise TypeError(f"key must be bytes, not {type(key).__name__}")
    if not key:
        raise ValueError("key must not be empty")


def draw_nonce(random_source: Optional[RandomSource] = None) -> bytes:
    """
    Draw NONCE_BYTES fresh bytes for a new token.

    Arguments:
        random_source: callable(n) -> bytes; os.urandom when None.
            Tests pass a deterministic source here.

    Raises:
        EntropyError: if the source raises or returns the wrong number of bytes.
    """
    if random_source is None:
        random_source = os.urandom
    try:
        nonce = random_source(NONCE_BYTES)
    except Exception as e:
        raise EntropyError("secure random source unavailable") from e
    if not isinstance(nonce, (bytes, bytearray)) or len(nonce) != NONCE_BYTES:
        raise EntropyError(f"random source did not return {NONCE_BYTES} bytes")
    logger.debug("Drew %d-byte nonce", NONCE_BYTES)
    return bytes(nonce)


def compute_tag(key: bytes, nonce: bytes) -> bytes:
    """
    HMAC-SHA256(key, nonce). Deterministic, 32 bytes.

    Does not check the nonce length, so RFC 4231 vectors can be fed in directly.
    """
    _check_key(key)
    return hmac.new(key, nonce, hashlib.sha256).digest()


def constant_time_equals(a: bytes, b: bytes) -> bool:
    """Byte comparison whose running time does not depend on where a and b differ."""
    return hmac.compare_digest(a, b)


# --- Wire format -----------------------------------------------------------
def encode_token(nonce: bytes, tag: bytes) -> str:
    """
    Encode nonce and tag as hex(nonce) + hex(tag).

    Raises:
        ValueError: if nonce is not 16 bytes or tag is not 32 bytes
    """
    if len(nonce) != NONCE_BYTES or len(tag) != TAG_BYTES:
        raise ValueError(
            f"expected {NONCE_BYTES}-byte nonce and {TAG_BYTES}-byte tag, "
            f"got {len(nonce)} and {len(tag)}"
        )
    # binascii.hexlify always yields lowercase
    return (binascii.hexlify(nonce) + binascii.hexlify(tag)).decode("ascii")


def decode_token(token) -> Optional[Tuple[bytes, bytes]]:
    """
    Split a token into (nonce, tag), or return None if it is malformed.

    Never raises on bad input: wrong type, wrong length, whitespace or
    non-hex characters all give None.
    """
    if not isinstance(token, str):
        logger.debug("Rejecting token: not a string")
        return None
    if len(token) != TOKEN_HEX_LENGTH:
        logger.debug("Rejecting token: length %d != %d", len(token), TOKEN_HEX_LENGTH)
        return None

    split = NONCE_BYTES * 2
    try:
        nonce = binascii.unhexlify(token[:split])
        tag = binascii.unhexlify(token[split:])
    except (binascii.Error, ValueError):
        # ValueError covers non-ASCII characters in a str
        logger.debug("Rejecting token: not hexadecimal")
        return None

    if len(nonce) != NONCE_BYTES or len(tag) != TAG_BYTES:
        logger.debug("Rejecting token: decoded field sizes are wrong")
        return None
    return nonce, tag


# --- Token operations ------------------------------------------------------
def generate(key: bytes, random_source: Optional[RandomSource] = None) -> str:
    """
    Produce a new token for key.

    Steps:
    1. R = 16 bytes from the random source
    2. M = HMAC-SHA256(key, R)
    3. token = hex(R) + hex(M), 96 lowercase hex characters

    Arguments:
        key: shared secret, non-empty bytes
        random_source: callable(n) -> bytes, defaults to os.urandom

    Raises:
        TypeError / ValueError: key is not bytes, or is empty
        EntropyError: the random source failed
    """
    _check_key(key)
    nonce = draw_nonce(random_source)
    tag = compute_tag(key, nonce)
    return encode_token(nonce, tag)


def verify(key: bytes, token) -> bool:
    """
    Check that token was produced by generate() with the same key.

    All structural checks run before any HMAC work. A malformed token and a
    forged one both give False; the function never raises because of token.

    Raises:
        TypeError / ValueError: key is not bytes, or is empty
    """
    _check_key(key)
    parts = decode_token(token)
    if parts is None:
        return False
    nonce, tag = parts
    expected = compute_tag(key, nonce)
    return constant_time_equals(tag, expected)
