#!/usr/bin/env python3
"""
otp_cli.py — CLI wrapper for otp_core.py

Subcommands:
- generate : print one or more fresh tokens
- verify   : check a token, exit 0 if valid and 1 if not
- demo     : generate, verify, tamper, verify again

The key comes from --key, --key-file, the HMAC_OTP_KEY environment variable
or otp_key.txt in the working directory.

eg..:
    hmac-otp --key supersecretkey123 generate
    hmac-otp --key supersecretkey123 generate --count 5
    hmac-otp --key-file otp_key.txt verify <token>
    HMAC_OTP_KEY=supersecretkey123 hmac-otp demo --verbose
"""

import argparse
import binascii
import logging
import os
import sys

from hmac_otp import otp_core

logger = logging.getLogger(__name__)

HEX_DIGITS = "0123456789abcdef"


def load_key(path: str = otp_core.KEY_FILE) -> str:
    """Read a key from a file. Raises FileNotFoundError if it does not exist."""
    with open(path, "r", encoding="utf-8") as f:
        return f.read().rstrip("\r\n")


def resolve_key(args) -> bytes:
    """
    Pick the key from --key, then --key-file, then the environment, then
    otp_key.txt in the working directory.

    With --hex the value is decoded from hexadecimal, otherwise UTF-8 encoded.

    Raises:
        ValueError: no key found, or --hex given with invalid hex
    """
    if args.key is not None:
        raw = args.key
        logger.debug("Using key from --key")
    elif args.key_file is not None:
        raw = load_key(args.key_file)
        logger.debug("Using key from %s", args.key_file)
    else:
        raw = os.environ.get(otp_core.KEY_ENV_VAR)
        if raw is not None:
            logger.debug("Using key from $%s", otp_core.KEY_ENV_VAR)
        elif os.path.exists(otp_core.KEY_FILE):
            raw = load_key()
            logger.debug("Using key from %s", otp_core.KEY_FILE)
        else:
            raise ValueError(
                f"No key given. Use --key, --key-file, set {otp_core.KEY_ENV_VAR} "
                f"or create {otp_core.KEY_FILE}."
            )

    if args.hex:
        try:
            key = binascii.unhexlify(raw.strip())
        except (binascii.Error, ValueError) as e:
            raise ValueError("Key is not valid hexadecimal") from e
    else:
        key = raw.encode("utf-8")
    if not key:
        raise ValueError("Key must not be empty")
    return key


def tamper(token: str, index: int = -1) -> str:
    """
    Return a copy of token with the hex digit at index replaced by a different one.

    Raises:
        ValueError: if the character at index is not a hex digit
    """
    chars = list(token)
    position = HEX_DIGITS.find(chars[index].lower())
    if position < 0:
        raise ValueError(f"character {chars[index]!r} at index {index} is not a hex digit")
    chars[index] = HEX_DIGITS[(position + 1) % len(HEX_DIGITS)]
    return "".join(chars)


# --- CLI command handlers ---
def cmd_generate(args, key: bytes) -> int:
    for _ in range(args.count):
        print(otp_core.generate(key))
    return 0


def cmd_verify(args, key: bytes) -> int:
    if otp_core.verify(key, args.token):
        print("[+] Token is VALID")
        return 0
    print("[-] Token is INVALID")
    return 1


def cmd_demo(args, key: bytes) -> int:
    token = otp_core.generate(key)
    print("Generated token (hex):", token)

    ok = otp_core.verify(key, token)
    print("Verification:", "SUCCESS" if ok else "FAILED")

    tampered = tamper(token)
    print("Tampered token (hex): ", tampered)
    forged_ok = otp_core.verify(key, tampered)
    if forged_ok:
        print("[!] Tampered token was accepted, this is a bug!")
    else:
        print("Tampered token rejected, as expected.")

    return 0 if ok and not forged_ok else 1


# --- Argparse builder ---
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="hmac-otp",
        description="Nonce-based HMAC-SHA256 one-time token generator and verifier",
    )
    p.add_argument("--key", help="Shared secret key (text)")
    p.add_argument("--key-file", help="Read the shared secret key from a file")
    p.add_argument("--hex", action="store_true", help="Key value is hex-encoded bytes")
    p.add_argument("--verbose", action="store_true", help="Verbose output")
    sub = p.add_subparsers(dest="cmd")

    # generate
    pg = sub.add_parser("generate", help="Generate fresh tokens")
    pg.add_argument("--count", type=int, default=1, help="Number of tokens to print")
    pg.set_defaults(func=cmd_generate)

    # verify
    pv = sub.add_parser("verify", help="Verify a token")
    pv.add_argument("token", help="96-character hex token")
    pv.set_defaults(func=cmd_verify)

    # demo
    pd = sub.add_parser("demo", help="Generate, verify and tamper with a token")
    pd.set_defaults(func=cmd_demo)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[+] %(message)s",
    )

    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    if args.cmd == "generate" and args.count < 1:
        parser.error("--count must be at least 1")

    try:
        key = resolve_key(args)
    except (OSError, ValueError) as e:
        print(f"[!] {e}", file=sys.stderr)
        return 2

    try:
        return args.func(args, key)
    except otp_core.EntropyError as e:
        logger.error("Token generation failed: %s", e)
        print(f"[!] {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
