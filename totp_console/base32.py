"""
base32.py — RFC 4648 base32 for TOTP secrets.

- decode() is case-insensitive and drops every '=' (padding is optional).
- Leftover bits (< 8) at the end are discarded, not validated.
- encode() wraps base64.b32encode and strips the padding by default, the way
  Google Authenticator secrets are usually written.
"""

import base64

from .errors import InvalidCharacterError

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
_VALUES = {c: i for i, c in enumerate(ALPHABET)}


def decode(text: str) -> bytes:
    """
    Decode a base32 string into bytes.

    Steps:
    1. Upper-case every character and skip '='
    2. Validate the whole input first, so no partial result is ever returned
    3. Shift 5-bit groups into a buffer, emit one byte per 8 accumulated bits

    Raises:
        InvalidCharacterError: a character outside A-Z2-7; ``position`` is
            the index in ``text`` as given by the caller
    """
    chunks = []
    for pos, char in enumerate(text):
        if char == "=":
            continue
        upper = char.upper()
        if any(c not in _VALUES for c in upper):
            raise InvalidCharacterError(char, pos)
        chunks.append(upper)

    out = bytearray()
    buffer = 0
    bits = 0
    for char in "".join(chunks):
        buffer = ((buffer << 5) | _VALUES[char]) & 0xFFFFFFFFFF  # 40-bit buffer
        bits += 5
        if bits >= 8:
            out.append((buffer >> (bits - 8)) & 0xFF)
            bits -= 8
    # bits < 8 left here are dropped
    return bytes(out)


def encode(data: bytes, padding: bool = False) -> str:
    """Encode bytes as upper-case base32; '=' padding only kept when padding=True."""
    b32 = base64.b32encode(data).decode("ascii")
    return b32 if padding else b32.rstrip("=")
