"""
totp_console package
====================

TOTP (RFC 6238, HMAC-SHA1, 30s, 6 digits) + base32 decoder (RFC 4648).

──────────────────────────────────────────────
Core algorithms
──────────────────────────────────────────────
- Base32: drop '=', upper(), pack 5-bit groups into bytes; leftover bits are ignored.
- HMAC-SHA1: SHA1(opad || SHA1(ipad || counter)) with the key padded to 64 bytes.
- TOTP: counter = floor(timestamp / timestep), dynamic truncation, mod 10^digits.

──────────────────────────────────────────────
Quick usage
──────────────────────────────────────────────
>>> from totp_console import Totp, base32
>>> totp = Totp(base32.decode("JBSWY3DPEHPK3PXP"))
>>> code, remaining = totp.generate(), totp.time_remaining()
"""
from . import base32
from .errors import ClockError, InvalidCharacterError, OtpAuthError, TotpConsoleError
from .otp_core import DEFAULT_DIGITS, DEFAULT_TIME_STEP, Totp, hmac_sha1
from .otpauth import OtpAuthEntry, format_otpauth_uri, parse_otpauth_uri
from .verify import verify_code

__version__ = "0.1.0"

__all__ = [
    "base32",
    "Totp",
    "hmac_sha1",
    "DEFAULT_DIGITS",
    "DEFAULT_TIME_STEP",
    "OtpAuthEntry",
    "parse_otpauth_uri",
    "format_otpauth_uri",
    "verify_code",
    "TotpConsoleError",
    "InvalidCharacterError",
    "ClockError",
    "OtpAuthError",
]
