"""
otpauth.py — parse / format ``otpauth://totp/...`` URIs (Google Authenticator key URI format).

The label, ``secret``, ``issuer``, ``digits`` and ``period`` are read back.
``algorithm`` must be SHA1 when present: the generator only does HMAC-SHA1,
so any other value is rejected instead of silently producing a wrong code.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qsl, quote, unquote, urlencode, urlsplit

import pyotp

from .otp_core import DEFAULT_DIGITS, DEFAULT_TIME_STEP
from .errors import OtpAuthError

TOTP_URI_PREFIX = "otpauth://totp/"


def random_secret() -> str:
    """Fresh 160-bit base32 secret (32 chars, unpadded) for a new account."""
    return pyotp.random_base32()


@dataclass(frozen=True)
class OtpAuthEntry:
    name: str
    secret: str
    issuer: Optional[str] = None
    digits: Optional[int] = None
    period: Optional[int] = None


def _int_param(params: dict, key: str) -> Optional[int]:
    value = params.get(key)
    if not value:
        return None
    try:
        number = int(value)
    except ValueError as e:
        raise OtpAuthError(f"Invalid {key} {value!r} in TOTP URI") from e
    if number <= 0:
        raise OtpAuthError(f"Invalid {key} {value!r} in TOTP URI")
    return number


def parse_otpauth_uri(uri: str) -> OtpAuthEntry:
    """
    Extract name, secret, issuer, digits and period from an otpauth TOTP URI.

    ``otpauth://totp/GitHub:alice?secret=JBSWY3DP&issuer=GitHub`` gives
    ``OtpAuthEntry(name="GitHub", secret="JBSWY3DP", issuer="GitHub")``:
    the name is the last path segment cut at the first ``:``. digits and
    period stay None when the URI does not carry them.

    Raises:
        OtpAuthError: not a TOTP URI, no ``secret`` parameter, non-SHA1
            ``algorithm``, or a non-numeric ``digits`` / ``period``
    """
    if not uri.startswith(TOTP_URI_PREFIX):
        raise OtpAuthError("Not an otpauth://totp/ URI")

    parts = urlsplit(uri)
    label = unquote(parts.path.rstrip("/").rsplit("/", 1)[-1])
    name = label.split(":", 1)[0].strip() or "unknown"

    params = dict(parse_qsl(parts.query, keep_blank_values=True))
    secret = params.get("secret", "")
    if not secret:
        raise OtpAuthError("The TOTP URI does not contain a secret")

    algorithm = params.get("algorithm") or "SHA1"
    if algorithm.upper() != "SHA1":
        raise OtpAuthError(f"Unsupported algorithm {algorithm!r}: only SHA1 is supported")

    return OtpAuthEntry(
        name=name,
        secret=secret,
        issuer=params.get("issuer") or None,
        digits=_int_param(params, "digits"),
        period=_int_param(params, "period"),
    )


def format_otpauth_uri(
    secret_b32: str,
    account: str,
    issuer: Optional[str] = None,
    digits: int = DEFAULT_DIGITS,
    period: int = DEFAULT_TIME_STEP,
) -> str:
    """
    Build an otpauth TOTP URI for authenticator apps.

    otpauth://totp/{issuer}:{account}?secret=...&issuer=...&algorithm=SHA1&digits=...&period=...
    """
    label = quote(account, safe="@")
    if issuer:
        label = f"{quote(issuer, safe='')}:{label}"

    query = {"secret": secret_b32}
    if issuer:
        query["issuer"] = issuer
    query.update(algorithm="SHA1", digits=digits, period=period)
    return f"{TOTP_URI_PREFIX}{label}?{urlencode(query, quote_via=quote)}"
