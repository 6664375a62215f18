"""Caller-side verification of a user-typed code with a +/- step window."""

from typing import Optional
import hmac

from .otp_core import Totp


def verify_code(totp: Totp, code: str, timestamp: Optional[int] = None, window: int = 1) -> bool:
    """
    Check ``code`` against the counters ``counter - window .. counter + window``.

    Arguments:
        totp: generator holding the key
        code: code typed by the user
        timestamp: epoch seconds (None -> totp's clock)
        window: allowed drift in steps; 0 checks the exact step only

    Raises:
        ValueError: negative window
        ClockError: clock cannot be read
    """
    if window < 0:
        raise ValueError("window must be >= 0")
    if timestamp is None:
        timestamp = totp.now()

    code = code.strip()
    counter = totp.counter_at(timestamp)
    for offset in range(-window, window + 1):
        test_counter = counter + offset
        if test_counter < 0:
            continue
        expected = totp.code_for_counter(test_counter)
        if hmac.compare_digest(expected.encode(), code.encode()):
            return True
    return False
