"""
otp_core.py — Core TOTP (RFC 6238) on top of HMAC-SHA1 (RFC 2104).

Goals:
- Pure computation only: no file I/O, no logging, no printing.
- Callers (CLI, verify, ...) decode the base32 secret themselves and hand the
  raw key bytes to Totp.
- The only failure is an unreadable system clock (ClockError).

Example:
    >>> from totp_console import base32
    >>> totp = Totp(base32.decode("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"))
    >>> totp.generate_at(59)
    '287082'
"""

from typing import Callable, Optional
import hashlib
import struct
import time

from .errors import ClockError

# --- Config / constants ----------------------------------------------------
DEFAULT_DIGITS = 6          # standard: 6 digits
DEFAULT_TIME_STEP = 30      # TOTP step (seconds)
BLOCK_SIZE = 64             # SHA-1 block size, fixes every HMAC constant below

# byte -> byte ^ 0x36 / byte ^ 0x5c, used with bytes.translate
_TRANS_36 = bytes(x ^ 0x36 for x in range(256))
_TRANS_5C = bytes(x ^ 0x5C for x in range(256))


# --- RFC helpers -----------------------------------------------------------
def int_to_bytes(i: int) -> bytes:
    """
    Pack the counter as 8-byte big-endian, as RFC4226 requires.

    Example: int_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'
    """
    return struct.pack(">Q", i)


def hmac_sha1(key: bytes, message: bytes) -> bytes:
    """
    HMAC-SHA1 exactly as RFC 2104 builds it.

    1. Keys longer than 64 bytes -> SHA1(key) (20 bytes)
    2. Right-pad with 0x00 to 64 bytes
    3. ipad = key ^ 0x36, opad = key ^ 0x5c (64 bytes each)
    4. HMAC = SHA1(opad || SHA1(ipad || message))

    Returns:
        bytes: 20-byte digest
    """
    if len(key) > BLOCK_SIZE:
        key = hashlib.sha1(key).digest()
    key = key.ljust(BLOCK_SIZE, b"\x00")

    # inner hash over ipad || message
    inner = hashlib.sha1(key.translate(_TRANS_36))
    inner.update(message)
    # outer hash over opad || inner digest
    outer = hashlib.sha1(key.translate(_TRANS_5C))
    outer.update(inner.digest())
    return outer.digest()


def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    Dynamic truncation per RFC4226 §5.3.

    - offset = last byte & 0x0F (0..15)
    - take 4 bytes from offset, clear the MSB (0x7F) of the first -> 31-bit value
    """
    # offset in range 0..15, so offset + 3 <= 18 stays inside the 20-byte digest
    offset = hmac_digest[19] & 0x0F
    return (
        ((hmac_digest[offset] & 0x7F) << 24)
        | (hmac_digest[offset + 1] << 16)
        | (hmac_digest[offset + 2] << 8)
        | hmac_digest[offset + 3]
    )


# --- Generator -------------------------------------------------------------
class Totp:
    """
    TOTP generator bound to one key.

    time_step and digits are fixed at construction (read-only).
    The counter is never stored: every call reads the clock again.

    Arguments:
        key: raw key bytes (already base32-decoded)
        time_step: seconds per code window (default 30)
        digits: code length (default 6)
        clock: callable returning epoch seconds (None -> time.time)
    """

    def __init__(
        self,
        key: bytes,
        time_step: int = DEFAULT_TIME_STEP,
        digits: int = DEFAULT_DIGITS,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        if time_step <= 0:
            raise ValueError("time_step must be a positive number of seconds")
        # a 31-bit value never has more than 10 digits
        if not 1 <= digits <= 10:
            raise ValueError("digits must be between 1 and 10")
        self._key = bytes(key)
        self._time_step = time_step
        self._digits = digits
        self._clock = clock or time.time

    @property
    def time_step(self) -> int:
        return self._time_step

    @property
    def digits(self) -> int:
        return self._digits

    def __repr__(self) -> str:
        # never print the key
        return f"Totp(time_step={self._time_step}, digits={self._digits})"

    def now(self) -> int:
        """Epoch seconds (int) read from the clock."""
        try:
            now = self._clock()
        except (OSError, OverflowError, ValueError) as e:
            raise ClockError(f"Unable to read system clock: {e}") from e
        if now < 0:
            raise ClockError("System clock is before the Unix epoch")
        return int(now)

    def counter_at(self, unix_time: int) -> int:
        """Counter = floor(unix_time / time_step); negative time -> ClockError."""
        if unix_time < 0:
            raise ClockError("Time is before the Unix epoch")
        return int(unix_time) // self._time_step

    def code_for_counter(self, counter: int) -> str:
        """HMAC-SHA1(key, counter) -> truncate -> mod 10^digits -> zero-pad."""
        digest = hmac_sha1(self._key, int_to_bytes(counter))
        otp_val = dynamic_truncate(digest) % (10 ** self._digits)
        # zero-pad
        return str(otp_val).zfill(self._digits)

    def generate_at(self, unix_time: int) -> str:
        """
        TOTP code at an explicit time (used for the RFC 6238 test vectors).

        Pure: the same key and unix_time always give the same code.
        """
        return self.code_for_counter(self.counter_at(unix_time))

    def generate(self) -> str:
        """
        TOTP code for the current time.

        Raises:
            ClockError: the system clock cannot be read / is before the epoch
        """
        return self.generate_at(self.now())

    def time_remaining(self) -> int:
        """Seconds left in the current window, always in [1, time_step]."""
        return self._time_step - (self.now() % self._time_step)
