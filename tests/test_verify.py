"""Tests for the window verification wrapper."""

import pytest

from totp_console.otp_core import Totp
from totp_console.verify import verify_code

RFC_KEY = b"12345678901234567890"


@pytest.fixture
def totp():
    return Totp(RFC_KEY, clock=lambda: 1111111111)


def test_current_code(totp):
    assert verify_code(totp, "050471")


def test_explicit_timestamp(totp):
    assert verify_code(totp, "287082", timestamp=59, window=0)
    assert not verify_code(totp, "287082", timestamp=1111111111, window=0)


def test_adjacent_steps(totp):
    previous = totp.generate_at(1111111111 - 30)
    following = totp.generate_at(1111111111 + 30)
    assert verify_code(totp, previous, window=1)
    assert verify_code(totp, following, window=1)
    assert not verify_code(totp, previous, window=0)


def test_outside_window(totp):
    old = totp.generate_at(1111111111 - 60)
    assert not verify_code(totp, old, window=1)
    assert verify_code(totp, old, window=2)


def test_first_step_skips_negative_counter():
    totp = Totp(RFC_KEY, clock=lambda: 0)
    assert verify_code(totp, totp.generate_at(0), window=3)


def test_whitespace_and_garbage(totp):
    assert verify_code(totp, " 050471\n")
    assert not verify_code(totp, "")
    assert not verify_code(totp, "O5O471")
    assert not verify_code(totp, "０５０４７１")


def test_negative_window(totp):
    with pytest.raises(ValueError):
        verify_code(totp, "050471", window=-1)
