"""Tests for the HMAC-SHA1 / TOTP core."""

import hashlib
import hmac

import pyotp
import pytest

from totp_console import base32
from totp_console.errors import ClockError
from totp_console.otp_core import Totp, dynamic_truncate, hmac_sha1, int_to_bytes

RFC_KEY = b"12345678901234567890"

RFC6238_VECTORS = [
    (59, "287082"),
    (1111111109, "081804"),
    (1111111111, "050471"),
    (1234567890, "005924"),
    (2000000000, "279037"),
    (20000000000, "353130"),
]


class TestHelpers:
    """Tests for the RFC helper functions."""

    def test_int_to_bytes(self):
        assert int_to_bytes(1) == b"\x00\x00\x00\x00\x00\x00\x00\x01"
        assert int_to_bytes(0x0102030405060708) == bytes(range(1, 9))

    @pytest.mark.parametrize("key_len", [0, 1, 20, 63, 64, 65, 200])
    def test_hmac_sha1_matches_stdlib(self, key_len):
        key = bytes((i * 7) & 0xFF for i in range(key_len))
        msg = int_to_bytes(123456)
        assert hmac_sha1(key, msg) == hmac.new(key, msg, hashlib.sha1).digest()

    def test_hmac_sha1_rfc2202_case_1(self):
        digest = hmac_sha1(b"\x0b" * 20, b"Hi There")
        assert digest.hex() == "b617318655057264e28bc0b6fb378c8ef146be00"

    def test_dynamic_truncate_rfc4226_example(self):
        digest = bytes.fromhex("1f8698690e02ca16618550ef7f19da8e945b555a")
        assert dynamic_truncate(digest) == 0x50EF7F19
        assert dynamic_truncate(digest) % 10 ** 6 == 872921

    def test_dynamic_truncate_masks_top_bit(self):
        digest = b"\xff" * 19 + b"\x00"
        assert dynamic_truncate(digest) == 0x7FFFFFFF


class TestTotp:
    """Tests for the Totp generator."""

    @pytest.mark.parametrize("unix_time,expected", RFC6238_VECTORS)
    def test_rfc6238_vectors(self, unix_time, expected):
        assert Totp(RFC_KEY).generate_at(unix_time) == expected

    def test_rfc6238_eight_digits(self):
        assert Totp(RFC_KEY, digits=8).generate_at(59) == "94287082"
        assert Totp(RFC_KEY, digits=8).generate_at(1111111109) == "07081804"

    def test_generate_at_is_idempotent(self):
        totp = Totp(RFC_KEY)
        assert totp.generate_at(1234567890) == totp.generate_at(1234567890)

    def test_same_code_within_a_step(self):
        totp = Totp(RFC_KEY)
        assert totp.generate_at(30) == totp.generate_at(59)
        assert totp.generate_at(59) != totp.generate_at(60)

    @pytest.mark.parametrize("unix_time", [0, 29, 30, 1700000000, 1700000017])
    def test_matches_pyotp(self, unix_time):
        secret = pyotp.random_base32()
        ours = Totp(base32.decode(secret)).generate_at(unix_time)
        assert ours == pyotp.TOTP(secret).at(unix_time)

    def test_long_key_is_hashed(self):
        key = bytes(range(100))
        secret = base32.encode(key)
        assert Totp(key).generate_at(59) == pyotp.TOTP(secret).at(59)

    def test_generate_uses_clock(self):
        totp = Totp(RFC_KEY, clock=lambda: 59.9)
        assert totp.generate() == "287082"

    def test_code_format(self):
        code = Totp(bytes([1, 2, 3, 4, 5])).generate()
        assert len(code) == 6
        assert code.isdigit()

    @pytest.mark.parametrize("now,expected", [(0, 30), (1, 29), (29, 1), (30, 30), (59, 1), (59.5, 1)])
    def test_time_remaining(self, now, expected):
        assert Totp(RFC_KEY, clock=lambda: now).time_remaining() == expected

    def test_time_remaining_real_clock(self):
        assert 1 <= Totp(RFC_KEY).time_remaining() <= 30

    def test_clock_before_epoch(self):
        totp = Totp(RFC_KEY, clock=lambda: -1.0)
        with pytest.raises(ClockError):
            totp.generate()
        with pytest.raises(ClockError):
            totp.time_remaining()

    def test_unreadable_clock(self):
        def broken_clock():
            raise OSError("clock_gettime failed")

        with pytest.raises(ClockError, match="clock_gettime failed"):
            Totp(RFC_KEY, clock=broken_clock).generate()

    def test_negative_time(self):
        with pytest.raises(ClockError):
            Totp(RFC_KEY).generate_at(-1)

    def test_default_clock_is_time_time(self, monkeypatch):
        monkeypatch.setattr("time.time", lambda: 1111111111.0)
        assert Totp(RFC_KEY).generate() == "050471"

    @pytest.mark.parametrize("kwargs", [{"time_step": 0}, {"digits": 0}, {"digits": 11}])
    def test_invalid_parameters(self, kwargs):
        with pytest.raises(ValueError):
            Totp(RFC_KEY, **kwargs)

    def test_parameters_are_read_only(self):
        totp = Totp(RFC_KEY)
        assert (totp.time_step, totp.digits) == (30, 6)
        with pytest.raises(AttributeError):
            totp.digits = 8

    def test_repr_hides_key(self):
        assert "1234" not in repr(Totp(RFC_KEY))
