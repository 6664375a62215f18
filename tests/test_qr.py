"""Tests for QR rendering."""

import io

from totp_console.otpauth import format_otpauth_uri
from totp_console.qr import make_qr, print_qr, save_qr

URI = format_otpauth_uri("JBSWY3DPEHPK3PXP", "alice@example", "otp-demo")


def test_make_qr_holds_uri():
    qr = make_qr(URI)
    assert qr.data_list[0].data == URI.encode()
    assert qr.modules_count >= 21


def test_print_qr_ascii():
    out = io.StringIO()
    print_qr(URI, out)
    lines = out.getvalue().splitlines()
    assert len(lines) > 10
    assert len(set(len(line) for line in lines)) == 1


def test_save_qr_png(tmp_path):
    path = tmp_path / "otp.png"
    save_qr(URI, str(path))
    assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
