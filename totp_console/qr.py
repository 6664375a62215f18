"""QR code rendering for otpauth URIs (scan with Google Authenticator / Authy)."""

from typing import TextIO
import logging

import qrcode

logger = logging.getLogger(__name__)


def make_qr(uri: str) -> qrcode.QRCode:
    qr = qrcode.QRCode(box_size=10, border=4)
    qr.add_data(uri)
    qr.make(fit=True)
    return qr


def print_qr(uri: str, out: TextIO) -> None:
    """Write the QR code as ASCII art (inverted so it scans on dark terminals)."""
    make_qr(uri).print_ascii(out=out, invert=True)


def save_qr(uri: str, path: str) -> None:
    img = make_qr(uri).make_image(fill_color="black", back_color="white")
    img.save(path)
    logger.info("QR code written to %s", path)
