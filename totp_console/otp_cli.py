#!/usr/bin/env python3
"""
otp_cli.py — CLI wrapper around otp_core.py

Subcommands:
- code   : print the current TOTP code and how long it stays valid
- copy   : copy the current TOTP code to the clipboard
- watch  : show TOTP codes in real time (Ctrl+C to quit)
- new    : generate a random secret + otpauth URI
- uri    : print the otpauth URI for a secret
- parse  : read an otpauth URI, print name / issuer / current code
- verify : verify a code typed by the user (+/- window steps)
- qr     : render the otpauth URI as a QR code (ASCII or PNG file)

A secret is either a base32 string or a whole otpauth://totp/... URI; when it
is omitted it is read from the TOTP_SECRET environment variable. digits and
period come from --digits / --period, else from the URI, else 6 / 30.
"""

from typing import List, Optional, Tuple
import argparse
import logging
import os
import sys
import time

import pyperclip

from . import base32
from .errors import TotpConsoleError
from .otp_core import DEFAULT_DIGITS, DEFAULT_TIME_STEP, Totp
from .otpauth import (
    TOTP_URI_PREFIX,
    OtpAuthEntry,
    format_otpauth_uri,
    parse_otpauth_uri,
    random_secret,
)
from .qr import print_qr, save_qr
from .verify import verify_code

logger = logging.getLogger(__name__)

SECRET_ENV_VAR = "TOTP_SECRET"
LOW_TIME_SECONDS = 5
CLEAR_SCREEN = "\x1b[2J\x1b[1;1H"


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(filename)s:%(lineno)s  - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def use_color() -> bool:
    return "NO_COLOR" not in os.environ


def resolve_secret(secret: Optional[str]) -> OtpAuthEntry:
    """
    Turn a CLI argument (or TOTP_SECRET) into an OtpAuthEntry.

    - otpauth://totp/... URI -> name, secret, digits and period from the URI
    - plain secret -> name "secret"; spaces from hand typing are removed
      (e.g. "JBSW Y3DP ...")
    """
    if not secret:
        secret = os.environ.get(SECRET_ENV_VAR, "")
        if not secret:
            raise TotpConsoleError(f"No secret given and {SECRET_ENV_VAR} is not set")
        logger.debug("Secret read from %s", SECRET_ENV_VAR)

    secret = secret.strip()
    if secret.startswith(TOTP_URI_PREFIX):
        entry = parse_otpauth_uri(secret)
    else:
        entry = OtpAuthEntry(name="secret", secret=secret)
    return OtpAuthEntry(
        name=entry.name,
        secret="".join(entry.secret.split()),
        issuer=entry.issuer,
        digits=entry.digits,
        period=entry.period,
    )


def otp_params(args, entry: OtpAuthEntry) -> Tuple[int, int]:
    """(digits, period): explicit CLI option > URI parameter > default."""
    digits = args.digits if args.digits is not None else (entry.digits or DEFAULT_DIGITS)
    period = args.period if args.period is not None else (entry.period or DEFAULT_TIME_STEP)
    return digits, period


def make_totp(entry: OtpAuthEntry, args) -> Totp:
    key = base32.decode(entry.secret)
    digits, period = otp_params(args, entry)
    logger.debug("Decoded %d-byte key for %s (digits=%d, period=%ds)", len(key), entry.name, digits, period)
    return Totp(key, time_step=period, digits=digits)


def format_remaining(remaining: int) -> str:
    text = f"{remaining:2d}s"
    if remaining <= LOW_TIME_SECONDS and use_color():
        return f"\x1b[31m{text}\x1b[0m"  # red when the code is about to expire
    return text


# --- CLI command handlers ---
def cmd_code(args) -> int:
    totp = make_totp(resolve_secret(args.secret), args)
    code = totp.generate()
    print(f"{code}  (valid {totp.time_remaining()}s)")
    return 0


def cmd_copy(args) -> int:
    entry = resolve_secret(args.secret)
    totp = make_totp(entry, args)
    code = totp.generate()
    pyperclip.copy(code)
    print(f"[+] Copied TOTP code for {entry.name}, valid for {totp.time_remaining()} seconds")
    return 0


def cmd_watch(args) -> int:
    secrets = args.secrets or [None]
    entries = []
    for raw in secrets:
        entry = resolve_secret(raw)
        entries.append((entry.name, make_totp(entry, args)))

    print("Press Ctrl+C to quit. Generating TOTP in real time...\n")
    last_codes = {}
    try:
        while True:
            if use_color():
                # redraw in place instead of scrolling
                print(CLEAR_SCREEN, end="")
            print("Live TOTP Codes - " + time.strftime("%H:%M:%S", time.localtime(time.time())))
            print("=" * 42)
            for i, (name, totp) in enumerate(entries):
                code = totp.generate()
                status = "*" if last_codes.get(i) != code else " "
                print(f"{status} {name:20} | {code} | {format_remaining(totp.time_remaining())}")
                last_codes[i] = code
            print()
            time.sleep(args.interval)
    except KeyboardInterrupt:
        print("\nBye.")
    return 0


def cmd_new(args) -> int:
    secret = random_secret()
    digits, period = otp_params(args, OtpAuthEntry(name="new", secret=secret))
    logger.debug("Generated %d-bit secret", len(base32.decode(secret)) * 8)
    print("Secret:", secret)
    print("TOTP URI:", format_otpauth_uri(secret, args.account, args.issuer, digits, period))
    return 0


def cmd_uri(args) -> int:
    entry = resolve_secret(args.secret)
    base32.decode(entry.secret)  # fail early on a bad secret
    digits, period = otp_params(args, entry)
    print(format_otpauth_uri(entry.secret, args.account, args.issuer, digits, period))
    return 0


def cmd_parse(args) -> int:
    entry = resolve_secret(args.uri)
    totp = make_totp(entry, args)
    print("Name:  ", entry.name)
    if entry.issuer:
        print("Issuer:", entry.issuer)
    print(f"Code:   {totp.generate()}  (valid {totp.time_remaining()}s)")
    return 0


def cmd_verify(args) -> int:
    totp = make_totp(resolve_secret(args.secret), args)
    if verify_code(totp, args.code, window=args.window):
        print("[+] TOTP code is VALID")
        return 0
    print("[-] TOTP code is INVALID")
    return 1


def cmd_qr(args) -> int:
    entry = resolve_secret(args.secret)
    base32.decode(entry.secret)
    digits, period = otp_params(args, entry)
    uri = format_otpauth_uri(entry.secret, args.account, args.issuer, digits, period)
    if args.output:
        save_qr(uri, args.output)
        print(f"[+] QR code saved to {args.output}")
    else:
        print_qr(uri, sys.stdout)
    return 0


def cmd_help(args) -> int:
    print("'totp-console -h' for help.")
    return 0


# --- Argparse builder ---
def _add_otp_options(p: argparse.ArgumentParser) -> None:
    # None -> take the value from an otpauth URI, else the default
    p.add_argument("--digits", type=int, default=None, help=f"Number of OTP digits (default {DEFAULT_DIGITS})")
    p.add_argument("--period", type=int, default=None, help=f"TOTP time step in seconds (default {DEFAULT_TIME_STEP})")


def _add_label_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--account", default="user@example", help="Account label for otpauth URI")
    p.add_argument("--issuer", default=None, help="Issuer label for otpauth URI")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="totp-console", description="TOTP (HMAC-SHA1) code generator")
    p.add_argument("--verbose", action="store_true", help="Verbose output")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help)

    # code
    pc = sub.add_parser("code", help="Print the current TOTP code")
    pc.add_argument("secret", nargs="?", help=f"Base32 secret or otpauth URI (default: ${SECRET_ENV_VAR})")
    _add_otp_options(pc)
    pc.set_defaults(func=cmd_code)

    # copy
    pcp = sub.add_parser("copy", help="Copy the current TOTP code to the clipboard")
    pcp.add_argument("secret", nargs="?")
    _add_otp_options(pcp)
    pcp.set_defaults(func=cmd_copy)

    # watch
    pw = sub.add_parser("watch", help="Show TOTP codes in real time")
    pw.add_argument("secrets", nargs="*", help="One or more secrets / otpauth URIs")
    pw.add_argument("--interval", type=float, default=1.0, help="Refresh interval (seconds)")
    _add_otp_options(pw)
    pw.set_defaults(func=cmd_watch)

    # new
    pn = sub.add_parser("new", help="Generate a random secret and its otpauth URI")
    _add_label_options(pn)
    _add_otp_options(pn)
    pn.set_defaults(func=cmd_new)

    # uri
    pu = sub.add_parser("uri", help="Print the otpauth URI for a secret")
    pu.add_argument("secret", nargs="?")
    _add_label_options(pu)
    _add_otp_options(pu)
    pu.set_defaults(func=cmd_uri)

    # parse
    pp = sub.add_parser("parse", help="Read an otpauth:// URI and print its current code")
    pp.add_argument("uri")
    _add_otp_options(pp)
    pp.set_defaults(func=cmd_parse)

    # verify
    pv = sub.add_parser("verify", help="Verify a TOTP code")
    pv.add_argument("code", help="OTP code to verify")
    pv.add_argument("secret", nargs="?")
    pv.add_argument("--window", type=int, default=1, help="Allowed +/- step window")
    _add_otp_options(pv)
    pv.set_defaults(func=cmd_verify)

    # qr
    pq = sub.add_parser("qr", help="Render the otpauth URI as a QR code")
    pq.add_argument("secret", nargs="?")
    pq.add_argument("--output", "-o", help="Write a PNG file instead of printing ASCII")
    _add_label_options(pq)
    _add_otp_options(pq)
    pq.set_defaults(func=cmd_qr)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    try:
        return args.func(args)
    except (TotpConsoleError, ValueError) as e:
        logger.debug("Command %s failed", args.cmd, exc_info=True)
        print(f"[!] {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
