"""Exception types shared by the core and the CLI."""


class TotpConsoleError(Exception):
    """Base class for every error this package raises on purpose."""


class InvalidCharacterError(TotpConsoleError, ValueError):
    """Base32 input contains a symbol outside ``A-Z2-7``."""

    def __init__(self, char: str, position: int):
        self.char = char
        self.position = position
        super().__init__(f"Invalid base32 character {char!r} at position {position}")


class ClockError(TotpConsoleError, RuntimeError):
    """The wall clock could not be read or is before the Unix epoch."""


class OtpAuthError(TotpConsoleError, ValueError):
    """An ``otpauth://`` URI is not a usable TOTP URI."""
