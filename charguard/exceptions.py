"""Custom exceptions for charguard."""

from __future__ import annotations


class CharGuardError(Exception):
    """Base exception for all charguard errors."""


class ConfigError(CharGuardError):
    """Raised when a scan configuration is invalid (bad root, profile, mode or limits)."""


class DecodeFailure(CharGuardError):
    """Raised when a file in the text profile is not valid text in the configured encoding."""

    def __init__(self, path: str, cause: UnicodeDecodeError):
        self.path = path
        self.cause = cause
        super().__init__(
            f"Cannot decode {path} as {cause.encoding} "
            f"(byte 0x{cause.object[cause.start]:02x} at offset {cause.start}): {cause.reason}"
        )
