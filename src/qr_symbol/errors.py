"""Exceptions raised by the symbol encoder."""

from __future__ import annotations

from typing import Optional


class EncodeError(ValueError):
    """Base class for every error the encoder reports to its caller."""


class DataTooLong(EncodeError):
    """Raised when the payload does not fit any allowed version.

    Ways to handle this exception include lowering the error correction
    level, dropping a forced version, or shortening the payload.
    """

    def __init__(
        self,
        message: str,
        *,
        required_bits: Optional[int] = None,
        available_bits: Optional[int] = None,
        version: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.required_bits = required_bits
        self.available_bits = available_bits
        self.version = version


class UnsupportedCharacter(EncodeError):
    """Raised when data cannot be represented in the requested mode or encoding."""


class InvalidOption(EncodeError):
    """Raised for option values outside their documented domain."""
