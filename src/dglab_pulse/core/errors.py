"""Exception types raised while decoding pulse payloads."""

from __future__ import annotations


class PulseDecodeError(ValueError):
    """Base class for every failure of the pulse payload codec."""


class InvalidFormatError(PulseDecodeError):
    """Raised when the payload structure or one of its fields is malformed."""


class DecompressionError(PulseDecodeError):
    """Raised when the gzip layer of the payload cannot be inflated."""


class OutOfRangeError(PulseDecodeError, IndexError):
    """Raised when a slider index falls outside its lookup table."""
