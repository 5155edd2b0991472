"""Exception types raised by stftgram."""

from __future__ import annotations


class StftgramError(Exception):
    """Base class for stftgram errors."""


class InvalidArgumentError(StftgramError, ValueError):
    """Raised when an option, signal, or config value is invalid."""


class IOFailureError(StftgramError, OSError):
    """Raised when audio input cannot be read or a figure cannot be written."""
