"""Exception types raised by pixbench.

Verification mismatches are not errors: they are reported as
``verified=False`` in the benchmark report.
"""
from __future__ import annotations


class PixbenchError(Exception):
    """Base class for all pixbench errors."""


class ConfigurationError(PixbenchError, ValueError):
    """Invalid dimensions, worker counts or other call parameters."""


class DecodeError(PixbenchError):
    """An image file could not be read into a PixelGrid."""


class EncodeError(PixbenchError):
    """A PixelGrid could not be written to an image file."""


__all__ = ["PixbenchError", "ConfigurationError", "DecodeError", "EncodeError"]
