"""Flat RGB pixel buffer shared by the resampler, verifier and I/O helpers.

A :class:`PixelGrid` owns one contiguous row-major ``uint8`` buffer of
``height * width * 3`` bytes. Pixel ``(row, col)`` channel ``c`` lives at
offset ``(row * width + col) * 3 + c``.
"""
from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np

from ..errors import ConfigurationError

CHANNELS = 3

Array = np.ndarray


class PixelGrid:
    """Rectangular 3-channel image stored as a single flat byte buffer."""

    __slots__ = ("height", "width", "pixels")

    def __init__(self, height: int, width: int, pixels: Array) -> None:
        if height < 1 or width < 1:
            raise ConfigurationError(
                f"grid dimensions must be >= 1, got {height}x{width}"
            )
        buf = np.ascontiguousarray(pixels, dtype=np.uint8).reshape(-1)
        if buf.size != height * width * CHANNELS:
            raise ValueError(
                f"buffer holds {buf.size} bytes, expected "
                f"{height * width * CHANNELS} for a {height}x{width} RGB grid"
            )
        self.height = int(height)
        self.width = int(width)
        self.pixels = buf

    @classmethod
    def empty(cls, height: int, width: int) -> "PixelGrid":
        """Allocate a zero-filled grid."""
        if height < 1 or width < 1:
            raise ConfigurationError(
                f"grid dimensions must be >= 1, got {height}x{width}"
            )
        return cls(height, width, np.zeros(height * width * CHANNELS, dtype=np.uint8))

    @classmethod
    def from_array(cls, arr) -> "PixelGrid":
        """Build a grid from an array-like of shape (H, W, 3).

        The data is copied, so later writes to ``arr`` do not affect the grid.
        """
        a = np.asarray(arr)
        if a.ndim != 3 or a.shape[2] != CHANNELS:
            raise ValueError("arr must be an RGB image with shape (H, W, 3)")
        h, w, _ = a.shape
        return cls(h, w, np.array(a, dtype=np.uint8, copy=True).reshape(-1))

    @property
    def channels(self) -> int:
        return CHANNELS

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    def as_array(self) -> Array:
        """Return an (H, W, 3) view onto the buffer (no copy)."""
        return self.pixels.reshape(self.height, self.width, CHANNELS)

    def copy(self) -> "PixelGrid":
        return PixelGrid(self.height, self.width, self.pixels.copy())

    def index(self, row: int, col: int, channel: int = 0) -> int:
        """Flat buffer offset of ``(row, col, channel)``."""
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(
                f"pixel ({row}, {col}) outside {self.height}x{self.width} grid"
            )
        if not 0 <= channel < CHANNELS:
            raise IndexError(f"channel {channel} outside 0..{CHANNELS - 1}")
        return (row * self.width + col) * CHANNELS + channel

    def get(self, row: int, col: int, channel: int) -> int:
        return int(self.pixels[self.index(row, col, channel)])

    def pixel(self, row: int, col: int) -> Tuple[int, int, int]:
        base = self.index(row, col)
        r, g, b = self.pixels[base:base + CHANNELS]
        return int(r), int(g), int(b)

    def set_pixel(self, row: int, col: int, rgb: Iterable[int]) -> None:
        values = [int(v) for v in rgb]
        if len(values) != CHANNELS:
            raise ValueError(f"expected {CHANNELS} channel values, got {len(values)}")
        if any(v < 0 or v > 255 for v in values):
            raise ValueError("channel values must be in 0..255")
        base = self.index(row, col)
        self.pixels[base:base + CHANNELS] = values

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self.pixels, other.pixels))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PixelGrid(height={self.height}, width={self.width})"


__all__ = ["PixelGrid", "CHANNELS"]
