"""Exact comparison of two resized grids."""
from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from .errors import ConfigurationError
from .utils.grid import CHANNELS, PixelGrid


def _check_shapes(a: PixelGrid, b: PixelGrid) -> None:
    if a.shape != b.shape:
        raise ConfigurationError(
            f"cannot compare a {a.height}x{a.width} grid with a {b.height}x{b.width} grid"
        )


def verify(a: PixelGrid, b: PixelGrid) -> bool:
    """True iff every channel of every pixel matches exactly.

    No tolerance is applied: the resampler is deterministic, so any difference
    between strategies is a bug.
    """
    _check_shapes(a, b)
    return bool(np.array_equal(a.pixels, b.pixels))


def first_mismatch(a: PixelGrid, b: PixelGrid) -> Optional[Tuple[int, int]]:
    """Row-major first ``(row, col)`` where the grids differ, or None."""
    _check_shapes(a, b)
    diff = np.flatnonzero(a.pixels != b.pixels)
    if diff.size == 0:
        return None
    return divmod(int(diff[0]) // CHANNELS, a.width)


__all__ = ["verify", "first_mismatch"]
