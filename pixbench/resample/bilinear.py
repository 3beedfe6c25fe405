"""Bilinear interpolation math and the compiled tile kernel.

The kernel is compiled with Numba in ``nogil`` mode so that several threads
can run it at once over disjoint parts of the destination buffer. The same
kernel serves the sequential strategy (one tile covering everything) and the
parallel one (many tiles), which is what keeps their output bit-identical.
"""
from __future__ import annotations

import numpy as np
from numba import njit

from ..errors import ConfigurationError

Array = np.ndarray


def axis_ratio(src_dim: int, dst_dim: int) -> float:
    """Source step per destination step along one axis.

    ``(src_dim - 1) / (dst_dim - 1)``, so the first and last destination
    samples land exactly on the first and last source samples.

    A single-sample source axis gives 0.0 for any destination size (every
    destination index maps onto that one sample). A single-sample destination
    axis over a longer source has no defined step and is rejected.
    """
    if src_dim < 1 or dst_dim < 1:
        raise ConfigurationError(
            f"dimensions must be >= 1, got source {src_dim}, target {dst_dim}"
        )
    if src_dim == 1:
        return 0.0
    if dst_dim == 1:
        raise ConfigurationError(
            f"cannot resample an axis of {src_dim} samples onto 1 sample"
        )
    return (src_dim - 1) / (dst_dim - 1)


@njit(cache=True, nogil=True)
def clamp_corner(coord, dim):
    """Return the ``(lo, hi)`` source indices bracketing ``coord``.

    ``lo`` is ``coord`` truncated and clamped to ``[0, dim - 2]`` so that
    ``hi = lo + 1`` stays inside the axis; the last row/column is only ever
    reached as ``hi``. On a single-sample axis both indices are 0.
    """
    lo = int(coord)
    if lo > dim - 2:
        lo = dim - 2
    if lo < 0:
        lo = 0
    hi = lo + 1
    if hi > dim - 1:
        hi = dim - 1
    return lo, hi


@njit(cache=True, nogil=True)
def bilinear_blend(dx, dy, q11, q21, q12, q22):
    """Blend along x on both rows, then along y between the two results."""
    fx1 = q11 + (q21 - q11) * dx
    fx2 = q12 + (q22 - q12) * dx
    return fx1 + (fx2 - fx1) * dy


@njit(cache=True, nogil=True)
def to_byte(value):
    """Clamp to [0, 255] and round half up."""
    if value < 0.0:
        value = 0.0
    if value > 255.0:
        value = 255.0
    return int(value + 0.5)


@njit(cache=True, nogil=True)
def resize_tile(src, src_h, src_w, dst, dst_w, x_ratio, y_ratio,
                row_start, row_stop, col_start, col_stop):
    """Fill destination rows ``[row_start, row_stop)`` x cols ``[col_start, col_stop)``.

    ``src`` and ``dst`` are flat row-major RGB byte buffers. Only the
    destination cells inside the tile are written.
    """
    for i in range(row_start, row_stop):
        src_y = i * y_ratio
        y1, y2 = clamp_corner(src_y, src_h)
        dy = src_y - y1
        top = y1 * src_w
        bottom = y2 * src_w
        for j in range(col_start, col_stop):
            src_x = j * x_ratio
            x1, x2 = clamp_corner(src_x, src_w)
            dx = src_x - x1
            p11 = (top + x1) * 3
            p21 = (top + x2) * 3
            p12 = (bottom + x1) * 3
            p22 = (bottom + x2) * 3
            out = (i * dst_w + j) * 3
            for c in range(3):
                value = bilinear_blend(
                    dx, dy,
                    float(src[p11 + c]), float(src[p21 + c]),
                    float(src[p12 + c]), float(src[p22 + c]),
                )
                dst[out + c] = to_byte(value)


__all__ = ["axis_ratio", "clamp_corner", "bilinear_blend", "to_byte", "resize_tile"]
