"""Bilinear resizing of PixelGrids with a selectable execution strategy.

Exported API
------------
- resize(grid, new_h, new_w, strategy=Sequential())
- Sequential(), Parallel(workers)
- warmup()

Strategies
----------
- ``Sequential()``   : one pass over the destination in row-major order
- ``Parallel(n)``    : ``n`` threads pulling row x column tiles from a queue

Both strategies run the same compiled kernel over the same coordinates, so
their output is byte-for-byte identical.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from ..errors import ConfigurationError
from ..utils.grid import PixelGrid
from .bilinear import axis_ratio, bilinear_blend, clamp_corner, resize_tile, to_byte
from .parallel import DEFAULT_TILE_COLS, DEFAULT_TILE_ROWS, make_tiles, run_tiles

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sequential:
    """Single thread, row-major scan."""

    def describe(self) -> str:
        return "sequential"


@dataclass(frozen=True)
class Parallel:
    """``workers`` threads sharing a queue of destination tiles."""

    workers: int
    tile_rows: int = DEFAULT_TILE_ROWS
    tile_cols: int = DEFAULT_TILE_COLS

    def __post_init__(self) -> None:
        if self.workers < 1:
            raise ConfigurationError(f"workers must be >= 1, got {self.workers}")
        if self.tile_rows < 1 or self.tile_cols < 1:
            raise ConfigurationError("tile_rows and tile_cols must be >= 1")

    def describe(self) -> str:
        return f"parallel x{self.workers}"


Strategy = Union[Sequential, Parallel]


def resize(
    grid: PixelGrid,
    new_h: int,
    new_w: int,
    strategy: Strategy = Sequential(),
) -> PixelGrid:
    """Resize ``grid`` to ``(new_h, new_w)`` with bilinear interpolation.

    Parameters
    ----------
    grid : PixelGrid
        Source image. It is only read, and must not be modified by the caller
        while the call runs.
    new_h, new_w : int
        Target height and width (>= 1). A target axis of 1 is only accepted
        when the matching source axis is also 1.
    strategy : Sequential | Parallel
        How the destination is traversed. Does not affect the result.

    Returns
    -------
    PixelGrid
        Newly allocated resized grid.

    Raises
    ------
    ConfigurationError
        On non-positive or degenerate dimensions, or an unknown strategy.
    """
    if not isinstance(grid, PixelGrid):
        raise TypeError("grid must be a PixelGrid")
    if new_h < 1 or new_w < 1:
        raise ConfigurationError(f"target dimensions must be >= 1, got {new_h}x{new_w}")

    x_ratio = axis_ratio(grid.width, new_w)
    y_ratio = axis_ratio(grid.height, new_h)
    out = PixelGrid.empty(new_h, new_w)
    src = grid.pixels

    def work(tile):
        r0, r1, c0, c1 = tile
        resize_tile(src, grid.height, grid.width, out.pixels, new_w,
                    x_ratio, y_ratio, r0, r1, c0, c1)

    if isinstance(strategy, Sequential):
        work((0, new_h, 0, new_w))
    elif isinstance(strategy, Parallel):
        tiles = make_tiles(new_h, new_w, strategy.tile_rows, strategy.tile_cols)
        run_tiles(tiles, work, strategy.workers)
    else:
        raise ConfigurationError(f"Unknown resize strategy: {strategy!r}")

    logger.debug(
        "resized %dx%d -> %dx%d (%s)",
        grid.height, grid.width, new_h, new_w, strategy.describe(),
    )
    return out


def warmup() -> None:
    """Compile the kernel ahead of any timed call.

    Numba compiles on first use; without this the first timed resize would
    include compilation time.
    """
    tiny = PixelGrid.empty(2, 2)
    resize(tiny, 3, 3, Sequential())
    resize(tiny, 3, 3, Parallel(2, tile_rows=1, tile_cols=1))


__all__ = [
    "resize",
    "warmup",
    "Sequential",
    "Parallel",
    "Strategy",
    "axis_ratio",
    "clamp_corner",
    "bilinear_blend",
    "to_byte",
]
