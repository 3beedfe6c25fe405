"""Tile partitioning and the per-call worker pool for the parallel strategy.

The destination index space is cut into row x column tiles and flattened into
one queue. Exactly ``workers`` threads drain that queue, each taking the next
tile as soon as it finishes its previous one, so faster threads simply process
more tiles. No worker takes a tile before all of them have started. Tiles
never overlap, and the source buffer is only read, so no locking is needed
around the kernel.
"""
from __future__ import annotations

import logging
import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Tuple

logger = logging.getLogger(__name__)

Tile = Tuple[int, int, int, int]

DEFAULT_TILE_ROWS = 16
DEFAULT_TILE_COLS = 256


def make_tiles(height: int, width: int, tile_rows: int = DEFAULT_TILE_ROWS,
               tile_cols: int = DEFAULT_TILE_COLS) -> List[Tile]:
    """Split a ``height x width`` index space into row-major tiles.

    Each tile is ``(row_start, row_stop, col_start, col_stop)``; edge tiles are
    cut short. Together the tiles cover every index exactly once.
    """
    if tile_rows < 1 or tile_cols < 1:
        raise ValueError("tile_rows and tile_cols must be >= 1")
    tiles: List[Tile] = []
    for r in range(0, height, tile_rows):
        r_stop = min(height, r + tile_rows)
        for c in range(0, width, tile_cols):
            tiles.append((r, r_stop, c, min(width, c + tile_cols)))
    return tiles


def _drain(tiles: "queue.SimpleQueue[Tile]", work: Callable[[Tile], None],
           start: threading.Barrier) -> int:
    # every worker must be running before the first tile is taken
    start.wait()
    done = 0
    while True:
        try:
            tile = tiles.get_nowait()
        except queue.Empty:
            return done
        work(tile)
        done += 1


def run_tiles(tiles: List[Tile], work: Callable[[Tile], None], workers: int) -> List[int]:
    """Run ``work`` over every tile using exactly ``workers`` threads.

    Blocks until all tiles are processed and returns the number of tiles each
    worker handled. An exception raised inside a worker is re-raised here
    after the pool has shut down.
    """
    pending: "queue.SimpleQueue[Tile]" = queue.SimpleQueue()
    for tile in tiles:
        pending.put(tile)

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pixbench") as pool:
        start = threading.Barrier(workers)
        futures = [pool.submit(_drain, pending, work, start) for _ in range(workers)]
    counts = [f.result() for f in futures]
    logger.debug("%d tiles over %d workers: %s", len(tiles), workers, counts)
    return counts


__all__ = ["Tile", "make_tiles", "run_tiles", "DEFAULT_TILE_ROWS", "DEFAULT_TILE_COLS"]
