from __future__ import annotations

import threading

import pytest

from pixbench.resample import Parallel, resize
from pixbench.resample import parallel
from pixbench.resample.parallel import make_tiles, run_tiles
from pixbench.utils.grid import PixelGrid


def test_tiles_cover_every_index_once() -> None:
    tiles = make_tiles(10, 7, tile_rows=3, tile_cols=4)
    seen = {}
    for r0, r1, c0, c1 in tiles:
        for r in range(r0, r1):
            for c in range(c0, c1):
                seen[(r, c)] = seen.get((r, c), 0) + 1
    assert len(seen) == 70
    assert set(seen.values()) == {1}


def test_tiles_are_row_major_with_short_edges() -> None:
    assert make_tiles(3, 5, tile_rows=2, tile_cols=3) == [
        (0, 2, 0, 3),
        (0, 2, 3, 5),
        (2, 3, 0, 3),
        (2, 3, 3, 5),
    ]


def test_tile_larger_than_grid_is_single_tile() -> None:
    assert make_tiles(4, 4, tile_rows=16, tile_cols=256) == [(0, 4, 0, 4)]


def test_invalid_tile_size() -> None:
    with pytest.raises(ValueError):
        make_tiles(4, 4, tile_rows=0, tile_cols=2)


def test_run_tiles_processes_each_tile_once() -> None:
    tiles = make_tiles(9, 9, tile_rows=2, tile_cols=2)
    done = []
    lock = threading.Lock()

    def work(tile):
        with lock:
            done.append(tile)

    counts = run_tiles(tiles, work, workers=4)
    assert len(counts) == 4
    assert sum(counts) == len(tiles)
    assert sorted(done) == sorted(tiles)


def test_run_tiles_runs_exactly_worker_count_threads() -> None:
    tiles = make_tiles(8, 8, tile_rows=1, tile_cols=1)
    names = set()
    lock = threading.Lock()
    # each thread's first tile waits for two other threads to be mid-tile
    together = threading.Barrier(3, timeout=10)

    def work(tile):
        name = threading.current_thread().name
        with lock:
            first = name not in names
            names.add(name)
        if first:
            together.wait()

    run_tiles(tiles, work, workers=3)
    assert len(names) == 3
    assert all(name.startswith("pixbench") for name in names)


@pytest.mark.parametrize("size,workers", [(5, 8), (50, 8), (300, 4)])
def test_resize_starts_every_worker(monkeypatch, size: int, workers: int) -> None:
    names = set()
    lock = threading.Lock()
    real_drain = parallel._drain

    def recording_drain(*args):
        with lock:
            names.add(threading.current_thread().name)
        return real_drain(*args)

    monkeypatch.setattr(parallel, "_drain", recording_drain)
    src = PixelGrid.empty(size, size)
    resize(src, size, size, Parallel(workers))
    assert len(names) == workers


def test_more_workers_than_tiles() -> None:
    counts = run_tiles([(0, 1, 0, 1)], lambda tile: None, workers=5)
    assert len(counts) == 5
    assert sum(counts) == 1


def test_worker_error_propagates() -> None:
    def work(tile):
        if tile[0] == 2:
            raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        run_tiles(make_tiles(4, 2, tile_rows=1, tile_cols=2), work, workers=2)
