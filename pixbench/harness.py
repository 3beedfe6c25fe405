"""Sequential-vs-parallel benchmark of the bilinear resizer.

A run resizes one source image sequentially (the baseline) and then once per
configured worker count, timing each call with an injected wall-clock. Every
parallel result is checked against the baseline; a mismatch is reported, not
raised. Only the baseline and the result for the largest worker count are
kept once their metrics are recorded.
"""
from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from .errors import ConfigurationError
from .resample import Parallel, Sequential, resize, warmup
from .resample.parallel import DEFAULT_TILE_COLS, DEFAULT_TILE_ROWS
from .utils.grid import PixelGrid
from .verify import first_mismatch, verify

logger = logging.getLogger(__name__)

Clock = Callable[[], float]

DEFAULT_WORKER_COUNTS: Tuple[int, ...] = (2, 4, 8)
DEFAULT_SCALE = 2.0
# Floor for measured durations so speedup stays finite and positive
MIN_ELAPSED = 1e-9


@dataclass(frozen=True)
class ConfigResult:
    worker_count: int
    time_seconds: float
    speedup: float
    efficiency_percent: float
    verified: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "workers": self.worker_count,
            "time": self.time_seconds,
            "speedup": self.speedup,
            "efficiency": self.efficiency_percent,
            "verified": self.verified,
        }


@dataclass(frozen=True)
class BenchmarkReport:
    source_shape: Tuple[int, int]
    target_shape: Tuple[int, int]
    baseline_time_seconds: float
    per_config: Tuple[ConfigResult, ...]
    available_cores: int = 1

    @property
    def all_verified(self) -> bool:
        return all(r.verified for r in self.per_config)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready mapping of the report."""
        src_h, src_w = self.source_shape
        dst_h, dst_w = self.target_shape
        return {
            "algorithm": "bilinear",
            "original_height": src_h,
            "original_width": src_w,
            "new_height": dst_h,
            "new_width": dst_w,
            "serial_time": self.baseline_time_seconds,
            "parallel_results": [r.to_dict() for r in self.per_config],
            "all_verified": self.all_verified,
            "available_cores": self.available_cores,
        }


@dataclass(frozen=True)
class BenchmarkRun:
    """A report plus the grids kept for export."""

    report: BenchmarkReport
    baseline: PixelGrid
    retained: PixelGrid
    retained_workers: int


def target_shape(source: PixelGrid, scale: float) -> Tuple[int, int]:
    """Destination size for a uniform ``scale`` factor (each side >= 1)."""
    if not scale > 0:
        raise ConfigurationError(f"scale must be > 0, got {scale}")
    h = max(1, int(round(source.height * scale)))
    w = max(1, int(round(source.width * scale)))
    return h, w


def speedup_of(baseline_time: float, parallel_time: float) -> float:
    return baseline_time / parallel_time


def efficiency_of(speedup: float, workers: int) -> float:
    """Speedup as a percentage of ideal linear scaling."""
    return speedup / workers * 100.0


class BenchmarkHarness:
    """Times a sequential baseline against a sweep of parallel worker counts.

    Parameters
    ----------
    worker_counts : iterable of int
        Worker counts to run, in order. Must be non-empty, all >= 1.
    scale : float
        Uniform resize factor applied to both axes.
    clock : callable
        Monotonic wall-clock in seconds. Defaults to ``time.perf_counter``.
    tile_rows, tile_cols : int
        Tile size handed to the parallel strategy.
    warmup : bool
        Compile the kernel before the first timed call.
    """

    def __init__(
        self,
        worker_counts: Iterable[int] = DEFAULT_WORKER_COUNTS,
        scale: float = DEFAULT_SCALE,
        clock: Clock = time.perf_counter,
        tile_rows: int = DEFAULT_TILE_ROWS,
        tile_cols: int = DEFAULT_TILE_COLS,
        warmup: bool = True,
    ) -> None:
        counts = tuple(int(n) for n in worker_counts)
        if not counts:
            raise ConfigurationError("at least one worker count is required")
        if any(n < 1 for n in counts):
            raise ConfigurationError(f"worker counts must be >= 1, got {list(counts)}")
        if not scale > 0:
            raise ConfigurationError(f"scale must be > 0, got {scale}")
        if tile_rows < 1 or tile_cols < 1:
            raise ConfigurationError("tile_rows and tile_cols must be >= 1")
        self.worker_counts = counts
        self.scale = float(scale)
        self.clock = clock
        self.tile_rows = tile_rows
        self.tile_cols = tile_cols
        self.warmup = warmup

    def _timed(self, source: PixelGrid, shape: Tuple[int, int], strategy) -> Tuple[PixelGrid, float]:
        start = self.clock()
        result = resize(source, shape[0], shape[1], strategy)
        elapsed = self.clock() - start
        return result, max(elapsed, MIN_ELAPSED)

    def run(self, source: PixelGrid) -> BenchmarkRun:
        shape = target_shape(source, self.scale)
        logger.info(
            "Source %dx%d -> target %dx%d (scale %.2fx)",
            source.height, source.width, shape[0], shape[1], self.scale,
        )
        if self.warmup:
            warmup()

        baseline, baseline_time = self._timed(source, shape, Sequential())
        logger.info("Sequential: %.4f s", baseline_time)
        logger.info("Available cores: %d", os.cpu_count() or 1)

        keep_workers = max(self.worker_counts)
        retained: Optional[PixelGrid] = None
        results = []
        for workers in self.worker_counts:
            strategy = Parallel(workers, self.tile_rows, self.tile_cols)
            result, elapsed = self._timed(source, shape, strategy)
            speedup = speedup_of(baseline_time, elapsed)
            ok = verify(baseline, result)
            if not ok:
                logger.warning(
                    "Parallel x%d differs from baseline, first at %s",
                    workers, first_mismatch(baseline, result),
                )
            results.append(ConfigResult(
                worker_count=workers,
                time_seconds=elapsed,
                speedup=speedup,
                efficiency_percent=efficiency_of(speedup, workers),
                verified=ok,
            ))
            logger.info(
                "Parallel x%d: %.4f s, speedup %.2fx, verified=%s",
                workers, elapsed, speedup, ok,
            )
            if workers == keep_workers:
                retained = result

        report = BenchmarkReport(
            source_shape=source.shape,
            target_shape=shape,
            baseline_time_seconds=baseline_time,
            per_config=tuple(results),
            available_cores=os.cpu_count() or 1,
        )
        return BenchmarkRun(report, baseline, retained, keep_workers)


def format_report(report: BenchmarkReport) -> str:
    """Render a report as plain text."""
    src_h, src_w = report.source_shape
    dst_h, dst_w = report.target_shape
    lines = [
        "=" * 65,
        "  Bilinear interpolation: sequential vs parallel",
        "=" * 65,
        f"Source size: {src_h}x{src_w} (RGB)",
        f"Target size: {dst_h}x{dst_w} (RGB)",
        "",
        f"Sequential time: {report.baseline_time_seconds:.4f} s",
        f"Available cores: {report.available_cores}",
        "",
    ]
    for r in report.per_config:
        lines.append(f"Parallel with {r.worker_count} workers:")
        lines.append(f"  Time:       {r.time_seconds:.4f} s")
        lines.append(f"  Speedup:    {r.speedup:.2f}x")
        lines.append(f"  Efficiency: {r.efficiency_percent:.2f}%")
        lines.append(f"  Verified:   {'yes' if r.verified else 'NO'}")
        lines.append("")
    lines.append("=" * 65)
    return "\n".join(lines)


__all__ = [
    "BenchmarkHarness",
    "BenchmarkReport",
    "BenchmarkRun",
    "ConfigResult",
    "format_report",
    "target_shape",
    "speedup_of",
    "efficiency_of",
    "DEFAULT_WORKER_COUNTS",
    "DEFAULT_SCALE",
]
