from __future__ import annotations

import json
import os
from typing import Iterable

import pytest

from pixbench.errors import ConfigurationError
from pixbench.harness import (
    MIN_ELAPSED,
    BenchmarkHarness,
    efficiency_of,
    format_report,
    speedup_of,
    target_shape,
)
from pixbench.resample import Sequential, resize
from pixbench.utils.grid import PixelGrid


class FakeClock:
    """Returns the given readings in order, one per call."""

    def __init__(self, readings: Iterable[float]) -> None:
        self._readings = iter(readings)
        self.calls = 0

    def __call__(self) -> float:
        self.calls += 1
        return next(self._readings)


def test_report_with_fake_clock(random_grid) -> None:
    # baseline 4s, then x2 -> 2s, x4 -> 1s, x8 -> 1s
    clock = FakeClock([0.0, 4.0, 10.0, 12.0, 20.0, 21.0, 30.0, 31.0])
    harness = BenchmarkHarness(clock=clock, tile_rows=2, tile_cols=3, warmup=False)
    run = harness.run(random_grid(5, 6))
    report = run.report

    assert clock.calls == 8
    assert report.source_shape == (5, 6)
    assert report.target_shape == (10, 12)
    assert report.baseline_time_seconds == 4.0
    assert [r.worker_count for r in report.per_config] == [2, 4, 8]
    assert [r.time_seconds for r in report.per_config] == [2.0, 1.0, 1.0]
    assert [r.speedup for r in report.per_config] == [2.0, 4.0, 4.0]
    assert [r.efficiency_percent for r in report.per_config] == [100.0, 100.0, 50.0]
    assert report.all_verified


def test_efficiency_reconstructs_from_times(random_grid) -> None:
    clock = FakeClock([0.0, 0.3, 1.0, 1.7, 2.0, 2.11])
    run = BenchmarkHarness(worker_counts=(3, 5), clock=clock, warmup=False).run(random_grid(3, 4))
    base = run.report.baseline_time_seconds
    for r in run.report.per_config:
        assert r.speedup > 0
        assert r.speedup == base / r.time_seconds
        assert r.efficiency_percent == r.speedup / r.worker_count * 100


def test_baseline_is_sequential_result_and_max_workers_retained(random_grid) -> None:
    src = random_grid(6, 5, seed=4)
    run = BenchmarkHarness(worker_counts=(8, 2, 4), tile_rows=3, tile_cols=2, warmup=False).run(src)
    assert run.baseline == resize(src, 12, 10, Sequential())
    assert run.retained_workers == 8
    assert run.retained == run.baseline
    assert run.retained is not run.baseline
    assert [r.worker_count for r in run.report.per_config] == [8, 2, 4]


def test_zero_elapsed_time_is_floored(random_grid) -> None:
    run = BenchmarkHarness(worker_counts=(2,), clock=lambda: 5.0, warmup=False).run(random_grid(2, 2))
    assert run.report.baseline_time_seconds == MIN_ELAPSED
    assert run.report.per_config[0].speedup == 1.0


def test_mismatch_is_reported_not_raised(monkeypatch, random_grid) -> None:
    import pixbench.harness as harness_mod

    real_resize = harness_mod.resize

    def corrupting_resize(grid, h, w, strategy):
        out = real_resize(grid, h, w, strategy)
        if not isinstance(strategy, Sequential) and strategy.workers == 4:
            out.pixels[0] ^= 0xFF
        return out

    monkeypatch.setattr(harness_mod, "resize", corrupting_resize)
    report = BenchmarkHarness(warmup=False).run(random_grid(3, 3)).report
    assert [r.verified for r in report.per_config] == [True, False, True]
    assert not report.all_verified


def test_scale_sets_target_shape(random_grid) -> None:
    run = BenchmarkHarness(worker_counts=(2,), scale=1.5, warmup=False).run(random_grid(4, 6))
    assert run.report.target_shape == (6, 9)
    assert run.baseline.shape == (6, 9)


def test_target_shape_rounds_and_floors_at_one() -> None:
    grid = PixelGrid.empty(3, 10)
    assert target_shape(grid, 2.0) == (6, 20)
    assert target_shape(grid, 0.01) == (1, 1)
    with pytest.raises(ConfigurationError):
        target_shape(grid, 0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"worker_counts": ()},
        {"worker_counts": (2, 0)},
        {"scale": 0.0},
        {"scale": -1.0},
        {"tile_rows": 0},
    ],
)
def test_invalid_configuration(kwargs) -> None:
    with pytest.raises(ConfigurationError):
        BenchmarkHarness(**kwargs)


def test_speedup_and_efficiency_helpers() -> None:
    assert speedup_of(3.0, 1.5) == 2.0
    assert efficiency_of(2.0, 4) == 50.0


def test_report_rendering_and_json(random_grid) -> None:
    clock = FakeClock([0.0, 2.0, 0.0, 1.0])
    report = BenchmarkHarness(worker_counts=(2,), clock=clock, warmup=False).run(random_grid(2, 3)).report

    text = format_report(report)
    assert "Source size: 2x3" in text
    assert "Target size: 4x6" in text
    assert "Sequential time: 2.0000 s" in text
    assert "Parallel with 2 workers:" in text
    assert "Speedup:    2.00x" in text
    assert "Efficiency: 100.00%" in text
    assert "Verified:   yes" in text
    assert f"Available cores: {os.cpu_count() or 1}" in text

    data = json.loads(json.dumps(report.to_dict()))
    assert data["original_height"] == 2
    assert data["new_width"] == 6
    assert data["serial_time"] == 2.0
    assert data["parallel_results"] == [
        {"workers": 2, "time": 1.0, "speedup": 2.0, "efficiency": 100.0, "verified": True}
    ]
    assert data["all_verified"] is True
    assert data["available_cores"] == (os.cpu_count() or 1)
    assert report.available_cores >= 1


def test_report_is_immutable(random_grid) -> None:
    report = BenchmarkHarness(worker_counts=(2,), warmup=False).run(random_grid(2, 2)).report
    with pytest.raises(AttributeError):
        report.baseline_time_seconds = 1.0  # type: ignore[misc]
