from __future__ import annotations

from pixbench.errors import ConfigurationError, DecodeError, EncodeError, PixbenchError  # noqa: F401
from pixbench.harness import (  # noqa: F401
    BenchmarkHarness,
    BenchmarkReport,
    BenchmarkRun,
    ConfigResult,
    format_report,
)
from pixbench.resample import Parallel, Sequential, resize, warmup  # noqa: F401
from pixbench.utils.grid import PixelGrid  # noqa: F401
from pixbench.utils.loader import load_image, save_image  # noqa: F401
from pixbench.verify import verify  # noqa: F401

__all__ = [
    "PixelGrid",
    "load_image",
    "save_image",
    "resize",
    "warmup",
    "Sequential",
    "Parallel",
    "verify",
    "BenchmarkHarness",
    "BenchmarkReport",
    "BenchmarkRun",
    "ConfigResult",
    "format_report",
    "PixbenchError",
    "ConfigurationError",
    "DecodeError",
    "EncodeError",
]
