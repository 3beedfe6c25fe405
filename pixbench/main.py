"""Command-line entry point for pixbench.

Loads an image, resizes it with bilinear interpolation once sequentially and
once per worker count, prints speedup, efficiency and a correctness check
for each run, and saves the sequential result and the result of the largest
worker count.

All processing occurs on flat NumPy pixel buffers; Pillow is used only for
loading and saving.

Usage example:
    python -m pixbench.main gantrycrane.png --workers 2 4 8 --scale 2 --json report.json
"""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError, DecodeError, EncodeError
from .harness import DEFAULT_SCALE, DEFAULT_WORKER_COUNTS, BenchmarkHarness, format_report
from .logging_config import setup_logging
from .resample.parallel import DEFAULT_TILE_COLS, DEFAULT_TILE_ROWS
from .utils.loader import load_image, save_image

logger = logging.getLogger(__name__)

DEFAULT_INPUT = "gantrycrane.png"


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    argv : list[str] | None
        Optional list of arguments for testing. If None, uses sys.argv.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="pixbench",
        description=(
            "Benchmark sequential against multi-threaded bilinear image "
            "resizing and verify that both produce identical pixels."
        ),
    )

    parser.add_argument(
        "input",
        nargs="?",
        default=DEFAULT_INPUT,
        help=f"Path to input image file (default: {DEFAULT_INPUT})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        nargs="+",
        default=list(DEFAULT_WORKER_COUNTS),
        help="Worker counts to benchmark, in order (default: 2 4 8)",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=DEFAULT_SCALE,
        help="Resize factor applied to both axes (default: 2.0)",
    )
    parser.add_argument(
        "--tile",
        type=int,
        nargs=2,
        metavar=("ROWS", "COLS"),
        default=[DEFAULT_TILE_ROWS, DEFAULT_TILE_COLS],
        help="Tile size handed to each parallel task",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        default=".",
        help="Directory for result_serial.png and result_parallel_<N>.png",
    )
    parser.add_argument("--no-save", action="store_true", help="Do not write result images")
    parser.add_argument("--json", dest="json_path", default=None, help="Also write the report as JSON")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    return parser.parse_args(argv)


def validate_args(ns: argparse.Namespace) -> None:
    """Validate argument values and raise ConfigurationError for invalid inputs."""
    if any(n < 1 for n in ns.workers):
        raise ConfigurationError("--workers values must be integers >= 1")
    if not ns.scale > 0:
        raise ConfigurationError("--scale must be > 0")
    if ns.tile[0] < 1 or ns.tile[1] < 1:
        raise ConfigurationError("--tile values must be >= 1")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry function for the CLI.

    Returns
    -------
    int
        0 on success, 1 when an image cannot be read or written, 2 for
        invalid arguments.
    """
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)
    try:
        validate_args(args)
        harness = BenchmarkHarness(
            worker_counts=args.workers,
            scale=args.scale,
            tile_rows=args.tile[0],
            tile_cols=args.tile[1],
        )
    except ConfigurationError as e:
        print(f"Argument error: {e}")
        return 2

    try:
        source = load_image(args.input)
    except DecodeError as e:
        logger.error("%s", e)
        return 1

    try:
        run = harness.run(source)
    except ConfigurationError as e:
        print(f"Argument error: {e}")
        return 2

    print(format_report(run.report))

    if args.json_path:
        try:
            Path(args.json_path).write_text(json.dumps(run.report.to_dict(), indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("Cannot write report %s: %s", args.json_path, e)
            return 1
        logger.info("Report written to %s", args.json_path)

    if not args.no_save:
        outdir = Path(args.output_dir)
        outdir.mkdir(parents=True, exist_ok=True)
        try:
            save_image(run.baseline, outdir / "result_serial.png")
            save_image(run.retained, outdir / f"result_parallel_{run.retained_workers}.png")
        except EncodeError as e:
            logger.error("%s", e)
            return 1

    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
