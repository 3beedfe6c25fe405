from __future__ import annotations

import logging

import numpy as np
import pytest

from pixbench.utils.grid import PixelGrid


@pytest.fixture(autouse=True)
def _reset_pixbench_logger():
    yield
    logger = logging.getLogger("pixbench")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def random_grid():
    def make(height: int, width: int, seed: int = 0) -> PixelGrid:
        rng = np.random.default_rng(seed)
        return PixelGrid.from_array(rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8))

    return make


@pytest.fixture
def corners_grid() -> PixelGrid:
    """2x2 grid with black, red, green and blue corners."""
    return PixelGrid.from_array(
        [
            [[0, 0, 0], [255, 0, 0]],
            [[0, 255, 0], [0, 0, 255]],
        ]
    )
