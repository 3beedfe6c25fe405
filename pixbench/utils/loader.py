"""Image loading and saving using Pillow, producing PixelGrid buffers.

The resampling core never touches files. These helpers are the only place
where Pillow images are converted to and from RGB ``uint8`` pixel grids.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..errors import DecodeError, EncodeError
from .grid import PixelGrid

logger = logging.getLogger(__name__)


def load_image(path: Union[str, Path]) -> PixelGrid:
    """Load an image file into a 3-channel PixelGrid.

    Parameters
    ----------
    path : str | Path
        Path to an image supported by Pillow. Palette, grayscale and alpha
        images are converted to RGB; the alpha channel is dropped.

    Returns
    -------
    PixelGrid
        Grid of the image's height and width.

    Raises
    ------
    DecodeError
        If the file does not exist or Pillow cannot decode it.
    """
    p = Path(path)
    try:
        with Image.open(p) as im:
            im = im.convert("RGB")
            arr = np.array(im, dtype=np.uint8)
    except FileNotFoundError as exc:
        raise DecodeError(f"Input file not found: {p}") from exc
    except (UnidentifiedImageError, OSError) as exc:
        raise DecodeError(f"Cannot decode image {p}: {exc}") from exc

    grid = PixelGrid.from_array(arr)
    logger.info("Loaded %s: %dx%d (RGB)", p, grid.height, grid.width)
    return grid


def save_image(grid: PixelGrid, path: Union[str, Path]) -> None:
    """Save a PixelGrid to an image file via Pillow.

    Parameters
    ----------
    grid : PixelGrid
        Grid to write.
    path : str | Path
        Output file path. The format is inferred from the extension.

    Raises
    ------
    EncodeError
        If the format is unknown or the file cannot be written.
    """
    if not isinstance(grid, PixelGrid):
        raise TypeError("grid must be a PixelGrid")

    p = Path(path)
    im = Image.fromarray(grid.as_array())
    try:
        im.save(p)
    except (ValueError, OSError) as exc:
        raise EncodeError(f"Cannot write image {p}: {exc}") from exc
    logger.info("Saved %s", p)


__all__ = ["load_image", "save_image"]
