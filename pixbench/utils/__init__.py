"""Utility modules for pixbench.

Modules:
- grid: Flat RGB PixelGrid buffer.
- loader: Load/save Pillow <-> PixelGrid conversion utilities.
"""
from .grid import PixelGrid, CHANNELS
from .loader import load_image, save_image

__all__ = [
    "PixelGrid",
    "CHANNELS",
    "load_image",
    "save_image",
]
