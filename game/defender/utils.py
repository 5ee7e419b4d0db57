"""
Utility functions for game mechanics
"""

from __future__ import annotations
import colorsys
import random
from typing import Tuple, Optional
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def rects_overlap(a, b) -> bool:
    """Check if two axis-aligned rectangles overlap.

    Any object with ``x``, ``y``, ``width`` and ``height`` works. Edges that
    only touch do not count as an overlap.
    """
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )


def rect_center(r) -> Tuple[float, float]:
    """Center point of a rectangle"""
    return r.x + r.width / 2, r.y + r.height / 2


def hsl_to_rgb(hue: float, saturation: float = 1.0, lightness: float = 0.5) -> Tuple[int, int, int]:
    """Convert an HSL color (hue in degrees) to an 8-bit RGB tuple"""
    r, g, b = colorsys.hls_to_rgb((hue % 360) / 360.0, lightness, saturation)
    return int(r * 255), int(g * 255), int(b * 255)


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
