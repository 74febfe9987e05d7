"""
Normalization of caller geometry into point arrays.
"""

from typing import Any

import numpy as np


def as_points(linestring: Any) -> np.ndarray:
    """
    Convert a line string into a float64 array of shape (N, 2).

    Accepts a numpy array, any sequence of (x, y) pairs, or an object with a
    `coords` attribute holding such pairs (e.g. a shapely LineString).

    Raises:
        ValueError: If the points are not two-dimensional.
    """
    coords = getattr(linestring, "coords", linestring)
    points = np.asarray(coords, dtype=np.float64)
    if points.size == 0:
        return np.empty((0, 2), dtype=np.float64)
    if points.ndim != 2 or points.shape[1] != 2:
        raise ValueError(f"Expected points of shape (N, 2), got {points.shape}")
    return points


def points_close(a: Any, b: Any, tolerance: float) -> bool:
    """Whether two line strings have the same length and all coordinates within `tolerance`."""
    a = as_points(a)
    b = as_points(b)
    if a.shape != b.shape:
        return False
    return bool(np.all(np.abs(a - b) <= tolerance))
