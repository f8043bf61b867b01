"""
Sequential geodesic distances along a segment's vertices.

Distances are measured on the WGS84 ellipsoid with :class:`pyproj.Geod`.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np
from pyproj import Geod

_GEOD = Geod(ellps="WGS84")


def sequential_distances(coords: np.ndarray) -> np.ndarray:
    """
    Distances in metres between consecutive (lon, lat) vertices.

    Args:
        coords: Array of shape (M, 2), longitude first

    Returns:
        Array of M - 1 distances; empty for a single vertex
    """
    coords = np.asarray(coords, dtype=float)
    if coords.ndim != 2 or coords.shape[1] != 2:
        raise ValueError(f"coords must have shape (M, 2), got {coords.shape}")
    if coords.shape[0] < 2:
        return np.zeros(0, dtype=float)

    lons = coords[:, 0]
    lats = coords[:, 1]
    _, _, dist = _GEOD.inv(lons[:-1], lats[:-1], lons[1:], lats[1:])
    return np.abs(np.asarray(dist, dtype=float))


def segment_length(coords: np.ndarray) -> Tuple[np.ndarray, float]:
    """Return the sequential distances and their sum (0 for a single vertex)."""
    dist = sequential_distances(coords)
    return dist, float(dist.sum())


__all__ = [
    "sequential_distances",
    "segment_length",
]
