"""
Per-segment elevation and gradient metrics.

Every metric is computed from a :class:`~transform.decode.DecodedSegment`
and its sequential geodesic distances, so each segment is parsed once.
Gradients are ratios (rise over run); the summary statistics are taken over
absolute per-vertex-pair gradients.
"""

from __future__ import annotations

import warnings
from dataclasses import asdict, dataclass
from typing import Dict, List

import numpy as np

from common.errors import DegenerateSegmentWarning
from common.logging_utils import logger
from transform.decode import DecodedSegment

METRIC_COLUMNS = [
    "elevation_start",
    "elevation_end",
    "elevation_max",
    "elevation_min",
    "elevation_mean",
    "elevation_change",
    "gradient_mean",
    "gradient_median",
    "gradient_p75",
    "gradient_max",
]


@dataclass(frozen=True)
class SegmentMetrics:
    elevation_start: float
    elevation_end: float
    elevation_max: float
    elevation_min: float
    elevation_mean: float
    elevation_change: float
    gradient_mean: float
    gradient_median: float
    gradient_p75: float
    gradient_max: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def pair_gradients(elevations: np.ndarray, distances: np.ndarray) -> np.ndarray:
    """
    Gradient between each consecutive pair of vertices.

    A zero-length pair has no defined gradient and yields NaN.
    """
    rise = np.diff(np.asarray(elevations, dtype=float))
    run = np.asarray(distances, dtype=float)
    if rise.shape != run.shape:
        raise ValueError(f"{rise.size} elevation differences but {run.size} distances")

    gradients = np.full(rise.shape, np.nan)
    ok = run > 0
    gradients[ok] = rise[ok] / run[ok]
    return gradients


def _nan_stat(func, values: np.ndarray, *args) -> float:
    # Empty or all-NaN input gives NaN without numpy's RuntimeWarning
    if values.size == 0 or np.all(np.isnan(values)):
        return float("nan")
    return float(func(values, *args))


def derive_metrics(segment: DecodedSegment, distances: np.ndarray) -> SegmentMetrics:
    """Summarise one segment's elevations and per-pair gradients."""
    elev = segment.elevations
    grad = np.abs(pair_gradients(elev, distances))

    n_undefined = int(np.isnan(grad).sum())
    if n_undefined:
        logger.debug(
            "Segment %d: %d zero-length vertex pair(s) excluded from gradient stats",
            segment.index,
            n_undefined,
        )

    elevation_max = float(elev.max())
    elevation_min = float(elev.min())

    return SegmentMetrics(
        elevation_start=float(elev[0]),
        elevation_end=float(elev[-1]),
        elevation_max=elevation_max,
        elevation_min=elevation_min,
        elevation_mean=float(elev.mean()),
        elevation_change=elevation_max - elevation_min,
        gradient_mean=_nan_stat(np.nanmean, grad),
        gradient_median=_nan_stat(np.nanmedian, grad),
        gradient_p75=_nan_stat(np.nanpercentile, grad, 75),
        gradient_max=_nan_stat(np.nanmax, grad),
    )


def gradient_segment(elevation_change: np.ndarray, distances: np.ndarray, index_offset: int = 1) -> np.ndarray:
    """
    Average gradient per segment, ``elevation_change / distance``.

    Zero-length segments get NaN and a :class:`DegenerateSegmentWarning`.
    ``index_offset`` only affects the segment numbers reported.
    """
    change = np.asarray(elevation_change, dtype=float)
    dist = np.asarray(distances, dtype=float)

    result = np.full(change.shape, np.nan)
    ok = dist > 0
    result[ok] = change[ok] / dist[ok]

    degenerate: List[int] = [int(i) + index_offset for i in np.flatnonzero(~ok)]
    if degenerate:
        message = f"Zero-length segment(s) {degenerate}: gradient_segment set to NaN"
        logger.warning(message)
        warnings.warn(message, DegenerateSegmentWarning, stacklevel=2)

    return result


def metrics_table(segments: List[DecodedSegment], distances: List[np.ndarray]) -> Dict[str, List[float]]:
    """Column-major metrics for a list of segments, in segment order."""
    columns: Dict[str, List[float]] = {name: [] for name in METRIC_COLUMNS}
    for segment, dist in zip(segments, distances):
        for name, value in derive_metrics(segment, dist).as_dict().items():
            columns[name].append(value)
    return columns


__all__ = [
    "METRIC_COLUMNS",
    "SegmentMetrics",
    "pair_gradients",
    "derive_metrics",
    "gradient_segment",
    "metrics_table",
]
