"""
Anomalous gradient smoothing.

Short segments amplify elevation-sampling noise: a couple of metres of error
over ten metres of road reads as a 20% climb. When a segment is both steeper
than ``gradient_cutoff`` and no longer than ``distance_cutoff`` its gradient
is replaced by the ratio of centred rolling means of elevation change and
distance over ``n`` neighbouring segments.
"""

from __future__ import annotations

import warnings
from typing import Sequence

import numpy as np
import pandas as pd

from common.config import DISTANCE_CUTOFF, GRADIENT_CUTOFF, SMOOTHING_WINDOW, SmoothingConfig
from common.errors import AnomalyCorrectionNotice
from common.logging_utils import logger


def rolling_average(values: Sequence[float], n: int = SMOOTHING_WINDOW) -> np.ndarray:
    """
    Centred moving average over ``n`` values.

    Near either end the window shrinks to the values that exist, so the first
    and last ``n // 2`` entries average fewer than ``n`` values. Missing
    values are skipped rather than counted as zero.
    """
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")
    series = pd.Series(np.asarray(values, dtype=float))
    return series.rolling(window=n, center=True, min_periods=1).mean().to_numpy()


def flag_anomalies(
    gradient_segment: Sequence[float],
    distances: Sequence[float],
    distance_cutoff: float = DISTANCE_CUTOFF,
    gradient_cutoff: float = GRADIENT_CUTOFF,
) -> np.ndarray:
    """Boolean mask of steep, short segments. NaN gradients are never flagged."""
    gradient = np.asarray(gradient_segment, dtype=float)
    dist = np.asarray(distances, dtype=float)
    with np.errstate(invalid="ignore"):
        return (gradient > gradient_cutoff) & (dist <= distance_cutoff)


def smooth_with_cutoffs(
    gradient_segment: Sequence[float],
    elevation_change: Sequence[float],
    distances: Sequence[float],
    distance_cutoff: float = DISTANCE_CUTOFF,
    gradient_cutoff: float = GRADIENT_CUTOFF,
    n: int = SMOOTHING_WINDOW,
) -> np.ndarray:
    """
    Identify and smooth out anomalous gradient values.

    Args:
        gradient_segment: Gradient of each segment (ratio)
        elevation_change: Max minus min elevation within each segment (m)
        distances: Length of each segment (m)
        distance_cutoff: Segments at or below this length may be anomalous
        gradient_cutoff: Segments steeper than this may be anomalous
        n: Odd window size; 3 means the segments directly before and after

    Returns:
        A new gradient array; the inputs are left untouched
    """
    config = SmoothingConfig(distance_cutoff=distance_cutoff, gradient_cutoff=gradient_cutoff, n=n)

    gradient = np.array(gradient_segment, dtype=float, copy=True)
    change = np.asarray(elevation_change, dtype=float)
    dist = np.asarray(distances, dtype=float)
    if not (gradient.shape == change.shape == dist.shape):
        raise ValueError(
            f"length mismatch: gradient={gradient.size} elevation_change={change.size} distances={dist.size}"
        )

    selected = flag_anomalies(gradient, dist, config.distance_cutoff, config.gradient_cutoff)

    with np.errstate(divide="ignore", invalid="ignore"):
        smoothed = rolling_average(change, config.n) / rolling_average(dist, config.n)

    gradient[selected] = smoothed[selected]
    logger.info(
        "Smoothed %d of %d segment gradient(s) (distance_cutoff=%s gradient_cutoff=%s n=%d)",
        int(selected.sum()),
        gradient.size,
        config.distance_cutoff,
        config.gradient_cutoff,
        config.n,
    )

    undefined = ~np.isfinite(gradient)
    if undefined.any():
        defined = gradient[~undefined]
        fill = float(defined.mean()) if defined.size else float("nan")
        gradient[undefined] = fill
        message = f"NA values detected in {int(undefined.sum())} gradient(s); replaced with route mean {fill:.4f}"
        logger.warning(message)
        warnings.warn(message, AnomalyCorrectionNotice, stacklevel=2)

    return gradient


__all__ = [
    "rolling_average",
    "flag_anomalies",
    "smooth_with_cutoffs",
]
