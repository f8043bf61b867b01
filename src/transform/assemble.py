# src/transform/assemble.py
"""Build the per-segment route table from a parsed CycleStreets response."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence

import numpy as np
import pandas as pd
from pyproj import CRS
from shapely.geometry import LineString

from common.config import (
    CRS_EPSG,
    DISTANCE_CUTOFF,
    GRADIENT_CUTOFF,
    SEGMENT_COLS_EXTRA,
    SMOOTHING_WINDOW,
)
from common.errors import SchemaError
from common.logging_utils import logger
from schemas.common.schema_utils import validate_route_table
from schemas.schema_registry import get_schema_class
from transform.columns import AttributeClassification, classify_attributes, coerce_series
from transform.decode import DecodedSegment, decode_segment, txt_to_distance_sum
from transform.distance import sequential_distances
from transform.metrics import gradient_segment, metrics_table
from transform.smoothing import smooth_with_cutoffs
from transform.transform_utils import Timer, normalize_marker_attributes

POINTS_ATTRIBUTE = "points"
ELEVATIONS_ATTRIBUTE = "elevations"
DISTANCES_ATTRIBUTE = "distances"
GEOMETRY_COLUMN = "geometry"

# Text attributes never coerced to numbers
TEXT_ATTRIBUTES = {"name", "provisionName", POINTS_ATTRIBUTE, ELEVATIONS_ATTRIBUTE}


def _unique(names: Iterable[str]) -> List[str]:
    seen = set()
    out = []
    for name in names:
        if name not in seen:
            seen.add(name)
            out.append(name)
    return out


def decode_segments(attributes: pd.DataFrame) -> List[DecodedSegment]:
    """Decode every segment (rows 1..N) of the attribute frame."""
    missing = [c for c in (POINTS_ATTRIBUTE, ELEVATIONS_ATTRIBUTE) if c not in attributes.columns]
    if missing:
        raise SchemaError(f"journey response is missing required attribute(s): {missing}", missing)

    segment_rows = attributes.iloc[1:]
    if segment_rows.empty:
        raise SchemaError("journey response contains no route segments")

    return [
        decode_segment(row[POINTS_ATTRIBUTE], row[ELEVATIONS_ATTRIBUTE], index=int(i))
        for i, row in segment_rows.iterrows()
    ]


def segment_distances(classification: AttributeClassification, geodesic_lengths: np.ndarray) -> np.ndarray:
    """
    Segment lengths in metres from the API's per-segment ``distances`` strings.

    Falls back to the geodesic length when the response carries no complete
    ``distances`` series.
    """
    raw = classification.variable.get(DISTANCES_ATTRIBUTE)
    if raw is None:
        logger.warning(
            "No per-segment '%s' attribute in response; using geodesic segment lengths",
            DISTANCES_ATTRIBUTE,
        )
        return np.asarray(geodesic_lengths, dtype=float)
    return np.array([txt_to_distance_sum(txt) for txt in raw], dtype=float)


def build_variable_frame(
    classification: AttributeClassification,
    segments: Sequence[DecodedSegment],
    pair_distances: Sequence[np.ndarray],
) -> pd.DataFrame:
    """Per-segment attributes plus every derived metric, one row per segment."""
    geodesic = np.array([float(d.sum()) for d in pair_distances], dtype=float)
    distances = segment_distances(classification, geodesic)

    df = pd.DataFrame(classification.variable, index=pd.RangeIndex(classification.n_segments))
    for column in df.columns:
        if column not in TEXT_ATTRIBUTES:
            df[column] = coerce_series(df[column])

    df[DISTANCES_ATTRIBUTE] = distances
    df["distance_geodesic"] = geodesic
    for name, values in metrics_table(list(segments), list(pair_distances)).items():
        df[name] = values

    df["gradient_segment"] = gradient_segment(df["elevation_change"].to_numpy(), distances)
    return df


def select_columns(
    variable: pd.DataFrame,
    constant: pd.DataFrame,
    cols: Optional[Sequence[str]] = None,
    cols_extra: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """
    Merge variable and constant columns, then restrict and order them.

    ``cols_extra`` limits the variable columns to those named in ``cols`` or
    ``cols_extra``; constants are always carried into the merge. With ``cols``
    set the result holds exactly ``cols`` followed by whichever ``cols_extra``
    are available. A primary column that is unavailable, or that has no value
    for any segment, raises :class:`SchemaError`. With neither list every
    column is kept.
    """
    constant = constant.drop(columns=[c for c in constant.columns if c in variable.columns])
    if cols_extra is not None:
        wanted = _unique(list(cols or []) + list(cols_extra))
        variable = variable[[c for c in wanted if c in variable.columns]]
    merged = pd.concat([variable, constant], axis=1)

    if cols is None:
        return merged

    primary = _unique(cols)
    missing = [c for c in primary if c not in merged.columns or merged[c].isna().all()]
    if missing:
        raise SchemaError(f"requested column(s) not available in journey: {missing}", missing)

    extras = [c for c in _unique(cols_extra or []) if c in merged.columns and c not in primary]
    skipped = [c for c in _unique(cols_extra or []) if c not in merged.columns]
    if skipped:
        logger.debug(f"Extra columns not available and skipped: {skipped}")

    return merged[primary + extras]


def build_geometry(segments: Sequence[DecodedSegment]) -> List[LineString]:
    """One linestring per segment; a lone vertex becomes a zero-length line."""
    lines = []
    for segment in segments:
        coords = segment.coords
        if coords.shape[0] == 1:
            coords = np.vstack([coords, coords])
        lines.append(LineString(coords))
    return lines


def json_to_route_table(
    obj: Mapping[str, Any],
    cols: Optional[Sequence[str]] = None,
    cols_extra: Optional[Sequence[str]] = SEGMENT_COLS_EXTRA,
    smooth_gradient: bool = False,
    distance_cutoff: float = DISTANCE_CUTOFF,
    gradient_cutoff: float = GRADIENT_CUTOFF,
    n: int = SMOOTHING_WINDOW,
) -> pd.DataFrame:
    """
    Convert a parsed CycleStreets journey into a per-segment route table.

    Args:
        obj: Parsed JSON response; marker 0 is the whole journey
        cols: Columns to keep, in order, or None for every column
        cols_extra: Further columns appended after ``cols`` when available.
            Without ``cols`` it selects the variable columns kept next to the
            constants; None keeps every variable column
        smooth_gradient: Add a ``gradient_smooth`` column
        distance_cutoff: See :func:`transform.smoothing.smooth_with_cutoffs`
        gradient_cutoff: See :func:`transform.smoothing.smooth_with_cutoffs`
        n: See :func:`transform.smoothing.smooth_with_cutoffs`

    Returns:
        DataFrame with one row per segment, a ``geometry`` column of shapely
        linestrings and ``attrs["crs"]`` set to EPSG:4326
    """
    with Timer() as timer:
        attributes = normalize_marker_attributes(obj)
        segments = decode_segments(attributes)
        pair_distances = [sequential_distances(s.coords) for s in segments]

        classification = classify_attributes(attributes)
        variable = build_variable_frame(classification, segments, pair_distances)
        table = select_columns(variable, classification.constant_frame(), cols, cols_extra)

        table = table.copy()
        table[GEOMETRY_COLUMN] = pd.Series(build_geometry(segments), index=table.index, dtype=object)

        if smooth_gradient:
            table["gradient_smooth"] = smooth_with_cutoffs(
                variable["gradient_segment"].to_numpy(),
                variable["elevation_change"].to_numpy(),
                variable[DISTANCES_ATTRIBUTE].to_numpy(),
                distance_cutoff,
                gradient_cutoff,
                n,
            )

        table = validate_route_table(table, get_schema_class("route-segments"))
        table.attrs["crs"] = CRS.from_epsg(CRS_EPSG)

    logger.info(
        "Route table built: segments=%d columns=%d smoothed=%s duration=%.2fs",
        len(table),
        len(table.columns),
        smooth_gradient,
        timer.duration,
    )
    return table


__all__ = [
    "POINTS_ATTRIBUTE",
    "ELEVATIONS_ATTRIBUTE",
    "DISTANCES_ATTRIBUTE",
    "GEOMETRY_COLUMN",
    "decode_segments",
    "segment_distances",
    "build_variable_frame",
    "select_columns",
    "build_geometry",
    "json_to_route_table",
]
