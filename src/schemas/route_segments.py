"""
Route Segments Schema
=====================

Schema for the per-segment route table built from a CycleStreets journey.
Every column is optional because callers choose which ones to keep; those
present are type-checked and coerced.
"""

from typing import Optional

import pandera.pandas as pa
from pandera.typing import Series

from schemas.common.columns import ElevationMixin, GradientMixin


class RouteSegments(ElevationMixin, GradientMixin, pa.DataFrameModel):
    """
    Pandera DataFrameModel for route segments.
    One row per segment, in route order; geometry is checked separately.
    """

    # Segment identification
    name:				Optional[Series[str]]	= pa.Field(nullable=True,				description="Street or path name of the segment")

    # Lengths
    distances:			Optional[Series[float]]	= pa.Field(nullable=True, ge=0,		description="Segment length from CycleStreets sub-distances (m)")
    distance_geodesic:	Optional[Series[float]]	= pa.Field(nullable=True, ge=0,		description="Geodesic length along the segment vertices (m)")

    class Config:
        strict = False  # Journey attributes vary between API editions
        coerce = True


# Columns that must hold one shapely LineString per row
COLS_GEOMETRY = ["geometry"]

RouteSegments._description = "Per-segment CycleStreets journey table with derived gradient metrics"

__all__ = [
    'RouteSegments',
    'COLS_GEOMETRY',
]
