"""
Common Columns Mixins
=====================

Defines shared Pandera columns to be mixed into DataFrameModel schemas.
"""

from typing import Optional

import pandera.pandas as pa
from pandera.typing import Series


class ElevationMixin(pa.DataFrameModel):
    """
    Elevation summary of each segment, in metres.

    - elevation_start / elevation_end: first and last vertex samples
    - elevation_change: elevation_max minus elevation_min
    """

    elevation_start:	Optional[Series[float]]	= pa.Field(nullable=True,			description="Elevation at the first vertex (m)")
    elevation_end:		Optional[Series[float]]	= pa.Field(nullable=True,			description="Elevation at the last vertex (m)")
    elevation_max:		Optional[Series[float]]	= pa.Field(nullable=True,			description="Highest vertex elevation (m)")
    elevation_min:		Optional[Series[float]]	= pa.Field(nullable=True,			description="Lowest vertex elevation (m)")
    elevation_mean:		Optional[Series[float]]	= pa.Field(nullable=True,			description="Mean vertex elevation (m)")
    elevation_change:	Optional[Series[float]]	= pa.Field(nullable=True, ge=0,		description="elevation_max - elevation_min (m)")

    class Config:
        strict = False
        coerce = True


class GradientMixin(pa.DataFrameModel):
    """Gradient ratios; summaries are over absolute vertex-pair gradients."""

    gradient_segment:	Optional[Series[float]]	= pa.Field(nullable=True, ge=0,		description="elevation_change / distances")
    gradient_mean:		Optional[Series[float]]	= pa.Field(nullable=True, ge=0,		description="Mean absolute vertex-pair gradient")
    gradient_median:	Optional[Series[float]]	= pa.Field(nullable=True, ge=0,		description="Median absolute vertex-pair gradient")
    gradient_p75:		Optional[Series[float]]	= pa.Field(nullable=True, ge=0,		description="75th percentile absolute vertex-pair gradient")
    gradient_max:		Optional[Series[float]]	= pa.Field(nullable=True, ge=0,		description="Largest absolute vertex-pair gradient")
    gradient_smooth:	Optional[Series[float]]	= pa.Field(nullable=True, ge=0,		description="gradient_segment with anomalies smoothed")

    class Config:
        strict = False
        coerce = True


__all__ = [
    "ElevationMixin",
    "GradientMixin",
]
