"""
Constant / variable attribute classification.

The response's attribute frame has one row per marker: row 0 is the whole
journey and rows 1..N are the segments. An attribute is

* constant when every segment is missing it, so only the journey record
  carries a value. That value is broadcast to all rows.
* variable when no segment is missing it and its name is not bearing or
  type metadata. Rows 1..N are taken as they are.

Anything else is partially missing and is dropped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Union

import numpy as np
import pandas as pd

from common.logging_utils import logger

Scalar = Union[str, float, None]

EXCLUDED_VARIABLE = re.compile(r"startBearing|type")
EXCLUDED_CONSTANT = {"coordinates"}


@dataclass
class AttributeClassification:
    """Two disjoint attribute maps plus the names that were dropped."""

    n_segments: int
    constant: Dict[str, Scalar] = field(default_factory=dict)
    variable: Dict[str, List[object]] = field(default_factory=dict)
    dropped: List[str] = field(default_factory=list)

    def constant_frame(self) -> pd.DataFrame:
        """Constants repeated for every segment row."""
        return pd.DataFrame(
            {name: [value] * self.n_segments for name, value in self.constant.items()},
            index=pd.RangeIndex(self.n_segments),
        )


def coerce_scalar(value) -> Scalar:
    """Return ``value`` as a float when it parses as one, otherwise unchanged."""
    if value is None or (np.ndim(value) == 0 and pd.isna(value)):
        return None
    if isinstance(value, bool):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return value


def coerce_series(values: pd.Series) -> pd.Series:
    """Numeric when every non-missing value parses as a number, else untouched."""
    try:
        numeric = pd.to_numeric(values, errors="coerce")
    except (TypeError, ValueError):
        return values
    if numeric.notna().sum() == values.notna().sum():
        return numeric.astype(float)
    return values


def classify_attributes(attributes: pd.DataFrame) -> AttributeClassification:
    """
    Split the attribute frame into constant and variable attribute maps.

    Args:
        attributes: One row per marker, row 0 being the whole-journey record

    Returns:
        AttributeClassification over the N = len(attributes) - 1 segments
    """
    n_segments = len(attributes) - 1
    result = AttributeClassification(n_segments=n_segments)
    if n_segments < 1:
        return result

    segment_rows = attributes.iloc[1:]
    n_missing = segment_rows.isna().sum()

    for name in attributes.columns:
        missing = int(n_missing[name])

        if missing == n_segments:
            if name in EXCLUDED_CONSTANT:
                logger.debug(f"Skipping constant attribute '{name}'")
                continue
            result.constant[name] = coerce_scalar(attributes[name].iloc[0])
        elif missing == 0:
            if EXCLUDED_VARIABLE.search(name):
                logger.debug(f"Skipping excluded variable attribute '{name}'")
                continue
            result.variable[name] = segment_rows[name].tolist()
        else:
            result.dropped.append(name)

    if result.dropped:
        logger.warning(
            "Dropped %d partially missing attribute(s): %s",
            len(result.dropped),
            result.dropped,
        )

    logger.info(
        "Classified attributes: constant=%d variable=%d dropped=%d",
        len(result.constant),
        len(result.variable),
        len(result.dropped),
    )
    return result


__all__ = [
    "AttributeClassification",
    "EXCLUDED_VARIABLE",
    "coerce_scalar",
    "coerce_series",
    "classify_attributes",
]
