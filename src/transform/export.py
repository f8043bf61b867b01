"""Write a route table to CSV (geometry as WKT) or GeoJSON."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Dict, Union

import pandas as pd
from shapely.geometry import mapping

from common.logging_utils import logger
from transform.assemble import GEOMETRY_COLUMN


def _json_value(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if hasattr(value, "item"):
        # numpy scalars
        return _json_value(value.item())
    return value


def to_geojson(table: pd.DataFrame) -> Dict[str, Any]:
    """FeatureCollection with one LineString feature per segment."""
    properties = [c for c in table.columns if c != GEOMETRY_COLUMN]
    features = []
    for _, row in table.iterrows():
        features.append(
            {
                "type": "Feature",
                "properties": {c: _json_value(row[c]) for c in properties},
                "geometry": mapping(row[GEOMETRY_COLUMN]),
            }
        )
    return {"type": "FeatureCollection", "features": features}


def write_route_table(table: pd.DataFrame, path: Union[str, Path]) -> Path:
    """Write ``table`` to ``path``; the suffix picks the format."""
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".csv":
        out = table.copy()
        out[GEOMETRY_COLUMN] = [geom.wkt for geom in out[GEOMETRY_COLUMN]]
        out.to_csv(path, index=False)
    elif suffix in (".geojson", ".json"):
        with path.open("w", encoding="utf-8") as fh:
            json.dump(to_geojson(table), fh)
    else:
        raise ValueError(f"Unsupported output format: {path.suffix!r} (use .csv or .geojson)")

    logger.info("Wrote %d segments to %s", len(table), path)
    return path


__all__ = [
    "to_geojson",
    "write_route_table",
]
