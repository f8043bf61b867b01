"""Shared helpers for the route transform pipeline."""

from __future__ import annotations

from time import monotonic
from typing import Any, Dict, List, Mapping, Tuple

import pandas as pd

from common.errors import SchemaError
from common.logging_utils import logger


class Timer:
    """Context manager for timing code blocks."""

    def __init__(self) -> None:
        self.duration: float = 0.0
        self._start: float = 0.0

    def __enter__(self) -> "Timer":
        self._start = monotonic()
        return self

    def __exit__(self, exc_type, exc, exc_tb) -> None:
        self.duration = monotonic() - self._start


def build_response(status: str, http_code: int = 200, **payload) -> Tuple[Dict[str, object], int]:
    """Construct a standard handler response tuple."""

    body: Dict[str, object] = {"status": status}
    body.update(payload)
    return body, http_code


def _records_from_markers(markers: List[Any]) -> List[Mapping[str, Any]]:
    records = []
    for marker in markers:
        if isinstance(marker, Mapping) and "@attributes" in marker:
            marker = marker["@attributes"]
        if not isinstance(marker, Mapping):
            raise SchemaError(f"marker record must be an object, got {type(marker).__name__}")
        records.append(marker)
    return records


def normalize_marker_attributes(obj: Mapping[str, Any]) -> pd.DataFrame:
    """
    Flatten a parsed journey response into one row per marker.

    Row 0 is the whole-journey record, rows 1..N the route segments. Accepts
    the raw CycleStreets shape (``{"marker": [{"@attributes": {...}}, ...]}``),
    its column-major form (``{"marker": {"@attributes": {name: [...]}}}``)
    and the equivalent ``segments`` key. Attributes a marker lacks are NaN.
    """
    if not isinstance(obj, Mapping):
        raise SchemaError(f"journey response must be an object, got {type(obj).__name__}")

    if "marker" in obj:
        container = obj["marker"]
    elif "segments" in obj:
        container = obj["segments"]
    else:
        raise SchemaError("journey response has no 'marker' or 'segments' collection", ["marker"])

    if isinstance(container, Mapping):
        columns = container.get("@attributes", container)
        lengths = {len(v) for v in columns.values() if isinstance(v, list)}
        if len(lengths) > 1:
            raise SchemaError(f"attribute series have differing lengths: {sorted(lengths)}")
        df = pd.DataFrame({name: list(values) for name, values in columns.items()})
    elif isinstance(container, list):
        df = pd.DataFrame.from_records(_records_from_markers(container))
    else:
        raise SchemaError(f"unsupported marker collection type: {type(container).__name__}")

    df = df.reset_index(drop=True)
    logger.debug(f"Normalized {len(df)} marker records with {len(df.columns)} attributes")
    return df


__all__ = [
    "Timer",
    "build_response",
    "normalize_marker_attributes",
]
