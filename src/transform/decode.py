"""Decode a segment's encoded coordinate and elevation strings once."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

import numpy as np

from common.errors import DecodeError

_COORD_SEPARATOR = re.compile(r"[\s,]+")


@dataclass(frozen=True)
class DecodedSegment:
    """Vertex coordinates (lon, lat) and the elevation sampled at each vertex."""

    index: int
    coords: np.ndarray
    elevations: np.ndarray

    @property
    def n_vertices(self) -> int:
        return int(self.coords.shape[0])


def _parse_numbers(tokens, segment_index: Optional[int], text: str, what: str) -> np.ndarray:
    try:
        values = np.array([float(t) for t in tokens], dtype=float)
    except ValueError as exc:
        raise DecodeError(f"non-numeric {what} value: {exc}", segment_index, text) from exc

    if not np.all(np.isfinite(values)):
        raise DecodeError(f"non-finite {what} value", segment_index, text)
    return values


def txt_to_coords(txt: str, segment_index: Optional[int] = None) -> np.ndarray:
    """
    Parse ``"lon,lat lon,lat ..."`` into an (M, 2) array.

    Vertices may be separated by spaces or commas; surrounding brackets are
    ignored. An odd number of values is a decode error.
    """
    if not isinstance(txt, str):
        raise DecodeError(f"coordinate string expected, got {type(txt).__name__}", segment_index, txt)

    cleaned = txt.strip().strip("[]").strip()
    tokens = [t for t in _COORD_SEPARATOR.split(cleaned) if t]
    if not tokens:
        raise DecodeError("empty coordinate string", segment_index, txt)
    if len(tokens) % 2 != 0:
        raise DecodeError(f"odd number of coordinate values ({len(tokens)})", segment_index, txt)

    values = _parse_numbers(tokens, segment_index, txt, "coordinate")
    return values.reshape(-1, 2)


def txt_to_elevations(txt: str, segment_index: Optional[int] = None) -> np.ndarray:
    """Parse a comma-separated elevation string into a 1-d array (metres)."""
    if isinstance(txt, (int, float)) and not isinstance(txt, bool):
        # single-vertex segments can arrive pre-coerced as a bare number
        txt = repr(txt)
    if not isinstance(txt, str):
        raise DecodeError(f"elevation string expected, got {type(txt).__name__}", segment_index, txt)

    tokens = [t.strip() for t in txt.strip().strip("[]").split(",")]
    if not any(tokens):
        raise DecodeError("empty elevation string", segment_index, txt)
    if not all(tokens):
        raise DecodeError("empty elevation value", segment_index, txt)

    return _parse_numbers(tokens, segment_index, txt, "elevation")


def decode_segment(points: str, elevations: str, index: int) -> DecodedSegment:
    """Decode one segment and check vertices and elevations line up."""
    coords = txt_to_coords(points, index)
    elev = txt_to_elevations(elevations, index)

    if coords.shape[0] != elev.shape[0]:
        raise DecodeError(
            f"{coords.shape[0]} vertices but {elev.shape[0]} elevation samples",
            index,
            elevations,
        )

    return DecodedSegment(index=index, coords=coords, elevations=elev)


def txt_to_distance_sum(txt) -> float:
    """Sum a comma-separated string of sub-segment distances (metres)."""
    if isinstance(txt, (int, float)) and not isinstance(txt, bool):
        return float(txt)
    tokens = [t.strip() for t in str(txt).split(",") if t.strip()]
    try:
        return float(sum(float(t) for t in tokens))
    except ValueError as exc:
        raise DecodeError(f"non-numeric distance value: {exc}", None, txt) from exc


__all__ = [
    "DecodedSegment",
    "txt_to_coords",
    "txt_to_elevations",
    "decode_segment",
    "txt_to_distance_sum",
]
