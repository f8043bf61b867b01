"""
Error and Warning Kinds
=======================

Fatal conditions derive from :class:`RouteProcessingError` and stop the
pipeline; no partial table is returned. Recoverable conditions are issued as
warnings through :func:`warnings.warn` and logged.
"""

from typing import Iterable, Optional


class RouteProcessingError(Exception):
    """Base exception for errors raised while turning a route into a table."""

    pass


class DecodeError(RouteProcessingError):
    """
    A segment's encoded coordinate or elevation string is malformed.

    Raised for an odd number of coordinate values, non-numeric tokens, empty
    strings, or a vertex count that does not match the elevation count.
    """

    def __init__(self, message: str, segment_index: Optional[int] = None, text: Optional[str] = None):
        super().__init__(message)
        self.segment_index = segment_index
        self.text = text

    def __str__(self) -> str:
        base = super().__str__()
        if self.segment_index is not None:
            return f"segment {self.segment_index}: {base}"
        return base


class SchemaError(RouteProcessingError):
    """A required or requested column is absent from the response."""

    def __init__(self, message: str, missing: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.missing = list(missing or [])


class CycleStreetsApiError(RouteProcessingError):
    """CycleStreets.net returned something other than a usable JSON route."""

    def __init__(self, message: str, url: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status = status


class DegenerateSegmentWarning(UserWarning):
    """A segment has zero length, so its gradient is NaN."""


class AnomalyCorrectionNotice(UserWarning):
    """Smoothing left a NaN gradient which was replaced by the route mean."""


__all__ = [
    "RouteProcessingError",
    "DecodeError",
    "SchemaError",
    "CycleStreetsApiError",
    "DegenerateSegmentWarning",
    "AnomalyCorrectionNotice",
]
