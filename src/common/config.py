"""
Pipeline Configuration
======================

Defaults for column selection, gradient smoothing and the CycleStreets
request. Core functions receive these as explicit parameters; only the entry
points read the process environment, through :func:`get_globals`.
"""

import os
from dataclasses import dataclass
from typing import Dict, Optional

BASE_URL = "https://www.cyclestreets.net"
JOURNEY_PATH = "api/journey.json"
PLANS = ("fastest", "quietest", "balanced")
REQUEST_TIMEOUT = 30

DISTANCE_CUTOFF = 50.0  # metres
GRADIENT_CUTOFF = 0.1  # rise over run
SMOOTHING_WINDOW = 3

CRS_EPSG = 4326

# Columns kept by journey() ahead of the extras
DEFAULT_COLS = [
    "name",
    "distances",
    "time",
    "busynance",
    "elevations",
    "start_longitude",
    "start_latitude",
    "finish_longitude",
    "finish_latitude",
]

DEFAULT_COLS_EXTRA = [
    "crow_fly_distance", "event", "whence", "speed",
    "itinerary", "clientRouteId", "plan", "note", "length", "quietness",
    "west", "south", "east", "north", "leaving", "arriving", "grammesCO2saved",
    "calories", "edition",
    "gradient_segment",
    "elevation_change",
    "provisionName",
]

# Extras kept by json_to_route_table() when called directly
SEGMENT_COLS_EXTRA = [
    "elevation_start",
    "elevation_end",
    "gradient_segment",
    "elevation_change",
    "provisionName",
]


@dataclass(frozen=True)
class SmoothingConfig:
    """Thresholds and window for anomalous gradient correction."""

    distance_cutoff: float = DISTANCE_CUTOFF
    gradient_cutoff: float = GRADIENT_CUTOFF
    n: int = SMOOTHING_WINDOW

    def __post_init__(self) -> None:
        if self.distance_cutoff < 0:
            raise ValueError(f"distance_cutoff must be non-negative, got {self.distance_cutoff}")
        if self.gradient_cutoff < 0:
            raise ValueError(f"gradient_cutoff must be non-negative, got {self.gradient_cutoff}")
        if isinstance(self.n, bool) or not isinstance(self.n, int) or self.n < 1 or self.n % 2 == 0:
            raise ValueError(f"n must be an odd integer >= 1, got {self.n!r}")


def get_globals() -> Dict[str, Optional[str]]:
    """Read request settings from the environment for the CLI and handler."""

    api_key = os.getenv("CYCLESTREETS")
    base_url = os.getenv("CYCLESTREETS_BASE_URL") or BASE_URL

    return {
        "api_key": api_key,
        "base_url": base_url,
    }


__all__ = [
    "BASE_URL",
    "JOURNEY_PATH",
    "PLANS",
    "REQUEST_TIMEOUT",
    "DISTANCE_CUTOFF",
    "GRADIENT_CUTOFF",
    "SMOOTHING_WINDOW",
    "CRS_EPSG",
    "DEFAULT_COLS",
    "DEFAULT_COLS_EXTRA",
    "SEGMENT_COLS_EXTRA",
    "SmoothingConfig",
    "get_globals",
]
