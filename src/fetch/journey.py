# src/fetch/journey.py
"""Request a journey from the CycleStreets.net journey planner."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Sequence, Union

import requests

from common.config import BASE_URL, JOURNEY_PATH, PLANS, REQUEST_TIMEOUT
from common.errors import CycleStreetsApiError
from common.logging_utils import logger

Point = Union[str, Sequence[float]]


def format_point(point: Point) -> str:
    """Render a (longitude, latitude) pair as ``"lon,lat"``."""
    if isinstance(point, str):
        parts = [p.strip() for p in point.split(",")]
    else:
        parts = list(point)
    if len(parts) != 2:
        raise ValueError(f"point must be a longitude/latitude pair, got {point!r}")
    lon, lat = (float(p) for p in parts)
    return f"{lon:g},{lat:g}"


def build_journey_url(
    from_point: Point,
    to_point: Point,
    plan: str = "fastest",
    api_key: Optional[str] = None,
    base_url: str = BASE_URL,
    reporterrors: bool = True,
) -> str:
    """Build the journey.json request URL for a two-point itinerary."""
    if plan not in PLANS:
        raise ValueError(f"plan must be one of {PLANS}, got {plan!r}")
    if not api_key:
        raise ValueError("A CycleStreets API key is required")

    params = {
        "key": api_key,
        "itinerarypoints": f"{format_point(from_point)}|{format_point(to_point)}",
        "plan": plan,
        "reporterrors": 1 if reporterrors else 0,
    }
    url = f"{base_url.rstrip('/')}/{JOURNEY_PATH}"
    return requests.Request("GET", url, params=params).prepare().url


def redact_key(url: str, api_key: Optional[str]) -> str:
    if not api_key:
        return url
    return url.replace(api_key, "***")


def parse_journey_response(response: requests.Response) -> Dict[str, Any]:
    """
    Check a journey response and return the decoded JSON object.

    Raises:
        CycleStreetsApiError: Non-JSON content type, empty body, undecodable
            JSON, or an ``error`` key in the payload
    """
    content_type = response.headers.get("content-type", "")
    if "application/json" not in content_type:
        raise CycleStreetsApiError(
            "CycleStreets did not return a valid result",
            url=response.url,
            status=response.status_code,
        )

    text = response.text
    if not text.strip():
        raise CycleStreetsApiError("CycleStreets did not return a valid result", url=response.url)

    try:
        obj = json.loads(text)
    except ValueError as exc:
        raise CycleStreetsApiError(f"CycleStreets returned invalid JSON: {exc}", url=response.url) from exc

    if isinstance(obj, dict) and "error" in obj:
        raise CycleStreetsApiError(f"CycleStreets error: {obj['error']}", url=response.url)

    return obj


def get_journey(
    from_point: Point,
    to_point: Point,
    plan: str = "fastest",
    api_key: Optional[str] = None,
    base_url: str = BASE_URL,
    reporterrors: bool = True,
    silent: bool = True,
    timeout: float = REQUEST_TIMEOUT,
) -> Dict[str, Any]:
    """Fetch a journey and return the parsed JSON object."""
    url = build_journey_url(from_point, to_point, plan, api_key, base_url, reporterrors)

    if not silent:
        logger.info("The request sent to cyclestreets.net was: %s", redact_key(url, api_key))

    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return parse_journey_response(response)


__all__ = [
    "format_point",
    "build_journey_url",
    "parse_journey_response",
    "get_journey",
]
