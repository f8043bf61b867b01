"""Shared fixtures for route pipeline tests."""

import copy
import json
from pathlib import Path

import pytest

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture(scope="session")
def journey_path() -> Path:
    return DATA_DIR / "journey.json"


@pytest.fixture
def journey_obj(journey_path):
    """Saved CycleStreets journey: 4 segments, the second one 9 m long."""
    with journey_path.open(encoding="utf-8") as fh:
        return json.load(fh)


@pytest.fixture
def two_segment_obj():
    """Minimal response with two segments and no API distances."""
    return copy.deepcopy({
        "segments": [
            {"name": "Whole journey", "plan": "fastest", "time": "60"},
            {
                "name": "A",
                "time": "20",
                "points": "[-1.55,53.80 -1.551,53.801]",
                "elevations": "100,102",
            },
            {
                "name": "B",
                "time": "40",
                "points": "[-1.551,53.801 -1.552,53.802]",
                "elevations": "102,101",
            },
        ]
    })
