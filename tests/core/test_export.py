"""Tests for writing route tables."""

import json

import pandas as pd
import pytest

from transform.assemble import json_to_route_table
from transform.export import to_geojson, write_route_table


@pytest.fixture
def table(journey_obj):
    return json_to_route_table(journey_obj, cols=["name", "distances"], smooth_gradient=True)


class TestToGeojson:
    """Tests for to_geojson."""

    def test_one_feature_per_segment(self, table):
        collection = to_geojson(table)
        assert collection["type"] == "FeatureCollection"
        assert len(collection["features"]) == 4

    def test_feature_contents(self, table):
        feature = to_geojson(table)["features"][0]
        assert feature["geometry"]["type"] == "LineString"
        assert feature["properties"]["name"] == "Station Approach"
        assert set(feature["properties"]) == {
            "name", "distances", "elevation_start", "elevation_end",
            "gradient_segment", "elevation_change", "provisionName", "gradient_smooth",
        }

    def test_nan_becomes_null(self, two_segment_obj):
        two_segment_obj["segments"][2]["points"] = "-1.551,53.801 -1.551,53.801"
        with pytest.warns(UserWarning):
            table = json_to_route_table(two_segment_obj, cols=["gradient_segment"])
        feature = to_geojson(table)["features"][1]
        assert feature["properties"]["gradient_segment"] is None


class TestWriteRouteTable:
    """Tests for write_route_table."""

    def test_csv_geometry_as_wkt(self, table, tmp_path):
        path = write_route_table(table, tmp_path / "route.csv")
        written = pd.read_csv(path)
        assert len(written) == 4
        assert written["geometry"].str.startswith("LINESTRING").all()

    def test_geojson(self, table, tmp_path):
        path = write_route_table(table, tmp_path / "route.geojson")
        with path.open(encoding="utf-8") as fh:
            collection = json.load(fh)
        assert len(collection["features"]) == 4

    def test_unsupported_suffix(self, table, tmp_path):
        with pytest.raises(ValueError, match="Unsupported output format"):
            write_route_table(table, tmp_path / "route.xlsx")
