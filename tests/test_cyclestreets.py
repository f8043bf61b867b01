"""Tests for the journey entry points."""

import json

import pytest

import cyclestreets
from common.config import DEFAULT_COLS, DEFAULT_COLS_EXTRA


class TestJourney:
    """Tests for journey()."""

    @pytest.fixture
    def fake_fetch(self, monkeypatch, journey_obj):
        calls = {}

        def fake_get_journey(from_point, to_point, **kwargs):
            calls.update(kwargs, from_point=from_point, to_point=to_point)
            return journey_obj

        monkeypatch.setattr(cyclestreets, "get_journey", fake_get_journey)
        return calls

    def test_defaults_select_columns_and_smooth(self, fake_fetch):
        table = cyclestreets.journey((-1.54408, 53.79360), (-1.54802, 53.79618), api_key="abc")
        assert list(table.columns) == DEFAULT_COLS + DEFAULT_COLS_EXTRA + ["geometry", "gradient_smooth"]
        assert fake_fetch["api_key"] == "abc"
        assert fake_fetch["plan"] == "fastest"

    def test_save_raw_returns_json(self, fake_fetch, journey_obj):
        obj = cyclestreets.journey((0, 0), (1, 1), api_key="abc", save_raw=True)
        assert obj is journey_obj


class TestRun:
    """Tests for the run() handler."""

    def test_journey_payload(self, journey_obj):
        body, code = cyclestreets.run({"journey": journey_obj})
        assert code == 200
        assert body["status"] == "ok"
        assert body["rows"] == 4
        assert len(body["route"]["features"]) == 4

    def test_all_columns(self, journey_obj):
        body, code = cyclestreets.run({"journey": journey_obj, "all_columns": True, "smooth_gradient": False})
        assert code == 200
        assert "distance_geodesic" in body["columns"]
        assert "gradient_smooth" not in body["columns"]

    def test_unknown_column_is_client_error(self, journey_obj):
        body, code = cyclestreets.run({"journey": journey_obj, "cols": ["distnaces"]})
        assert code == 422
        assert "distnaces" in body["error"]

    def test_missing_from_point(self):
        body, code = cyclestreets.run({})
        assert code == 400
        assert body["status"] == "error"


class TestMain:
    """Tests for the command line."""

    def test_input_to_geojson(self, journey_path, tmp_path):
        output = tmp_path / "route.geojson"
        assert cyclestreets.main(["--input", str(journey_path), "--output", str(output)]) == 0
        collection = json.loads(output.read_text(encoding="utf-8"))
        assert len(collection["features"]) == 4
        assert "gradient_smooth" in collection["features"][0]["properties"]

    def test_input_to_stdout(self, journey_path, capsys):
        assert cyclestreets.main(["--input", str(journey_path), "--no-smooth", "--all-columns"]) == 0
        assert "Bishopgate Street" in capsys.readouterr().out

    def test_missing_input_file(self, tmp_path):
        assert cyclestreets.main(["--input", str(tmp_path / "missing.json")]) == 1

    def test_unsupported_output_suffix_fails(self, journey_path, tmp_path):
        output = tmp_path / "route.xlsx"
        assert cyclestreets.main(["--input", str(journey_path), "--output", str(output)]) == 1
        assert not output.exists()

    def test_even_window_fails(self, journey_path):
        assert cyclestreets.main(["--input", str(journey_path), "--window", "4"]) == 1

    def test_from_requires_to(self):
        with pytest.raises(SystemExit):
            cyclestreets.main(["--from", "-1.55,53.80"])
