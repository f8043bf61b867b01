"""
Tests for segment string decoding.

Covers coordinate and elevation parsing and the vertex/elevation alignment.
"""

import numpy as np
import pytest

from common.errors import DecodeError
from transform.decode import (
    decode_segment,
    txt_to_coords,
    txt_to_distance_sum,
    txt_to_elevations,
)


class TestTxtToCoords:
    """Tests for txt_to_coords."""

    def test_space_separated_vertices(self):
        coords = txt_to_coords("-1.55,53.80 -1.551,53.801")
        assert coords.shape == (2, 2)
        np.testing.assert_allclose(coords[0], [-1.55, 53.80])
        np.testing.assert_allclose(coords[1], [-1.551, 53.801])

    def test_comma_only_separators(self):
        """Row-major pairing when every separator is a comma."""
        coords = txt_to_coords("-1.55,53.80,-1.551,53.801,-1.552,53.802")
        assert coords.shape == (3, 2)
        np.testing.assert_allclose(coords[:, 0], [-1.55, -1.551, -1.552])

    def test_brackets_ignored(self):
        coords = txt_to_coords("[-1.55,53.80 -1.551,53.801]")
        assert coords.shape == (2, 2)

    def test_odd_count_raises(self):
        with pytest.raises(DecodeError, match="odd number"):
            txt_to_coords("-1.55,53.80 -1.551")

    def test_non_numeric_raises(self):
        with pytest.raises(DecodeError):
            txt_to_coords("-1.55,abc -1.551,53.801")

    def test_empty_raises(self):
        with pytest.raises(DecodeError, match="empty"):
            txt_to_coords("  ")

    def test_non_string_raises(self):
        with pytest.raises(DecodeError):
            txt_to_coords(None)

    def test_error_reports_segment(self):
        with pytest.raises(DecodeError) as excinfo:
            txt_to_coords("1,2,3", segment_index=4)
        assert excinfo.value.segment_index == 4
        assert str(excinfo.value).startswith("segment 4:")


class TestTxtToElevations:
    """Tests for txt_to_elevations."""

    def test_comma_separated(self):
        np.testing.assert_allclose(txt_to_elevations("100,102,101.5"), [100, 102, 101.5])

    def test_single_value(self):
        np.testing.assert_allclose(txt_to_elevations("37"), [37])

    def test_bare_number(self):
        np.testing.assert_allclose(txt_to_elevations(37), [37])

    def test_blank_value_raises(self):
        with pytest.raises(DecodeError):
            txt_to_elevations("100,,101")

    def test_non_numeric_raises(self):
        with pytest.raises(DecodeError):
            txt_to_elevations("100,high")


class TestDecodeSegment:
    """Tests for decode_segment."""

    def test_aligned_lengths(self):
        segment = decode_segment("-1.55,53.80 -1.551,53.801", "100,102", index=1)
        assert segment.n_vertices == 2
        assert len(segment.coords) == len(segment.elevations)
        assert segment.index == 1

    def test_length_mismatch_raises(self):
        with pytest.raises(DecodeError, match="2 vertices but 3 elevation samples"):
            decode_segment("-1.55,53.80 -1.551,53.801", "100,102,103", index=2)


class TestTxtToDistanceSum:
    """Tests for txt_to_distance_sum."""

    def test_sums_sub_distances(self):
        assert txt_to_distance_sum("53,48") == 101.0

    def test_single_distance(self):
        assert txt_to_distance_sum("9") == 9.0

    def test_numeric_passthrough(self):
        assert txt_to_distance_sum(12) == 12.0

    def test_non_numeric_raises(self):
        with pytest.raises(DecodeError):
            txt_to_distance_sum("53,far")
