"""
Tests for per-segment metric derivation.

Gradient summaries are over absolute vertex-pair gradients; segment
gradients are elevation change over segment distance.
"""

import numpy as np
import pytest

from common.errors import DegenerateSegmentWarning
from transform.decode import decode_segment
from transform.metrics import (
    METRIC_COLUMNS,
    derive_metrics,
    gradient_segment,
    metrics_table,
    pair_gradients,
)


def _segment(elevations):
    n = len(elevations)
    points = " ".join(f"-1.55,{53.80 + i * 0.001:.3f}" for i in range(n))
    return decode_segment(points, ",".join(str(e) for e in elevations), index=1)


class TestPairGradients:
    """Tests for pair_gradients."""

    def test_rise_over_run(self):
        grads = pair_gradients(np.array([100.0, 102.0, 101.0]), np.array([100.0, 50.0]))
        np.testing.assert_allclose(grads, [0.02, -0.02])

    def test_zero_distance_is_nan(self):
        grads = pair_gradients(np.array([100.0, 102.0, 104.0]), np.array([0.0, 100.0]))
        assert np.isnan(grads[0])
        assert grads[1] == pytest.approx(0.02)

    def test_shape_mismatch_raises(self):
        with pytest.raises(ValueError):
            pair_gradients(np.array([1.0, 2.0, 3.0]), np.array([10.0]))


class TestDeriveMetrics:
    """Tests for derive_metrics."""

    def test_elevation_and_gradient_stats(self):
        segment = _segment([0, 1, 3, 6, 10])
        metrics = derive_metrics(segment, np.full(4, 100.0))

        assert metrics.elevation_start == 0
        assert metrics.elevation_end == 10
        assert metrics.elevation_max == 10
        assert metrics.elevation_min == 0
        assert metrics.elevation_mean == pytest.approx(4.0)
        assert metrics.elevation_change == 10
        assert metrics.gradient_mean == pytest.approx(0.025)
        assert metrics.gradient_median == pytest.approx(0.025)
        assert metrics.gradient_p75 == pytest.approx(0.0325)
        assert metrics.gradient_max == pytest.approx(0.04)

    def test_stats_use_absolute_values(self):
        segment = _segment([10, 5, 10])
        metrics = derive_metrics(segment, np.array([100.0, 100.0]))
        assert metrics.gradient_mean == pytest.approx(0.05)
        assert metrics.gradient_max == pytest.approx(0.05)

    def test_elevation_change_is_range_not_net(self):
        """A climb then descent back to the start still has a range."""
        segment = _segment([50, 60, 50])
        metrics = derive_metrics(segment, np.array([100.0, 100.0]))
        assert metrics.elevation_change == 10

    def test_single_vertex(self):
        segment = decode_segment("-1.55,53.80", "42", index=3)
        metrics = derive_metrics(segment, np.zeros(0))
        assert metrics.elevation_change == 0
        assert np.isnan(metrics.gradient_mean)
        assert np.isnan(metrics.gradient_max)

    def test_as_dict_has_every_column(self):
        metrics = derive_metrics(_segment([1, 2]), np.array([10.0]))
        assert list(metrics.as_dict()) == METRIC_COLUMNS


class TestGradientSegment:
    """Tests for gradient_segment."""

    def test_ratio(self):
        result = gradient_segment(np.array([5.0, 2.0]), np.array([100.0, 8.0]))
        np.testing.assert_allclose(result, [0.05, 0.25])

    def test_zero_distance_is_nan_and_warns(self):
        with pytest.warns(DegenerateSegmentWarning, match=r"\[2\]"):
            result = gradient_segment(np.array([5.0, 2.0]), np.array([100.0, 0.0]))
        assert result[0] == pytest.approx(0.05)
        assert np.isnan(result[1])
        assert not np.isinf(result).any()


class TestMetricsTable:
    """Tests for metrics_table."""

    def test_column_major_in_segment_order(self):
        segments = [_segment([0, 10]), _segment([5, 6])]
        table = metrics_table(segments, [np.array([100.0]), np.array([50.0])])
        assert table["elevation_change"] == [10, 1]
        assert table["gradient_max"] == pytest.approx([0.1, 0.02])
