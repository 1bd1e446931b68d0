"""
Tests for Metric time series and standard metric definitions
"""

import pytest
import numpy as np

from depth_quality.metrics.metric import Metric, Band, ColorBands
from depth_quality.metrics.definitions import (
    create_standard_metrics, PUBLISH_ORDER, AVERAGE_ERROR, FILL_RATE, ANGLE
)


class TestMetric:
    """Test suite for a single metric series."""

    @pytest.fixture
    def metric(self):
        """Fixture providing an unbounded metric."""
        return Metric("Average Error", 0, 10, "(mm)", "Average distance from plane fit")

    def test_metric_initialization(self, metric):
        """Test that display metadata is kept as given."""
        assert metric.name == "Average Error"
        assert metric.min_value == 0
        assert metric.max_value == 10
        assert metric.units == "(mm)"
        assert metric.description == "Average distance from plane fit"
        assert metric.values == ()
        assert metric.latest is None
        assert len(metric) == 0

    def test_values_keep_call_order(self, metric):
        """Test that samples are retrievable in the order they were added."""
        for value in [3.0, 1.0, 2.0]:
            metric.add_value(value)

        assert metric.values == (3.0, 1.0, 2.0)
        assert metric.latest == 2.0

    def test_values_stored_single_precision(self, metric):
        """Test that samples are rounded to float32."""
        metric.add_value(0.1)
        assert metric.values[0] == float(np.float32(0.1))

    def test_values_view_is_read_only(self, metric):
        """Test that the exposed series cannot be mutated."""
        metric.add_value(1.0)
        values = metric.values
        assert isinstance(values, tuple)
        with pytest.raises(TypeError):
            values[0] = 5.0

    def test_bounded_history(self):
        """Test that a bounded series keeps the most recent samples."""
        metric = Metric("Distance", 0, 5, "(m)", "", history_size=3)
        for value in range(5):
            metric.add_value(value)

        assert metric.values == (2.0, 3.0, 4.0)

    def test_set_band_last_write_wins(self, metric):
        """Test band configuration."""
        metric.set(Band.GREEN, 0, 1)
        metric.set(Band.GREEN, 0, 2)
        metric.set(Band.RED, 7, 1000)

        assert metric.bands.range_for(Band.GREEN) == (0, 2)
        assert metric.bands.range_for(Band.RED) == (7, 1000)
        assert metric.bands.green_high == 2

    def test_classify_inclusive_exclusive(self, metric):
        """Test that band intervals include low and exclude high."""
        metric.set(Band.GREEN, 0, 1)
        metric.set(Band.YELLOW, 1, 7)
        metric.set(Band.RED, 7, 1000)

        assert metric.classify(0.0) == Band.GREEN
        assert metric.classify(1.0) == Band.YELLOW
        assert metric.classify(6.99) == Band.YELLOW
        assert metric.classify(7.0) == Band.RED
        assert metric.classify(1000.0) is None

    def test_classify_overlapping_bands_prefers_green(self):
        """Test overlapping bands resolve in green, yellow, red order."""
        metric = Metric("Angle", 0, 180, "(deg)", "",
                        bands=ColorBands(green_low=-5, green_high=5,
                                         yellow_low=-10, yellow_high=10,
                                         red_low=-100, red_high=100))
        assert metric.classify(0.0) == Band.GREEN
        assert metric.classify(7.0) == Band.YELLOW
        assert metric.classify(45.0) == Band.RED

    def test_clear(self, metric):
        """Test clearing the series."""
        metric.add_value(1.0)
        metric.clear()
        assert metric.values == ()


class TestStandardMetrics:
    """Test suite for the standard metric definitions."""

    def test_six_metrics_created(self):
        """Test that every published metric exists."""
        metrics = create_standard_metrics()
        assert set(metrics) == set(PUBLISH_ORDER)
        assert len(metrics) == 6

    def test_definitions_carry_bands(self):
        """Test configured display ranges and bands."""
        metrics = create_standard_metrics()

        assert metrics[AVERAGE_ERROR].units == "(mm)"
        assert metrics[AVERAGE_ERROR].bands.range_for(Band.GREEN) == (0, 1)
        assert metrics[FILL_RATE].bands.range_for(Band.GREEN) == (90, 100)
        assert metrics[FILL_RATE].classify(95.0) == Band.GREEN
        assert metrics[ANGLE].bands.range_for(Band.RED) == (-100, 100)

    def test_history_size_applied(self):
        """Test that history size reaches every metric."""
        metrics = create_standard_metrics(history_size=10)
        assert all(metric.history_size == 10 for metric in metrics.values())

    def test_metric_sets_are_independent(self):
        """Test that band edits do not leak between metric sets."""
        first = create_standard_metrics()
        second = create_standard_metrics()

        first[AVERAGE_ERROR].set(Band.GREEN, 0, 5)
        first[AVERAGE_ERROR].add_value(1.0)

        assert second[AVERAGE_ERROR].bands.range_for(Band.GREEN) == (0, 1)
        assert second[AVERAGE_ERROR].values == ()
