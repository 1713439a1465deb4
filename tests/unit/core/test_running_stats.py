"""
Tests for the online statistics helpers and the summary they feed.
"""

import math

import pytest

from pingscope.core.series import Series
from pingscope.core.stats import (
    SUMMARY_KEYS,
    RunningStats,
    build_summary,
    format_latency,
    loss_rate,
    standard_deviation,
    update_running_stats,
    variance,
)


# =============================================================================
# Welford accumulator
# =============================================================================


class TestRunningStats:
    """Test the Welford mean/variance accumulator."""

    def test_mean_and_variance(self) -> None:
        """Test mean and sample variance of a known sequence."""
        stats = RunningStats()

        for value in [10, 20, 30, 40, 50]:
            update_running_stats(stats, value)

        assert stats.count == 5
        assert stats.mean == pytest.approx(30.0)
        assert variance(stats) == pytest.approx(250.0)
        assert standard_deviation(stats) == pytest.approx(math.sqrt(250.0))

    def test_variance_undefined_below_two_samples(self) -> None:
        """Test variance is None until at least two samples exist."""
        stats = RunningStats()
        assert variance(stats) is None

        update_running_stats(stats, 12.5)

        assert variance(stats) is None
        assert standard_deviation(stats) is None
        assert stats.mean == pytest.approx(12.5)

    def test_large_offset_keeps_precision(self) -> None:
        """Test values with a large common offset keep an exact variance."""
        stats = RunningStats()

        for value in [1e9 + 4, 1e9 + 7, 1e9 + 13, 1e9 + 16]:
            update_running_stats(stats, value)

        assert variance(stats) == pytest.approx(30.0)


# =============================================================================
# Loss rate
# =============================================================================


class TestLossRate:
    """Test loss percentage derivation."""

    def test_loss_rate(self) -> None:
        assert loss_rate(10, 7) == pytest.approx(30.0)

    def test_no_packets_sent(self) -> None:
        """Test zero sent yields zero loss rather than dividing by zero."""
        assert loss_rate(0, 0) == 0.0

    def test_total_loss(self) -> None:
        assert loss_rate(4, 0) == pytest.approx(100.0)


# =============================================================================
# Formatting and summary
# =============================================================================


class TestFormatLatency:
    """Test human readable latency formatting."""

    @pytest.mark.parametrize(
        "latency,expected",
        [
            (0.25, "250µs"),
            (12.34, "12.3ms"),
            (999.9, "999.9ms"),
            (1500.0, "1.50s"),
            (math.nan, "N/A"),
        ],
    )
    def test_format(self, latency: float, expected: str) -> None:
        assert format_latency(latency) == expected


class TestBuildSummary:
    """Test the ordered per-target summary."""

    def test_empty_series(self) -> None:
        """Test a series with nothing received reports N/A for latency metrics."""
        series = Series(target="host-a")
        series.packets_sent = 3

        summary = build_summary(series)

        assert tuple(summary.keys()) == SUMMARY_KEYS
        assert summary["Loss"] == "100.0%"
        assert summary["Sent"] == "3"
        assert summary["Received"] == "0"
        assert summary["Mean"] == "N/A"
        assert summary["Min"] == "N/A"
        assert summary["Max"] == "N/A"
        assert summary["StdDev"] == "N/A"

    def test_populated_series(self) -> None:
        """Test formatted metrics once samples have been received."""
        series = Series(target="host-a")

        for value in [10.0, 20.0, 30.0]:
            series.packets_sent += 1
            series.packets_received += 1
            update_running_stats(series.stats, value)
            series.record_success(value)

        series.packets_sent += 1

        summary = build_summary(series)

        assert summary["Loss"] == "25.0%"
        assert summary["Sent"] == "4"
        assert summary["Received"] == "3"
        assert summary["Mean"] == "20.0ms"
        assert summary["Min"] == "10.0ms"
        assert summary["Max"] == "30.0ms"
        assert summary["StdDev"] == "10.0ms"

    def test_single_sample_has_no_stddev(self) -> None:
        series = Series(target="host-a")
        series.packets_sent = 1
        series.packets_received = 1
        update_running_stats(series.stats, 5.0)
        series.record_success(5.0)

        summary = build_summary(series)

        assert summary["Mean"] == "5.0ms"
        assert summary["StdDev"] == "N/A"
