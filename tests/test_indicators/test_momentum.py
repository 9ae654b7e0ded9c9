"""Tests for moving averages and Wilder RSI.

All test values use Decimal (project convention).
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from quant.exceptions import InsufficientDataError
from quant.indicators.momentum import (
    compute_ema,
    compute_rsi_series,
    compute_sma,
    latest_ema,
    latest_rsi,
    wilder_rsi_values,
)
from quant.models import Bar


def _make_bars(closes: list[Decimal]) -> list[Bar]:
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return [Bar.flat(start + timedelta(days=i), c) for i, c in enumerate(closes)]


class TestSma:
    """Tests for the simple moving average."""

    def test_mean_of_last_period_values(self) -> None:
        values = [Decimal(v) for v in ("1", "2", "3", "4", "5")]
        assert compute_sma(values, 3) == Decimal("4")

    def test_short_history_returns_last_value(self) -> None:
        """Fewer values than the period falls back to the latest value."""
        values = [Decimal("10"), Decimal("12")]
        assert compute_sma(values, 200) == Decimal("12")

    def test_empty_raises(self) -> None:
        with pytest.raises(InsufficientDataError):
            compute_sma([], 3)


class TestEma:
    """Tests for the exponential moving average."""

    def test_known_values_period_3(self) -> None:
        """alpha = 0.5: 1, 1.5, 2.25, 3.125."""
        values = [Decimal("1"), Decimal("2"), Decimal("3"), Decimal("4")]
        result = compute_ema(values, 3)
        assert result == [
            Decimal("1.000000000000"),
            Decimal("1.500000000000"),
            Decimal("2.250000000000"),
            Decimal("3.125000000000"),
        ]

    def test_empty_returns_empty(self) -> None:
        assert compute_ema([], 3) == []

    def test_latest_ema(self) -> None:
        values = [Decimal("1"), Decimal("2"), Decimal("3"), Decimal("4")]
        assert latest_ema(values, 3) == Decimal("3.125")

    def test_latest_ema_empty_raises(self) -> None:
        with pytest.raises(InsufficientDataError):
            latest_ema([], 3)


class TestWilderRsi:
    """Tests for RSI with Wilder smoothing."""

    def test_strictly_rising_series_is_100(self) -> None:
        closes = [Decimal(100 + i) for i in range(30)]
        values = wilder_rsi_values(closes, 14)
        assert values
        assert all(v == Decimal("100") for v in values)

    def test_strictly_falling_series_is_0(self) -> None:
        closes = [Decimal(100 - i) for i in range(30)]
        values = wilder_rsi_values(closes, 14)
        assert values
        assert all(v == Decimal("0") for v in values)

    def test_first_value_at_seed_completion(self) -> None:
        """len(closes) - period values; none at all when len <= period."""
        closes = [Decimal(100 + (i % 3)) for i in range(20)]
        assert len(wilder_rsi_values(closes, 14)) == 6
        assert wilder_rsi_values(closes[:14], 14) == []

    def test_values_bounded(self) -> None:
        closes = [Decimal(100 + (i * 7) % 11) for i in range(60)]
        for v in wilder_rsi_values(closes, 14):
            assert Decimal("0") <= v <= Decimal("100")

    def test_wilder_smoothing_known_value(self) -> None:
        """period=2, closes 1,2,1,2.

        changes: +1, -1, +1
        seed: avg_gain = 0.5, avg_loss = 0.5 -> RSI 50
        next: avg_gain = (0.5 + 1) / 2 = 0.75, avg_loss = 0.25 -> RS 3 -> RSI 75
        """
        closes = [Decimal("1"), Decimal("2"), Decimal("1"), Decimal("2")]
        assert wilder_rsi_values(closes, 2) == [Decimal("50"), Decimal("75")]

    def test_series_dated_by_closing_bar(self) -> None:
        bars = _make_bars([Decimal(100 + i) for i in range(20)])
        series = compute_rsi_series(list(reversed(bars)), 14)
        assert len(series) == 6
        assert series[0].date == bars[14].date
        assert series[-1].date == bars[-1].date

    def test_latest_rsi_neutral_when_short(self) -> None:
        assert latest_rsi([Decimal("1"), Decimal("2")], 14) == Decimal("50")

    def test_deterministic(self) -> None:
        closes = [Decimal(100 + (i * 7) % 11) for i in range(60)]
        assert wilder_rsi_values(closes, 14) == wilder_rsi_values(list(closes), 14)
