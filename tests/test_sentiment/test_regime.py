"""Tests for the sentiment regime trajectory."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from quant.exceptions import NoDataAvailableError
from quant.models import Present
from quant.sentiment.models import FearGreedReading, LiveIndicators, SentimentRegime, VolumePoint
from quant.sentiment.regime import (
    closest_point,
    compute_regime_data,
    volume_engagement_scores,
)


def _make_fear_greed(values: list[int], start: datetime) -> list[FearGreedReading]:
    return [FearGreedReading(start + timedelta(days=i), v) for i, v in enumerate(values)]


def _make_volumes(n: int, start: datetime, volume: str = "1000") -> list[VolumePoint]:
    return [VolumePoint(start + timedelta(days=i), Decimal(volume)) for i in range(n)]


class TestVolumeEngagement:
    def test_constant_volume_is_neutral(self, start: datetime) -> None:
        scores = volume_engagement_scores(_make_volumes(40, start))
        assert set(scores.values()) == {Decimal("50")}

    def test_volume_spike_is_engaged(self, start: datetime) -> None:
        volumes = _make_volumes(40, start)
        volumes[-1] = VolumePoint(volumes[-1].date, Decimal("5000"))
        scores = volume_engagement_scores(volumes)
        assert scores[volumes[-1].date.date()] > Decimal("80")

    def test_window_includes_current_day(self, start: datetime) -> None:
        """The first day is its own average."""
        volumes = [VolumePoint(start, Decimal("7")), VolumePoint(start + timedelta(days=1), Decimal("7"))]
        assert volume_engagement_scores(volumes)[start.date()] == Decimal("50")


class TestComputeRegimeData:
    """Tests for trajectory, current point and milestones."""

    def test_trajectory_chronological(self, start: datetime) -> None:
        readings = _make_fear_greed(list(range(30, 70)), start)
        data = compute_regime_data(list(reversed(readings)), _make_volumes(40, start))

        dates = [p.date for p in data.trajectory]
        assert dates == sorted(dates)
        assert len(data.trajectory) == 40
        assert data.current_point == data.trajectory[-1]
        assert data.current_point.emotion_score == Decimal("69")
        assert data.emotion_components == ["Fear & Greed"]
        assert data.engagement_components == ["BTC Volume"]

    def test_only_joined_days_kept(self, start: datetime) -> None:
        readings = _make_fear_greed([50] * 40, start)
        data = compute_regime_data(readings, _make_volumes(20, start + timedelta(days=20)))
        assert len(data.trajectory) == 20

    def test_no_overlap_raises(self, start: datetime) -> None:
        readings = _make_fear_greed([50] * 10, start)
        volumes = _make_volumes(10, start + timedelta(days=100))
        with pytest.raises(NoDataAvailableError):
            compute_regime_data(readings, volumes)

    def test_live_composite_replaces_latest(self, start: datetime) -> None:
        readings = _make_fear_greed([40] * 39 + [70], start)
        live = LiveIndicators.from_values(cycle_risk=Decimal("0.8"), altcoin_season=60)

        data = compute_regime_data(readings, _make_volumes(40, start), live)

        assert data.emotion_components == ["Fear & Greed", "Cycle Risk", "Altcoin Season"]
        expected = Decimal("53") / Decimal("0.75")
        assert abs(data.current_point.emotion_score - expected) < Decimal("1e-20")
        assert data.trajectory[-2].emotion_score == Decimal("40")

    def test_gating_only_on_current_point(self, start: datetime) -> None:
        readings = _make_fear_greed([90] * 40, start)

        data = compute_regime_data(
            readings, _make_volumes(40, start), volatility_score=Present(Decimal("85"))
        )

        assert data.current_point.emotion_score == Decimal("55")
        assert all(p.emotion_score == Decimal("90") for p in data.trajectory[:-1])
        assert data.current_point.engagement_score == Decimal("60.5")
        assert data.engagement_components == ["BTC Volume", "Volatility"]

    def test_milestones(self, start: datetime) -> None:
        readings = _make_fear_greed([20] * 40, start)
        data = compute_regime_data(readings, _make_volumes(40, start, "1000"))

        today = data.milestones.today
        assert today.date == start + timedelta(days=39)
        assert data.milestones.one_week_ago.date == start + timedelta(days=32)
        assert data.milestones.one_month_ago.date == start + timedelta(days=9)
        assert data.milestones.three_months_ago is None
        assert data.current_regime is SentimentRegime.PANIC

    def test_deterministic(self, start: datetime) -> None:
        readings = _make_fear_greed([(i * 13) % 100 for i in range(40)], start)
        volumes = [VolumePoint(start + timedelta(days=i), Decimal(1000 + (i * 37) % 500)) for i in range(40)]
        assert compute_regime_data(readings, volumes) == compute_regime_data(readings, volumes)


class TestClosestPoint:
    def test_outside_tolerance(self, start: datetime) -> None:
        data = compute_regime_data(_make_fear_greed([50] * 3, start), _make_volumes(3, start))
        target = start + timedelta(days=10)
        assert closest_point(data.trajectory, target, 2) is None
        assert closest_point(data.trajectory, target, 8) == data.trajectory[-1]

    def test_empty(self, start: datetime) -> None:
        assert closest_point([], start, 5) is None
