"""Tests for the emotion/engagement composites and regime gating."""

from datetime import datetime
from decimal import Decimal

from quant.config import SentimentSettings
from quant.models import Present
from quant.sentiment.composite import (
    apply_regime_gating,
    compute_composite_emotion,
    compute_composite_engagement,
)
from quant.sentiment.models import LiveIndicators, RegimePoint, SentimentRegime


class TestRegimeGating:
    """Volatility regime clamps the emotion score."""

    def test_expansion_caps_greed(self) -> None:
        assert apply_regime_gating(Decimal("90"), Decimal("85")) == Decimal("55")

    def test_compression_floors_fear(self) -> None:
        assert apply_regime_gating(Decimal("10"), Decimal("10")) == Decimal("45")

    def test_normal_regime_untouched(self) -> None:
        assert apply_regime_gating(Decimal("90"), Decimal("50")) == Decimal("90")

    def test_expansion_leaves_fear_alone(self) -> None:
        assert apply_regime_gating(Decimal("30"), Decimal("95")) == Decimal("30")

    def test_thresholds_are_strict(self) -> None:
        assert apply_regime_gating(Decimal("90"), Decimal("80")) == Decimal("90")
        assert apply_regime_gating(Decimal("10"), Decimal("20")) == Decimal("10")


class TestCompositeEmotion:
    def test_fear_greed_only(self) -> None:
        score, labels = compute_composite_emotion(Decimal("70"), LiveIndicators())
        assert score == Decimal("70")
        assert labels == ["Fear & Greed"]

    def test_redistributes_over_present(self) -> None:
        """(70 * 0.40 + 80 * 0.20 + 60 * 0.15) / 0.75."""
        live = LiveIndicators.from_values(cycle_risk=Decimal("0.8"), altcoin_season=60)
        score, labels = compute_composite_emotion(Decimal("70"), live)
        assert labels == ["Fear & Greed", "Cycle Risk", "Altcoin Season"]
        assert abs(score - Decimal("53") / Decimal("0.75")) < Decimal("1e-20")

    def test_positive_funding_reads_greedy(self) -> None:
        live = LiveIndicators.from_values(funding_rate=Decimal("0.0005"))
        score, labels = compute_composite_emotion(Decimal("50"), live)
        assert "Funding Rate" in labels
        assert score > Decimal("50")

    def test_funding_level_calibration(self) -> None:
        """100 / (1 + exp(-300 * 0.0001)) with the fear & greed weight zeroed."""
        settings = SentimentSettings(emotion_weight_fear_greed=Decimal("0"))
        live = LiveIndicators.from_values(funding_rate=Decimal("0.0001"))
        score, labels = compute_composite_emotion(Decimal("50"), live, settings=settings)
        assert labels == ["Fear & Greed", "Funding Rate"]
        assert abs(score - Decimal("50.750")) < Decimal("0.001")

    def test_all_inputs(self) -> None:
        live = LiveIndicators.from_values(
            cycle_risk=Decimal("0.5"),
            funding_rate=Decimal("0"),
            altcoin_season=50,
            capital_rotation=50,
        )
        score, labels = compute_composite_emotion(Decimal("50"), live)
        assert score == Decimal("50")
        assert len(labels) == 5


class TestCompositeEngagement:
    def test_volume_only(self) -> None:
        score, labels = compute_composite_engagement(Decimal("64"), LiveIndicators())
        assert score == Decimal("64")
        assert labels == ["BTC Volume"]

    def test_flat_funding_is_neutral(self) -> None:
        live = LiveIndicators.from_values(funding_rate=Decimal("0"))
        score, labels = compute_composite_engagement(Decimal("50"), live)
        assert labels == ["BTC Volume", "Funding Activity"]
        assert score == Decimal("50")

    def test_funding_magnitude_never_below_neutral(self) -> None:
        for rate in ("-0.0005", "-0.0001", "0.0001", "0.003"):
            live = LiveIndicators.from_values(funding_rate=Decimal(rate))
            score, _ = compute_composite_engagement(Decimal("50"), live)
            assert score > Decimal("50")

    def test_funding_magnitude_calibration(self) -> None:
        """100 / (1 + exp(-1500 * 0.001)) with the volume weight zeroed."""
        settings = SentimentSettings(engagement_weight_volume=Decimal("0"))
        live = LiveIndicators.from_values(funding_rate=Decimal("-0.001"))
        score, _ = compute_composite_engagement(Decimal("50"), live, settings=settings)
        assert abs(score - Decimal("81.757")) < Decimal("0.001")

    def test_volatility_component(self) -> None:
        """(50 * 0.35 + 85 * 0.15) / 0.50."""
        score, labels = compute_composite_engagement(
            Decimal("50"), LiveIndicators(), Present(Decimal("85"))
        )
        assert labels == ["BTC Volume", "Volatility"]
        assert score == Decimal("60.5")


class TestRegimeQuadrants:
    def test_quadrants(self) -> None:
        assert SentimentRegime.classify(Decimal("80"), Decimal("80")) is SentimentRegime.FOMO
        assert SentimentRegime.classify(Decimal("20"), Decimal("80")) is SentimentRegime.PANIC
        assert SentimentRegime.classify(Decimal("20"), Decimal("20")) is SentimentRegime.APATHY
        assert SentimentRegime.classify(Decimal("80"), Decimal("20")) is SentimentRegime.COMPLACENCY

    def test_midpoint_counts_as_high(self) -> None:
        assert SentimentRegime.classify(Decimal("50"), Decimal("50")) is SentimentRegime.FOMO

    def test_point_regime_derived(self) -> None:
        point = RegimePoint(datetime(2024, 1, 1), Decimal("10"), Decimal("90"))
        assert point.regime is SentimentRegime.PANIC
