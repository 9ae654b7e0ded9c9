"""Tests for the realized-volatility regime."""

from datetime import datetime, timedelta
from decimal import Decimal

from quant.models import PricePoint
from quant.sentiment.models import VolatilityLabel
from quant.sentiment.volatility import compute_volatility_regime, log_returns, sample_std


def _prices_from_returns(returns: list[Decimal], start: datetime) -> list[PricePoint]:
    price = Decimal("100")
    points = [PricePoint(start, price)]
    for i, r in enumerate(returns, start=1):
        price = price * r.exp()
        points.append(PricePoint(start + timedelta(days=i), price))
    return points


def _alternating(n: int, size: str) -> list[Decimal]:
    step = Decimal(size)
    return [step if i % 2 == 0 else -step for i in range(n)]


class TestHelpers:
    def test_sample_std_is_bessel_corrected(self) -> None:
        values = [Decimal("1"), Decimal("3")]
        # mean 2, squared deviations 1 + 1, divided by n - 1 = 1
        assert sample_std(values) == Decimal("2").sqrt()

    def test_sample_std_short(self) -> None:
        assert sample_std([Decimal("5")]) == Decimal("0")

    def test_log_returns(self) -> None:
        assert log_returns([Decimal("1"), Decimal("1")]) == [Decimal("0")]


class TestVolatilityRegime:
    """Tests for the 7d/30d volatility ratio score."""

    def test_requires_31_daily_prices(self, start: datetime) -> None:
        prices = _prices_from_returns(_alternating(29, "0.01"), start)
        assert len(prices) == 30
        assert compute_volatility_regime(prices) is None

    def test_constant_prices_are_neutral(self, start: datetime) -> None:
        prices = [PricePoint(start + timedelta(days=i), Decimal("100")) for i in range(40)]
        regime = compute_volatility_regime(prices)
        assert regime is not None
        assert regime.vol_30d == Decimal("0")
        assert regime.score == Decimal("50")
        assert regime.label is VolatilityLabel.NORMAL

    def test_uniform_volatility_is_neutral(self, start: datetime) -> None:
        """Equal-size alternating moves: 7d vol close to 30d vol."""
        regime = compute_volatility_regime(_prices_from_returns(_alternating(40, "0.02"), start))
        assert regime is not None
        assert Decimal("40") < regime.score < Decimal("60")

    def test_recent_spike_is_expansion(self, start: datetime) -> None:
        returns = _alternating(33, "0.001") + _alternating(7, "0.05")
        regime = compute_volatility_regime(_prices_from_returns(returns, start))
        assert regime is not None
        assert regime.vol_7d > regime.vol_30d
        assert regime.score > Decimal("80")
        assert regime.label is VolatilityLabel.EXPANSION

    def test_recent_calm_is_compression(self, start: datetime) -> None:
        returns = _alternating(33, "0.05") + _alternating(7, "0.0001")
        regime = compute_volatility_regime(_prices_from_returns(returns, start))
        assert regime is not None
        assert regime.score < Decimal("20")
        assert regime.label is VolatilityLabel.COMPRESSION

    def test_intraday_duplicates_collapsed(self, start: datetime) -> None:
        """Earlier same-day observations lose to the last one."""
        prices = _prices_from_returns(_alternating(40, "0.02"), start + timedelta(hours=12))
        noisy = prices + [
            PricePoint(p.date - timedelta(hours=3), p.price * Decimal("2")) for p in prices
        ]
        assert compute_volatility_regime(noisy) == compute_volatility_regime(prices)
