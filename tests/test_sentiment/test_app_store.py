"""Tests for the app store ranking composite."""

from decimal import Decimal

import pytest

from quant.exceptions import NoDataAvailableError
from quant.sentiment.app_store import compute_app_store_composite, rank_score
from quant.sentiment.models import AppRanking, AppStoreTier


class TestRankScore:
    def test_top_rank(self) -> None:
        assert rank_score(1) == Decimal("99.8")

    def test_below_max_rank_is_zero(self) -> None:
        assert rank_score(750) == Decimal("0")


class TestComposite:
    def test_all_top_ranked_is_euphoria(self) -> None:
        rankings = [AppRanking(name, 1) for name in ("Coinbase", "Binance", "Kraken")]
        composite = compute_app_store_composite(rankings)
        assert composite.score == Decimal("99.8")
        assert composite.tier is AppStoreTier.EXTREME_EUPHORIA

    def test_weighted_by_app(self) -> None:
        """Coinbase 100 * 0.5 + Kraken 0 * 0.2 over 0.7."""
        rankings = [AppRanking("Coinbase", 0), AppRanking("Kraken", 500)]
        composite = compute_app_store_composite(rankings)
        assert abs(composite.score - Decimal("50") / Decimal("0.7")) < Decimal("1e-20")
        assert composite.tier is AppStoreTier.HIGH_INTEREST

    def test_unknown_apps_ignored(self) -> None:
        rankings = [AppRanking("Coinbase", 250), AppRanking("Robinhood", 1)]
        composite = compute_app_store_composite(rankings)
        assert composite.score == Decimal("50")
        assert composite.tier is AppStoreTier.MODERATE_INTEREST

    def test_no_known_apps_raises(self) -> None:
        with pytest.raises(NoDataAvailableError):
            compute_app_store_composite([AppRanking("Robinhood", 1)])


class TestTier:
    def test_boundaries(self) -> None:
        assert AppStoreTier.from_score(Decimal("80")) is AppStoreTier.EXTREME_EUPHORIA
        assert AppStoreTier.from_score(Decimal("60")) is AppStoreTier.HIGH_INTEREST
        assert AppStoreTier.from_score(Decimal("20")) is AppStoreTier.LOW_INTEREST
        assert AppStoreTier.from_score(Decimal("19.9")) is AppStoreTier.APATHY
