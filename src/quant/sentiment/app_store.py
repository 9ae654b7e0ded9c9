"""Retail interest composite from exchange app store rankings.

Each app's rank maps linearly onto 0-100 (rank 0 -> 100, ``max_rank`` and
below -> 0); the composite is the weighted mean over the known apps
supplied.
"""

from decimal import Decimal

from quant.exceptions import NoDataAvailableError
from quant.indicators.normalization import ScoreComponent, clamp, weighted_average
from quant.sentiment.models import AppRanking, AppStoreComposite

DEFAULT_MAX_RANK = 500

APP_WEIGHTS: dict[str, Decimal] = {
    "Coinbase": Decimal("0.50"),
    "Binance": Decimal("0.30"),
    "Kraken": Decimal("0.20"),
}


def rank_score(rank: int, max_rank: int = DEFAULT_MAX_RANK) -> Decimal:
    """(max_rank - rank) / max_rank * 100, clamped to 0-100."""
    score = Decimal(max_rank - rank) / Decimal(max_rank) * Decimal("100")
    return clamp(score, Decimal("0"), Decimal("100"))


def compute_app_store_composite(
    rankings: list[AppRanking],
    max_rank: int = DEFAULT_MAX_RANK,
    weights: dict[str, Decimal] | None = None,
) -> AppStoreComposite:
    """Weighted composite over the rankings of known exchange apps.

    Rankings of apps without a weight are ignored.

    Raises:
        NoDataAvailableError: If no ranking belongs to a known app.
    """
    weights = weights or APP_WEIGHTS
    components = [
        ScoreComponent(rank_score(r.rank, max_rank), weights[r.app_name], r.app_name)
        for r in rankings
        if r.app_name in weights
    ]
    if not components:
        raise NoDataAvailableError("no rankings for known exchange apps")

    score, _ = weighted_average(components)
    return AppStoreComposite(score=score, rankings=list(rankings))
