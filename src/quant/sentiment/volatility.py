"""Realized-volatility regime from daily prices.

Compares annualized 7-day realized volatility against 30-day realized
volatility and squashes the ratio onto 0-100:

    score = sigmoid_normalize(vol_7d / vol_30d, average=1, k=3)

A score above 80 marks a volatility expansion (crash-like moves), below
20 an extreme compression.

CRITICAL: All computations use Decimal. Never use float.
"""

from decimal import Decimal

from quant.config import SentimentSettings
from quant.indicators.normalization import sigmoid_normalize
from quant.logging import get_logger
from quant.models import PricePoint, dedupe_daily_prices
from quant.sentiment.models import VolatilityRegime

logger = get_logger(__name__)

_QUANTIZE = Decimal("0.000000000001")


def log_returns(prices: list[Decimal]) -> list[Decimal]:
    """ln(p[i] / p[i-1]) for consecutive prices."""
    return [(curr / prev).ln() for prev, curr in zip(prices, prices[1:])]


def sample_std(values: list[Decimal]) -> Decimal:
    """Bessel-corrected sample standard deviation. Zero for fewer than 2 values."""
    n = len(values)
    if n < 2:
        return Decimal("0")
    mean = sum(values, Decimal("0")) / n
    variance = sum(((v - mean) ** 2 for v in values), Decimal("0")) / (n - 1)
    return variance.sqrt()


def compute_volatility_regime(
    prices: list[PricePoint],
    settings: SentimentSettings | None = None,
) -> VolatilityRegime | None:
    """Volatility regime of a price history.

    Prices are collapsed to one per calendar day (last observation wins)
    and non-positive prices are dropped.

    Returns:
        VolatilityRegime, or None with fewer than ``min_daily_prices``
        (default 31) distinct daily prices. A zero 30-day volatility
        yields the neutral score 50 and ratio 1.
    """
    settings = settings or SentimentSettings()
    daily = dedupe_daily_prices([p for p in prices if p.price > 0])
    if len(daily) < settings.min_daily_prices:
        return None

    returns = log_returns([p.price for p in daily])
    annualize = Decimal(settings.annualization_days).sqrt()
    vol_short = (sample_std(returns[-settings.short_vol_window:]) * annualize).quantize(_QUANTIZE)
    vol_long = (sample_std(returns[-settings.long_vol_window:]) * annualize).quantize(_QUANTIZE)

    if vol_long == 0:
        ratio = Decimal("1")
        score = Decimal("50")
    else:
        ratio = vol_short / vol_long
        score = sigmoid_normalize(ratio, Decimal("1"), settings.default_sigmoid_k)

    regime = VolatilityRegime(vol_7d=vol_short, vol_30d=vol_long, ratio=ratio, score=score)
    logger.debug(
        "volatility_regime_computed",
        vol_7d=str(vol_short),
        vol_30d=str(vol_long),
        score=str(score),
        label=regime.label.value,
    )
    return regime
