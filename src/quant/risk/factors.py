"""Normalizers mapping raw factor values onto a 0-1 risk contribution.

0 means the factor argues for minimum risk (deep discount, fear),
1 for maximum risk (overextension, euphoria).
"""

from decimal import Decimal

from quant.indicators.normalization import clamp

_ZERO = Decimal("0")
_ONE = Decimal("1")
_NEUTRAL = Decimal("0.5")

#: (minimum % distance above the SMA, risk) steps, checked in order.
_SMA_STEPS: tuple[tuple[Decimal, Decimal], ...] = (
    (Decimal("20"), Decimal("0.2")),
    (Decimal("10"), Decimal("0.3")),
    (Decimal("0"), Decimal("0.4")),
    (Decimal("-10"), Decimal("0.6")),
    (Decimal("-20"), Decimal("0.7")),
)
_SMA_FLOOR_RISK = Decimal("0.8")


def normalize_rsi(rsi: Decimal) -> Decimal:
    """RSI 30 -> 0, RSI 70 -> 1, linear in between."""
    return clamp((rsi - Decimal("30")) / Decimal("40"), _ZERO, _ONE)


def normalize_sma_position(price: Decimal, sma: Decimal) -> Decimal:
    """Stepped risk from the price's percentage distance to its long SMA.

    Trading well above the 200-day average is read as a healthy trend
    (lower risk); trading well below it as a broken one (higher risk).
    Returns 0.5 when the SMA is not positive.
    """
    if sma <= 0:
        return _NEUTRAL
    distance_pct = (price - sma) / sma * Decimal("100")
    for threshold, risk in _SMA_STEPS:
        if distance_pct > threshold:
            return risk
    return _SMA_FLOOR_RISK


def normalize_funding_rate(rate: Decimal) -> Decimal:
    """Funding -0.1% -> 0, 0 -> 0.5, +0.1% -> 1 per period."""
    return clamp((rate + Decimal("0.001")) / Decimal("0.002"), _ZERO, _ONE)


def normalize_index(value: Decimal) -> Decimal:
    """A 0-100 index scaled to 0-1."""
    return clamp(value / Decimal("100"), _ZERO, _ONE)
