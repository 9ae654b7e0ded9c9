"""Momentum indicators: simple/exponential moving averages and Wilder RSI.

Moving averages operate on ordered Decimal lists (oldest first). The RSI
series operates on bars and re-sorts them by date. Intermediate smoothing
results are quantized to 12 decimal places to prevent Decimal precision
explosion across long recurrences.

CRITICAL: All computations use Decimal. Never use float.
"""

from decimal import Decimal

from quant.exceptions import InsufficientDataError
from quant.indicators.models import RSIPoint
from quant.models import Bar, sort_bars

#: Precision limit for recurrence intermediates (12 decimal places).
_QUANTIZE = Decimal("0.000000000001")

_HUNDRED = Decimal("100")


def compute_sma(values: list[Decimal], period: int) -> Decimal:
    """Arithmetic mean of the last ``period`` values.

    Degenerate fallback: with fewer than ``period`` values the last value
    is returned unchanged, so callers always get a number.

    Raises:
        InsufficientDataError: If values is empty.
    """
    if not values:
        raise InsufficientDataError(required=1, actual=0, what="values for SMA")
    if period <= 0 or len(values) < period:
        return values[-1]

    window = values[-period:]
    return sum(window, Decimal("0")) / Decimal(period)


def compute_ema(values: list[Decimal], period: int) -> list[Decimal]:
    """Compute the Exponential Moving Average series.

    Seeds with the first value, then applies
        ema = (price - ema) * (2 / (period + 1)) + ema

    Args:
        values: Ordered list of Decimal values (oldest first).
        period: Smoothing period.

    Returns:
        List of EMA values, same length as input. Empty list if input is empty.
    """
    if not values:
        return []

    multiplier = Decimal("2") / (Decimal(period) + Decimal("1"))

    ema = [values[0].quantize(_QUANTIZE)]
    for price in values[1:]:
        prev = ema[-1]
        ema.append(((price - prev) * multiplier + prev).quantize(_QUANTIZE))

    return ema


def latest_ema(values: list[Decimal], period: int) -> Decimal:
    """Last value of the EMA over ``values``.

    Raises:
        InsufficientDataError: If values is empty.
    """
    series = compute_ema(values, period)
    if not series:
        raise InsufficientDataError(required=1, actual=0, what="values for EMA")
    return series[-1]


def _rsi_value(avg_gain: Decimal, avg_loss: Decimal) -> Decimal:
    if avg_loss == 0:
        return _HUNDRED
    rs = avg_gain / avg_loss
    return _HUNDRED - _HUNDRED / (Decimal("1") + rs)


def wilder_rsi_values(closes: list[Decimal], period: int = 14) -> list[Decimal]:
    """RSI values over an ordered close series using Wilder smoothing.

    Average gain/loss are seeded with the simple mean of the first
    ``period`` changes, then smoothed as
        avg = (avg * (period - 1) + new) / period

    The first value corresponds to ``closes[period]`` (the close that
    completes the seed window), so the result has ``len(closes) - period``
    entries. Empty when ``len(closes) <= period``.
    """
    if period <= 0 or len(closes) <= period:
        return []

    gains: list[Decimal] = []
    losses: list[Decimal] = []
    for prev, curr in zip(closes, closes[1:]):
        change = curr - prev
        gains.append(max(change, Decimal("0")))
        losses.append(max(-change, Decimal("0")))

    p = Decimal(period)
    avg_gain = (sum(gains[:period], Decimal("0")) / p).quantize(_QUANTIZE)
    avg_loss = (sum(losses[:period], Decimal("0")) / p).quantize(_QUANTIZE)

    values = [_rsi_value(avg_gain, avg_loss)]
    for gain, loss in zip(gains[period:], losses[period:]):
        avg_gain = ((avg_gain * (p - 1) + gain) / p).quantize(_QUANTIZE)
        avg_loss = ((avg_loss * (p - 1) + loss) / p).quantize(_QUANTIZE)
        values.append(_rsi_value(avg_gain, avg_loss))

    return values


def compute_rsi_series(bars: list[Bar], period: int = 14) -> list[RSIPoint]:
    """Wilder RSI series over bars, dated by the bar each value closes on.

    Bars are sorted ascending by date first. Returns an empty list when
    there are not more than ``period`` bars.
    """
    ordered = sort_bars(bars)
    values = wilder_rsi_values([b.close for b in ordered], period)
    dates = [b.date for b in ordered[period:]]
    return [RSIPoint(date=d, value=v) for d, v in zip(dates, values)]


def latest_rsi(
    closes: list[Decimal], period: int = 14, neutral: Decimal = Decimal("50")
) -> Decimal:
    """Most recent Wilder RSI, or ``neutral`` when history is too short."""
    values = wilder_rsi_values(closes, period)
    if not values:
        return neutral
    return values[-1]
