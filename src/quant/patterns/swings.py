"""Swing high / swing low detection over a symmetric lookback window.

A swing high at index i has a high strictly greater than every high in
the ``lookback`` bars before it and the ``lookback`` bars after it. Swing
lows mirror this with lows and strict less-than. Bars are expected sorted
ascending by date.
"""

from decimal import Decimal

from quant.models import Bar
from quant.patterns.models import SwingPoint


def _find_swings(values: list[Decimal], lookback: int, highs: bool) -> list[int]:
    """Indices of strict local extremes with ``lookback`` neighbours per side."""
    if lookback <= 0 or len(values) <= lookback * 2:
        return []

    indices: list[int] = []
    for i in range(lookback, len(values) - lookback):
        current = values[i]
        neighbours = values[i - lookback : i] + values[i + 1 : i + lookback + 1]
        if highs:
            is_swing = all(v < current for v in neighbours)
        else:
            is_swing = all(v > current for v in neighbours)
        if is_swing:
            indices.append(i)
    return indices


def find_swing_highs(bars: list[Bar], lookback: int = 5) -> list[SwingPoint]:
    """Swing highs in chronological order. Empty when len(bars) <= 2 * lookback."""
    indices = _find_swings([b.high for b in bars], lookback, highs=True)
    return [SwingPoint(date=bars[i].date, price=bars[i].high) for i in indices]


def find_swing_lows(bars: list[Bar], lookback: int = 5) -> list[SwingPoint]:
    """Swing lows in chronological order. Empty when len(bars) <= 2 * lookback."""
    indices = _find_swings([b.low for b in bars], lookback, highs=False)
    return [SwingPoint(date=bars[i].date, price=bars[i].low) for i in indices]
