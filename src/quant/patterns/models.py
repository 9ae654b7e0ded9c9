"""Price pattern data models: swings, RSI divergences and consolidation ranges.

CRITICAL: All price and RSI values use Decimal. Never use float.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class DivergenceType(str, Enum):
    """Direction of an RSI divergence."""

    BULLISH = "bullish"  # Lower price low, higher RSI low
    BEARISH = "bearish"  # Higher price high, lower RSI high


@dataclass(frozen=True)
class SwingPoint:
    """A local extreme: a swing high's high or a swing low's low."""

    date: datetime
    price: Decimal


@dataclass(frozen=True)
class Divergence:
    """Disagreement between consecutive price swings and their RSI readings.

    end_date is always after start_date. Bearish: price_end > price_start
    and rsi_end < rsi_start. Bullish: price_end < price_start and
    rsi_end > rsi_start.
    """

    type: DivergenceType
    start_date: datetime
    end_date: datetime
    price_start: Decimal
    price_end: Decimal
    rsi_start: Decimal
    rsi_end: Decimal


@dataclass(frozen=True)
class ConsolidationRange:
    """A run of bars whose combined high-low envelope stayed within the ATR threshold."""

    start_date: datetime
    end_date: datetime
    high_price: Decimal
    low_price: Decimal
    bar_count: int
