"""ATR-based consolidation (flat range) detection over OHLC bars.

True range per bar is max(high - low, |high - prev_close|, |low - prev_close|).
At each candidate start bar the threshold is the trailing ATR (mean true
range of the bars just before the start) times a multiplier. A running
high/low envelope is extended bar by bar while its height stays within the
threshold. Envelopes spanning at least ``min_bars`` bars become ranges and
scanning resumes at the breaking bar; shorter ones advance by one bar.

CRITICAL: All computations use Decimal. Never use float.
"""

from decimal import Decimal

from quant.config import ConsolidationSettings
from quant.logging import get_logger
from quant.models import Bar, dedupe_daily_bars, sort_bars
from quant.patterns.models import ConsolidationRange

logger = get_logger(__name__)


def true_ranges(bars: list[Bar]) -> list[Decimal]:
    """True range of each bar after the first (index k -> bar k + 1)."""
    ranges: list[Decimal] = []
    for prev, curr in zip(bars, bars[1:]):
        ranges.append(
            max(
                curr.high - curr.low,
                abs(curr.high - prev.close),
                abs(curr.low - prev.close),
            )
        )
    return ranges


def trailing_atr(tr: list[Decimal], index: int, window: int) -> Decimal:
    """Mean true range of up to ``window`` bars ending just before bar ``index``.

    ``tr`` is the output of true_ranges(). Returns zero for an empty window.
    """
    start_bar = max(1, index - window)
    values = tr[start_bar - 1 : index - 1]
    if not values:
        return Decimal("0")
    return sum(values, Decimal("0")) / Decimal(len(values))


def detect_consolidation_ranges(
    bars: list[Bar],
    settings: ConsolidationSettings | None = None,
    dedupe_daily: bool = True,
) -> list[ConsolidationRange]:
    """Find non-overlapping consolidation ranges.

    Args:
        bars: OHLC bars in any order.
        settings: ATR window, multiplier and minimum range length.
        dedupe_daily: Collapse the series to one bar per calendar day
            first. Disable for intraday timeframes.

    Returns:
        Ranges in chronological order. Empty unless there are more than
        ``atr_window`` bars.
    """
    settings = settings or ConsolidationSettings()
    ordered = dedupe_daily_bars(bars) if dedupe_daily else sort_bars(bars)
    window = settings.atr_window
    if len(ordered) <= window:
        return []

    tr = true_ranges(ordered)
    ranges: list[ConsolidationRange] = []
    i = window

    while i < len(ordered):
        threshold = trailing_atr(tr, i, window) * settings.atr_multiplier

        range_high = ordered[i].high
        range_low = ordered[i].low
        j = i + 1
        while j < len(ordered):
            new_high = max(range_high, ordered[j].high)
            new_low = min(range_low, ordered[j].low)
            if new_high - new_low > threshold:
                break
            range_high, range_low = new_high, new_low
            j += 1

        if j - i >= settings.min_bars:
            ranges.append(
                ConsolidationRange(
                    start_date=ordered[i].date,
                    end_date=ordered[j - 1].date,
                    high_price=range_high,
                    low_price=range_low,
                    bar_count=j - i,
                )
            )
            i = j
        else:
            i += 1

    logger.debug("consolidation_ranges_detected", bars=len(ordered), ranges=len(ranges))
    return ranges
