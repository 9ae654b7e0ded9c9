"""RSI divergence detection between consecutive price swings.

Bearish divergence: two consecutive swing highs where price makes a
higher high while RSI makes a lower high, with the later RSI still above
the bearish floor (default 55). Bullish divergence mirrors this on swing
lows with the later RSI below the bullish ceiling (default 45). The two
swings must be between ``min_gap_days`` and ``max_gap_days`` apart.

RSI values are matched to swings by exact timestamp first, falling back
to the calendar day for daily and slower timeframes.
"""

from datetime import date, datetime
from decimal import Decimal

from quant.config import DivergenceSettings
from quant.indicators.models import RSIPoint
from quant.logging import get_logger
from quant.models import Bar, day_key, sort_bars
from quant.patterns.models import Divergence, DivergenceType, SwingPoint
from quant.patterns.swings import find_swing_highs, find_swing_lows

logger = get_logger(__name__)


class RSILookup:
    """RSI values keyed by exact timestamp, with a calendar-day fallback.

    An exact timestamp match always wins. When several RSI points share a
    calendar day, the latest one backs the day-level fallback.
    """

    def __init__(self, rsi_series: list[RSIPoint]) -> None:
        self._by_timestamp: dict[datetime, Decimal] = {}
        self._by_day: dict[date, Decimal] = {}
        for point in sorted(rsi_series, key=lambda p: p.date):
            self._by_timestamp[point.date] = point.value
            self._by_day[day_key(point.date)] = point.value

    def get(self, when: datetime) -> Decimal | None:
        """RSI at ``when``, or on the same calendar day, or None."""
        value = self._by_timestamp.get(when)
        if value is not None:
            return value
        return self._by_day.get(day_key(when))


def _gap_ok(start: datetime, end: datetime, settings: DivergenceSettings) -> bool:
    days_between = (end - start).days
    return settings.min_gap_days <= days_between <= settings.max_gap_days


def _match_pairs(
    swings: list[SwingPoint],
    lookup: RSILookup,
    divergence_type: DivergenceType,
    settings: DivergenceSettings,
) -> list[Divergence]:
    found: list[Divergence] = []
    for prev, curr in zip(swings, swings[1:]):
        prev_rsi = lookup.get(prev.date)
        curr_rsi = lookup.get(curr.date)
        if prev_rsi is None or curr_rsi is None:
            continue

        if divergence_type is DivergenceType.BEARISH:
            matched = (
                curr.price > prev.price
                and curr_rsi < prev_rsi
                and curr_rsi > settings.bearish_rsi_floor
            )
        else:
            matched = (
                curr.price < prev.price
                and curr_rsi > prev_rsi
                and curr_rsi < settings.bullish_rsi_ceiling
            )

        if matched and _gap_ok(prev.date, curr.date, settings):
            found.append(
                Divergence(
                    type=divergence_type,
                    start_date=prev.date,
                    end_date=curr.date,
                    price_start=prev.price,
                    price_end=curr.price,
                    rsi_start=prev_rsi,
                    rsi_end=curr_rsi,
                )
            )
    return found


def match_divergences(
    swing_highs: list[SwingPoint],
    swing_lows: list[SwingPoint],
    rsi_series: list[RSIPoint],
    settings: DivergenceSettings | None = None,
) -> list[Divergence]:
    """Match consecutive swing pairs against RSI and return recent divergences.

    Args:
        swing_highs: Chronological swing highs.
        swing_lows: Chronological swing lows.
        rsi_series: RSI points to look swing dates up in.
        settings: Thresholds and result cap. Defaults to DivergenceSettings().

    Returns:
        At most ``settings.max_results`` divergences of both types combined,
        the most recent by end date, in chronological order.
    """
    settings = settings or DivergenceSettings()
    lookup = RSILookup(rsi_series)

    divergences = _match_pairs(swing_highs, lookup, DivergenceType.BEARISH, settings)
    divergences += _match_pairs(swing_lows, lookup, DivergenceType.BULLISH, settings)
    divergences.sort(key=lambda d: (d.end_date, d.start_date))

    if settings.max_results <= 0:
        return []
    return divergences[-settings.max_results :]


def detect_divergences(
    bars: list[Bar],
    rsi_series: list[RSIPoint],
    settings: DivergenceSettings | None = None,
) -> list[Divergence]:
    """Detect RSI divergences over a bar series.

    Returns an empty list unless both the bars and the RSI series are
    longer than twice the swing lookback.
    """
    settings = settings or DivergenceSettings()
    lookback = settings.swing_lookback
    ordered = sort_bars(bars)
    if len(ordered) <= lookback * 2 or len(rsi_series) <= lookback * 2:
        return []

    highs = find_swing_highs(ordered, lookback)
    lows = find_swing_lows(ordered, lookback)
    divergences = match_divergences(highs, lows, rsi_series, settings)

    logger.debug(
        "divergences_detected",
        swing_highs=len(highs),
        swing_lows=len(lows),
        divergences=len(divergences),
    )
    return divergences
