"""Chart analysis: every price-series indicator for one bar series.

The ChartAnalyzer composes the regression channel, momentum indicators,
divergence detection and consolidation detection over a single OHLC
series, each configured from its own settings object.

CRITICAL: All computations use Decimal. Never use float.
"""

from dataclasses import dataclass
from decimal import Decimal

from quant.channel.models import RegressionChannel
from quant.channel.regression import fit_log_regression_channel
from quant.config import (
    AppSettings,
    ConsolidationSettings,
    DivergenceSettings,
    MomentumSettings,
    RegressionSettings,
)
from quant.exceptions import NoDataAvailableError
from quant.indicators.models import RSIPoint
from quant.indicators.momentum import compute_rsi_series, compute_sma
from quant.logging import get_logger
from quant.models import Bar, sort_bars
from quant.patterns.consolidation import detect_consolidation_ranges
from quant.patterns.divergence import detect_divergences
from quant.patterns.models import ConsolidationRange, Divergence

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChartAnalysis:
    """Indicator overlays for one bar series."""

    channel: RegressionChannel | None  # None when the fit is degenerate
    rsi_series: list[RSIPoint]
    current_rsi: Decimal  # Neutral default when the series is too short
    sma: Decimal  # Long simple moving average of closes
    divergences: list[Divergence]
    consolidation_ranges: list[ConsolidationRange]


class ChartAnalyzer:
    """Runs all price-series indicators over a bar series.

    Args:
        momentum: RSI period, SMA period and neutral RSI.
        regression: Channel minimum length and annualization cadence.
        divergence: Swing lookback and divergence thresholds.
        consolidation: ATR window, multiplier and minimum range length.
    """

    def __init__(
        self,
        momentum: MomentumSettings,
        regression: RegressionSettings,
        divergence: DivergenceSettings,
        consolidation: ConsolidationSettings,
    ) -> None:
        self._momentum = momentum
        self._regression = regression
        self._divergence = divergence
        self._consolidation = consolidation

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "ChartAnalyzer":
        return cls(
            momentum=settings.momentum,
            regression=settings.regression,
            divergence=settings.divergence,
            consolidation=settings.consolidation,
        )

    def analyze(self, bars: list[Bar], dedupe_daily: bool = True) -> ChartAnalysis:
        """Compute every overlay for ``bars``.

        Args:
            bars: OHLC bars in any order.
            dedupe_daily: Passed to consolidation detection; disable for
                intraday timeframes.

        Raises:
            NoDataAvailableError: If ``bars`` is empty.
            InsufficientDataError: If there are fewer bars than the
                regression channel minimum.
        """
        if not bars:
            raise NoDataAvailableError("no bars to analyze")

        ordered = sort_bars(bars)
        closes = [b.close for b in ordered]

        channel = fit_log_regression_channel(
            ordered,
            bars_per_year=self._regression.bars_per_year,
            min_bars=self._regression.min_bars,
        )
        rsi_series = compute_rsi_series(ordered, self._momentum.rsi_period)
        current_rsi = rsi_series[-1].value if rsi_series else self._momentum.neutral_rsi
        sma = compute_sma(closes, self._momentum.sma_period)
        divergences = detect_divergences(ordered, rsi_series, self._divergence)
        ranges = detect_consolidation_ranges(ordered, self._consolidation, dedupe_daily)

        logger.info(
            "chart_analyzed",
            bars=len(ordered),
            zone=channel.current_zone.value if channel is not None else None,
            rsi=str(current_rsi),
            divergences=len(divergences),
            consolidation_ranges=len(ranges),
        )

        return ChartAnalysis(
            channel=channel,
            rsi_series=rsi_series,
            current_rsi=current_rsi,
            sma=sma,
            divergences=divergences,
            consolidation_ranges=ranges,
        )
