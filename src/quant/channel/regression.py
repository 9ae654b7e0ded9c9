"""Log-regression channel fitting and zone classification.

Fits ordinary least squares of ln(close) against the integer bar index
(x = 0..n-1) using closed-form sums, measures the residual spread sigma in
log space, and projects +-1 sigma / +-2 sigma bands back into price space.

CRITICAL: All computations use Decimal. Never use float.
"""

from decimal import Decimal

from quant.channel.models import ChannelZone, RegressionChannel, RegressionPoint
from quant.exceptions import InsufficientDataError, NoDataAvailableError
from quant.logging import get_logger
from quant.models import Bar, sort_bars

logger = get_logger(__name__)

#: Precision limit for log-space values (12 decimal places).
_LOG_QUANTIZE = Decimal("0.000000000001")

_DEFAULT_MIN_BARS = 20


def classify_zone(
    price: Decimal,
    lower: Decimal,
    lower_mid: Decimal,
    upper_mid: Decimal,
    upper: Decimal,
) -> ChannelZone:
    """Strict five-way threshold ladder over the channel bands.

    price <= lower -> DEEP_VALUE; <= lower_mid -> VALUE; <= upper_mid -> FAIR;
    <= upper -> ELEVATED; otherwise OVEREXTENDED.
    """
    if price <= lower:
        return ChannelZone.DEEP_VALUE
    if price <= lower_mid:
        return ChannelZone.VALUE
    if price <= upper_mid:
        return ChannelZone.FAIR
    if price <= upper:
        return ChannelZone.ELEVATED
    return ChannelZone.OVEREXTENDED


def fit_log_regression_channel(
    bars: list[Bar],
    bars_per_year: Decimal = Decimal("252"),
    min_bars: int = _DEFAULT_MIN_BARS,
) -> RegressionChannel | None:
    """Fit a log-regression channel over a bar series.

    Bars are sorted ascending by date; duplicate dates are not removed.

    Degenerate cases:
    - A zero OLS denominator returns None.
    - A zero residual sigma collapses every band onto the fitted price;
      every bar is then classified FAIR.

    Args:
        bars: Price bars. Bars with a non-positive close are skipped.
        bars_per_year: Bar cadence used to annualize the slope.
        min_bars: Minimum number of bars required for a fit.

    Returns:
        The fitted RegressionChannel, or None if the fit is degenerate.

    Raises:
        NoDataAvailableError: If bars were supplied but none has a positive close.
        InsufficientDataError: If fewer than ``min_bars`` usable bars remain.
    """
    ordered = [b for b in sort_bars(bars) if b.close > 0]
    if bars and not ordered:
        raise NoDataAvailableError("no bars with a positive close")
    if len(ordered) < len(bars):
        logger.debug("non_positive_closes_skipped", skipped=len(bars) - len(ordered))
    if len(ordered) < min_bars:
        raise InsufficientDataError(required=min_bars, actual=len(ordered), what="bars")

    closes = [b.close for b in ordered]
    log_closes = [c.ln().quantize(_LOG_QUANTIZE) for c in closes]
    n = Decimal(len(log_closes))
    xs = [Decimal(i) for i in range(len(log_closes))]

    sum_x = sum(xs, Decimal("0"))
    sum_y = sum(log_closes, Decimal("0"))
    sum_xy = sum((x * y for x, y in zip(xs, log_closes)), Decimal("0"))
    sum_x2 = sum((x * x for x in xs), Decimal("0"))

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        return None

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    fitted = [slope * x + intercept for x in xs]
    residuals = [y - f for y, f in zip(log_closes, fitted)]
    mean_residual = sum(residuals, Decimal("0")) / n
    variance = sum(((r - mean_residual) ** 2 for r in residuals), Decimal("0")) / n
    sigma = variance.sqrt().quantize(_LOG_QUANTIZE)

    mean_y = sum_y / n
    ss_total = sum(((y - mean_y) ** 2 for y in log_closes), Decimal("0"))
    ss_residual = sum((r * r for r in residuals), Decimal("0"))
    if ss_total > 0:
        r_squared = max(Decimal("0"), min(Decimal("1"), 1 - ss_residual / ss_total))
    else:
        r_squared = Decimal("0")

    annualized_growth = (slope * bars_per_year).exp() - 1

    points: list[RegressionPoint] = []
    for bar, fit in zip(ordered, fitted):
        upper = (fit + 2 * sigma).exp()
        lower = (fit - 2 * sigma).exp()
        upper_mid = (fit + sigma).exp()
        lower_mid = (fit - sigma).exp()
        if sigma == 0:
            zone = ChannelZone.FAIR
        else:
            zone = classify_zone(bar.close, lower, lower_mid, upper_mid, upper)
        points.append(
            RegressionPoint(
                date=bar.date,
                close=bar.close,
                fitted_price=fit.exp(),
                upper_band=upper,
                lower_band=lower,
                upper_mid=upper_mid,
                lower_mid=lower_mid,
                zone=zone,
            )
        )

    logger.debug(
        "regression_channel_fitted",
        bars=len(points),
        slope=str(slope),
        r_squared=str(r_squared),
        sigma=str(sigma),
        current_zone=points[-1].zone.value,
    )

    return RegressionChannel(
        points=points,
        slope=slope,
        intercept=intercept,
        r_squared=r_squared,
        standard_deviation=sigma,
        current_zone=points[-1].zone,
        annualized_growth_rate=annualized_growth,
    )
