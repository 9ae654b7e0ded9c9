"""Regression-based risk placement and the multi-factor risk composite.

Single-factor risk fits a log-regression channel over the whole price
history and places each price within the fitted +-2 sigma band:

    risk = clamp((deviation + 2 sigma) / (4 sigma), 0, 1)

where deviation = ln(price) - fitted ln(price). The lower 2-sigma band
maps to 0, the fitted price to 0.5 and the upper 2-sigma band to 1.
Assets configured with fixed deviation bounds are instead placed
linearly between those bounds.

CRITICAL: All computations use Decimal. Never use float.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal

from quant.channel.models import ChannelZone
from quant.channel.regression import fit_log_regression_channel
from quant.config import RiskFactorWeights
from quant.exceptions import NoDataAvailableError
from quant.indicators.normalization import ScoreComponent, clamp, redistribute_weights
from quant.models import Bar, Present, PricePoint, day_key, dedupe_daily_prices
from quant.risk.factors import (
    normalize_funding_rate,
    normalize_index,
    normalize_rsi,
    normalize_sma_position,
)
from quant.risk.models import (
    MultiFactorRiskPoint,
    RiskComponent,
    RiskFactorSnapshot,
    RiskHistory,
    RiskHistoryPoint,
)

_ZERO = Decimal("0")
_ONE = Decimal("1")
_NEUTRAL = Decimal("0.5")
_QUANTIZE = Decimal("0.000000000001")


def risk_from_deviation(deviation: Decimal, sigma: Decimal) -> Decimal:
    """Place a log-space deviation within the +-2 sigma band as a 0-1 risk.

    A zero sigma (perfect fit) places every price at the neutral 0.5.
    """
    if sigma <= 0:
        return _NEUTRAL
    risk = (deviation + 2 * sigma) / (4 * sigma)
    return clamp(risk, _ZERO, _ONE).quantize(_QUANTIZE)


def risk_from_bounds(deviation: Decimal, bounds: tuple[Decimal, Decimal]) -> Decimal:
    """Map a log-space deviation linearly from [low, high] onto a 0-1 risk.

    Deviations outside the bounds clamp to 0 or 1. An empty or inverted
    range places every price at the neutral 0.5.
    """
    low, high = bounds
    if high <= low:
        return _NEUTRAL
    risk = (clamp(deviation, low, high) - low) / (high - low)
    return risk.quantize(_QUANTIZE)


def compute_risk_history(
    prices: list[PricePoint],
    bars_per_year: Decimal = Decimal("365"),
    min_points: int = 20,
    deviation_bounds: tuple[Decimal, Decimal] | None = None,
    origin_date: date | None = None,
) -> RiskHistory:
    """Risk level for every daily price of a history.

    Non-positive prices and prices dated before ``origin_date`` are
    discarded, and the series is collapsed to one price per calendar day
    (last observation wins) before fitting.

    Args:
        prices: Price observations in any order.
        bars_per_year: Cadence used to annualize the fitted slope.
        min_points: Minimum number of daily prices required.
        deviation_bounds: Log-space deviations mapping to risk 0 and 1.
            None places prices within the fitted +-2 sigma band.
        origin_date: First day of the asset's usable history.

    Returns:
        RiskHistory with one point per day in ascending date order.

    Raises:
        NoDataAvailableError: If no positive price remains on or after the origin.
        InsufficientDataError: If fewer than ``min_points`` daily prices remain.
    """
    usable = [
        p for p in prices
        if p.price > 0 and (origin_date is None or day_key(p.date) >= origin_date)
    ]
    daily = dedupe_daily_prices(usable)
    if not daily:
        raise NoDataAvailableError("no usable prices in history")

    bars = [Bar.flat(p.date, p.price) for p in daily]
    channel = fit_log_regression_channel(bars, bars_per_year=bars_per_year, min_bars=min_points)

    if channel is None:
        # No slope can be fitted; every price is its own fair value.
        points = [
            RiskHistoryPoint(
                date=p.date,
                price=p.price,
                risk_level=_NEUTRAL,
                fair_value=p.price,
                deviation=_ZERO,
                zone=ChannelZone.FAIR,
            )
            for p in daily
        ]
        return RiskHistory(points=points, r_squared=_ZERO, standard_deviation=_ZERO)

    sigma = channel.standard_deviation
    points = []
    for index, regression_point in enumerate(channel.points):
        log_close = regression_point.close.ln().quantize(_QUANTIZE)
        deviation = (log_close - channel.fitted_log(index)).quantize(_QUANTIZE)
        points.append(
            RiskHistoryPoint(
                date=regression_point.date,
                price=regression_point.close,
                risk_level=(
                    risk_from_deviation(deviation, sigma)
                    if deviation_bounds is None
                    else risk_from_bounds(deviation, deviation_bounds)
                ),
                fair_value=regression_point.fitted_price,
                deviation=deviation,
                zone=regression_point.zone,
            )
        )

    return RiskHistory(points=points, r_squared=channel.r_squared, standard_deviation=sigma)


def sample_history(
    history: list[RiskHistoryPoint],
    days: int | None,
    max_points: int,
    now: datetime,
) -> list[RiskHistoryPoint]:
    """Downsample a risk history for display.

    Keeps points from the last ``days`` days (all points when None), then
    takes every n-th point with n = len // max_points. The most recent
    point is always kept.
    """
    if days is not None:
        cutoff = now - timedelta(days=days)
        history = [p for p in history if p.date >= cutoff]

    if max_points <= 0 or len(history) <= max_points:
        return list(history)

    step = len(history) // max_points
    sampled = history[::step]
    if sampled[-1] is not history[-1]:
        sampled.append(history[-1])
    return sampled


def compute_multi_factor_risk(
    point: RiskHistoryPoint,
    factors: RiskFactorSnapshot,
    weights: RiskFactorWeights | None = None,
) -> MultiFactorRiskPoint:
    """Combine regression risk with independently supplied factors.

    The regression component is always present. Every other factor
    contributes only when it is ``Present``; the weights of the present
    components are renormalized to sum to 1.

    Args:
        point: Regression risk placement of the current price.
        factors: Optional factor snapshot.
        weights: Nominal factor weights. Defaults to RiskFactorWeights().

    Returns:
        MultiFactorRiskPoint with composite score in [0, 1].
    """
    weights = weights or RiskFactorWeights()

    candidates: list[tuple[ScoreComponent, Decimal]] = [
        (ScoreComponent(point.risk_level, weights.regression, "regression"), point.risk_level)
    ]

    def add(name: str, weight: Decimal, raw: Decimal, value: Decimal) -> None:
        candidates.append((ScoreComponent(value, weight, name), raw))

    if isinstance(factors.rsi, Present):
        add("rsi", weights.rsi, factors.rsi.value, normalize_rsi(factors.rsi.value))
    if isinstance(factors.sma200, Present):
        add(
            "sma_position",
            weights.sma_position,
            factors.sma200.value,
            normalize_sma_position(point.price, factors.sma200.value),
        )
    if isinstance(factors.funding_rate, Present):
        rate = factors.funding_rate.value
        add("funding", weights.funding, rate, normalize_funding_rate(rate))

    for name, factor, weight in (
        ("fear_greed", factors.fear_greed, weights.fear_greed),
        ("volatility", factors.volatility_score, weights.volatility),
        ("app_store", factors.app_store_score, weights.app_store),
        ("search", factors.search_interest, weights.search),
        ("altcoin_season", factors.altcoin_season, weights.altcoin_season),
        ("capital_rotation", factors.capital_rotation, weights.capital_rotation),
    ):
        if isinstance(factor, Present):
            add(name, weight, factor.value, normalize_index(factor.value))

    raw_by_label = {component.label: raw for component, raw in candidates}
    normalized = redistribute_weights([component for component, _ in candidates])
    if not normalized:
        return MultiFactorRiskPoint(
            date=point.date, price=point.price, components=[], composite_score=_NEUTRAL
        )

    components = [
        RiskComponent(
            name=c.label,
            raw_value=raw_by_label[c.label],
            value=c.score,
            weight=c.weight,
        )
        for c in normalized
    ]
    composite = sum((c.value * c.weight for c in components), _ZERO)
    return MultiFactorRiskPoint(
        date=point.date,
        price=point.price,
        components=components,
        composite_score=clamp(composite, _ZERO, _ONE).quantize(_QUANTIZE),
    )
