"""Sentiment regime trajectory on the emotion/engagement plane.

Historical points pair each day's fear & greed reading (emotion) with
that day's volume scored against its trailing 30-day average
(engagement). The most recent point is replaced by the full live
composite, gated by the volatility regime, when live inputs are
supplied. Gating never touches historical points.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal

from quant.config import SentimentSettings
from quant.exceptions import NoDataAvailableError
from quant.indicators.normalization import sigmoid_normalize
from quant.logging import get_logger
from quant.models import ABSENT, Absent, Present, day_key
from quant.sentiment.composite import (
    apply_regime_gating,
    compute_composite_emotion,
    compute_composite_engagement,
)
from quant.sentiment.models import (
    FearGreedReading,
    LiveIndicators,
    RegimeData,
    RegimeMilestones,
    RegimePoint,
    VolumePoint,
)

logger = get_logger(__name__)

#: (look-back days, tolerance days) for each milestone.
_MILESTONES = {
    "one_week_ago": (7, 2),
    "one_month_ago": (30, 3),
    "three_months_ago": (90, 5),
}


def volume_engagement_scores(
    volume_history: list[VolumePoint],
    sma_days: int = 30,
    k: Decimal = Decimal("3.0"),
) -> dict[date, Decimal]:
    """Engagement score of each day's volume against its trailing average.

    The average covers up to ``sma_days`` most recent days, the scored
    day included. Keyed by calendar day; a later observation of the
    same day replaces an earlier one.
    """
    ordered = sorted(volume_history, key=lambda v: v.date)
    scores: dict[date, Decimal] = {}
    for i, point in enumerate(ordered):
        window = ordered[max(0, i - sma_days + 1):i + 1]
        sma = sum((v.volume for v in window), Decimal("0")) / len(window)
        scores[day_key(point.date)] = sigmoid_normalize(point.volume, sma, k)
    return scores


def closest_point(
    points: list[RegimePoint], target: datetime, tolerance_days: int
) -> RegimePoint | None:
    """Point nearest to ``target``, or None if none lies within the tolerance."""
    if not points:
        return None
    best = min(points, key=lambda p: abs(p.date - target))
    if abs(best.date - target) <= timedelta(days=tolerance_days):
        return best
    return None


def compute_regime_data(
    fear_greed_history: list[FearGreedReading],
    volume_history: list[VolumePoint],
    live: LiveIndicators | None = None,
    volatility_score: Present[Decimal] | Absent = ABSENT,
    settings: SentimentSettings | None = None,
) -> RegimeData:
    """Build the regime trajectory, current point and milestones.

    Args:
        fear_greed_history: Daily fear & greed readings, any order.
        volume_history: Daily total volumes, any order.
        live: Current optional composite inputs. When supplied (or when a
            volatility score is present) the latest point is recomputed
            as the full composite.
        volatility_score: Current volatility regime score, used as an
            engagement input and to gate the current emotion score.
        settings: Composite weights and constants.

    Raises:
        NoDataAvailableError: If no fear & greed reading shares a
            calendar day with a volume observation.
    """
    settings = settings or SentimentSettings()
    engagement_by_day = volume_engagement_scores(
        volume_history, settings.volume_sma_days, settings.default_sigmoid_k
    )

    points = sorted(
        (
            RegimePoint(
                date=reading.date,
                emotion_score=Decimal(reading.value),
                engagement_score=engagement_by_day[day_key(reading.date)],
            )
            for reading in fear_greed_history
            if day_key(reading.date) in engagement_by_day
        ),
        key=lambda p: p.date,
    )
    if not points:
        raise NoDataAvailableError("no fear & greed reading matches a volume observation")

    emotion_labels = ["Fear & Greed"]
    engagement_labels = ["BTC Volume"]

    if live is not None or isinstance(volatility_score, Present):
        live = live or LiveIndicators()
        latest = max(fear_greed_history, key=lambda r: r.date)
        base_volume = engagement_by_day.get(day_key(latest.date), Decimal("50"))

        emotion, emotion_labels = compute_composite_emotion(
            Decimal(latest.value), live, settings
        )
        engagement, engagement_labels = compute_composite_engagement(
            base_volume, live, volatility_score, settings
        )
        if isinstance(volatility_score, Present):
            emotion = apply_regime_gating(emotion, volatility_score.value, settings)

        points[-1] = RegimePoint(
            date=latest.date, emotion_score=emotion, engagement_score=engagement
        )

    today = points[-1]
    nearest = {
        name: closest_point(points, today.date - timedelta(days=days), tolerance)
        for name, (days, tolerance) in _MILESTONES.items()
    }
    milestones = RegimeMilestones(today=today, **nearest)

    logger.debug(
        "regime_data_computed",
        points=len(points),
        regime=today.regime.value,
        emotion=str(today.emotion_score),
        engagement=str(today.engagement_score),
    )

    return RegimeData(
        current_point=today,
        milestones=milestones,
        trajectory=points,
        emotion_components=emotion_labels,
        engagement_components=engagement_labels,
    )
