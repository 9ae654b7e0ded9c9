"""Composite emotion and engagement scores and regime gating.

Both axes are weighted averages over whichever inputs are present; the
base input of each axis (fear & greed for emotion, volume for
engagement) is always present.
"""

from decimal import Decimal

from quant.config import SentimentSettings
from quant.indicators.normalization import ScoreComponent, sigmoid_normalize, weighted_average
from quant.logging import get_logger
from quant.models import ABSENT, Absent, Present
from quant.sentiment.models import LiveIndicators

logger = get_logger(__name__)

_HUNDRED = Decimal("100")


def compute_composite_emotion(
    fear_greed: Decimal,
    live: LiveIndicators,
    settings: SentimentSettings | None = None,
) -> tuple[Decimal, list[str]]:
    """Fear (0) to greed (100) composite.

    Returns:
        Tuple of (score, labels of the components used).
    """
    settings = settings or SentimentSettings()
    components = [
        ScoreComponent(Decimal(fear_greed), settings.emotion_weight_fear_greed, "Fear & Greed"),
    ]

    if isinstance(live.cycle_risk, Present):
        components.append(
            ScoreComponent(
                live.cycle_risk.value * _HUNDRED, settings.emotion_weight_cycle_risk, "Cycle Risk"
            )
        )
    if isinstance(live.funding_rate, Present):
        # Zero-centered: positive funding (longs paying shorts) reads as greed
        funding = sigmoid_normalize(live.funding_rate.value, Decimal("0"), settings.funding_level_k)
        components.append(ScoreComponent(funding, settings.emotion_weight_funding, "Funding Rate"))
    if isinstance(live.altcoin_season, Present):
        components.append(
            ScoreComponent(
                live.altcoin_season.value, settings.emotion_weight_altcoin_season, "Altcoin Season"
            )
        )
    if isinstance(live.capital_rotation, Present):
        components.append(
            ScoreComponent(
                live.capital_rotation.value,
                settings.emotion_weight_capital_rotation,
                "Capital Rotation",
            )
        )

    return weighted_average(components)


def compute_composite_engagement(
    volume_score: Decimal,
    live: LiveIndicators,
    volatility_score: Present[Decimal] | Absent = ABSENT,
    settings: SentimentSettings | None = None,
) -> tuple[Decimal, list[str]]:
    """Low (0) to high (100) activity composite.

    Returns:
        Tuple of (score, labels of the components used).
    """
    settings = settings or SentimentSettings()
    components = [ScoreComponent(volume_score, settings.engagement_weight_volume, "BTC Volume")]

    if isinstance(live.funding_rate, Present):
        # Zero-centered on |rate|: flat funding scores 50
        magnitude = sigmoid_normalize(
            abs(live.funding_rate.value), Decimal("0"), settings.funding_magnitude_k
        )
        components.append(
            ScoreComponent(
                magnitude, settings.engagement_weight_funding_magnitude, "Funding Activity"
            )
        )
    if isinstance(live.app_store_score, Present):
        components.append(
            ScoreComponent(
                live.app_store_score.value, settings.engagement_weight_app_store, "App Store"
            )
        )
    if isinstance(live.search_interest, Present):
        components.append(
            ScoreComponent(
                live.search_interest.value, settings.engagement_weight_search, "Search Trends"
            )
        )
    if isinstance(volatility_score, Present):
        components.append(
            ScoreComponent(
                volatility_score.value, settings.engagement_weight_volatility, "Volatility"
            )
        )

    return weighted_average(components)


def apply_regime_gating(
    emotion: Decimal,
    volatility_score: Decimal,
    settings: SentimentSettings | None = None,
) -> Decimal:
    """Clamp an emotion score by the volatility regime.

    Expansion (score > 80) caps emotion at 55: greed readings during
    crash-like moves are not trusted. Compression (score < 20) floors it
    at 45: fear readings in a dead-calm market are not trusted.
    """
    settings = settings or SentimentSettings()
    gated = emotion
    if volatility_score > settings.gate_expansion_threshold:
        gated = min(emotion, settings.gate_expansion_cap)
    elif volatility_score < settings.gate_compression_threshold:
        gated = max(emotion, settings.gate_compression_floor)

    if gated != emotion:
        logger.info(
            "regime_gating_applied",
            raw_emotion=str(emotion),
            gated_emotion=str(gated),
            volatility_score=str(volatility_score),
        )
    return gated
