"""Composite sentiment regime, volatility regime and capital rotation scoring."""

from quant.sentiment.app_store import compute_app_store_composite, rank_score
from quant.sentiment.composite import (
    apply_regime_gating,
    compute_composite_emotion,
    compute_composite_engagement,
)
from quant.sentiment.models import (
    AppRanking,
    AppStoreComposite,
    AppStoreTier,
    DominanceSnapshot,
    FearGreedReading,
    LiveIndicators,
    RegimeData,
    RegimeMilestones,
    RegimePoint,
    RotationPhase,
    RotationSignal,
    SentimentRegime,
    VolatilityLabel,
    VolatilityRegime,
    VolumePoint,
)
from quant.sentiment.regime import compute_regime_data, volume_engagement_scores
from quant.sentiment.rotation import CapitalRotationTracker, compute_rotation_signal
from quant.sentiment.volatility import compute_volatility_regime

__all__ = [
    "AppRanking",
    "AppStoreComposite",
    "AppStoreTier",
    "CapitalRotationTracker",
    "DominanceSnapshot",
    "FearGreedReading",
    "LiveIndicators",
    "RegimeData",
    "RegimeMilestones",
    "RegimePoint",
    "RotationPhase",
    "RotationSignal",
    "SentimentRegime",
    "VolatilityLabel",
    "VolatilityRegime",
    "VolumePoint",
    "apply_regime_gating",
    "compute_app_store_composite",
    "compute_composite_emotion",
    "compute_composite_engagement",
    "compute_regime_data",
    "compute_rotation_signal",
    "compute_volatility_regime",
    "rank_score",
    "volume_engagement_scores",
]
