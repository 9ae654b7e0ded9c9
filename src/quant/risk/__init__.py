"""Regression-based and multi-factor risk scoring."""

from quant.risk.assets import DEFAULT_ASSET_CONFIGS, AssetRegistry, AssetRiskConfig, log10_bounds
from quant.risk.calculator import (
    compute_multi_factor_risk,
    compute_risk_history,
    risk_from_bounds,
    risk_from_deviation,
    sample_history,
)
from quant.risk.confidence import ConfidenceTracker, evaluate_prediction
from quant.risk.engine import RiskScoreEngine
from quant.risk.models import (
    AdaptiveConfidence,
    MultiFactorRiskPoint,
    RiskAssessment,
    RiskComponent,
    RiskFactorSnapshot,
    RiskHistory,
    RiskHistoryPoint,
    risk_category,
)
from quant.risk.refresh import latest_boundary, should_refresh

__all__ = [
    "DEFAULT_ASSET_CONFIGS",
    "AdaptiveConfidence",
    "AssetRegistry",
    "AssetRiskConfig",
    "ConfidenceTracker",
    "MultiFactorRiskPoint",
    "RiskAssessment",
    "RiskComponent",
    "RiskFactorSnapshot",
    "RiskHistory",
    "RiskHistoryPoint",
    "RiskScoreEngine",
    "compute_multi_factor_risk",
    "compute_risk_history",
    "evaluate_prediction",
    "latest_boundary",
    "log10_bounds",
    "risk_category",
    "risk_from_bounds",
    "risk_from_deviation",
    "sample_history",
    "should_refresh",
]
