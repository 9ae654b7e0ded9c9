"""Price pattern detection: swings, RSI divergences and consolidation ranges."""

from quant.patterns.consolidation import detect_consolidation_ranges, true_ranges
from quant.patterns.divergence import RSILookup, detect_divergences, match_divergences
from quant.patterns.models import (
    ConsolidationRange,
    Divergence,
    DivergenceType,
    SwingPoint,
)
from quant.patterns.swings import find_swing_highs, find_swing_lows

__all__ = [
    "ConsolidationRange",
    "Divergence",
    "DivergenceType",
    "RSILookup",
    "SwingPoint",
    "detect_consolidation_ranges",
    "detect_divergences",
    "find_swing_highs",
    "find_swing_lows",
    "match_divergences",
    "true_ranges",
]
