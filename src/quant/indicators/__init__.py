"""Momentum indicators and score normalization utilities."""

from quant.indicators.models import RSIPoint
from quant.indicators.momentum import (
    compute_ema,
    compute_rsi_series,
    compute_sma,
    latest_ema,
    latest_rsi,
    wilder_rsi_values,
)
from quant.indicators.normalization import (
    ScoreComponent,
    clamp,
    linear_scale,
    redistribute_weights,
    sigmoid_normalize,
    weighted_average,
)

__all__ = [
    "RSIPoint",
    "ScoreComponent",
    "clamp",
    "compute_ema",
    "compute_rsi_series",
    "compute_sma",
    "latest_ema",
    "latest_rsi",
    "linear_scale",
    "redistribute_weights",
    "sigmoid_normalize",
    "weighted_average",
]
