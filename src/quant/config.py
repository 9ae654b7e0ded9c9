"""Configuration system using pydantic-settings with environment variable loading.

Every calibrated constant of the analytics engine lives here. Engines take
their settings object as a constructor argument; nothing reads global state.
"""

from decimal import Decimal

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class MomentumSettings(BaseSettings):
    """Moving average and RSI parameters."""

    model_config = SettingsConfigDict(env_prefix="MOMENTUM_")

    rsi_period: int = 14  # Wilder's default
    sma_period: int = 200
    neutral_rsi: Decimal = Decimal("50")  # Returned when history is too short


class RegressionSettings(BaseSettings):
    """Log-regression channel parameters."""

    model_config = SettingsConfigDict(env_prefix="REGRESSION_")

    min_bars: int = 20
    bars_per_year: Decimal = Decimal("252")  # Daily-equivalent cadence


class DivergenceSettings(BaseSettings):
    """Swing detection and RSI divergence matching parameters."""

    model_config = SettingsConfigDict(env_prefix="DIVERGENCE_")

    swing_lookback: int = 5  # Bars required on each side of a swing
    bearish_rsi_floor: Decimal = Decimal("55")  # Later swing RSI must exceed this
    bullish_rsi_ceiling: Decimal = Decimal("45")  # Later swing RSI must stay below this
    min_gap_days: int = 3
    max_gap_days: int = 365
    max_results: int = 5


class ConsolidationSettings(BaseSettings):
    """ATR-based flat range detection parameters."""

    model_config = SettingsConfigDict(env_prefix="CONSOLIDATION_")

    atr_window: int = 20
    atr_multiplier: Decimal = Decimal("1.5")
    min_bars: int = 10


class RiskFactorWeights(BaseModel):
    """Nominal weights for the multi-factor risk composite.

    Weights need not sum to 1: the composite renormalizes over the
    factors that are actually present.
    """

    regression: Decimal = Decimal("0.30")
    rsi: Decimal = Decimal("0.10")
    sma_position: Decimal = Decimal("0.05")
    funding: Decimal = Decimal("0.10")
    fear_greed: Decimal = Decimal("0.10")
    volatility: Decimal = Decimal("0.05")
    app_store: Decimal = Decimal("0.05")
    search: Decimal = Decimal("0.05")
    altcoin_season: Decimal = Decimal("0.10")
    capital_rotation: Decimal = Decimal("0.10")

    @property
    def total(self) -> Decimal:
        """Sum of all nominal weights."""
        return sum(
            (getattr(self, name) for name in type(self).model_fields),
            Decimal("0"),
        )


class RiskSettings(BaseSettings):
    """Risk score engine parameters.

    The refresh boundaries are wall-clock hours in ``refresh_timezone``.
    A cached current-risk value is recomputed only after one of them has
    been crossed since the last computation.
    """

    model_config = SettingsConfigDict(env_prefix="RISK_")

    refresh_morning_hour: int = 7
    refresh_evening_hour: int = 17
    refresh_timezone: str = "America/New_York"
    history_bars_per_year: Decimal = Decimal("365")  # Crypto trades every day
    min_history_points: int = 20
    weights: RiskFactorWeights = RiskFactorWeights()


class SentimentSettings(BaseSettings):
    """Composite emotion/engagement scoring and regime gating parameters.

    Default composite weights are calibrated constants, not derived values.
    """

    model_config = SettingsConfigDict(env_prefix="SENTIMENT_")

    # Emotion axis (fear <-> greed)
    emotion_weight_fear_greed: Decimal = Decimal("0.40")
    emotion_weight_cycle_risk: Decimal = Decimal("0.20")
    emotion_weight_funding: Decimal = Decimal("0.15")
    emotion_weight_altcoin_season: Decimal = Decimal("0.15")
    emotion_weight_capital_rotation: Decimal = Decimal("0.10")

    # Engagement axis (low <-> high activity)
    engagement_weight_volume: Decimal = Decimal("0.35")
    engagement_weight_funding_magnitude: Decimal = Decimal("0.15")
    engagement_weight_app_store: Decimal = Decimal("0.15")
    engagement_weight_search: Decimal = Decimal("0.20")
    engagement_weight_volatility: Decimal = Decimal("0.15")

    # Sigmoid steepness
    default_sigmoid_k: Decimal = Decimal("3.0")
    funding_level_k: Decimal = Decimal("300")  # Zero-centered: 0.01%/period -> ~50.75
    funding_magnitude_k: Decimal = Decimal("1500")  # Zero-centered on |rate|: never below 50
    volume_sma_days: int = 30

    # Regime gating
    gate_expansion_threshold: Decimal = Decimal("80")
    gate_expansion_cap: Decimal = Decimal("55")
    gate_compression_threshold: Decimal = Decimal("20")
    gate_compression_floor: Decimal = Decimal("45")

    # Realized volatility
    short_vol_window: int = 7
    long_vol_window: int = 30
    annualization_days: int = 365
    min_daily_prices: int = 31


class RotationSettings(BaseSettings):
    """Capital rotation sub-signal weights and typical dominance ranges."""

    model_config = SettingsConfigDict(env_prefix="ROTATION_")

    weight_usdt_dominance: Decimal = Decimal("0.35")
    weight_btc_direction: Decimal = Decimal("0.35")
    weight_alt_share: Decimal = Decimal("0.30")

    usdt_dominance_low: Decimal = Decimal("3")  # Percent
    usdt_dominance_high: Decimal = Decimal("8")
    btc_dominance_low: Decimal = Decimal("40")
    btc_dominance_high: Decimal = Decimal("70")
    alt_share_low: Decimal = Decimal("30")
    alt_share_high: Decimal = Decimal("60")
    btc_delta_scale: Decimal = Decimal("25")  # Score points per dominance point
    fallback_alt_share: Decimal = Decimal("40")  # Used when total market cap is zero


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    momentum: MomentumSettings = MomentumSettings()
    regression: RegressionSettings = RegressionSettings()
    divergence: DivergenceSettings = DivergenceSettings()
    consolidation: ConsolidationSettings = ConsolidationSettings()
    risk: RiskSettings = RiskSettings()
    sentiment: SentimentSettings = SentimentSettings()
    rotation: RotationSettings = RotationSettings()
