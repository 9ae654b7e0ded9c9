"""Sentiment regime, volatility and capital rotation data models.

CRITICAL: All score and market values use Decimal. Never use float.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from quant.models import ABSENT, Absent, Present, factor_of

_MIDPOINT = Decimal("50")


class SentimentRegime(str, Enum):
    """Quadrant of the emotion/engagement plane."""

    PANIC = "panic"  # Fearful, highly engaged
    FOMO = "fomo"  # Greedy, highly engaged
    APATHY = "apathy"  # Fearful, disengaged
    COMPLACENCY = "complacency"  # Greedy, disengaged

    @classmethod
    def classify(
        cls, emotion: Decimal, engagement: Decimal, midpoint: Decimal = _MIDPOINT
    ) -> "SentimentRegime":
        """Quadrant for a pair of 0-100 scores. Scores equal to the midpoint count as high."""
        greedy = emotion >= midpoint
        engaged = engagement >= midpoint
        if engaged:
            return cls.FOMO if greedy else cls.PANIC
        return cls.COMPLACENCY if greedy else cls.APATHY


@dataclass(frozen=True)
class RegimePoint:
    """A dated position on the emotion/engagement plane."""

    date: datetime
    emotion_score: Decimal  # 0 = extreme fear, 100 = extreme greed
    engagement_score: Decimal  # 0 = no activity, 100 = frenzy

    @property
    def regime(self) -> SentimentRegime:
        return SentimentRegime.classify(self.emotion_score, self.engagement_score)


@dataclass(frozen=True)
class RegimeMilestones:
    """Trajectory points closest to fixed look-back offsets from today."""

    today: RegimePoint
    one_week_ago: RegimePoint | None
    one_month_ago: RegimePoint | None
    three_months_ago: RegimePoint | None


@dataclass(frozen=True)
class RegimeData:
    """Regime trajectory plus the current point and its component attribution."""

    current_point: RegimePoint
    milestones: RegimeMilestones
    trajectory: list[RegimePoint]  # Chronological; last element is current_point
    emotion_components: list[str]
    engagement_components: list[str]

    @property
    def current_regime(self) -> SentimentRegime:
        return self.current_point.regime


@dataclass(frozen=True)
class FearGreedReading:
    """One daily reading of the 0-100 fear & greed index."""

    date: datetime
    value: int


@dataclass(frozen=True)
class VolumePoint:
    """Total traded volume (quote currency) for one day."""

    date: datetime
    volume: Decimal


@dataclass(frozen=True)
class LiveIndicators:
    """Current values of the optional composite inputs.

    Each field is ``Present(value)`` or ``ABSENT``.
    """

    cycle_risk: Present[Decimal] | Absent = ABSENT  # 0-1 regression risk of BTC
    funding_rate: Present[Decimal] | Absent = ABSENT  # Per period, e.g. 0.0001
    altcoin_season: Present[Decimal] | Absent = ABSENT  # 0-100
    capital_rotation: Present[Decimal] | Absent = ABSENT  # 0-100
    app_store_score: Present[Decimal] | Absent = ABSENT  # 0-100
    search_interest: Present[Decimal] | Absent = ABSENT  # 0-100

    @classmethod
    def from_values(cls, **values: Decimal | int | None) -> "LiveIndicators":
        """Build from nullable values; None becomes ABSENT."""
        return cls(
            **{
                name: factor_of(None if value is None else Decimal(value))
                for name, value in values.items()
            }
        )


class VolatilityLabel(str, Enum):
    EXPANSION = "expansion"
    NORMAL = "normal"
    COMPRESSION = "compression"


@dataclass(frozen=True)
class VolatilityRegime:
    """Short-term versus long-term realized volatility."""

    vol_7d: Decimal  # Annualized
    vol_30d: Decimal  # Annualized
    ratio: Decimal  # vol_7d / vol_30d
    score: Decimal  # 0-100, 50 = short-term vol equals long-term vol

    @property
    def label(self) -> VolatilityLabel:
        if self.score > Decimal("80"):
            return VolatilityLabel.EXPANSION
        if self.score < Decimal("20"):
            return VolatilityLabel.COMPRESSION
        return VolatilityLabel.NORMAL


@dataclass(frozen=True)
class DominanceSnapshot:
    """Point-in-time market dominance figures. Dominances are percentages."""

    btc_dominance: Decimal
    usdt_dominance: Decimal
    alt_market_cap: Decimal
    total_market_cap: Decimal
    date: datetime | None = None


class RotationPhase(str, Enum):
    RISK_OFF = "Risk Off"
    BTC_ACCUMULATION = "BTC Accumulation"
    ALT_ROTATION = "Alt Rotation"
    PEAK_SPECULATION = "Peak Speculation"

    @classmethod
    def from_score(cls, score: Decimal) -> "RotationPhase":
        if score < 25:
            return cls.RISK_OFF
        if score < 50:
            return cls.BTC_ACCUMULATION
        if score < 75:
            return cls.ALT_ROTATION
        return cls.PEAK_SPECULATION


@dataclass(frozen=True)
class RotationSignal:
    """Capital rotation score with its three sub-signals (all 0-100)."""

    score: Decimal
    usdt_score: Decimal
    btc_score: Decimal
    alt_share_score: Decimal
    alt_share: Decimal  # Alt market cap as % of total
    btc_dominance_change: Decimal | None  # previous - current, None without prior snapshot

    @property
    def phase(self) -> RotationPhase:
        return RotationPhase.from_score(self.score)


class AppStoreTier(str, Enum):
    EXTREME_EUPHORIA = "Extreme Euphoria"
    HIGH_INTEREST = "High Interest"
    MODERATE_INTEREST = "Moderate Interest"
    LOW_INTEREST = "Low Interest"
    APATHY = "Apathy"

    @classmethod
    def from_score(cls, score: Decimal) -> "AppStoreTier":
        if score >= 80:
            return cls.EXTREME_EUPHORIA
        if score >= 60:
            return cls.HIGH_INTEREST
        if score >= 40:
            return cls.MODERATE_INTEREST
        if score >= 20:
            return cls.LOW_INTEREST
        return cls.APATHY


@dataclass(frozen=True)
class AppRanking:
    """Store ranking of one exchange app (1 = top of the category)."""

    app_name: str
    rank: int


@dataclass(frozen=True)
class AppStoreComposite:
    score: Decimal  # 0-100
    rankings: list[AppRanking]

    @property
    def tier(self) -> AppStoreTier:
        return AppStoreTier.from_score(self.score)
