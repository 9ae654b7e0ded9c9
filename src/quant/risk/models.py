"""Risk score data models.

CRITICAL: All risk, price and weight values use Decimal. Never use float.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from quant.channel.models import ChannelZone
from quant.models import ABSENT, Absent, Present, factor_of

#: Upper bounds (exclusive) of each risk category, checked in order.
_CATEGORY_BOUNDS: tuple[tuple[Decimal, str], ...] = (
    (Decimal("0.20"), "Very Low Risk"),
    (Decimal("0.40"), "Low Risk"),
    (Decimal("0.55"), "Neutral"),
    (Decimal("0.70"), "Elevated Risk"),
    (Decimal("0.90"), "High Risk"),
)


def risk_category(level: Decimal) -> str:
    """Human-readable category for a 0-1 risk level."""
    for bound, label in _CATEGORY_BOUNDS:
        if level < bound:
            return label
    return "Extreme Risk"


@dataclass(frozen=True)
class RiskHistoryPoint:
    """Regression-based placement of one dated price within its channel.

    risk_level is 0 at the lower 2-sigma band and 1 at the upper 2-sigma band.
    """

    date: datetime
    price: Decimal
    risk_level: Decimal
    fair_value: Decimal  # Fitted channel price
    deviation: Decimal  # ln(price) - fitted ln(price)
    zone: ChannelZone

    @property
    def category(self) -> str:
        return risk_category(self.risk_level)


@dataclass(frozen=True)
class RiskAssessment:
    """Current single-factor risk for an asset plus fit-quality side channel."""

    asset_id: str
    point: RiskHistoryPoint
    r_squared: Decimal
    sample_size: int
    computed_at: datetime

    @property
    def risk_level(self) -> Decimal:
        return self.point.risk_level


@dataclass(frozen=True)
class RiskHistory:
    """Risk placement of every point of a price history plus fit quality."""

    points: list[RiskHistoryPoint]
    r_squared: Decimal
    standard_deviation: Decimal

    @property
    def sample_size(self) -> int:
        return len(self.points)

    @property
    def latest(self) -> RiskHistoryPoint:
        return self.points[-1]


@dataclass(frozen=True)
class RiskComponent:
    """One present factor of a multi-factor composite.

    ``weight`` is the renormalized weight: the weights of all components
    of a point sum to 1.
    """

    name: str
    raw_value: Decimal
    value: Decimal  # Normalized risk contribution in [0, 1]
    weight: Decimal


@dataclass(frozen=True)
class MultiFactorRiskPoint:
    """Multi-factor composite risk for one dated price."""

    date: datetime
    price: Decimal
    components: list[RiskComponent]
    composite_score: Decimal  # [0, 1]

    @property
    def category(self) -> str:
        return risk_category(self.composite_score)

    def component(self, name: str) -> RiskComponent | None:
        """Component by name, or None if the factor was absent."""
        return next((c for c in self.components if c.name == name), None)


@dataclass(frozen=True)
class RiskFactorSnapshot:
    """Independently supplied factor values for the multi-factor composite.

    Each field is ``Present(value)`` or ``ABSENT``. Absent factors drop out
    of the composite and their weight is redistributed.
    """

    rsi: Present[Decimal] | Absent = ABSENT  # 0-100
    sma200: Present[Decimal] | Absent = ABSENT  # Price level
    funding_rate: Present[Decimal] | Absent = ABSENT  # Per period, e.g. 0.0001
    fear_greed: Present[Decimal] | Absent = ABSENT  # 0-100
    volatility_score: Present[Decimal] | Absent = ABSENT  # 0-100 regime score
    app_store_score: Present[Decimal] | Absent = ABSENT  # 0-100
    search_interest: Present[Decimal] | Absent = ABSENT  # 0-100
    altcoin_season: Present[Decimal] | Absent = ABSENT  # 0-100
    capital_rotation: Present[Decimal] | Absent = ABSENT  # 0-100

    @classmethod
    def from_values(cls, **values: Decimal | int | None) -> "RiskFactorSnapshot":
        """Build a snapshot from nullable values; None becomes ABSENT.

        Integer inputs (e.g. an altcoin-season index) are converted to Decimal.
        """
        wrapped = {
            name: factor_of(None if value is None else Decimal(value))
            for name, value in values.items()
        }
        return cls(**wrapped)

    @property
    def present_count(self) -> int:
        return sum(
            1 for name in self.__dataclass_fields__ if isinstance(getattr(self, name), Present)
        )


@dataclass
class PredictionSnapshot:
    """A directional risk reading later validated against realized price moves."""

    asset_id: str
    snapshot_date: datetime
    risk_level: Decimal
    risk_category: str
    price_at_snapshot: Decimal
    price_at_30d: Decimal | None = None
    price_at_60d: Decimal | None = None
    price_at_90d: Decimal | None = None
    correct_30d: bool | None = None
    correct_60d: bool | None = None
    correct_90d: bool | None = None
    validated_at: datetime | None = None

    @property
    def is_directional(self) -> bool:
        return self.risk_level < Decimal("0.45") or self.risk_level > Decimal("0.55")


@dataclass
class ConfidenceRecord:
    """Mutable per-asset confidence log owned by the ConfidenceTracker."""

    asset_id: str
    r_squared_history: list[tuple[datetime, Decimal, int]] = field(default_factory=list)
    data_point_counts: list[tuple[datetime, int]] = field(default_factory=list)
    predictions: list[PredictionSnapshot] = field(default_factory=list)
    last_updated: datetime | None = None


@dataclass(frozen=True)
class AdaptiveConfidence:
    """Static confidence adjusted by fit quality, history depth and track record."""

    asset_id: str
    static_confidence: int
    adaptive_confidence: int
    r_squared: Decimal | None
    data_point_count: int
    prediction_accuracy: Decimal | None
    validated_predictions: int
    total_predictions: int
    r_squared_bonus: Decimal
    data_point_bonus: Decimal
    accuracy_bonus: Decimal
