"""Adaptive confidence tracking for regression risk scores.

Every risk computation is logged per asset: the fit's R-squared, the
number of data points and, for directional readings, a prediction
snapshot. Snapshots are scored against the price observed 30, 60 and 90
days later. The log feeds an adaptive confidence level that starts from
the asset's static configuration and moves with fit quality, history
depth and the realized hit rate.

The log is held in memory only and never feeds back into the risk value
being computed.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from quant.indicators.normalization import clamp
from quant.logging import get_logger
from quant.risk.assets import AssetRegistry
from quant.risk.models import (
    AdaptiveConfidence,
    ConfidenceRecord,
    PredictionSnapshot,
    risk_category,
)

logger = get_logger(__name__)

MAX_R_SQUARED_HISTORY = 180
MAX_PREDICTION_SNAPSHOTS = 365
MIN_VALIDATED_PREDICTIONS = 5
DEFAULT_STATIC_CONFIDENCE = 5
MAX_CONFIDENCE = 9

_HIGH_RISK = Decimal("0.55")
_LOW_RISK = Decimal("0.45")
_MOVE_THRESHOLD = Decimal("0.05")
_BASELINE_POINTS = Decimal("365")


def evaluate_prediction(risk_level: Decimal, snapshot_price: Decimal, outcome_price: Decimal) -> bool:
    """Whether a directional risk reading was borne out.

    High risk (>= 0.55) is correct if the price fell at least 5%;
    low risk (< 0.45) is correct if it rose at least 5%. Neutral
    readings are never correct.
    """
    change = (outcome_price - snapshot_price) / snapshot_price
    if risk_level >= _HIGH_RISK:
        return change <= -_MOVE_THRESHOLD
    if risk_level < _LOW_RISK:
        return change >= _MOVE_THRESHOLD
    return False


class ConfidenceTracker:
    """Per-asset in-memory log of risk computations and their outcomes.

    Args:
        registry: Source of static confidence levels. Defaults to the
            built-in asset registry.
    """

    def __init__(self, registry: AssetRegistry | None = None) -> None:
        self._registry = registry or AssetRegistry()
        self._records: dict[str, ConfidenceRecord] = {}

    def record(self, asset_id: str) -> ConfidenceRecord | None:
        """The confidence log for an asset, or None if nothing was recorded."""
        return self._records.get(asset_id)

    def record_calculation(
        self,
        asset_id: str,
        r_squared: Decimal,
        data_point_count: int,
        risk_level: Decimal,
        price: Decimal,
        when: datetime,
    ) -> None:
        """Append one risk computation to the asset's log.

        Takes at most one prediction snapshot per calendar day, and only
        for directional readings (risk < 0.45 or > 0.55). Pending
        snapshots are then validated against ``price``.
        """
        record = self._records.setdefault(asset_id, ConfidenceRecord(asset_id=asset_id))

        record.r_squared_history.append((when, r_squared, data_point_count))
        del record.r_squared_history[:-MAX_R_SQUARED_HISTORY]
        record.data_point_counts.append((when, data_point_count))
        del record.data_point_counts[:-MAX_R_SQUARED_HISTORY]

        snapshot = PredictionSnapshot(
            asset_id=asset_id,
            snapshot_date=when,
            risk_level=risk_level,
            risk_category=risk_category(risk_level),
            price_at_snapshot=price,
        )
        taken_today = any(p.snapshot_date.date() == when.date() for p in record.predictions)
        if snapshot.is_directional and not taken_today:
            record.predictions.append(snapshot)
            del record.predictions[:-MAX_PREDICTION_SNAPSHOTS]
            logger.debug(
                "prediction_snapshot_recorded",
                asset=asset_id,
                risk_level=str(risk_level),
                price=str(price),
            )

        self._validate_pending(record, price, when)
        record.last_updated = when

    def _validate_pending(self, record: ConfidenceRecord, price: Decimal, when: datetime) -> None:
        for snapshot in record.predictions:
            if snapshot.correct_90d is not None:
                continue
            days_since = (when - snapshot.snapshot_date).days

            if days_since >= 30 and snapshot.price_at_30d is None:
                snapshot.price_at_30d = price
                snapshot.correct_30d = evaluate_prediction(
                    snapshot.risk_level, snapshot.price_at_snapshot, price
                )
                logger.info(
                    "prediction_validated",
                    asset=record.asset_id,
                    horizon_days=30,
                    correct=snapshot.correct_30d,
                )
            if days_since >= 60 and snapshot.price_at_60d is None:
                snapshot.price_at_60d = price
                snapshot.correct_60d = evaluate_prediction(
                    snapshot.risk_level, snapshot.price_at_snapshot, price
                )
            if days_since >= 90 and snapshot.price_at_90d is None:
                snapshot.price_at_90d = price
                snapshot.correct_90d = evaluate_prediction(
                    snapshot.risk_level, snapshot.price_at_snapshot, price
                )
                snapshot.validated_at = when

    def _static_confidence(self, asset_id: str) -> int:
        if self._registry.is_supported(asset_id):
            return self._registry.get(asset_id).confidence_level
        return DEFAULT_STATIC_CONFIDENCE

    def adaptive_confidence(self, asset_id: str) -> AdaptiveConfidence:
        """Static confidence adjusted by the asset's computation log.

        adaptive = static + r2_bonus + data_bonus + accuracy_bonus, rounded
        and clamped to [max(1, static - 1), 9], where

        - r2_bonus = clamp((R^2 - 0.85) * 5, -0.5, 1) on the latest fit
        - data_bonus = min(1, log2(points / 365) / 4) above 365 points
        - accuracy_bonus = clamp((hit_rate - 0.5) * 2, -1, 1) once five
          snapshots have a 30-day outcome
        """
        static = self._static_confidence(asset_id)
        record = self._records.get(asset_id)
        zero = Decimal("0")
        if record is None:
            return AdaptiveConfidence(
                asset_id=asset_id,
                static_confidence=static,
                adaptive_confidence=static,
                r_squared=None,
                data_point_count=0,
                prediction_accuracy=None,
                validated_predictions=0,
                total_predictions=0,
                r_squared_bonus=zero,
                data_point_bonus=zero,
                accuracy_bonus=zero,
            )

        latest_r2 = record.r_squared_history[-1][1] if record.r_squared_history else None
        r2_bonus = zero
        if latest_r2 is not None:
            r2_bonus = clamp((latest_r2 - Decimal("0.85")) * 5, Decimal("-0.5"), Decimal("1"))

        points = record.data_point_counts[-1][1] if record.data_point_counts else 0
        data_bonus = zero
        if points > _BASELINE_POINTS:
            log2_ratio = (Decimal(points) / _BASELINE_POINTS).ln() / Decimal(2).ln()
            data_bonus = min(Decimal("1"), log2_ratio / 4)

        validated = [p for p in record.predictions if p.correct_30d is not None]
        accuracy = None
        accuracy_bonus = zero
        if len(validated) >= MIN_VALIDATED_PREDICTIONS:
            correct = sum(1 for p in validated if p.correct_30d)
            accuracy = Decimal(correct) / Decimal(len(validated))
            accuracy_bonus = clamp((accuracy - Decimal("0.5")) * 2, Decimal("-1"), Decimal("1"))

        raw = Decimal(static) + r2_bonus + data_bonus + accuracy_bonus
        floor = Decimal(max(1, static - 1))
        clamped = clamp(raw, floor, Decimal(MAX_CONFIDENCE))
        adaptive = int(clamped.to_integral_value(rounding=ROUND_HALF_UP))

        return AdaptiveConfidence(
            asset_id=asset_id,
            static_confidence=static,
            adaptive_confidence=adaptive,
            r_squared=latest_r2,
            data_point_count=points,
            prediction_accuracy=accuracy,
            validated_predictions=len(validated),
            total_predictions=len(record.predictions),
            r_squared_bonus=r2_bonus,
            data_point_bonus=data_bonus,
            accuracy_bonus=accuracy_bonus,
        )
