"""Risk score engine: per-asset price store and refresh-window cache.

The engine owns the only shared mutable state of the analytics core: the
supplied price histories and the last computed current-risk value per
asset. Both live behind a single asyncio.Lock, so a check-cache, maybe
recompute, store sequence runs as one critical section and two concurrent
callers never fit the same regression twice.
"""

import asyncio
from collections.abc import Callable
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from quant.config import RiskSettings
from quant.exceptions import NoDataAvailableError
from quant.logging import asset_context, get_logger
from quant.models import PricePoint
from quant.risk.assets import AssetRegistry
from quant.risk.calculator import compute_multi_factor_risk, compute_risk_history, sample_history
from quant.risk.confidence import ConfidenceTracker
from quant.risk.models import (
    AdaptiveConfidence,
    MultiFactorRiskPoint,
    RiskAssessment,
    RiskFactorSnapshot,
    RiskHistory,
    RiskHistoryPoint,
)
from quant.risk.refresh import should_refresh

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RiskScoreEngine:
    """Computes and caches regression risk for supported assets.

    The cached current-risk value of an asset is served verbatim until a
    refresh boundary (see ``quant.risk.refresh``) has been crossed since it
    was computed. Appending prices does not by itself invalidate the cache.

    Args:
        settings: Risk configuration (refresh hours and zone, weights).
        registry: Supported assets. Defaults to the built-in registry.
        confidence_tracker: Optional log that receives every recomputation.
        clock: Returns the current time. Defaults to UTC wall clock.
    """

    def __init__(
        self,
        settings: RiskSettings,
        registry: AssetRegistry | None = None,
        confidence_tracker: ConfidenceTracker | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._settings = settings
        self._registry = registry or AssetRegistry()
        self._confidence = confidence_tracker
        self._clock = clock or _utc_now
        self._tz = ZoneInfo(settings.refresh_timezone)
        self._hours = (settings.refresh_morning_hour, settings.refresh_evening_hour)
        self._prices: dict[str, dict[datetime, PricePoint]] = {}
        self._cache: dict[str, RiskAssessment] = {}
        self._lock = asyncio.Lock()

    def _key(self, asset_id: str) -> str:
        return self._registry.get(asset_id).asset_id

    async def set_history(self, asset_id: str, prices: list[PricePoint]) -> None:
        """Replace the stored price history of an asset.

        Raises:
            UnsupportedAssetError: If the asset has no configuration.
        """
        key = self._key(asset_id)
        async with self._lock:
            self._prices[key] = {p.date: p for p in prices}

    async def append_prices(self, asset_id: str, prices: list[PricePoint]) -> None:
        """Merge new observations into an asset's history; equal timestamps are overwritten.

        Raises:
            UnsupportedAssetError: If the asset has no configuration.
        """
        key = self._key(asset_id)
        async with self._lock:
            store = self._prices.setdefault(key, {})
            for point in prices:
                store[point.date] = point

    async def invalidate(self, asset_id: str | None = None) -> None:
        """Drop the cached value of one asset, or of all assets when None."""
        async with self._lock:
            if asset_id is None:
                self._cache.clear()
            else:
                self._cache.pop(self._key(asset_id), None)

    def _history_for(self, key: str) -> RiskHistory:
        prices = list(self._prices.get(key, {}).values())
        if not prices:
            raise NoDataAvailableError(f"no price history for {key}")
        config = self._registry.get(key)
        min_points = config.min_history_points or self._settings.min_history_points
        return compute_risk_history(
            prices,
            bars_per_year=self._settings.history_bars_per_year,
            min_points=min_points,
            deviation_bounds=config.deviation_bounds,
            origin_date=config.origin_date,
        )

    def _recompute(self, key: str, now: datetime) -> RiskAssessment:
        with asset_context(key):
            return self._recompute_in_context(key, now)

    def _recompute_in_context(self, key: str, now: datetime) -> RiskAssessment:
        history = self._history_for(key)
        assessment = RiskAssessment(
            asset_id=key,
            point=history.latest,
            r_squared=history.r_squared,
            sample_size=history.sample_size,
            computed_at=now,
        )
        self._cache[key] = assessment

        logger.info(
            "risk_recomputed",
            risk_level=str(assessment.risk_level),
            category=assessment.point.category,
            r_squared=str(assessment.r_squared),
            sample_size=assessment.sample_size,
        )

        if self._confidence is not None:
            self._confidence.record_calculation(
                asset_id=key,
                r_squared=assessment.r_squared,
                data_point_count=assessment.sample_size,
                risk_level=assessment.risk_level,
                price=assessment.point.price,
                when=now,
            )
        return assessment

    async def get_current_risk(self, asset_id: str, now: datetime | None = None) -> RiskAssessment:
        """Current regression risk, served from cache within a refresh window.

        Raises:
            UnsupportedAssetError: If the asset has no configuration.
            NoDataAvailableError: If no usable price history is stored.
            InsufficientDataError: If the history is shorter than the minimum.
        """
        key = self._key(asset_id)
        now = now or self._clock()
        async with self._lock:
            cached = self._cache.get(key)
            last = cached.computed_at if cached is not None else None
            if cached is not None and not should_refresh(last, now, self._tz, self._hours):
                logger.debug("risk_cache_hit", asset=key, computed_at=last.isoformat())
                return cached
            return self._recompute(key, now)

    async def force_refresh(self, asset_id: str, now: datetime | None = None) -> RiskAssessment:
        """Recompute current risk regardless of the refresh window."""
        key = self._key(asset_id)
        now = now or self._clock()
        async with self._lock:
            return self._recompute(key, now)

    async def get_risk_history(
        self,
        asset_id: str,
        days: int | None = None,
        max_points: int | None = None,
        now: datetime | None = None,
    ) -> list[RiskHistoryPoint]:
        """Risk level for each stored daily price, optionally downsampled.

        Not cached: the full history is refitted on every call.
        """
        key = self._key(asset_id)
        async with self._lock:
            history = self._history_for(key)
        if max_points is None and days is None:
            return history.points
        return sample_history(
            history.points,
            days=days,
            max_points=max_points or 0,
            now=now or self._clock(),
        )

    async def get_multi_factor_risk(
        self,
        asset_id: str,
        factors: RiskFactorSnapshot,
        now: datetime | None = None,
    ) -> MultiFactorRiskPoint:
        """Composite of the cached regression risk and the supplied factors."""
        current = await self.get_current_risk(asset_id, now)
        point = compute_multi_factor_risk(current.point, factors, self._settings.weights)
        logger.debug(
            "multi_factor_risk_computed",
            asset=current.asset_id,
            composite=str(point.composite_score),
            factors=[c.name for c in point.components],
        )
        return point

    def adaptive_confidence(self, asset_id: str) -> AdaptiveConfidence | None:
        """Adaptive confidence of an asset, or None without a tracker."""
        if self._confidence is None:
            return None
        return self._confidence.adaptive_confidence(self._key(asset_id))
