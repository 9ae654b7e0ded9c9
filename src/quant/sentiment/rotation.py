"""Capital rotation sub-signal from market dominance figures.

Three 0-100 sub-signals, combined 35/35/30 by default:

- USDT dominance, inverted over its typical 3-8% range (stablecoin
  hoarding reads as risk-off).
- BTC dominance direction: with a prior snapshot, ``50 + delta * 25``
  where delta = previous - current dominance; without one, the level
  inverted over its typical 40-70% range.
- Alt market share (alt cap / total cap) over a 30-60% range.
"""

from decimal import Decimal

from quant.config import RotationSettings
from quant.indicators.normalization import ScoreComponent, clamp, linear_scale, weighted_average
from quant.logging import get_logger
from quant.sentiment.models import DominanceSnapshot, RotationSignal

logger = get_logger(__name__)

_HUNDRED = Decimal("100")


def alt_market_share(snapshot: DominanceSnapshot, fallback: Decimal = Decimal("40")) -> Decimal:
    """Alt market cap as a percentage of total; ``fallback`` when the total is zero."""
    if snapshot.total_market_cap <= 0:
        return fallback
    return snapshot.alt_market_cap / snapshot.total_market_cap * _HUNDRED


def compute_rotation_signal(
    current: DominanceSnapshot,
    previous: DominanceSnapshot | None = None,
    settings: RotationSettings | None = None,
) -> RotationSignal:
    """Capital rotation score for a dominance snapshot.

    Args:
        current: Latest dominance figures.
        previous: Prior snapshot, if one was retained.
        settings: Weights and typical ranges. Defaults to RotationSettings().
    """
    settings = settings or RotationSettings()

    usdt_score = linear_scale(
        current.usdt_dominance,
        settings.usdt_dominance_low,
        settings.usdt_dominance_high,
        invert=True,
    )

    if previous is not None:
        delta = previous.btc_dominance - current.btc_dominance
        btc_score = clamp(
            Decimal("50") + delta * settings.btc_delta_scale, Decimal("0"), _HUNDRED
        )
    else:
        delta = None
        btc_score = linear_scale(
            current.btc_dominance,
            settings.btc_dominance_low,
            settings.btc_dominance_high,
            invert=True,
        )

    share = alt_market_share(current, settings.fallback_alt_share)
    alt_score = linear_scale(share, settings.alt_share_low, settings.alt_share_high)

    score, _ = weighted_average([
        ScoreComponent(usdt_score, settings.weight_usdt_dominance, "USDT Dominance"),
        ScoreComponent(btc_score, settings.weight_btc_direction, "BTC Dominance"),
        ScoreComponent(alt_score, settings.weight_alt_share, "Alt Share"),
    ])

    return RotationSignal(
        score=score,
        usdt_score=usdt_score,
        btc_score=btc_score,
        alt_share_score=alt_score,
        alt_share=share,
        btc_dominance_change=delta,
    )


class CapitalRotationTracker:
    """Retains the single prior dominance snapshot between updates.

    Each update scores the new snapshot against the retained one, then
    overwrites the slot with the new snapshot.
    """

    def __init__(self, settings: RotationSettings | None = None) -> None:
        self._settings = settings or RotationSettings()
        self._previous: DominanceSnapshot | None = None

    @property
    def previous(self) -> DominanceSnapshot | None:
        return self._previous

    def update(self, snapshot: DominanceSnapshot) -> RotationSignal:
        signal = compute_rotation_signal(snapshot, self._previous, self._settings)
        logger.debug(
            "dominance_snapshot_rollover",
            had_previous=self._previous is not None,
            btc_dominance=str(snapshot.btc_dominance),
            score=str(signal.score),
            phase=signal.phase.value,
        )
        self._previous = snapshot
        return signal

    def reset(self) -> None:
        self._previous = None
