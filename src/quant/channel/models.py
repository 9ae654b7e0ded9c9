"""Log-regression channel data models.

CRITICAL: All values use Decimal. Never use float for prices or statistics.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class ChannelZone(str, Enum):
    """Where a close sits relative to its fitted regression bands."""

    DEEP_VALUE = "deep_value"  # At or below the -2 sigma band
    VALUE = "value"  # Between -2 and -1 sigma
    FAIR = "fair"  # Within +-1 sigma
    ELEVATED = "elevated"  # Between +1 and +2 sigma
    OVEREXTENDED = "overextended"  # Above the +2 sigma band

    @property
    def signal(self) -> str:
        """Short reading of the zone for display."""
        return _ZONE_SIGNALS[self]


_ZONE_SIGNALS: dict[ChannelZone, str] = {
    ChannelZone.DEEP_VALUE: "Strong buy zone",
    ChannelZone.VALUE: "Accumulation zone",
    ChannelZone.FAIR: "Fairly valued",
    ChannelZone.ELEVATED: "Caution zone",
    ChannelZone.OVEREXTENDED: "Overextended",
}


@dataclass(frozen=True)
class RegressionPoint:
    """One bar of a fitted channel, with bands in price space."""

    date: datetime
    close: Decimal
    fitted_price: Decimal
    upper_band: Decimal  # exp(fit + 2 sigma)
    lower_band: Decimal  # exp(fit - 2 sigma)
    upper_mid: Decimal  # exp(fit + sigma)
    lower_mid: Decimal  # exp(fit - sigma)
    zone: ChannelZone


@dataclass(frozen=True)
class RegressionChannel:
    """Least-squares fit of ln(close) against bar index.

    ``standard_deviation`` is sigma of the residuals in log space.
    ``r_squared`` is in [0, 1], or 0 when the log closes have no variance.
    """

    points: list[RegressionPoint]
    slope: Decimal
    intercept: Decimal
    r_squared: Decimal
    standard_deviation: Decimal
    current_zone: ChannelZone
    annualized_growth_rate: Decimal

    def fitted_log(self, index: int) -> Decimal:
        """Fitted ln(price) at bar ``index``."""
        return self.slope * Decimal(index) + self.intercept
