"""Log-regression channel: OLS fit of ln(price), sigma bands and zones."""

from quant.channel.models import ChannelZone, RegressionChannel, RegressionPoint
from quant.channel.regression import classify_zone, fit_log_regression_channel

__all__ = [
    "ChannelZone",
    "RegressionChannel",
    "RegressionPoint",
    "classify_zone",
    "fit_log_regression_channel",
]
