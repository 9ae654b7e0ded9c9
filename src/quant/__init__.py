"""Quantitative analytics engine for crypto market dashboards.

Pure Decimal computations over in-memory price series: momentum
indicators, log-regression channels, swing/divergence and consolidation
detection, regression-based risk scoring and composite sentiment regimes.
"""

__version__ = "0.1.0"
