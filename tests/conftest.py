"""Shared test fixtures for the quant analytics engine."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from quant.config import AppSettings, RiskSettings, SentimentSettings

_WOBBLE = [Decimal("0"), Decimal("0.03"), Decimal("0.01"), Decimal("-0.02"), Decimal("-0.03")]


@pytest.fixture
def start() -> datetime:
    """First date of generated daily series."""
    return datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def wavy_closes() -> list[Decimal]:
    """120 closes: 1%/day exponential trend with a repeating +-3% wobble."""
    log_base = Decimal("100").ln()
    return [
        (log_base + Decimal("0.01") * i + _WOBBLE[i % len(_WOBBLE)]).exp().quantize(
            Decimal("0.0001")
        )
        for i in range(120)
    ]


@pytest.fixture
def risk_settings() -> RiskSettings:
    """Risk settings with refresh boundaries in UTC."""
    return RiskSettings(refresh_timezone="UTC")


@pytest.fixture
def app_settings(risk_settings: RiskSettings) -> AppSettings:
    """Return AppSettings with test defaults."""
    return AppSettings(log_level="DEBUG", risk=risk_settings, sentiment=SentimentSettings())
