"""Indicator output models."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class RSIPoint:
    """RSI value (0-100) at the close of a bar."""

    date: datetime
    value: Decimal
