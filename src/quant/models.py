"""Shared data models for the analytics engine.

CRITICAL: All price, score and rate values use Decimal. Never use float for
signal computations.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Bar:
    """A single OHLC price bar.

    Callers may supply bars in any order; every consumer re-sorts by
    date ascending before use.
    """

    date: datetime
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal

    @classmethod
    def flat(cls, when: datetime, price: Decimal) -> "Bar":
        """Build a bar whose open, high, low and close all equal ``price``."""
        return cls(date=when, open=price, high=price, low=price, close=price)


@dataclass(frozen=True)
class PricePoint:
    """A dated close-only price observation."""

    date: datetime
    price: Decimal


@dataclass(frozen=True)
class Present(Generic[T]):
    """An optional factor whose value was supplied."""

    value: T


@dataclass(frozen=True)
class Absent:
    """An optional factor that was not supplied.

    Absence is a first-class signal: composites redistribute the factor's
    weight over the factors that are present.
    """


ABSENT = Absent()

#: An optional composite input: ``Present(value)`` or ``ABSENT``.
Factor = Present[T] | Absent


def factor_of(value: T | None) -> "Present[T] | Absent":
    """Wrap a nullable collaborator value as a Factor."""
    if value is None:
        return ABSENT
    return Present(value)


def sort_bars(bars: list[Bar]) -> list[Bar]:
    """Return bars sorted ascending by date (stable for equal dates)."""
    return sorted(bars, key=lambda b: b.date)


def day_key(when: datetime) -> date:
    """Calendar-day key of a timestamp, in the timestamp's own zone."""
    return when.date()


def dedupe_daily_prices(points: list[PricePoint]) -> list[PricePoint]:
    """Collapse a price series to one observation per calendar day.

    Points are sorted ascending first; the last observation of each day wins.
    """
    by_day: dict[date, PricePoint] = {}
    for point in sorted(points, key=lambda p: p.date):
        by_day[day_key(point.date)] = point
    return list(by_day.values())


def dedupe_daily_bars(bars: list[Bar]) -> list[Bar]:
    """Collapse an OHLC series to one bar per calendar day (last bar wins)."""
    by_day: dict[date, Bar] = {}
    for bar in sort_bars(bars):
        by_day[day_key(bar.date)] = bar
    return list(by_day.values())
