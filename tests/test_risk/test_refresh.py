"""Tests for the fixed-window refresh predicate."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from quant.risk.refresh import latest_boundary, should_refresh

UTC = timezone.utc


def _at(hour: int, minute: int = 0, day: int = 15) -> datetime:
    return datetime(2024, 3, day, hour, minute, tzinfo=UTC)


class TestShouldRefresh:
    """Tests for staleness across the 07:00 / 17:00 boundaries."""

    def test_same_window_is_fresh(self) -> None:
        assert should_refresh(_at(7, 5), _at(16, 59), UTC) is False

    def test_crossing_evening_boundary_is_stale(self) -> None:
        assert should_refresh(_at(7, 5), _at(17, 1), UTC) is True

    def test_never_computed_is_stale(self) -> None:
        assert should_refresh(None, _at(12), UTC) is True

    def test_overnight_window(self) -> None:
        """Yesterday 18:00 is still fresh at 06:00, stale at 07:00."""
        last = _at(18, 0, day=14)
        assert should_refresh(last, _at(6, 0), UTC) is False
        assert should_refresh(last, _at(7, 0), UTC) is True

    def test_computed_exactly_at_boundary_is_fresh(self) -> None:
        assert should_refresh(_at(17), _at(23, 59), UTC) is False

    def test_repeated_calls_are_stable(self) -> None:
        last = _at(8)
        results = {should_refresh(last, _at(8) + timedelta(minutes=m), UTC) for m in range(0, 500, 7)}
        assert results == {False}

    def test_naive_timestamps_are_reference_wall_clock(self) -> None:
        last = datetime(2024, 3, 15, 7, 5)
        assert should_refresh(last, datetime(2024, 3, 15, 16, 59), UTC) is False
        assert should_refresh(last, datetime(2024, 3, 15, 17, 1), UTC) is True

    def test_reference_zone_conversion(self) -> None:
        """Boundaries are wall-clock hours in the reference zone, not UTC."""
        new_york = ZoneInfo("America/New_York")
        # 2024-03-15 is EDT (UTC-4): 17:00 local is 21:00 UTC
        last = datetime(2024, 3, 15, 12, 0, tzinfo=UTC)
        assert should_refresh(last, datetime(2024, 3, 15, 20, 59, tzinfo=UTC), new_york) is False
        assert should_refresh(last, datetime(2024, 3, 15, 21, 1, tzinfo=UTC), new_york) is True


class TestLatestBoundary:
    def test_before_morning_uses_yesterday_evening(self) -> None:
        assert latest_boundary(_at(3), UTC) == _at(17, day=14)

    def test_midday_uses_morning(self) -> None:
        assert latest_boundary(_at(12), UTC) == _at(7)

    def test_custom_hours(self) -> None:
        assert latest_boundary(_at(10), UTC, hours=(9, 21)) == _at(9)
