"""Fixed-window refresh policy for cached risk values.

A cached value is stale once the wall clock has crossed one of the daily
refresh boundaries (07:00 and 17:00 in a reference time zone by default)
since it was computed. Both functions are pure in their arguments.
"""

from datetime import datetime, time, timedelta, tzinfo

DEFAULT_REFRESH_HOURS: tuple[int, ...] = (7, 17)


def _localize(when: datetime, tz: tzinfo) -> datetime:
    # Naive timestamps are taken to be wall-clock time in the reference zone.
    if when.tzinfo is None:
        return when.replace(tzinfo=tz)
    return when.astimezone(tz)


def latest_boundary(
    now: datetime,
    tz: tzinfo,
    hours: tuple[int, ...] = DEFAULT_REFRESH_HOURS,
) -> datetime:
    """Most recent refresh boundary at or before ``now``.

    Candidates are today's boundaries plus yesterday's last one, so a
    boundary always exists.
    """
    local_now = _localize(now, tz)
    today = local_now.date()
    candidates = [datetime.combine(today, time(hour), tzinfo=tz) for hour in hours]
    candidates.append(datetime.combine(today - timedelta(days=1), time(max(hours)), tzinfo=tz))
    return max(c for c in candidates if c <= local_now)


def should_refresh(
    last_computed_at: datetime | None,
    now: datetime,
    tz: tzinfo,
    hours: tuple[int, ...] = DEFAULT_REFRESH_HOURS,
) -> bool:
    """True if a value computed at ``last_computed_at`` is stale at ``now``.

    A value that was never computed is always stale.
    """
    if last_computed_at is None:
        return True
    return _localize(last_computed_at, tz) < latest_boundary(now, tz, hours)
