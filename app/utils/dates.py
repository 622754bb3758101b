"""UTC time helpers.

Timestamps are stored as naive UTC datetimes, so every comparison in the
service goes through :func:`utcnow`.
"""

from datetime import datetime, timedelta, timezone

ONE_DAY = timedelta(days=1)


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def one_hour_from_now() -> datetime:
    return utcnow() + timedelta(hours=1)


def thirty_days_from_now() -> datetime:
    return utcnow() + timedelta(days=30)


def one_year_from_now() -> datetime:
    return utcnow() + timedelta(days=365)
