from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta


def utc_now() -> datetime:
    return datetime.now(UTC)


def start_of_day(value: date) -> datetime:
    return datetime.combine(value, time.min, tzinfo=UTC)


def end_of_day(value: date) -> datetime:
    return start_of_day(value) + timedelta(days=1)


def start_of_month(value: datetime) -> datetime:
    return value.astimezone(UTC).replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def previous_month_start(value: datetime) -> datetime:
    current = start_of_month(value)
    return start_of_month(current - timedelta(days=1))


__all__ = ["end_of_day", "previous_month_start", "start_of_day", "start_of_month", "utc_now"]
