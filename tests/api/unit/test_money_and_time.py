from __future__ import annotations

from datetime import UTC, date, datetime

from shop_api.common.money import format_amount, to_units
from shop_api.common.time import end_of_day, previous_month_start, start_of_month


def test_to_units() -> None:
    assert to_units(150000) == 1500.0
    assert to_units(1) == 0.01
    assert to_units(None) == 0.0


def test_format_amount() -> None:
    assert format_amount(123450) == "1,234.50"
    assert format_amount(2999, "₺") == "₺29.99"
    assert format_amount(0, "$") == "$0.00"


def test_month_boundaries() -> None:
    now = datetime(2024, 3, 15, 12, 30, tzinfo=UTC)

    assert start_of_month(now) == datetime(2024, 3, 1, tzinfo=UTC)
    assert previous_month_start(now) == datetime(2024, 2, 1, tzinfo=UTC)
    assert previous_month_start(datetime(2024, 1, 5, tzinfo=UTC)) == datetime(
        2023, 12, 1, tzinfo=UTC
    )


def test_end_of_day_is_exclusive_next_midnight() -> None:
    assert end_of_day(date(2024, 2, 29)) == datetime(2024, 3, 1, tzinfo=UTC)
