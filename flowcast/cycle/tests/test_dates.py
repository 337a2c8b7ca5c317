"""Tests for day-level date arithmetic and inclusive ranges."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from flowcast.cycle.dates import (
    DateRange,
    add_days,
    closed_range,
    days_between,
    normalize,
    same_day,
)


class TestAddDays:
    def test_month_rollover(self) -> None:
        assert add_days(date(2024, 1, 31), 1) == date(2024, 2, 1)

    def test_year_rollover(self) -> None:
        assert add_days(date(2024, 12, 31), 1) == date(2025, 1, 1)

    def test_leap_day(self) -> None:
        assert add_days(date(2024, 2, 28), 1) == date(2024, 2, 29)
        assert add_days(date(2023, 2, 28), 1) == date(2023, 3, 1)

    def test_century_non_leap(self) -> None:
        assert add_days(date(1900, 2, 28), 1) == date(1900, 3, 1)
        assert add_days(date(2000, 2, 28), 1) == date(2000, 2, 29)

    def test_negative_offset_crosses_back(self) -> None:
        assert add_days(date(2024, 3, 1), -1) == date(2024, 2, 29)
        assert add_days(date(2024, 1, 3), -5) == date(2023, 12, 29)

    def test_zero_is_identity(self) -> None:
        assert add_days(date(2024, 6, 15), 0) == date(2024, 6, 15)

    def test_accepts_datetime_and_string(self) -> None:
        assert add_days(datetime(2024, 1, 31, 23, 59), 1) == date(2024, 2, 1)
        assert add_days("2024-01-31", 1) == date(2024, 2, 1)


class TestClosedRange:
    def test_inclusive_both_ends(self) -> None:
        days = list(closed_range(date(2024, 1, 30), date(2024, 2, 2)))
        assert days == [
            date(2024, 1, 30),
            date(2024, 1, 31),
            date(2024, 2, 1),
            date(2024, 2, 2),
        ]

    def test_single_day(self) -> None:
        assert list(closed_range(date(2024, 5, 5), date(2024, 5, 5))) == [date(2024, 5, 5)]

    def test_empty_when_start_after_end(self) -> None:
        r = closed_range(date(2024, 5, 6), date(2024, 5, 5))
        assert list(r) == []
        assert len(r) == 0

    def test_restartable(self) -> None:
        r = closed_range(date(2024, 12, 30), date(2025, 1, 2))
        assert list(r) == list(r)
        assert len(r) == 4

    def test_lazy(self) -> None:
        r = closed_range(date(2000, 1, 1), date(9999, 12, 31))
        assert next(iter(r)) == date(2000, 1, 1)


class TestNormalize:
    def test_strips_time_of_day(self) -> None:
        assert normalize(datetime(2024, 1, 29, 18, 30)) == date(2024, 1, 29)

    def test_iso_string_with_time(self) -> None:
        assert normalize("2024-01-29T23:59:59") == date(2024, 1, 29)

    def test_plain_date_passthrough(self) -> None:
        assert normalize(date(2024, 1, 29)) == date(2024, 1, 29)

    def test_rejects_garbage(self) -> None:
        with pytest.raises(ValueError):
            normalize("not a date")
        with pytest.raises(TypeError):
            normalize(42)  # type: ignore[arg-type]

    def test_same_day_ignores_time(self) -> None:
        assert same_day(datetime(2024, 1, 29, 0, 0), datetime(2024, 1, 29, 23, 59))
        assert not same_day(datetime(2024, 1, 29, 23, 59), datetime(2024, 1, 30, 0, 0))

    def test_days_between_signed(self) -> None:
        assert days_between(date(2024, 1, 1), date(2024, 1, 29)) == 28
        assert days_between(date(2024, 1, 29), date(2024, 1, 1)) == -28


class TestDateRange:
    def test_contains_boundaries(self) -> None:
        r = DateRange(date(2024, 1, 10), date(2024, 1, 16))
        assert date(2024, 1, 10) in r
        assert date(2024, 1, 16) in r
        assert date(2024, 1, 9) not in r
        assert date(2024, 1, 17) not in r

    def test_time_of_day_on_boundary_does_not_exclude(self) -> None:
        r = DateRange.between(datetime(2024, 1, 10, 15, 0), datetime(2024, 1, 16, 8, 0))
        assert datetime(2024, 1, 10, 0, 0) in r
        assert datetime(2024, 1, 16, 23, 59) in r

    def test_none_is_never_contained(self) -> None:
        assert None not in DateRange(date(2024, 1, 1), date(2024, 1, 2))

    def test_length_days(self) -> None:
        assert DateRange(date(2024, 1, 29), date(2024, 2, 2)).length_days == 5

    def test_start_after_end_rejected(self) -> None:
        with pytest.raises(ValueError):
            DateRange(date(2024, 1, 2), date(2024, 1, 1))

    def test_days_iterates_range(self) -> None:
        r = DateRange(date(2024, 2, 28), date(2024, 3, 1))
        assert list(r.days()) == [date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]
