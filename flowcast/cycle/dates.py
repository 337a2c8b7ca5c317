"""Day-level calendar arithmetic.

Everything in the cycle engine works on plain ``datetime.date`` values.
Timestamps coming from the outside (``datetime`` objects, ISO strings with
or without a time component) are normalized to a calendar day before any
comparison so that time-of-day never leaks into range checks.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterator, Union

DayLike = Union[date, datetime, str]


def normalize(value: DayLike) -> date:
    """Strip any sub-day component and return a pure calendar day.

    Accepts ``date``, ``datetime`` (time and tzinfo are dropped, the local
    wall-clock date is kept) and ISO-8601 strings such as ``"2024-01-29"`` or
    ``"2024-01-29T23:59:00"``.

    Args:
        value: Day-like value.

    Returns:
        The calendar day.

    Raises:
        ValueError: If a string is not an ISO date.
        TypeError:  If the value is not day-like.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    raise TypeError(f"Cannot interpret {value!r} as a calendar day")


def add_days(day: DayLike, n: int) -> date:
    """Return the calendar day ``n`` days after ``day`` (``n`` may be negative)."""
    return normalize(day) + timedelta(days=n)


def same_day(a: DayLike, b: DayLike) -> bool:
    return normalize(a) == normalize(b)


def days_between(start: DayLike, end: DayLike) -> int:
    """Signed number of days from ``start`` to ``end``."""
    return (normalize(end) - normalize(start)).days


@dataclass(frozen=True)
class ClosedRange:
    """Every calendar day from ``start`` to ``end`` inclusive, ascending.

    Iterating twice yields the same days again; the range is empty when
    ``start > end``.
    """

    start: date
    end: date

    def __iter__(self) -> Iterator[date]:
        day = self.start
        while day <= self.end:
            yield day
            day += timedelta(days=1)

    def __len__(self) -> int:
        return max(0, (self.end - self.start).days + 1)


def closed_range(start: DayLike, end: DayLike) -> ClosedRange:
    return ClosedRange(normalize(start), normalize(end))


@dataclass(frozen=True)
class DateRange:
    """An inclusive span of calendar days.

    Attributes:
        start: First day of the span.
        end:   Last day of the span (``start <= end``).
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"DateRange start {self.start} is after end {self.end}")

    @classmethod
    def between(cls, start: DayLike, end: DayLike) -> DateRange:
        return cls(normalize(start), normalize(end))

    def __contains__(self, value: object) -> bool:
        if value is None:
            return False
        try:
            day = normalize(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return False
        return self.start <= day <= self.end

    @property
    def length_days(self) -> int:
        return (self.end - self.start).days + 1

    def days(self) -> ClosedRange:
        return ClosedRange(self.start, self.end)
