"""Monday-first month grids with highlighted date ranges.

Months are zero-based here (0 = January … 11 = December), matching the
``month`` query parameter of the calendar endpoint.  A grid is a flat list of
cells: leading blanks so the 1st lands under its weekday, then one cell per
day.  Grids never exceed 6 weeks (42 cells).
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import Mapping

from flowcast.cycle.dates import DateRange, DayLike, normalize

WEEKDAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
MAX_CELLS = 42

PERIOD_RANGE = "period"
FERTILE_RANGE = "fertile"

_DAYS_IN_MONTH = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month_index: int) -> int:
    """Number of days in a zero-based month, February adjusted for leap years."""
    if month_index == 1 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month_index]


def leading_blanks(year: int, month_index: int) -> int:
    """Weekday of the 1st with Monday = 0 … Sunday = 6."""
    return date(year, month_index + 1, 1).weekday()


def next_month(year: int, month_index: int) -> tuple[int, int]:
    """Return (year, month_index) for the following month, rolling December over."""
    if month_index == 11:
        return year + 1, 0
    return year, month_index + 1


@dataclass(frozen=True)
class CalendarCell:
    """One slot in a month grid.

    Attributes:
        day:      Calendar day, or None for a leading blank.
        ranges:   Names of every highlighted range containing ``day``.
        is_today: True only for the cell equal to today's date.
    """

    day: date | None
    ranges: frozenset[str] = field(default_factory=frozenset)
    is_today: bool = False

    @property
    def is_blank(self) -> bool:
        return self.day is None

    @property
    def is_in_period_range(self) -> bool:
        return PERIOD_RANGE in self.ranges

    @property
    def is_in_fertile_range(self) -> bool:
        return FERTILE_RANGE in self.ranges


@dataclass(frozen=True)
class CalendarGrid:
    """A full month laid out in Monday-first weeks.

    Attributes:
        year:           Calendar year.
        month_index:    Zero-based month.
        leading_blanks: Number of blank cells before the 1st.
        cells:          Blanks followed by one cell per day.
    """

    year: int
    month_index: int
    leading_blanks: int
    cells: tuple[CalendarCell, ...]

    @property
    def day_count(self) -> int:
        return len(self.cells) - self.leading_blanks

    @property
    def title(self) -> str:
        return f"{calendar.month_name[self.month_index + 1]} {self.year}"

    @property
    def weeks(self) -> list[list[CalendarCell]]:
        """Cells chunked into rows of seven; the last row may be short."""
        return [list(self.cells[i:i + 7]) for i in range(0, len(self.cells), 7)]

    def cell_for(self, day: DayLike) -> CalendarCell | None:
        target = normalize(day)
        if (target.year, target.month - 1) != (self.year, self.month_index):
            return None
        return self.cells[self.leading_blanks + target.day - 1]


def build_month_grid(
    year: int,
    month_index: int,
    ranges: Mapping[str, DateRange | None] | None = None,
    today: DayLike | None = None,
) -> CalendarGrid:
    """Lay out a month and classify each day against the highlighted ranges.

    Args:
        year:        Calendar year.
        month_index: Zero-based month (0–11).
        ranges:      Named inclusive ranges to highlight; None values are skipped.
        today:       Reference day for the today marker (defaults to date.today()).

    Returns:
        CalendarGrid with at most 42 cells.

    Raises:
        ValueError: If ``month_index`` is outside 0–11.
    """
    if not 0 <= month_index <= 11:
        raise ValueError(f"month_index must be between 0 and 11, got {month_index}")

    today_day = normalize(today) if today is not None else date.today()
    active = {name: r for name, r in (ranges or {}).items() if r is not None}

    blanks = leading_blanks(year, month_index)
    cells: list[CalendarCell] = [CalendarCell(day=None) for _ in range(blanks)]
    for day_number in range(1, days_in_month(year, month_index) + 1):
        day = date(year, month_index + 1, day_number)
        cells.append(
            CalendarCell(
                day=day,
                ranges=frozenset(name for name, r in active.items() if day in r),
                is_today=day == today_day,
            )
        )

    return CalendarGrid(
        year=year,
        month_index=month_index,
        leading_blanks=blanks,
        cells=tuple(cells),
    )


def build_two_month_view(
    year: int,
    month_index: int,
    ranges: Mapping[str, DateRange | None] | None = None,
    today: DayLike | None = None,
) -> tuple[CalendarGrid, CalendarGrid]:
    """Grids for the given month and the one after it, sharing the same ranges."""
    following_year, following_month = next_month(year, month_index)
    return (
        build_month_grid(year, month_index, ranges, today),
        build_month_grid(following_year, following_month, ranges, today),
    )
