"""Response schemas for predictions and calendar grids."""

from __future__ import annotations

import datetime as dt

from pydantic import Field

from flowcast.cycle.calendar_grid import WEEKDAY_LABELS, CalendarCell, CalendarGrid
from flowcast.cycle.dates import DateRange
from flowcast.cycle.prediction import CyclePrediction
from flowcast.models.base import FlowcastBase


class DateRangeRead(FlowcastBase):
    start: dt.date
    end: dt.date
    days: int

    @classmethod
    def from_range(cls, value: DateRange) -> DateRangeRead:
        return cls(start=value.start, end=value.end, days=value.length_days)


class PredictionRead(FlowcastBase):
    based_on: dt.date
    next_period: DateRangeRead
    ovulation_day: dt.date
    fertile_window: DateRangeRead
    cycle_length: int
    period_length: int

    @classmethod
    def from_prediction(cls, prediction: CyclePrediction) -> PredictionRead:
        return cls(
            based_on=prediction.anchor,
            next_period=DateRangeRead.from_range(prediction.next_period),
            ovulation_day=prediction.ovulation_day,
            fertile_window=DateRangeRead.from_range(prediction.fertile_window),
            cycle_length=prediction.cycle_length,
            period_length=prediction.period_length,
        )


class PredictionResponse(FlowcastBase):
    """Current prediction, or ``prediction: null`` when nothing is logged."""

    prediction: PredictionRead | None = None
    summary: list[str] = Field(default_factory=list)
    disclaimer: str


class CalendarCellRead(FlowcastBase):
    date: dt.date | None = None
    day: int | None = None
    is_in_period_range: bool = False
    is_in_fertile_range: bool = False
    is_today: bool = False

    @classmethod
    def from_cell(cls, cell: CalendarCell) -> CalendarCellRead:
        return cls(
            date=cell.day,
            day=cell.day.day if cell.day else None,
            is_in_period_range=cell.is_in_period_range,
            is_in_fertile_range=cell.is_in_fertile_range,
            is_today=cell.is_today,
        )


class CalendarMonthRead(FlowcastBase):
    year: int
    month: int = Field(description="Zero-based month (0 = January)")
    title: str
    weekdays: list[str] = Field(default_factory=lambda: list(WEEKDAY_LABELS))
    leading_blanks: int
    day_count: int
    cells: list[CalendarCellRead]

    @classmethod
    def from_grid(cls, grid: CalendarGrid) -> CalendarMonthRead:
        return cls(
            year=grid.year,
            month=grid.month_index,
            title=grid.title,
            leading_blanks=grid.leading_blanks,
            day_count=grid.day_count,
            cells=[CalendarCellRead.from_cell(c) for c in grid.cells],
        )


class CalendarResponse(FlowcastBase):
    has_prediction: bool
    months: list[CalendarMonthRead]
