"""Prediction summary and the two-month calendar view.

Both endpoints recompute from a fresh store snapshot on every request.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import APIRouter, Query

from flowcast.cycle.calendar_grid import build_two_month_view
from flowcast.cycle.prediction import CyclePrediction
from flowcast.dependencies import Store, Today, Tracker
from flowcast.models.calendar import (
    CalendarMonthRead,
    CalendarResponse,
    PredictionRead,
    PredictionResponse,
)

router = APIRouter(tags=["predictions"])
logger = logging.getLogger("flowcast.routers.predictions")

DISCLAIMER = (
    "Predictions are estimates and can vary. "
    "Consult a healthcare professional for medical advice."
)
EMPTY_SUMMARY = "Add at least one entry to see predictions."


def format_day(value: date) -> str:
    return f"{value:%b} {value.day}, {value.year}"


def summarize(prediction: CyclePrediction | None) -> list[str]:
    """Human-readable summary lines for the prediction panel."""
    if prediction is None:
        return [EMPTY_SUMMARY]
    period = prediction.next_period
    fertile = prediction.fertile_window
    return [
        f"Next period: {format_day(period.start)} → {format_day(period.end)} "
        f"(~{prediction.period_length} days)",
        f"Fertile window: {format_day(fertile.start)} → {format_day(fertile.end)} "
        f"(ovulation ~ {format_day(prediction.ovulation_day)})",
        f"Cycle length: {prediction.cycle_length} days",
    ]


@router.get("/predictions/current", response_model=PredictionResponse)
async def current_prediction(store: Store, tracker: Tracker) -> Any:
    prediction = tracker.predict_latest(store.snapshot().entries)
    return PredictionResponse(
        prediction=PredictionRead.from_prediction(prediction) if prediction else None,
        summary=summarize(prediction),
        disclaimer=DISCLAIMER,
    )


@router.get("/calendar", response_model=CalendarResponse)
async def two_month_calendar(
    store: Store,
    tracker: Tracker,
    today: Today,
    year: int | None = Query(default=None, ge=1, le=9998),
    month: int | None = Query(default=None, ge=0, le=11, description="Zero-based month"),
) -> Any:
    """The requested month (default: the current one) and the month after it."""
    prediction = tracker.predict_latest(store.snapshot().entries)
    ranges = prediction.highlight_ranges() if prediction else {}

    start_year = year if year is not None else today.year
    start_month = month if month is not None else today.month - 1
    grids = build_two_month_view(start_year, start_month, ranges, today)
    logger.debug("Built calendar for %d-%02d (+1 month)", start_year, start_month + 1)

    return CalendarResponse(
        has_prediction=prediction is not None,
        months=[CalendarMonthRead.from_grid(g) for g in grids],
    )
