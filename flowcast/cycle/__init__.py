"""Cycle prediction core.

Pure, synchronous computation over snapshots of logged entries.

Modules:
    dates          — Day-level arithmetic and inclusive date ranges
    prediction     — Latest-entry selection and fixed-length cycle prediction
    calendar_grid  — Monday-first month grids with highlighted ranges
    config_loader  — Load/validate/hot-reload tracker_config.yaml
"""

from flowcast.cycle.calendar_grid import CalendarCell, CalendarGrid, build_month_grid
from flowcast.cycle.dates import DateRange, add_days, closed_range, normalize, same_day
from flowcast.cycle.prediction import CyclePrediction, CycleTracker, select_latest

__all__ = [
    "CalendarCell",
    "CalendarGrid",
    "build_month_grid",
    "DateRange",
    "add_days",
    "closed_range",
    "normalize",
    "same_day",
    "CyclePrediction",
    "CycleTracker",
    "select_latest",
]
