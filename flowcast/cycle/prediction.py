"""Fixed-length cycle prediction engine.

Given the most recent logged period start, predicts:
- Next period window
- Ovulation estimate
- Fertile window

No averaging across cycles: the latest entry's own cycle and period lengths
are taken at face value, falling back to configured defaults (28 / 5) when an
entry carries no positive value of at most ``MAX_LENGTH_DAYS``.  Together
with the date span enforced by ``Entry`` this keeps every derived day
representable, so ``predict`` never raises for a validated entry.

The ovulation estimate is anchored on the *logged* period start
(``entry.date + cycle_length - 14``), not on the predicted next period start.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Optional, Sequence

from flowcast.cycle.config_loader import TrackerConfig, get_tracker_config
from flowcast.cycle.dates import DateRange, add_days
from flowcast.models.tracking import MAX_LENGTH_DAYS, Entry

logger = logging.getLogger("flowcast.cycle.prediction")

LUTEAL_PHASE_DAYS = 14

# Fertile window relative to the ovulation day
FERTILE_DAYS_BEFORE_OVULATION = 5
FERTILE_DAYS_AFTER_OVULATION = 1


@dataclass(frozen=True)
class CyclePrediction:
    """Prediction derived from a single entry.  Never persisted.

    Attributes:
        anchor:         Period start date of the entry the prediction is based on.
        next_period:    Predicted next period, inclusive.
        ovulation_day:  Ovulation estimate for the anchor's cycle.
        fertile_window: Five days before through one day after ovulation.
        cycle_length:   Cycle length actually used (after defaulting).
        period_length:  Period length actually used (after defaulting).
    """

    anchor: date
    next_period: DateRange
    ovulation_day: date
    fertile_window: DateRange
    cycle_length: int
    period_length: int

    def highlight_ranges(self) -> dict[str, DateRange]:
        """Named ranges consumed by the calendar grid builder."""
        return {"period": self.next_period, "fertile": self.fertile_window}


def resolve_length(value: Any, default: int) -> int:
    """Return ``value`` as a positive int no greater than ``MAX_LENGTH_DAYS``,
    or ``default``.

    Missing, non-numeric, fractional, non-positive and oversized values all
    fall back silently; there is no validation failure path.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        number = value
    else:
        try:
            as_float = float(value)
        except (TypeError, ValueError, OverflowError):
            return default
        if not math.isfinite(as_float) or as_float != int(as_float):
            return default
        number = int(as_float)
    if number <= 0 or number > MAX_LENGTH_DAYS:
        return default
    return number


def select_latest(entries: Iterable[Entry]) -> Optional[Entry]:
    """Return the entry with the most recent date, or None for no entries."""
    latest: Optional[Entry] = None
    for entry in entries:
        if latest is None or entry.date > latest.date:
            latest = entry
    return latest


class CycleTracker:
    """Predict the next cycle from a snapshot of logged entries.

    Usage::

        tracker = CycleTracker()
        prediction = tracker.predict_latest(store.snapshot().entries)
        if prediction is not None:
            print(prediction.next_period.start)
    """

    def __init__(self, config: TrackerConfig | None = None) -> None:
        self._config = config or get_tracker_config()

    @property
    def _defaults(self):
        return self._config.prediction

    def predict(self, entry: Entry) -> CyclePrediction:
        """Compute the prediction for a single entry.

        Args:
            entry: The most recent logged entry.

        Returns:
            CyclePrediction built from the entry's (defaulted) lengths.
        """
        cycle_length = resolve_length(entry.cycle_length, self._defaults.default_cycle_length)
        period_length = resolve_length(entry.period_length, self._defaults.default_period_length)

        next_start = add_days(entry.date, cycle_length)
        next_end = add_days(next_start, period_length - 1)

        # May fall before entry.date when cycle_length < 14
        ovulation = add_days(entry.date, cycle_length - LUTEAL_PHASE_DAYS)
        fertile = DateRange(
            add_days(ovulation, -FERTILE_DAYS_BEFORE_OVULATION),
            add_days(ovulation, FERTILE_DAYS_AFTER_OVULATION),
        )

        return CyclePrediction(
            anchor=entry.date,
            next_period=DateRange(next_start, next_end),
            ovulation_day=ovulation,
            fertile_window=fertile,
            cycle_length=cycle_length,
            period_length=period_length,
        )

    def predict_latest(self, entries: Sequence[Entry]) -> CyclePrediction | None:
        """Select the latest entry and predict from it.

        Returns:
            None when there are no entries; the engine is not invoked.
        """
        latest = select_latest(entries)
        if latest is None:
            return None
        prediction = self.predict(latest)
        logger.debug(
            "Predicted from entry %s: next period %s, ovulation %s",
            latest.date,
            prediction.next_period.start,
            prediction.ovulation_day,
        )
        return prediction
