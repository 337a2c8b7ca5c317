"""Shared fixtures for cycle engine tests."""

from __future__ import annotations

from datetime import date

import pytest

from flowcast.cycle.config_loader import TrackerConfig, load_tracker_config
from flowcast.cycle.prediction import CycleTracker
from flowcast.models.tracking import Entry

TEST_DATE = date(2024, 1, 1)


def make_entry(
    d: date | str,
    cycle_length: object = 28,
    period_length: object = 5,
    notes: str | None = None,
) -> Entry:
    return Entry.model_validate(
        {
            "date": d,
            "cycle_length": cycle_length,
            "period_length": period_length,
            "notes": notes,
        }
    )


@pytest.fixture
def tracker_config() -> TrackerConfig:
    """Load the bundled tracker config for tests."""
    return load_tracker_config()


@pytest.fixture
def tracker(tracker_config: TrackerConfig) -> CycleTracker:
    return CycleTracker(tracker_config)
