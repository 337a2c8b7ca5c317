"""Shared FastAPI dependencies injected into route handlers."""

from __future__ import annotations

from datetime import date
from typing import Annotated

from fastapi import Depends, Request

from flowcast.config import Settings, get_settings
from flowcast.cycle.config_loader import TrackerConfig, get_tracker_config
from flowcast.cycle.prediction import CycleTracker
from flowcast.services.store import TrackerStore


def get_store(request: Request) -> TrackerStore:
    """Return the store created by the app lifespan (see ``flowcast.main``)."""
    return request.app.state.store


def get_tracker(config: Annotated[TrackerConfig, Depends(get_tracker_config)]) -> CycleTracker:
    return CycleTracker(config)


def get_today() -> date:
    """Local calendar day used for the today marker and default symptom dates."""
    return date.today()


# Annotated shortcuts for route signatures
Store = Annotated[TrackerStore, Depends(get_store)]
Tracker = Annotated[CycleTracker, Depends(get_tracker)]
Today = Annotated[date, Depends(get_today)]
AppSettings = Annotated[Settings, Depends(get_settings)]
TrackerSettings = Annotated[TrackerConfig, Depends(get_tracker_config)]
