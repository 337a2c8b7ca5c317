"""Shared fixtures for store and transfer tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from flowcast.services.store import TrackerStore


@pytest.fixture
def data_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "flowcast-data.json"


@pytest.fixture
def store(data_path: Path) -> TrackerStore:
    return TrackerStore(data_path)
