"""Shared fixtures for API tests."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from flowcast.config import Settings
from flowcast.dependencies import get_today
from flowcast.main import create_app
from flowcast.services.store import TrackerStore

TODAY = date(2024, 1, 20)


@pytest.fixture
def store(tmp_path: Path) -> TrackerStore:
    return TrackerStore(tmp_path / "flowcast-data.json")


@pytest.fixture
def client(tmp_path: Path, store: TrackerStore) -> Iterator[TestClient]:
    app = create_app(settings=Settings(data_dir=tmp_path), store=store)
    app.dependency_overrides[get_today] = lambda: TODAY
    with TestClient(app) as test_client:
        yield test_client
