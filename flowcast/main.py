"""FlowCast API — FastAPI application entry point.

Run locally:
    uvicorn flowcast.main:app --port 8765
or:
    flowcast
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from flowcast.config import Settings, get_settings
from flowcast.cycle.config_loader import get_tracker_config
from flowcast.middleware.privacy import PrivacyHeadersMiddleware
from flowcast.routers import entries, health, predictions, symptoms, transfer
from flowcast.services.store import TrackerStore

# ---------- Logging ----------

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger("flowcast")


# ---------- Lifespan ----------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup / shutdown hooks."""
    settings: Settings = app.state.settings
    config = get_tracker_config()  # fail fast on a broken tracker_config.yaml
    store: TrackerStore = app.state.store
    logger.info(
        "Starting FlowCast v%s (tracker config v%s, data at %s)",
        settings.app_version,
        config.version,
        store.path or "memory",
    )
    yield
    logger.info("FlowCast shut down")


# ---------- App factory ----------

def create_app(
    settings: Settings | None = None,
    store: TrackerStore | None = None,
) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="FlowCast API",
        description=(
            "Local-only period tracker: log cycles and symptoms, "
            "predict the next period and fertile window."
        ),
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else TrackerStore(settings.data_path)

    # ---------- Middleware (outermost first) ----------

    app.add_middleware(PrivacyHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )

    # ---------- Routes ----------

    app.include_router(health.router)

    v1_prefix = "/api/v1"
    app.include_router(entries.router, prefix=v1_prefix)
    app.include_router(symptoms.router, prefix=v1_prefix)
    app.include_router(predictions.router, prefix=v1_prefix)
    app.include_router(transfer.router, prefix=v1_prefix)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API on the loopback interface."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
