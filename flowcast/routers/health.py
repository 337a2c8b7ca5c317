"""Health check endpoint."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone

from fastapi import APIRouter

from flowcast.dependencies import AppSettings, Store

router = APIRouter(tags=["system"])
logger = logging.getLogger("flowcast.health")


@router.get("/health")
async def health_check(settings: AppSettings, store: Store) -> dict:
    """Liveness probe.  Reports ``degraded`` when the data directory is not writable."""
    snapshot = store.snapshot()
    writable = True
    if store.path is not None:
        directory = store.path.parent
        writable = directory.exists() and os.access(directory, os.W_OK)
        if not writable:
            logger.warning("Data directory %s is not writable", directory)

    return {
        "status": "healthy" if writable else "degraded",
        "version": settings.app_version,
        "storage": "file" if store.path is not None else "memory",
        "entries": len(snapshot.entries),
        "symptoms": len(snapshot.symptoms),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
