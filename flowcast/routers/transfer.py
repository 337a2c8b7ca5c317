"""Export, import, and reset of all local data."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from flowcast.dependencies import Store, TrackerSettings
from flowcast.models.base import ErrorDetail
from flowcast.models.tracking import DataSnapshot
from flowcast.services.transfer import ImportRejected, export_document, import_into

router = APIRouter(tags=["data"])


@router.get("/export", response_model=DataSnapshot)
async def export_data(store: Store, config: TrackerSettings) -> Any:
    """Download every entry and symptom as one JSON document."""
    return JSONResponse(
        content=export_document(store),
        headers={
            "Content-Disposition": f'attachment; filename="{config.export.filename}"'
        },
    )


@router.post(
    "/import",
    response_model=DataSnapshot,
    responses={422: {"model": ErrorDetail}},
)
async def import_data(request: Request, store: Store) -> Any:
    """Replace stored data with an uploaded export.

    The body is the raw JSON document.  Nothing is changed unless the whole
    document validates.
    """
    payload = await request.body()
    try:
        return import_into(store, payload)
    except ImportRejected as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.delete("/data", status_code=204)
async def reset_data(store: Store) -> None:
    """Clear all local data."""
    store.clear()
