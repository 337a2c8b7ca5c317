"""Period entry history: list, upsert by date, delete."""

from __future__ import annotations

from datetime import date
from typing import Any

from fastapi import APIRouter, HTTPException

from flowcast.dependencies import Store
from flowcast.models.base import ErrorDetail
from flowcast.models.tracking import Entry

router = APIRouter(prefix="/entries", tags=["entries"])


@router.get("", response_model=list[Entry])
async def list_entries(store: Store) -> Any:
    """Entry history, newest period start first."""
    return store.entries_newest_first()


@router.post("", response_model=Entry, status_code=201)
async def upsert_entry(store: Store, body: Entry) -> Any:
    """Log a period start.  An entry with the same date is replaced."""
    return store.upsert_entry(body)


@router.delete(
    "/{entry_date}",
    status_code=204,
    responses={404: {"model": ErrorDetail}},
)
async def delete_entry(entry_date: date, store: Store) -> None:
    try:
        store.delete_entry(entry_date)
    except KeyError:
        raise HTTPException(status_code=404, detail="Entry not found") from None
