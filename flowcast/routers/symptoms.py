"""Symptom tags: list, log, delete, and the configured quick tags."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException

from flowcast.dependencies import Store, Today, TrackerSettings
from flowcast.models.base import ErrorDetail
from flowcast.models.tracking import Symptom, SymptomCreate

router = APIRouter(prefix="/symptoms", tags=["symptoms"])


@router.get("", response_model=list[Symptom])
async def list_symptoms(store: Store) -> Any:
    return store.symptoms_newest_first()


@router.get("/tags", response_model=list[str])
async def quick_tags(config: TrackerSettings) -> Any:
    """Preset tags offered as one-tap buttons."""
    return config.symptoms.quick_tags


@router.post("", response_model=Symptom, status_code=201)
async def log_symptom(
    store: Store, body: SymptomCreate, config: TrackerSettings, today: Today
) -> Any:
    max_length = config.symptoms.max_tag_length
    if len(body.tag) > max_length:
        raise HTTPException(
            status_code=422,
            detail=f"Symptom tag must be at most {max_length} characters",
        )
    return store.add_symptom(body.tag, body.date or today)


@router.delete(
    "/{symptom_id}",
    status_code=204,
    responses={404: {"model": ErrorDetail}},
)
async def delete_symptom(symptom_id: str, store: Store) -> None:
    try:
        store.delete_symptom(symptom_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Symptom not found") from None
