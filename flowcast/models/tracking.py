"""Pydantic models for logged data: period entries, symptom tags, and the
export/import snapshot document."""

from __future__ import annotations

import datetime as dt
import math
import uuid
from typing import Any

from pydantic import AliasChoices, ConfigDict, Field, field_validator

from flowcast.models.base import FlowcastBase

# Longest cycle or period length the engine will use
MAX_LENGTH_DAYS = 365

# Entry dates are limited so that every derived day (next period end, start
# of a fertile window before the entry) stays inside the date type's range.
EARLIEST_ENTRY_DATE = dt.date.min + dt.timedelta(days=31)
LATEST_ENTRY_DATE = dt.date.max - dt.timedelta(days=2 * MAX_LENGTH_DAYS)


def _new_symptom_id() -> str:
    return str(uuid.uuid4())


def _lenient_int(value: Any) -> int | None:
    """Coerce a length field to int, turning anything unusable into None.

    Non-positive integers are kept as entered; the prediction engine applies
    the defaults.  Lengths beyond ``MAX_LENGTH_DAYS`` in either direction are
    treated as unusable.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    else:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
        try:
            as_float = float(value)
        except (TypeError, ValueError, OverflowError):
            return None
        if not math.isfinite(as_float) or as_float != int(as_float):
            return None
        number = int(as_float)
    if abs(number) > MAX_LENGTH_DAYS:
        return None
    return number


# ---------- Period entries ----------

class Entry(FlowcastBase):
    """A logged period start.  ``date`` is the unique key."""

    date: dt.date
    cycle_length: int | None = Field(
        default=None,
        validation_alias=AliasChoices("cycle_length", "cycleLength", "cycleLen"),
    )
    period_length: int | None = Field(
        default=None,
        validation_alias=AliasChoices("period_length", "periodLength", "periodLen"),
    )
    notes: str | None = None

    @field_validator("date")
    @classmethod
    def date_in_supported_span(cls, value: dt.date) -> dt.date:
        if not EARLIEST_ENTRY_DATE <= value <= LATEST_ENTRY_DATE:
            raise ValueError(
                f"date must be between {EARLIEST_ENTRY_DATE} and {LATEST_ENTRY_DATE}"
            )
        return value

    @field_validator("cycle_length", "period_length", mode="before")
    @classmethod
    def coerce_length(cls, value: Any) -> int | None:
        return _lenient_int(value)

    @field_validator("notes", mode="before")
    @classmethod
    def blank_notes_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


# ---------- Symptoms ----------

class SymptomCreate(FlowcastBase):
    """A symptom tag submitted by the user.  Date defaults to today."""

    date: dt.date | None = None
    tag: str = Field(min_length=1)


class Symptom(FlowcastBase):
    id: str = Field(default_factory=_new_symptom_id, min_length=1)
    date: dt.date
    tag: str = Field(min_length=1)


# ---------- Snapshot / export document ----------

class DataSnapshot(FlowcastBase):
    """Full copy of the stored collections."""

    entries: list[Entry] = Field(default_factory=list)
    symptoms: list[Symptom] = Field(default_factory=list)


class ImportDocument(FlowcastBase):
    """An uploaded export.

    A missing collection leaves the stored one untouched; a present one must
    be a list where every item validates, otherwise nothing is imported.
    """

    model_config = ConfigDict(extra="ignore")

    entries: list[Entry] | None = None
    symptoms: list[Symptom] | None = None
