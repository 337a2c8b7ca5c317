"""Export and import of the full ``{entries, symptoms}`` document.

Imports are all-or-nothing: the uploaded document is parsed and validated in
full before the store is touched.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from flowcast.models.tracking import DataSnapshot, ImportDocument
from flowcast.services.store import TrackerStore

logger = logging.getLogger("flowcast.transfer")


class ImportRejected(ValueError):
    """Raised when an uploaded document cannot be imported."""


def _describe(exc: ValidationError) -> str:
    problems = []
    for err in exc.errors()[:5]:
        location = ".".join(str(part) for part in err["loc"])
        problems.append(f"{location}: {err['msg']}")
    more = exc.error_count() - len(problems)
    if more > 0:
        problems.append(f"... and {more} more")
    return "; ".join(problems)


def parse_import(payload: bytes | str | Any) -> ImportDocument:
    """Parse and validate an uploaded export.

    Args:
        payload: Raw JSON text/bytes, or an already decoded object.

    Returns:
        The validated document.

    Raises:
        ImportRejected: If the JSON is malformed, is not an object, carries
            neither collection, or any item fails validation.
    """
    if isinstance(payload, (bytes, str)):
        try:
            payload = json.loads(payload)
        except ValueError as exc:  # includes JSONDecodeError and over-long int literals
            raise ImportRejected(f"Invalid JSON file: {exc}") from exc

    if not isinstance(payload, dict):
        raise ImportRejected("Import must be a JSON object with 'entries' and/or 'symptoms'")

    try:
        document = ImportDocument.model_validate(payload)
    except ValidationError as exc:
        raise ImportRejected(f"Invalid import data: {_describe(exc)}") from exc

    if document.entries is None and document.symptoms is None:
        raise ImportRejected("Import contains neither 'entries' nor 'symptoms'")
    return document


def import_into(store: TrackerStore, payload: bytes | str | Any) -> DataSnapshot:
    """Validate ``payload`` and bulk-replace the store contents.

    Raises:
        ImportRejected: Store left unchanged.
    """
    try:
        document = parse_import(payload)
    except ImportRejected as exc:
        logger.warning("Rejected import: %s", exc)
        raise
    return store.replace_all(document)


def export_document(store: TrackerStore) -> dict[str, Any]:
    """JSON-ready export of the current store contents."""
    return store.snapshot().model_dump(mode="json")
