"""FlowCast — local-only period tracking with next-period and fertile-window prediction.

Subpackages:
    cycle/      — Date arithmetic, prediction engine, calendar grids, tracker config
    models/     — Pydantic schemas for stored data and API responses
    services/   — JSON-file store and export/import
    routers/    — FastAPI endpoints
    middleware/ — Response privacy headers
"""

__version__ = "0.1.0"
