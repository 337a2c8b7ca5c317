"""Load, validate, and hot-reload the FlowCast tracker configuration.

The config lives in ``tracker_config.yaml`` alongside this module.  It is
loaded once on first use and cached.  Call ``reload_tracker_config()`` to
re-read it from disk without restarting the process.

Usage::

    from flowcast.cycle.config_loader import get_tracker_config

    config = get_tracker_config()
    config.prediction.default_cycle_length   # 28
    config.symptoms.quick_tags               # ['cramps', 'headache', ...]
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from flowcast.models.tracking import MAX_LENGTH_DAYS

logger = logging.getLogger("flowcast.cycle.config")

# Path to the YAML file sitting next to this module
_CONFIG_PATH = Path(__file__).parent / "tracker_config.yaml"


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass
class PredictionConfig:
    """Fallback lengths used when an entry carries no usable value."""

    default_cycle_length: int = 28
    default_period_length: int = 5


@dataclass
class SymptomConfig:
    """Symptom tagging settings."""

    quick_tags: list[str] = field(default_factory=list)
    max_tag_length: int = 40


@dataclass
class ExportConfig:
    filename: str = "flowcast-data.json"


@dataclass
class TrackerConfig:
    """Complete, validated tracker configuration.

    Attributes:
        version:     Config schema version string.
        prediction:  Default cycle/period lengths.
        symptoms:    Quick tag presets and tag limits.
        export:      Export document settings.
    """

    version: str
    prediction: PredictionConfig
    symptoms: SymptomConfig
    export: ExportConfig
    _raw: dict = field(default_factory=dict, repr=False)


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when tracker_config.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Tracker config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            return yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc


def _positive_int(
    section: dict,
    key: str,
    default: int,
    label: str,
    errors: list[str],
    maximum: int | None = None,
) -> int:
    value = section.get(key, default)
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        errors.append(f"{label}.{key} must be an integer, got {value!r}")
        return default
    if number <= 0:
        errors.append(f"{label}.{key} = {number} must be positive")
        return default
    if maximum is not None and number > maximum:
        errors.append(f"{label}.{key} = {number} cannot exceed {maximum}")
        return default
    return number


def _validate_and_build(raw: dict) -> TrackerConfig:
    """Validate the raw YAML dict and construct a TrackerConfig.

    Missing sections fall back to defaults.  All problems are collected and
    reported together.

    Raises:
        ConfigValidationError: If any field is invalid.
    """
    errors: list[str] = []

    version = str(raw.get("version", "1.0"))

    # ── Prediction ──
    pred_raw: Any = raw.get("prediction") or {}
    if not isinstance(pred_raw, dict):
        errors.append("'prediction' must be a mapping")
        pred_raw = {}
    prediction = PredictionConfig(
        default_cycle_length=_positive_int(
            pred_raw, "default_cycle_length", 28, "prediction", errors, MAX_LENGTH_DAYS
        ),
        default_period_length=_positive_int(
            pred_raw, "default_period_length", 5, "prediction", errors, MAX_LENGTH_DAYS
        ),
    )
    if prediction.default_period_length > prediction.default_cycle_length:
        errors.append(
            "prediction.default_period_length cannot exceed prediction.default_cycle_length"
        )

    # ── Symptoms ──
    sym_raw: Any = raw.get("symptoms") or {}
    if not isinstance(sym_raw, dict):
        errors.append("'symptoms' must be a mapping")
        sym_raw = {}
    max_len = _positive_int(sym_raw, "max_tag_length", 40, "symptoms", errors)
    tags_raw = sym_raw.get("quick_tags", [])
    quick_tags: list[str] = []
    if not isinstance(tags_raw, list):
        errors.append("symptoms.quick_tags must be a list of strings")
    else:
        for tag in tags_raw:
            text = str(tag).strip()
            if not text:
                errors.append("symptoms.quick_tags contains an empty tag")
            elif len(text) > max_len:
                errors.append(f"symptoms.quick_tags entry {text!r} exceeds {max_len} characters")
            elif text not in quick_tags:
                quick_tags.append(text)
    symptoms = SymptomConfig(quick_tags=quick_tags, max_tag_length=max_len)

    # ── Export ──
    exp_raw: Any = raw.get("export") or {}
    filename = str(exp_raw.get("filename", "flowcast-data.json")) if isinstance(exp_raw, dict) else ""
    if not filename.endswith(".json"):
        errors.append(f"export.filename must end with .json, got {filename!r}")
    export = ExportConfig(filename=filename)

    if errors:
        raise ConfigValidationError(
            f"tracker_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return TrackerConfig(
        version=version,
        prediction=prediction,
        symptoms=symptoms,
        export=export,
        _raw=raw,
    )


def load_tracker_config(path: Path | None = None) -> TrackerConfig:
    """Load and validate the tracker config from disk.

    Args:
        path: Override path to YAML. Uses the bundled tracker_config.yaml by default.
    """
    target = path or _CONFIG_PATH
    raw = _load_yaml(target)
    config = _validate_and_build(raw)
    logger.info("Loaded tracker config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: TrackerConfig | None = None
_config_lock = threading.Lock()


def get_tracker_config() -> TrackerConfig:
    """Return the global TrackerConfig singleton, loading it on first call."""
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                _config = load_tracker_config()
    return _config


def reload_tracker_config(path: Path | None = None) -> TrackerConfig:
    """Reload the tracker config from disk and replace the global singleton.

    If validation fails, the old config is retained and the error is re-raised.

    Raises:
        ConfigValidationError: If the new config is invalid.
        FileNotFoundError:     If the config file is missing.
    """
    global _config
    new_config = load_tracker_config(path)  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info("Reloaded tracker config: %s → %s", old_version, new_config.version)
    return new_config
