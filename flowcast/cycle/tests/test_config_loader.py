"""Tests for tracker_config.yaml loading and validation."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from flowcast.cycle import config_loader
from flowcast.cycle.config_loader import (
    ConfigValidationError,
    TrackerConfig,
    _validate_and_build,
    get_tracker_config,
    load_tracker_config,
    reload_tracker_config,
)


class TestConfigLoading:
    """Tests for loading the bundled tracker_config.yaml."""

    def test_load_default_config(self, tracker_config: TrackerConfig) -> None:
        assert tracker_config.version == "1.0"

    def test_prediction_defaults(self, tracker_config: TrackerConfig) -> None:
        assert tracker_config.prediction.default_cycle_length == 28
        assert tracker_config.prediction.default_period_length == 5

    def test_quick_tags_configured(self, tracker_config: TrackerConfig) -> None:
        tags = tracker_config.symptoms.quick_tags
        assert "cramps" in tags
        assert len(tags) == len(set(tags))
        assert all(len(t) <= tracker_config.symptoms.max_tag_length for t in tags)

    def test_export_filename(self, tracker_config: TrackerConfig) -> None:
        assert tracker_config.export.filename == "flowcast-data.json"

    def test_get_tracker_config_is_cached(self) -> None:
        assert get_tracker_config() is get_tracker_config()

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_tracker_config(tmp_path / "nope.yaml")


class TestConfigValidation:
    def test_empty_config_uses_defaults(self) -> None:
        config = _validate_and_build({})
        assert config.prediction.default_cycle_length == 28
        assert config.prediction.default_period_length == 5
        assert config.symptoms.quick_tags == []

    def test_non_positive_length_raises(self) -> None:
        with pytest.raises(ConfigValidationError, match="must be positive"):
            _validate_and_build({"prediction": {"default_cycle_length": 0}})

    def test_non_numeric_length_raises(self) -> None:
        with pytest.raises(ConfigValidationError, match="must be an integer"):
            _validate_and_build({"prediction": {"default_period_length": "five"}})

    def test_oversized_default_length_raises(self) -> None:
        with pytest.raises(ConfigValidationError, match="cannot exceed 365"):
            _validate_and_build({"prediction": {"default_cycle_length": 400}})

    def test_period_longer_than_cycle_raises(self) -> None:
        with pytest.raises(ConfigValidationError, match="cannot exceed"):
            _validate_and_build(
                {"prediction": {"default_cycle_length": 5, "default_period_length": 7}}
            )

    def test_errors_are_aggregated(self) -> None:
        with pytest.raises(ConfigValidationError, match="2 validation error"):
            _validate_and_build(
                {
                    "prediction": {"default_cycle_length": -1},
                    "export": {"filename": "data.csv"},
                }
            )

    def test_duplicate_tags_collapsed(self) -> None:
        config = _validate_and_build({"symptoms": {"quick_tags": ["cramps", "cramps", "acne"]}})
        assert config.symptoms.quick_tags == ["cramps", "acne"]

    def test_overlong_tag_raises(self) -> None:
        with pytest.raises(ConfigValidationError, match="exceeds"):
            _validate_and_build(
                {"symptoms": {"quick_tags": ["x" * 11], "max_tag_length": 10}}
            )

    def test_malformed_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("prediction: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigValidationError, match="YAML parse error"):
            load_tracker_config(path)


class TestReload:
    def test_reload_replaces_singleton(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(config_loader, "_config", None)
        path = tmp_path / "tracker_config.yaml"
        path.write_text(
            textwrap.dedent(
                """
                version: "2.0"
                prediction:
                  default_cycle_length: 30
                """
            ),
            encoding="utf-8",
        )
        new_config = reload_tracker_config(path)
        assert new_config.version == "2.0"
        assert get_tracker_config() is new_config

    def test_invalid_reload_keeps_old_config(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        current = load_tracker_config()
        monkeypatch.setattr(config_loader, "_config", current)
        path = tmp_path / "tracker_config.yaml"
        path.write_text("prediction:\n  default_cycle_length: -5\n", encoding="utf-8")
        with pytest.raises(ConfigValidationError):
            reload_tracker_config(path)
        assert get_tracker_config() is current
