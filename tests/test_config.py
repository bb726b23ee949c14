"""Tests for settings and logging setup."""

import logging

import pytest
import structlog
from py_road.config import Settings
from py_road.utils.logging import configure_logging


class TestSettings:
    """Test configuration defaults and overrides."""

    def test_defaults(self):
        """Test default values."""
        config = Settings()

        assert config.default_scale == 0.125
        assert config.noise_sample_scale == 0.05
        assert config.marker_size == 0.1
        assert config.max_expanded_cells is None
        assert config.log_level == "INFO"

    def test_environment_override(self, monkeypatch):
        """Test that ROAD_ prefixed variables override defaults."""
        monkeypatch.setenv("ROAD_DEFAULT_SCALE", "0.25")
        monkeypatch.setenv("ROAD_MAX_EXPANDED_CELLS", "500")

        config = Settings()

        assert config.default_scale == 0.25
        assert config.max_expanded_cells == 500

    def test_rejects_non_positive_scale(self, monkeypatch):
        """Test validation of the default scale."""
        monkeypatch.setenv("ROAD_DEFAULT_SCALE", "0")
        with pytest.raises(ValueError):
            Settings()


class TestConfigureLogging:
    """Test structlog configuration."""

    @pytest.fixture(autouse=True)
    def restore_logging(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)
        structlog.reset_defaults()

    def test_sets_level(self):
        """Test that the stdlib root level follows the argument."""
        configure_logging(level="debug", fmt="console")
        assert logging.getLogger().level == logging.DEBUG

    def test_json_output(self, capsys):
        """Test that JSON format renders events as JSON lines."""
        configure_logging(level="INFO", fmt="json")
        structlog.get_logger("py_road.test").info("Road built", cells=4)

        err = capsys.readouterr().err
        assert '"event": "Road built"' in err
        assert '"cells": 4' in err
