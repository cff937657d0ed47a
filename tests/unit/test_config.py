"""Tests for configuration validation and logging setup"""
import logging

import pytest

from reborn import config
from reborn.exceptions import ConfigurationError
from reborn.logging_config import LOG_FORMAT, setup_logging


class TestConfigDefaults:
    def test_defaults(self):
        """Test the shipped defaults pass validation"""
        assert config.MAX_SLOTS_PER_SCHEDULE == 50
        assert config.SLOT_ALIGNMENT_MINUTES == 15
        config.validate_config()


class TestConfigValidation:
    """Test each setting is checked"""

    def test_unknown_log_level(self, monkeypatch):
        monkeypatch.setattr(config, "LOG_LEVEL", "CHATTY")

        with pytest.raises(ConfigurationError) as exc_info:
            config.validate_config()

        assert exc_info.value.config_key == "LOG_LEVEL"

    def test_invalid_timezone(self, monkeypatch):
        monkeypatch.setattr(config, "DEFAULT_TIMEZONE", "Mars/Olympus")

        with pytest.raises(ConfigurationError) as exc_info:
            config.validate_config()

        assert exc_info.value.config_key == "DEFAULT_TIMEZONE"

    def test_valid_timezone(self, monkeypatch):
        monkeypatch.setattr(config, "DEFAULT_TIMEZONE", "Europe/Stockholm")
        config.validate_config()

    def test_non_positive_slot_limit(self, monkeypatch):
        monkeypatch.setattr(config, "MAX_SLOTS_PER_SCHEDULE", 0)

        with pytest.raises(ConfigurationError, match="MAX_SLOTS_PER_SCHEDULE"):
            config.validate_config()

    @pytest.mark.parametrize("alignment", [0, 7, 25])
    def test_alignment_must_divide_hour(self, monkeypatch, alignment):
        monkeypatch.setattr(config, "SLOT_ALIGNMENT_MINUTES", alignment)

        with pytest.raises(ConfigurationError) as exc_info:
            config.validate_config()

        assert exc_info.value.config_key == "SLOT_ALIGNMENT_MINUTES"


class TestLogging:
    def test_format(self):
        assert "%(name)s" in LOG_FORMAT
        assert "%(levelname)s" in LOG_FORMAT

    def test_setup_logging(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

        setup_logging("debug")

        assert calls["level"] == logging.DEBUG
        assert calls["format"] == LOG_FORMAT

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

        setup_logging("chatty")

        assert calls["level"] == logging.INFO
