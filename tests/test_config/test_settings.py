"""Tests for environment-driven configuration."""

import pytest
from pydantic import ValidationError

from src.config.settings import Settings
from src.event_extraction.config import EventExtractionConfig


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.api_port == 8001
        assert settings.min_text_length == 100
        assert settings.allowed_extension_set == {".pdf", ".txt"}
        assert not settings.is_production

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("OUTPUT_DIR", "/data/events")
        monkeypatch.setenv("SAVE_OUTPUTS", "false")
        settings = Settings(_env_file=None)
        assert settings.output_dir == "/data/events"
        assert settings.save_outputs is False

    def test_extension_normalization(self):
        settings = Settings(_env_file=None, allowed_extensions="PDF, .Txt,,")
        assert settings.allowed_extension_set == {".pdf", ".txt"}


class TestEventExtractionConfig:
    def test_defaults(self):
        config = EventExtractionConfig(_env_file=None)
        assert config.strategy == "auto"
        assert config.slash_date_order == "dmy"
        assert config.confidence_profile == "almanac"
        assert config.min_confidence == 0.0

    def test_prefixed_env_override(self, monkeypatch):
        monkeypatch.setenv("EVENTS_STRATEGY", "merged")
        monkeypatch.setenv("EVENTS_MAX_EVENTS_PER_DOC", "50")
        config = EventExtractionConfig(_env_file=None)
        assert config.strategy == "merged"
        assert config.max_events_per_doc == 50

    def test_rejects_unknown_strategy(self):
        with pytest.raises(ValidationError):
            EventExtractionConfig(strategy="pages")

    def test_rejects_out_of_range_confidence(self):
        with pytest.raises(ValidationError):
            EventExtractionConfig(min_confidence=1.5)


class TestApiKeySet:
    def test_unset_is_empty(self):
        assert Settings(_env_file=None).api_key_set == set()

    def test_comma_separated_keys(self):
        settings = Settings(_env_file=None, api_keys=" k1,k2 ,,k1")
        assert settings.api_key_set == {"k1", "k2"}

    def test_extraction_timeout_env(self, monkeypatch):
        monkeypatch.setenv("EXTRACTION_TIMEOUT_SECONDS", "5")
        assert Settings(_env_file=None).extraction_timeout_seconds == 5.0
