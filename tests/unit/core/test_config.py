"""
Tests for environment configuration
"""

import pytest
from pydantic import ValidationError

from core.config import Settings, get_settings

# Mark entire module as unit test and critical - config is fundamental
pytestmark = [pytest.mark.unit, pytest.mark.critical]


class TestSettings:
    """Test environment variable configuration and validation"""

    def test_default_settings(self, monkeypatch):
        """Test default settings initialization"""
        for name in ("ENVIRONMENT", "LOG_FORMAT", "LOG_LEVEL", "SCORING_RULES_PATH", "PROMETHEUS_ENABLED"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.environment == "development"
        assert settings.is_development
        assert not settings.is_production
        assert settings.log_format == "json"
        assert settings.log_level == "INFO"
        assert settings.prometheus_enabled is True
        assert settings.scoring_rules_path == "config/scoring_rules.yaml"
        assert settings.hot_reload_enabled is False
        assert settings.hot_reload_debounce_seconds == 2.0
        assert settings.extra_competitor_domains == []

    def test_environment_variables(self, monkeypatch):
        """Test settings are read from the environment"""
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("EXTRA_COMPETITOR_DOMAINS", '["Rival.io", " other.com "]')

        settings = Settings(_env_file=None)

        assert settings.is_production
        assert settings.log_level == "DEBUG"
        assert settings.extra_competitor_domains == ["rival.io", "other.com"]

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, environment="qa")

    def test_invalid_log_format(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_format="xml")

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_negative_debounce_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, hot_reload_debounce_seconds=-1)


class TestRulesPath:
    """Test scoring rules path resolution"""

    def test_configured_path(self, monkeypatch):
        monkeypatch.delenv("SCORING_RULES_PATH", raising=False)

        settings = Settings(_env_file=None, scoring_rules_path="/etc/leadscore/rules.yaml")

        assert settings.resolve_rules_path() == "/etc/leadscore/rules.yaml"

    def test_environment_override(self, monkeypatch):
        settings = Settings(_env_file=None, scoring_rules_path="/etc/leadscore/rules.yaml")
        monkeypatch.setenv("SCORING_RULES_PATH", "/tmp/override.yaml")

        assert settings.resolve_rules_path() == "/tmp/override.yaml"


class TestGetSettings:
    """Test the cached accessor"""

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_cache_clear_picks_up_changes(self, monkeypatch):
        monkeypatch.setenv("APP_NAME", "LeadScore Test")
        get_settings.cache_clear()

        assert get_settings().app_name == "LeadScore Test"
