"""Tests for application settings."""

from clinical_risk.core.config import Settings


class TestSettings:
    """Tests for Settings defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PREVIEW_ENABLED", raising=False)
        config = Settings(_env_file=None)
        assert config.app_name == "Clinical Risk Engine"
        assert config.api_v1_prefix == "/api/v1"
        assert config.preview_enabled is True
        assert "http://localhost:3000" in config.cors_origins

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PREVIEW_ENABLED", "false")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        config = Settings(_env_file=None)
        assert config.preview_enabled is False
        assert config.log_level == "DEBUG"

    def test_cors_origins_from_json(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", '["https://example.org"]')
        config = Settings(_env_file=None)
        assert config.cors_origins == ["https://example.org"]
