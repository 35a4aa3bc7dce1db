"""Tests for application configuration."""


def test_settings_defaults():
    """Verify default settings load without errors."""
    from app.config import Settings

    settings = Settings()
    assert settings.app_name == "Watch Party API"
    assert settings.port == 3000
    assert settings.debug is False
    assert settings.session_idle_timeout == 3600
    assert settings.reaper_interval == 3600
    assert settings.reaper_enabled is True


def test_settings_from_environment(monkeypatch):
    """Environment variables override defaults (case-insensitive)."""
    from app.config import Settings

    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("SESSION_IDLE_TIMEOUT", "60")
    monkeypatch.setenv("reaper_enabled", "false")

    settings = Settings()
    assert settings.port == 8080
    assert settings.session_idle_timeout == 60
    assert settings.reaper_enabled is False


def test_get_settings_is_cached():
    """get_settings returns the same instance on every call."""
    from app.config import get_settings

    assert get_settings() is get_settings()
