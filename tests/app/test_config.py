"""Tests for application settings."""

from app.config import DEFAULT_TEST_DATABASE_URL, get_settings
from app.constants.credentials import DEFAULT_GATEWAY_SERVICE


def test_test_environment_uses_test_database(monkeypatch):
    monkeypatch.delenv("TEST_DATABASE_URL", raising=False)
    settings = get_settings()
    assert settings.is_test is True
    assert settings.database_url == DEFAULT_TEST_DATABASE_URL


def test_defaults(monkeypatch):
    for name in ("GATEWAY_SERVICE_NAME", "CORS_ALLOW_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    settings = get_settings()
    assert settings.gateway_service_name == DEFAULT_GATEWAY_SERVICE == "mspace"
    assert settings.cors_origins == ["*"]
    assert settings.is_production is False


def test_cors_origins_list(monkeypatch):
    monkeypatch.setenv(
        "CORS_ALLOW_ORIGINS", "https://a.example.com, https://b.example.com,"
    )
    assert get_settings().cors_origins == [
        "https://a.example.com",
        "https://b.example.com",
    ]


def test_production_uses_database_url(monkeypatch):
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/app")
    settings = get_settings()
    assert settings.is_production is True
    assert settings.database_url == "postgresql://u:p@db:5432/app"
