"""Tests for the system status router."""


def test_status_reports_key_loaded(client, key_handle):
    r = client.get("/system/status")
    assert r.status_code == 200
    data = r.json()
    assert data["encryption_key_loaded"] is True
    assert data["identity_provider_configured"] is True
    assert data["environment"] == "test"
    assert data["database_driver"] == "sqlite"
    assert data["gateway_service_name"] == "mspace"
    assert key_handle.key.hex() not in r.text


def test_status_reports_key_missing(client_without_key):
    r = client_without_key.get("/system/status")
    assert r.status_code == 200
    assert r.json()["encryption_key_loaded"] is False


def test_status_never_exposes_settings_values(client, monkeypatch):
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "very-secret-service-key")
    r = client.get("/system/status")
    assert "very-secret-service-key" not in r.text
