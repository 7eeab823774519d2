import pytest

from leadsheet.config import Settings


def test_defaults(monkeypatch):
    for name in ("SHEET_ID", "LEADS_SHEET_NAME", "PORT", "TIMEZONE", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)

    assert settings.LEADS_SHEET_NAME == "leads"
    assert settings.PORT == 5000
    assert settings.CORS_ORIGINS == ["*"]
    assert settings.GOOGLE_CREDENTIALS_FILE == "credentials.json"
    assert settings.TIMEZONE == "UTC"


def test_environment_override(monkeypatch):
    monkeypatch.setenv("LEADS_SHEET_NAME", "calls")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CORS_ORIGINS", '["http://localhost:3000"]')
    settings = Settings(_env_file=None)

    assert settings.LEADS_SHEET_NAME == "calls"
    assert settings.PORT == 8080
    assert settings.CORS_ORIGINS == ["http://localhost:3000"]


def test_invalid_sheet_id():
    with pytest.raises(ValueError):
        Settings(SHEET_ID="short", _env_file=None)


def test_invalid_timezone():
    with pytest.raises(ValueError):
        Settings(TIMEZONE="Mars/Olympus", _env_file=None)


def test_log_level_is_normalised():
    assert Settings(LOG_LEVEL="debug", _env_file=None).LOG_LEVEL == "DEBUG"
    with pytest.raises(ValueError):
        Settings(LOG_LEVEL="loud", _env_file=None)
