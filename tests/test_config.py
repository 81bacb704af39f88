from types import SimpleNamespace
from zoneinfo import ZoneInfo

import pytest

from src import config


class FailingSecrets:
    def get(self, *args, **kwargs):
        raise FileNotFoundError("No secrets found")


def test_timezone_defaults_to_moscow(monkeypatch):
    monkeypatch.setattr(config, "st", SimpleNamespace(secrets={}))
    monkeypatch.delenv("SCHEDULE_TIMEZONE", raising=False)
    assert config.get_timezone() == ZoneInfo("Europe/Moscow")


def test_timezone_from_secrets_then_env(monkeypatch):
    monkeypatch.setattr(config, "st", SimpleNamespace(secrets={"SCHEDULE_TIMEZONE": "Asia/Yekaterinburg"}))
    monkeypatch.setenv("SCHEDULE_TIMEZONE", "Europe/Berlin")
    assert config.get_timezone() == ZoneInfo("Asia/Yekaterinburg")

    monkeypatch.setattr(config, "st", SimpleNamespace(secrets=FailingSecrets()))
    assert config.get_timezone() == ZoneInfo("Europe/Berlin")


def test_admin_password_hash_sources(monkeypatch):
    monkeypatch.setattr(config, "st", SimpleNamespace(secrets={"admin": {"password_hash": "$2b$abc"}}))
    assert config.get_admin_password_hash() == "$2b$abc"

    monkeypatch.setattr(config, "st", SimpleNamespace(secrets={}))
    monkeypatch.setenv(config.ADMIN_HASH_ENV, "$2b$env")
    assert config.get_admin_password_hash() == "$2b$env"

    monkeypatch.delenv(config.ADMIN_HASH_ENV)
    assert config.get_admin_password_hash() == ""


def test_announcement(monkeypatch):
    monkeypatch.setattr(config, "st", SimpleNamespace(secrets={}))
    assert config.get_announcement() is None

    monkeypatch.setattr(config, "st", SimpleNamespace(secrets={"announcement": {"text": "  "}}))
    assert config.get_announcement() is None

    monkeypatch.setattr(
        config,
        "st",
        SimpleNamespace(secrets={"announcement": {"text": "Отметься в табличке", "url": "https://docs"}}),
    )
    assert config.get_announcement() == {
        "text": "Отметься в табличке",
        "url": "https://docs",
        "link_label": "Открыть таблицу →",
    }


def test_firebase_credentials_from_configured_section(monkeypatch):
    secrets = {config.FIREBASE_SECRETS_SECTION: {"project_id": "raspisanie", "type": "service_account"}}
    monkeypatch.setattr(config, "st", SimpleNamespace(secrets=secrets))
    assert config.get_firebase_credentials() == {"project_id": "raspisanie", "type": "service_account"}

    monkeypatch.setattr(config, "FIREBASE_SECRETS_SECTION", "firebase_staging")
    with pytest.raises(RuntimeError, match="firebase_staging"):
        config.get_firebase_credentials()
