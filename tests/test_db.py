from types import SimpleNamespace

import pytest

from raspisanie import db as db_module


def test_get_db_prefers_assigned_client(monkeypatch):
    dummy = object()
    monkeypatch.setattr(db_module, "db", dummy)
    assert db_module.get_db() is dummy


def test_get_db_connects_once_and_caches(monkeypatch):
    calls = []
    client = object()
    monkeypatch.setattr(db_module, "db", None)
    monkeypatch.setattr(db_module, "_db_client", None)
    monkeypatch.setattr(db_module, "_connect", lambda: calls.append(1) or client)

    assert db_module.get_db() is client
    assert db_module.get_db() is client
    assert calls == [1]


def test_get_db_reports_missing_credentials(monkeypatch):
    errors = []
    monkeypatch.setattr(db_module, "db", None)
    monkeypatch.setattr(db_module, "_db_client", None)
    monkeypatch.setattr(db_module.firebase_admin, "_apps", {})
    monkeypatch.setattr(db_module, "st", SimpleNamespace(error=errors.append))

    def missing():
        raise RuntimeError("Missing [firebase] section in secrets")

    monkeypatch.setattr(db_module, "get_firebase_credentials", missing)

    with pytest.raises(RuntimeError, match="Firebase initialization failed"):
        db_module.get_db()
    assert errors and "Missing [firebase] section" in errors[0]
