import logging
from types import SimpleNamespace

import bcrypt

from src import admin


def _hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def _setup(monkeypatch, password_hash: str):
    mock_st = SimpleNamespace(session_state={})
    monkeypatch.setattr(admin, "st", mock_st)
    monkeypatch.setattr(admin, "get_admin_password_hash", lambda: password_hash)
    return mock_st


def test_verify_admin_password():
    hashed = _hash("secret")
    assert admin.verify_admin_password("secret", hashed) is True
    assert admin.verify_admin_password("wrong", hashed) is False
    assert admin.verify_admin_password("", hashed) is False
    assert admin.verify_admin_password("secret", "") is False


def test_verify_admin_password_malformed_hash_is_rejected(caplog):
    with caplog.at_level(logging.ERROR):
        assert admin.verify_admin_password("secret", "not-a-bcrypt-hash") is False
    assert "malformed" in caplog.text


def test_admin_login_and_logout(monkeypatch):
    mock_st = _setup(monkeypatch, _hash("secret"))
    assert admin.is_admin() is False
    assert admin.admin_login("secret") is True
    assert mock_st.session_state["is_admin"] is True
    assert admin.is_admin() is True
    admin.admin_logout()
    assert admin.is_admin() is False


def test_admin_login_wrong_password_logs_warning(monkeypatch, caplog):
    mock_st = _setup(monkeypatch, _hash("secret"))
    with caplog.at_level(logging.WARNING):
        assert admin.admin_login("guess") is False
    assert "is_admin" not in mock_st.session_state
    assert "Rejected admin login" in caplog.text


def test_admin_login_without_configured_hash(monkeypatch, caplog):
    _setup(monkeypatch, "")
    with caplog.at_level(logging.WARNING):
        assert admin.admin_login("anything") is False
    assert "no admin password hash" in caplog.text
