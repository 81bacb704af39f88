"""Admin mode toggle for editing the schedule and link lists.

Admin mode is per browser session UI state only.  The password is checked
against a bcrypt hash supplied through secrets or the environment (see
:func:`src.config.get_admin_password_hash`).
"""
from __future__ import annotations

import logging

import bcrypt
import streamlit as st

from src.config import get_admin_password_hash

ADMIN_KEY = "is_admin"

logger = logging.getLogger(__name__)


def verify_admin_password(password: str, password_hash: str) -> bool:
    """Return ``True`` if ``password`` matches the bcrypt ``password_hash``."""
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        logger.exception("Admin password hash is malformed")
        return False


def is_admin() -> bool:
    return bool(st.session_state.get(ADMIN_KEY, False))


def admin_login(password: str) -> bool:
    """Enable admin mode if ``password`` is correct."""
    password_hash = get_admin_password_hash()
    if not password_hash:
        logger.warning("Admin login attempted but no admin password hash is configured")
        return False
    if not verify_admin_password(password, password_hash):
        logger.warning("Rejected admin login attempt")
        return False
    st.session_state[ADMIN_KEY] = True
    logger.info("Admin mode enabled")
    return True


def admin_logout() -> None:
    st.session_state[ADMIN_KEY] = False


__all__ = ["verify_admin_password", "is_admin", "admin_login", "admin_logout"]
