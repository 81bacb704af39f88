"""Application configuration utilities.

Settings are read from ``st.secrets`` first and fall back to environment
variables, so the app runs the same way on Streamlit Cloud and locally.
Nothing in here touches Firestore; the store and admin gate import these
helpers instead of reading secrets themselves.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

import streamlit as st

DEFAULT_TIMEZONE = "Europe/Moscow"

SESSIONS_COLLECTION = os.environ.get("RASPISANIE_SESSIONS_COLLECTION", "sessions")
LINKS_COLLECTION = os.environ.get("RASPISANIE_LINKS_COLLECTION", "links")

ADMIN_HASH_ENV = "RASPISANIE_ADMIN_PASSWORD_HASH"

FIREBASE_SECRETS_SECTION = os.environ.get("RASPISANIE_FIREBASE_SECTION", "firebase")

DEFAULT_ANNOUNCEMENT_LABEL = "Открыть таблицу →"


def _secret(key: str, default: Any = None) -> Any:
    """Return ``st.secrets[key]`` or ``default`` when secrets are unavailable."""
    try:
        return st.secrets.get(key, default)
    except Exception:  # no secrets.toml outside Streamlit Cloud
        logging.debug("st.secrets unavailable while reading %s", key)
        return default


def get_timezone() -> ZoneInfo:
    """Return the timezone used for "now" and for rendering session times."""
    name = _secret("SCHEDULE_TIMEZONE") or os.environ.get(
        "SCHEDULE_TIMEZONE", DEFAULT_TIMEZONE
    )
    return ZoneInfo(str(name))


def get_admin_password_hash() -> str:
    """Return the bcrypt hash guarding admin mode, or ``""`` if unset."""
    section = _secret("admin")
    if section:
        try:
            value = section.get("password_hash", "")
        except AttributeError:
            value = ""
        if value:
            return str(value)
    return os.environ.get(ADMIN_HASH_ENV, "")


def get_firebase_credentials() -> Dict[str, Any]:
    """Return the service-account mapping stored under ``FIREBASE_SECRETS_SECTION``."""
    section = _secret(FIREBASE_SECRETS_SECTION)
    if not section:
        raise RuntimeError(f"Missing [{FIREBASE_SECRETS_SECTION}] section in secrets")
    return dict(section)


def get_announcement() -> Optional[Dict[str, str]]:
    """Return the schedule banner config or ``None`` when no banner is set.

    The ``[announcement]`` secrets section accepts ``text`` (required),
    ``url`` and ``link_label``.
    """
    section = _secret("announcement")
    if not section:
        return None
    text = str(section.get("text", "") or "").strip()
    if not text:
        return None
    return {
        "text": text,
        "url": str(section.get("url", "") or "").strip(),
        "link_label": str(section.get("link_label", "") or DEFAULT_ANNOUNCEMENT_LABEL),
    }


__all__ = [
    "DEFAULT_TIMEZONE",
    "SESSIONS_COLLECTION",
    "LINKS_COLLECTION",
    "FIREBASE_SECRETS_SECTION",
    "get_timezone",
    "get_admin_password_hash",
    "get_firebase_credentials",
    "get_announcement",
]
