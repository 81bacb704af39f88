"""Form state helpers for the session and link editors.

The Streamlit widgets live in :mod:`src.ui.forms`; this module only turns
records into widget defaults and widget values back into store payloads so
both directions can be tested without a running app.
"""
from __future__ import annotations

from datetime import datetime, time, tzinfo
from typing import Any, Dict, Iterable, Optional

from src.models import LINK_CATEGORIES, SESSION_TYPES, THEORY, Link, Session, is_http_url

DEFAULT_START_TIME = time(10, 0)
DEFAULT_END_TIME = time(12, 0)


class FormError(ValueError):
    """Raised when submitted form values cannot be saved."""

    def __init__(self, errors: Iterable[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def _text(values: Dict[str, Any], key: str) -> str:
    return str(values.get(key) or "").strip()


def session_form_defaults(
    session: Optional[Session], tz: tzinfo, now: Optional[datetime] = None
) -> Dict[str, Any]:
    """Return widget values for editing ``session`` (or a blank new one)."""
    if session is None:
        today = (now or datetime.now(tz)).astimezone(tz).date()
        return {
            "title": "",
            "type": THEORY,
            "start_date": today,
            "start_time": DEFAULT_START_TIME,
            "has_end": False,
            "end_date": today,
            "end_time": DEFAULT_END_TIME,
            "teachers": "",
            "folder_link": "",
            "notes": "",
        }

    start = session.date_start.astimezone(tz)
    end = session.date_end.astimezone(tz) if session.date_end else None
    return {
        "title": session.title,
        "type": session.type,
        "start_date": start.date(),
        "start_time": start.time().replace(second=0, microsecond=0),
        "has_end": end is not None,
        "end_date": end.date() if end else start.date(),
        "end_time": end.time().replace(second=0, microsecond=0) if end else DEFAULT_END_TIME,
        "teachers": session.teachers,
        "folder_link": session.folder_link or "",
        "notes": session.notes or "",
    }


def build_session_payload(values: Dict[str, Any], tz: tzinfo) -> Dict[str, Any]:
    """Validate session editor values and return a store payload."""
    errors = []
    title = _text(values, "title")
    teachers = _text(values, "teachers")
    folder_link = _text(values, "folder_link")
    session_type = values.get("type") or THEORY
    start_date = values.get("start_date")

    if not title:
        errors.append("Укажите тему занятия")
    if session_type not in SESSION_TYPES:
        errors.append("Неизвестный тип занятия")
    if start_date is None:
        errors.append("Укажите дату начала")
    if not teachers:
        errors.append("Укажите преподавателей")
    if folder_link and not is_http_url(folder_link):
        errors.append("Ссылка должна начинаться с http:// или https://")
    if errors:
        raise FormError(errors)

    start = datetime.combine(start_date, values.get("start_time") or time(0, 0), tzinfo=tz)
    end = None
    if values.get("has_end") and values.get("end_date") is not None:
        end = datetime.combine(
            values["end_date"], values.get("end_time") or time(0, 0), tzinfo=tz
        )

    return {
        "title": title,
        "type": session_type,
        "date_start": start,
        "date_end": end,
        "teachers": teachers,
        "folder_link": folder_link or None,
        "notes": _text(values, "notes") or None,
    }


def link_form_defaults(link: Optional[Link]) -> Dict[str, Any]:
    if link is None:
        return {"title": "", "url": "", "order_index": 0}
    return {"title": link.title, "url": link.url, "order_index": link.order_index}


def build_link_payload(values: Dict[str, Any], category: str) -> Dict[str, Any]:
    """Validate link editor values and return a store payload for ``category``."""
    if category not in LINK_CATEGORIES:
        raise ValueError(f"Unknown link category: {category!r}")

    errors = []
    title = _text(values, "title")
    url = _text(values, "url")
    if not title:
        errors.append("Укажите название")
    if not url:
        errors.append("Укажите URL")
    elif not is_http_url(url):
        errors.append("URL должен начинаться с http:// или https://")

    try:
        order_index = int(values.get("order_index") or 0)
    except (TypeError, ValueError):
        errors.append("Порядок отображения должен быть числом")
        order_index = 0
    if order_index < 0:
        errors.append("Порядок отображения не может быть отрицательным")
    if errors:
        raise FormError(errors)

    return {"title": title, "url": url, "category": category, "order_index": order_index}


__all__ = [
    "FormError",
    "session_form_defaults",
    "build_session_payload",
    "link_form_defaults",
    "build_link_payload",
]
