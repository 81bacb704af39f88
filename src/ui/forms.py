"""Streamlit editors for sessions and links."""

from __future__ import annotations

from datetime import tzinfo
from typing import Any, Dict, Optional, Tuple

import streamlit as st

from src.forms import (
    FormError,
    build_link_payload,
    build_session_payload,
    link_form_defaults,
    session_form_defaults,
)
from src.models import IMPORTANT, SESSION_TYPES, TYPE_LABELS, Link, Session

SAVE = "save"
CANCEL = "cancel"

LINK_CATEGORY_TITLES = {IMPORTANT: "Важные ссылки"}
DEFAULT_LINK_CATEGORY_TITLE = "Полезные материалы"

FormResult = Tuple[str, Optional[Dict[str, Any]]]


def _show_errors(exc: FormError) -> None:
    for message in exc.errors:
        st.error(message)


def render_session_form(session: Optional[Session], tz: tzinfo) -> FormResult:
    """Render the session editor.

    Returns ``("save", payload)`` on a valid submit, ``("cancel", None)`` when
    cancelled and ``("", None)`` otherwise.
    """
    defaults = session_form_defaults(session, tz)
    form_id = f"session_form_{session.id if session else 'new'}"

    with st.form(form_id, clear_on_submit=False):
        st.markdown("#### " + ("Редактировать занятие" if session else "Добавить занятие"))
        title = st.text_input("Тема занятия *", value=defaults["title"])
        session_type = st.selectbox(
            "Тип занятия *",
            SESSION_TYPES,
            index=SESSION_TYPES.index(defaults["type"]) if defaults["type"] in SESSION_TYPES else 0,
            format_func=lambda t: TYPE_LABELS.get(t, t),
        )
        c1, c2 = st.columns(2)
        with c1:
            start_date = st.date_input("Дата начала *", value=defaults["start_date"], format="DD.MM.YYYY")
            start_time = st.time_input("Время начала", value=defaults["start_time"], step=300)
        with c2:
            has_end = st.checkbox("Указать окончание", value=defaults["has_end"])
            end_date = st.date_input("Дата окончания", value=defaults["end_date"], format="DD.MM.YYYY")
            end_time = st.time_input("Время окончания", value=defaults["end_time"], step=300)
        teachers = st.text_input(
            "Преподаватели *",
            value=defaults["teachers"],
            placeholder="Иванов И.И., Петров П.П.",
        )
        folder_link = st.text_input(
            "Ссылка на папку с материалами",
            value=defaults["folder_link"],
            placeholder="https://...",
        )
        notes = st.text_area("Примечания", value=defaults["notes"], height=90)
        b1, b2 = st.columns(2)
        with b1:
            submitted = st.form_submit_button("Сохранить", type="primary", use_container_width=True)
        with b2:
            cancelled = st.form_submit_button("Отмена", use_container_width=True)

    if cancelled:
        return CANCEL, None
    if not submitted:
        return "", None

    values = {
        "title": title,
        "type": session_type,
        "start_date": start_date,
        "start_time": start_time,
        "has_end": has_end,
        "end_date": end_date,
        "end_time": end_time,
        "teachers": teachers,
        "folder_link": folder_link,
        "notes": notes,
    }
    try:
        return SAVE, build_session_payload(values, tz)
    except FormError as exc:
        _show_errors(exc)
        return "", None


def render_link_form(link: Optional[Link], category: str) -> FormResult:
    """Render the link editor for ``category``; same contract as the session form."""
    defaults = link_form_defaults(link)
    category_title = LINK_CATEGORY_TITLES.get(category, DEFAULT_LINK_CATEGORY_TITLE)
    form_id = f"link_form_{category}_{link.id if link else 'new'}"

    with st.form(form_id, clear_on_submit=False):
        action = "Редактировать ссылку" if link else "Добавить ссылку"
        st.markdown(f"#### {action} - {category_title}")
        title = st.text_input("Название *", value=defaults["title"], placeholder="Название ссылки")
        url = st.text_input("URL *", value=defaults["url"], placeholder="https://...")
        order_index = st.number_input(
            "Порядок отображения",
            min_value=0,
            step=1,
            value=int(defaults["order_index"]),
            help="Меньшие значения отображаются первыми",
        )
        b1, b2 = st.columns(2)
        with b1:
            submitted = st.form_submit_button("Сохранить", type="primary", use_container_width=True)
        with b2:
            cancelled = st.form_submit_button("Отмена", use_container_width=True)

    if cancelled:
        return CANCEL, None
    if not submitted:
        return "", None

    values = {"title": title, "url": url, "order_index": order_index}
    try:
        return SAVE, build_link_payload(values, category)
    except FormError as exc:
        _show_errors(exc)
        return "", None


__all__ = ["SAVE", "CANCEL", "render_session_form", "render_link_form"]
