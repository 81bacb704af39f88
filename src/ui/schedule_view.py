"""Schedule page: upcoming cards, filters and the full session list."""

from __future__ import annotations

import html
import logging
from datetime import datetime, tzinfo
from typing import List, Optional, Sequence

import streamlit as st

from src.config import get_announcement
from src.date_format import COMPACT, VERBOSE, format_range
from src.models import PRACTICAL, THEORY, TYPE_LABELS, Session, is_http_url
from src.schedule import (
    FUTURE,
    ALL,
    SEMESTER_HEADER,
    TIME_FILTERS,
    TIME_FILTER_LABELS,
    TYPE_FILTERS,
    TYPE_FILTER_LABELS,
    query_and_sort,
    show_semester_header,
    upcoming_sessions,
)
from src.store import delete_session, fetch_sessions, save_session
from src.ui.forms import CANCEL, SAVE, render_session_form
from src.ui_helpers import linkify_notes
from src.utils.toasts import toast_err, toast_ok

SESSIONS_KEY = "sessions"
EDITING_KEY = "editing_session"
CONFIRM_DELETE_KEY = "confirm_delete_session"
ANNOUNCEMENT_HIDDEN_KEY = "announcement_hidden"
NEW_SESSION = "__new__"

UPCOMING_TITLES = {THEORY: "Ближайшая лекция", PRACTICAL: "Ближайшая практика"}


# ---------------------------------------------------------------------------
# Data
# ---------------------------------------------------------------------------


def refresh_sessions(tz: tzinfo) -> List[Session]:
    """Reload the full session list into ``st.session_state``."""
    try:
        with st.spinner("Загрузка..."):
            sessions = fetch_sessions(tz)
    except Exception:
        logging.exception("Error fetching sessions")
        st.error("Не удалось загрузить расписание")
        return st.session_state.get(SESSIONS_KEY, [])
    st.session_state[SESSIONS_KEY] = sessions
    return sessions


def load_sessions(tz: tzinfo) -> List[Session]:
    if SESSIONS_KEY not in st.session_state:
        return refresh_sessions(tz)
    return st.session_state[SESSIONS_KEY]


def _find_session(sessions: Sequence[Session], session_id: str) -> Optional[Session]:
    return next((s for s in sessions if s.id == session_id), None)


# ---------------------------------------------------------------------------
# HTML fragments
# ---------------------------------------------------------------------------


def upcoming_card_html(session: Optional[Session], session_type: str) -> str:
    title = UPCOMING_TITLES[session_type]
    if session is None:
        body = "<p class='session-meta'>Нет запланированных занятий</p>"
    else:
        when = format_range(session.date_start, session.date_end, session.type, VERBOSE)
        body = (
            f"<p class='session-meta'>📅 {html.escape(when)}</p>"
            f"<p class='session-title'>{html.escape(session.title)}</p>"
        )
        if session.teachers:
            body += f"<p class='session-meta'>👥 {html.escape(session.teachers)}</p>"
        if is_http_url(session.folder_link):
            href = html.escape(session.folder_link)
            body += (
                f"<p class='session-meta'><a href='{href}' target='_blank' "
                "rel='noopener noreferrer'>Материалы занятия</a></p>"
            )
    return f"<div class='upcoming-card {session_type}'><h3>{title}</h3>{body}</div>"


def session_card_html(session: Session) -> str:
    when = format_range(session.date_start, session.date_end, session.type, COMPACT)
    label = TYPE_LABELS.get(session.type, session.type)
    parts = [
        "<div class='session-card'>",
        f"<span class='type-badge {html.escape(session.type)}'>{label}</span>",
        f"<span class='session-when'>📅 {html.escape(when)}</span>",
        f"<p class='session-title'>{html.escape(session.title)}</p>",
    ]
    if session.teachers:
        parts.append(f"<p class='session-meta'>👥 {html.escape(session.teachers)}</p>")
    if is_http_url(session.folder_link):
        href = html.escape(session.folder_link)
        parts.append(
            f"<p class='session-meta'><a href='{href}' target='_blank' "
            "rel='noopener noreferrer'>🔗 Ссылка на материалы</a></p>"
        )
    if session.notes:
        parts.append(
            "<div class='session-notes'><b>Примечания:</b> "
            f"{linkify_notes(session.notes)}</div>"
        )
    parts.append("</div>")
    return "".join(parts)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def render_announcement() -> None:
    announcement = get_announcement()
    if not announcement or st.session_state.get(ANNOUNCEMENT_HIDDEN_KEY):
        return
    c1, c2 = st.columns([0.94, 0.06])
    with c1:
        text = announcement["text"]
        if announcement["url"]:
            text += f"  \n[{announcement['link_label']}]({announcement['url']})"
        st.warning(text, icon="⚠️")
    with c2:
        if st.button("✕", key="hide_announcement", help="Скрыть"):
            st.session_state[ANNOUNCEMENT_HIDDEN_KEY] = True
            st.rerun()


def render_upcoming_cards(sessions: Sequence[Session], now: datetime) -> None:
    theory, practical = upcoming_sessions(sessions, now)
    c1, c2 = st.columns(2)
    with c1:
        st.markdown(upcoming_card_html(theory, THEORY), unsafe_allow_html=True)
    with c2:
        st.markdown(upcoming_card_html(practical, PRACTICAL), unsafe_allow_html=True)


def _handle_delete(session: Session, tz: tzinfo) -> None:
    st.warning(f"Вы уверены, что хотите удалить это занятие? «{session.title}»")
    c1, c2 = st.columns(2)
    with c1:
        confirmed = st.button("Да, удалить", key=f"confirm_del_{session.id}", type="primary")
    with c2:
        cancelled = st.button("Отмена", key=f"cancel_del_{session.id}")
    if cancelled:
        st.session_state.pop(CONFIRM_DELETE_KEY, None)
        st.rerun()
    if not confirmed:
        return
    try:
        delete_session(session.id)
    except Exception:
        logging.exception("Error deleting session %s", session.id)
        toast_err("Ошибка при удалении занятия")
        return
    st.session_state.pop(CONFIRM_DELETE_KEY, None)
    refresh_sessions(tz)
    toast_ok("Занятие удалено")
    st.rerun()


def render_session_list(
    ordered: Sequence[Session], time_filter: str, admin: bool, tz: tzinfo
) -> None:
    if not ordered:
        st.markdown(
            "<div class='empty-state'>📄<br>Нет занятий для отображения</div>",
            unsafe_allow_html=True,
        )
        return

    if show_semester_header(ordered, time_filter):
        st.markdown(f"### {SEMESTER_HEADER}")

    for session in ordered:
        st.markdown(session_card_html(session), unsafe_allow_html=True)
        if not admin:
            continue
        c1, c2, _ = st.columns([0.15, 0.15, 0.7])
        with c1:
            if st.button("Изменить", key=f"edit_{session.id}"):
                st.session_state[EDITING_KEY] = session.id
                st.rerun()
        with c2:
            if st.button("Удалить", key=f"delete_{session.id}"):
                st.session_state[CONFIRM_DELETE_KEY] = session.id
                st.rerun()
        if st.session_state.get(CONFIRM_DELETE_KEY) == session.id:
            _handle_delete(session, tz)


def render_session_editor(sessions: Sequence[Session], tz: tzinfo) -> None:
    editing = st.session_state.get(EDITING_KEY)
    if not editing:
        return
    session = None if editing == NEW_SESSION else _find_session(sessions, editing)
    if editing != NEW_SESSION and session is None:
        st.session_state.pop(EDITING_KEY, None)
        toast_err("Занятие не найдено, возможно оно уже удалено")
        return

    action, payload = render_session_form(session, tz)
    if action == CANCEL:
        st.session_state.pop(EDITING_KEY, None)
        st.rerun()
    if action != SAVE:
        return
    try:
        save_session(payload, session.id if session else None)
    except Exception:
        logging.exception("Error saving session")
        toast_err("Ошибка при сохранении занятия")
        return
    st.session_state.pop(EDITING_KEY, None)
    refresh_sessions(tz)
    toast_ok("Занятие сохранено")
    st.rerun()


def render_schedule_page(admin: bool, tz: tzinfo, now: Optional[datetime] = None) -> None:
    """Render the whole schedule page for the current filter state."""
    render_announcement()
    sessions = load_sessions(tz)
    now = now or datetime.now(tz)

    render_upcoming_cards(sessions, now)
    st.write("")

    h1, h2, h3, h4 = st.columns([0.4, 0.2, 0.28, 0.12])
    with h1:
        st.subheader("Полное расписание")
    with h2:
        type_filter = st.selectbox(
            "Тип",
            TYPE_FILTERS,
            index=TYPE_FILTERS.index(ALL),
            format_func=lambda t: TYPE_FILTER_LABELS[t],
            key="type_filter",
            label_visibility="collapsed",
        )
    with h3:
        time_filter = st.radio(
            "Период",
            TIME_FILTERS,
            index=TIME_FILTERS.index(FUTURE),
            format_func=lambda t: TIME_FILTER_LABELS[t],
            key="time_filter",
            horizontal=True,
            label_visibility="collapsed",
        )
    with h4:
        if admin and st.button("➕ Добавить", key="add_session"):
            st.session_state[EDITING_KEY] = NEW_SESSION
            st.rerun()

    if admin:
        render_session_editor(sessions, tz)

    ordered = query_and_sort(sessions, time_filter, type_filter, now)
    render_session_list(ordered, time_filter, admin, tz)


__all__ = [
    "refresh_sessions",
    "load_sessions",
    "upcoming_card_html",
    "session_card_html",
    "render_upcoming_cards",
    "render_session_list",
    "render_schedule_page",
]
