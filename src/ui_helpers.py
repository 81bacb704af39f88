"""UI and query parameter helpers for the schedule app."""
from __future__ import annotations

import html
import re
from typing import List, NamedTuple

import streamlit as st

PAGE_KEY = "page"
SCHEDULE_PAGE = "schedule"
IMPORTANT_PAGE = "important"
MATERIALS_PAGE = "materials"
PAGES = (SCHEDULE_PAGE, IMPORTANT_PAGE, MATERIALS_PAGE)

PAGE_LABELS = {
    SCHEDULE_PAGE: "Расписание",
    IMPORTANT_PAGE: "Важные ссылки",
    MATERIALS_PAGE: "Полезное",
}

# Greedy up to whitespace: trailing punctuation stays part of the URL.
URL_RE = re.compile(r"(https?://\S+)")


def qp_get():
    return st.query_params


def qp_clear_keys(*keys):
    for k in keys:
        try:
            del st.query_params[k]
        except KeyError:
            pass


def seed_page_from_qp() -> str:
    """Seed ``st.session_state['page']`` from the ``page`` query parameter."""
    if PAGE_KEY not in st.session_state:
        val = qp_get().get(PAGE_KEY)
        if isinstance(val, list):
            val = val[0] if val else None
        st.session_state[PAGE_KEY] = val if val in PAGES else SCHEDULE_PAGE
    return st.session_state[PAGE_KEY]


def persist_page_to_qp() -> None:
    """Mirror the current page to the query string; the schedule is the default."""
    page = st.session_state.get(PAGE_KEY, SCHEDULE_PAGE)
    if page in (None, SCHEDULE_PAGE):
        qp_clear_keys(PAGE_KEY)
        return
    st.query_params[PAGE_KEY] = str(page)


def go_to_page(page: str) -> None:
    if page not in PAGES:
        raise ValueError(f"Unknown page: {page!r}")
    st.session_state[PAGE_KEY] = page
    persist_page_to_qp()


class TextSegment(NamedTuple):
    text: str
    is_link: bool


def split_text_links(text: str) -> List[TextSegment]:
    """Split ``text`` into literal and URL segments, preserving order."""
    if not text:
        return []
    return [
        TextSegment(part, bool(URL_RE.fullmatch(part)))
        for part in URL_RE.split(text)
        if part
    ]


def linkify_notes(text: str) -> str:
    """Return ``text`` as HTML with every URL turned into a new-tab link."""
    pieces = []
    for segment in split_text_links(text):
        escaped = html.escape(segment.text)
        if segment.is_link:
            pieces.append(
                f'<a href="{escaped}" target="_blank" rel="noopener noreferrer">{escaped}</a>'
            )
        else:
            pieces.append(escaped)
    return "".join(pieces)
