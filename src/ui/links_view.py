"""Important links and materials pages.

Both pages share one renderer; only the category and the wording differ.
"""

from __future__ import annotations

import html
import logging
from typing import Dict, List, Optional, Sequence

import streamlit as st

from src.models import IMPORTANT, MATERIALS, Link, is_http_url
from src.store import delete_link, fetch_links, save_link
from src.ui.forms import CANCEL, SAVE, render_link_form
from src.ui_helpers import SCHEDULE_PAGE, go_to_page
from src.utils.toasts import toast_err, toast_ok

NEW_LINK = "__new__"
OPEN_LINKS_PAGE_KEY = "open_links_page"

LINK_PAGE_TEXT: Dict[str, Dict[str, str]] = {
    IMPORTANT: {
        "empty": "Нет ссылок",
        "empty_admin": 'Нажмите "Добавить", чтобы создать первую ссылку',
        "confirm_delete": "Вы уверены, что хотите удалить эту ссылку?",
        "save_error": "Ошибка при сохранении ссылки",
        "delete_error": "Ошибка при удалении ссылки",
        "saved": "Ссылка сохранена",
        "deleted": "Ссылка удалена",
    },
    MATERIALS: {
        "empty": "Нет материалов",
        "empty_admin": 'Нажмите "Добавить", чтобы создать первый материал',
        "confirm_delete": "Вы уверены, что хотите удалить этот материал?",
        "save_error": "Ошибка при сохранении материала",
        "delete_error": "Ошибка при удалении материала",
        "saved": "Материал сохранён",
        "deleted": "Материал удалён",
    },
}


def _links_key(category: str) -> str:
    return f"links_{category}"


def _editing_key(category: str) -> str:
    return f"editing_link_{category}"


def _confirm_key(category: str) -> str:
    return f"confirm_delete_link_{category}"


def refresh_links(category: str) -> List[Link]:
    """Reload all links of ``category`` into ``st.session_state``."""
    try:
        with st.spinner("Загрузка..."):
            links = fetch_links(category)
    except Exception:
        logging.exception("Error fetching links for %s", category)
        st.error("Не удалось загрузить ссылки")
        return st.session_state.get(_links_key(category), [])
    st.session_state[_links_key(category)] = links
    return links


def load_links(category: str) -> List[Link]:
    """Return the links of ``category``, refetching when the page is entered.

    Reruns on the same page reuse the copy in ``st.session_state``; coming
    back from another page always reloads, so edits made in another browser
    show up without a manual refresh.
    """
    key = _links_key(category)
    if st.session_state.get(OPEN_LINKS_PAGE_KEY) != category or key not in st.session_state:
        st.session_state[OPEN_LINKS_PAGE_KEY] = category
        return refresh_links(category)
    return st.session_state[key]


def leave_links_pages() -> None:
    """Forget which links page is open so the next visit refetches."""
    st.session_state.pop(OPEN_LINKS_PAGE_KEY, None)


def link_row_html(link: Link) -> str:
    if not is_http_url(link.url):
        return f"🔗 <b>{html.escape(link.title)}</b> <code>{html.escape(link.url)}</code>"
    return (
        f"<a href='{html.escape(link.url)}' target='_blank' rel='noopener noreferrer'>"
        f"🔗 <b>{html.escape(link.title)}</b></a>"
    )


def _render_editor(category: str, links: Sequence[Link]) -> None:
    editing = st.session_state.get(_editing_key(category))
    if not editing:
        return
    link: Optional[Link] = None
    if editing != NEW_LINK:
        link = next((item for item in links if item.id == editing), None)

    action, payload = render_link_form(link, category)
    if action == CANCEL:
        st.session_state.pop(_editing_key(category), None)
        st.rerun()
    if action != SAVE:
        return
    text = LINK_PAGE_TEXT[category]
    try:
        save_link(payload, link.id if link else None)
    except Exception:
        logging.exception("Error saving link")
        toast_err(text["save_error"])
        return
    st.session_state.pop(_editing_key(category), None)
    refresh_links(category)
    toast_ok(text["saved"])
    st.rerun()


def _render_delete_confirm(category: str, link: Link) -> None:
    text = LINK_PAGE_TEXT[category]
    st.warning(text["confirm_delete"])
    c1, c2 = st.columns(2)
    with c1:
        confirmed = st.button("Да, удалить", key=f"confirm_del_link_{link.id}", type="primary")
    with c2:
        cancelled = st.button("Отмена", key=f"cancel_del_link_{link.id}")
    if cancelled:
        st.session_state.pop(_confirm_key(category), None)
        st.rerun()
    if not confirmed:
        return
    try:
        delete_link(link.id)
    except Exception:
        logging.exception("Error deleting link %s", link.id)
        toast_err(text["delete_error"])
        return
    st.session_state.pop(_confirm_key(category), None)
    refresh_links(category)
    toast_ok(text["deleted"])
    st.rerun()


def render_links_page(category: str, admin: bool) -> None:
    """Render the link list for ``category`` with admin controls when enabled."""
    text = LINK_PAGE_TEXT[category]

    if st.button("← Назад к расписанию", key=f"back_{category}"):
        go_to_page(SCHEDULE_PAGE)
        st.rerun()
    if admin and st.button("➕ Добавить", key=f"add_link_{category}"):
        st.session_state[_editing_key(category)] = NEW_LINK
        st.rerun()

    links = load_links(category)
    if admin:
        _render_editor(category, links)

    if not links:
        message = text["empty_admin"] if admin else text["empty"]
        st.markdown(f"<div class='empty-state'>{html.escape(message)}</div>", unsafe_allow_html=True)
        return

    for link in links:
        with st.container(border=True):
            if not admin:
                st.markdown(link_row_html(link), unsafe_allow_html=True)
                continue
            c1, c2, c3 = st.columns([0.8, 0.1, 0.1])
            with c1:
                st.markdown(link_row_html(link), unsafe_allow_html=True)
            with c2:
                if st.button("✏️", key=f"edit_link_{link.id}", help="Изменить"):
                    st.session_state[_editing_key(category)] = link.id
                    st.rerun()
            with c3:
                if st.button("🗑️", key=f"delete_link_{link.id}", help="Удалить"):
                    st.session_state[_confirm_key(category)] = link.id
                    st.rerun()
            if st.session_state.get(_confirm_key(category)) == link.id:
                _render_delete_confirm(category, link)


__all__ = [
    "LINK_PAGE_TEXT",
    "refresh_links",
    "load_links",
    "leave_links_pages",
    "link_row_html",
    "render_links_page",
]
