"""Footer toggle and password form for admin mode."""

from __future__ import annotations

import streamlit as st

from src.admin import admin_login, admin_logout, is_admin
from src.utils.toasts import toast_info, toast_ok

SHOW_LOGIN_KEY = "show_admin_login"


def render_admin_login_form() -> bool:
    """Password form; returns ``True`` once admin mode was enabled."""
    with st.form("admin_login_form", clear_on_submit=True):
        st.markdown("#### 🔒 Вход в админ-режим")
        password = st.text_input("Пароль", type="password", placeholder="Введите пароль")
        c1, c2 = st.columns(2)
        with c1:
            submitted = st.form_submit_button("Войти", type="primary", use_container_width=True)
        with c2:
            cancelled = st.form_submit_button("Отмена", use_container_width=True)

    if cancelled:
        st.session_state[SHOW_LOGIN_KEY] = False
        st.rerun()
    if not submitted:
        return False
    if admin_login(password):
        st.session_state[SHOW_LOGIN_KEY] = False
        toast_ok("Режим администратора включён")
        return True
    st.error("Неверный пароль")
    return False


def render_admin_footer() -> None:
    """Render the discreet login/logout control at the bottom of every page."""
    st.divider()
    _, mid, _ = st.columns([0.45, 0.1, 0.45])
    with mid:
        if is_admin():
            if st.button("выйти", key="admin_logout", type="tertiary"):
                admin_logout()
                toast_info("Режим администратора выключен")
                st.rerun()
        elif st.button("•", key="admin_login_toggle", type="tertiary"):
            st.session_state[SHOW_LOGIN_KEY] = not st.session_state.get(SHOW_LOGIN_KEY, False)
            st.rerun()

    if st.session_state.get(SHOW_LOGIN_KEY) and not is_admin():
        if render_admin_login_form():
            st.rerun()


__all__ = ["render_admin_login_form", "render_admin_footer"]
