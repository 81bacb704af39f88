# ==== Standard Library ====
import logging
from datetime import datetime

# ==== Third-Party Packages ====
import streamlit as st

# ==== Local ====
from src.admin import is_admin
from src.config import get_timezone
from src.models import IMPORTANT, MATERIALS
from src.styles import inject_global_styles
from src.ui.admin_login import render_admin_footer
from src.ui.links_view import leave_links_pages, render_links_page
from src.ui.schedule_view import render_schedule_page
from src.ui_helpers import (
    IMPORTANT_PAGE,
    MATERIALS_PAGE,
    PAGES,
    PAGE_LABELS,
    go_to_page,
    seed_page_from_qp,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

st.set_page_config(
    page_title="Расписание занятий",
    page_icon="📅",
    layout="wide",
)

# Load global CSS classes and variables
inject_global_styles()


def render_nav(current: str) -> None:
    cols = st.columns(len(PAGES) + 3)
    for col, page in zip(cols, PAGES):
        with col:
            if st.button(
                PAGE_LABELS[page],
                key=f"nav_{page}",
                type="primary" if page == current else "secondary",
                use_container_width=True,
            ):
                go_to_page(page)
                st.rerun()


def main() -> None:
    tz = get_timezone()
    page = seed_page_from_qp()
    admin = is_admin()

    render_nav(page)

    if page == IMPORTANT_PAGE:
        render_links_page(IMPORTANT, admin)
    elif page == MATERIALS_PAGE:
        render_links_page(MATERIALS, admin)
    else:
        leave_links_pages()
        render_schedule_page(admin, tz, now=datetime.now(tz))

    render_admin_footer()


if __name__ == "__main__":
    main()
