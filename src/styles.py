"""Global styling helpers for Streamlit UI components."""
from __future__ import annotations

import streamlit as st

# Shared CSS variables and utility classes
GLOBAL_CSS = """
:root {
  --color-text: #111827;
  --color-muted: #4b5563;
  --color-theory: #1d4ed8;
  --color-theory-bg: #eff6ff;
  --color-practical: #15803d;
  --color-practical-bg: #f0fdf4;
}

.session-card {
  background: #ffffff;
  border: 1px solid #e5e7eb;
  border-radius: 8px;
  padding: 14px 16px;
  margin-bottom: 12px;
}

.upcoming-card {
  border-radius: 8px;
  padding: 16px 18px;
  border: 1px solid #e5e7eb;
}
.upcoming-card.theory { background: var(--color-theory-bg); border-color: #bfdbfe; }
.upcoming-card.practical { background: var(--color-practical-bg); border-color: #bbf7d0; }
.upcoming-card h3 { margin: 0 0 6px; font-size: 1.1rem; color: var(--color-text); }

.type-badge {
  display: inline-block;
  border-radius: 999px;
  padding: 2px 10px;
  font-size: 0.75rem;
  font-weight: 600;
}
.type-badge.theory { background: #dbeafe; color: var(--color-theory); }
.type-badge.practical { background: #dcfce7; color: var(--color-practical); }

.session-when { font-size: 0.8rem; color: var(--color-muted); margin-left: 8px; }
.session-title { font-weight: 600; margin: 8px 0 4px; color: var(--color-text); }
.session-meta { font-size: 0.8rem; color: #374151; margin: 2px 0; }
.session-notes {
  font-size: 0.8rem;
  color: var(--color-muted);
  border-top: 1px solid #f3f4f6;
  margin-top: 8px;
  padding-top: 8px;
  word-break: break-all;
}

.empty-state { text-align: center; color: #6b7280; padding: 32px 0; }
"""


def inject_global_styles() -> None:
    """Inject shared CSS variables and classes into the app."""
    st.markdown(f"<style>{GLOBAL_CSS}</style>", unsafe_allow_html=True)
