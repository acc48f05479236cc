"""Streamlit application shell."""

from __future__ import annotations

_LIGHT_VARS = """
            --bg-0: #FAFAF8;
            --panel: #FFFFFF;
            --panel-border: rgba(30, 42, 53, 0.1);
            --ink-1: #0F1419;
            --ink-2: #3A4755;
            --accent-1: #C85A3A;
"""
_DARK_VARS = """
            --bg-0: #0F1419;
            --panel: #1A222C;
            --panel-border: rgba(229, 231, 235, 0.12);
            --ink-1: #E5E7EB;
            --ink-2: #AAB4C0;
            --accent-1: #E8897A;
"""


def render_app() -> None:
    import streamlit as st

    # set_page_config() must be the first streamlit call
    st.set_page_config(page_title="Linked Data Explorer", layout="wide")

    from ldexplorer.config import APP_FONTS
    from ldexplorer.ui.sidebar import get_theme, init_session_state, render_sidebar
    from ldexplorer.ui.tabs import render_tabs

    init_session_state()
    theme_vars = _DARK_VARS if get_theme() == "dark" else _LIGHT_VARS

    st.markdown(
        f"""
        <style>
        @import url('https://fonts.googleapis.com/css2?family=Fraunces:opsz,wght@9..144,500;9..144,700&family=IBM+Plex+Sans:wght@400;500;600;700&family=IBM+Plex+Mono:wght@400;500&display=swap');
        :root {{
            {theme_vars}
            --radius-md: 14px;
            --font-display: '{APP_FONTS["display"]}', serif;
            --font-body: '{APP_FONTS["body"]}', sans-serif;
            --font-mono: '{APP_FONTS["mono"]}', monospace;
        }}
        html, body, [class*="css"] {{
            font-family: var(--font-body);
            color: var(--ink-1);
        }}
        .stApp {{
            background: var(--bg-0);
        }}
        h1, h2, h3 {{
            font-family: var(--font-display);
            color: var(--ink-1);
            letter-spacing: -0.3px;
        }}
        code, pre {{
            font-family: var(--font-mono);
        }}
        .graph-frame {{
            border: 1px solid var(--panel-border);
            border-radius: var(--radius-md);
            background: var(--panel);
        }}
        </style>
        """,
        unsafe_allow_html=True,
    )

    st.title("Linked Data Explorer")
    sidebar_state = render_sidebar()
    render_tabs(sidebar_state)
