"""Reusable header component for Streamlit pages."""

from __future__ import annotations

import streamlit as st


def render_header(title: str, subtitle: str | None = None) -> None:
    """Render a compact banner with title and subtitle."""
    st.markdown(
        """
        <style>
          @import url('https://fonts.googleapis.com/css2?family=Merriweather:wght@400;700&display=swap');
          .folio-hero{background:linear-gradient(120deg,#1f2937 0%,#2E86AB 60%,#4EA8DE 100%);border-radius:16px;color:#fff;margin-bottom:8px;padding:10px 16px}
          .folio-hero-title{font:700 2.8rem 'Merriweather',Georgia,'Times New Roman',serif;margin:0}
          .folio-hero-subtitle{font:400 1.1rem 'Merriweather',Georgia,'Times New Roman',serif;margin:4px 0 0;opacity:.9}
        </style>
        """,
        unsafe_allow_html=True,
    )

    subtitle_html = (
        f'<div class="folio-hero-subtitle">{subtitle}</div>' if subtitle else ""
    )
    st.markdown(
        f"""
        <div class="folio-hero">
          <div class="folio-hero-title">{title}</div>
          {subtitle_html}
        </div>
        """,
        unsafe_allow_html=True,
    )
