"""Reusable UI components for the photowall client."""

import re
from collections.abc import Callable

import streamlit as st
import structlog

from photowall import __version__

logger = structlog.get_logger()

MARKDOWN_SPECIAL_CHARS = re.compile(r"([\\`*_{}\[\]()#+\-.!|<>~$:])")


def render_empty_state(
    title: str,
    description: str,
    icon: str = "📭",
    action_text: str | None = None,
    action_callback: Callable[[], None] | None = None,
) -> None:
    """
    Render an empty state message with optional action button.

    Args:
        title: Main title for the empty state
        description: Description text
        icon: Emoji icon to display
        action_text: Text for action button (optional)
        action_callback: Called when the action button is clicked (optional)
    """
    col1, col2, col3 = st.columns([1, 2, 1])

    with col2:
        st.markdown(
            f"""
        <div style='text-align: center; padding: 2rem 0;'>
            <div style='font-size: 4rem; margin-bottom: 1rem;'>{icon}</div>
            <h3 style='color: #9ca3af; margin-bottom: 1rem;'>{title}</h3>
            <p style='color: #888; margin-bottom: 2rem;'>{description}</p>
        </div>
        """,
            unsafe_allow_html=True,
        )

        if action_text and action_callback:
            if st.button(action_text, use_container_width=True, type="primary", key="empty_state_action"):
                action_callback()
                st.rerun()


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        str: Formatted file size (e.g., "1.5 MB")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def render_footer() -> None:
    """Render the application footer."""
    st.divider()

    st.markdown(
        f"""
    <div style='text-align: center; color: #666; font-size: 0.8em;'>
        <strong>photowall v{__version__}</strong>
    </div>
    """,
        unsafe_allow_html=True,
    )


def escape_markdown(text: str) -> str:
    """
    Escape user text so Streamlit's Markdown renders it literally.

    Args:
        text: Text typed by a user, e.g. a photo title

    Returns:
        str: Text with every Markdown control character backslash-escaped
    """
    return MARKDOWN_SPECIAL_CHARS.sub(r"\\\1", text)
