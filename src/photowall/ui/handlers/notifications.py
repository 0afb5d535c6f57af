"""User notifications for the photowall client.

Messages are queued in session state and rendered at the top of the next run,
so they survive the ``st.rerun()`` that follows most actions.
"""

import streamlit as st
import structlog

from photowall.config import get_notification_style

logger = structlog.get_logger(__name__)

NOTIFICATIONS_KEY = "pending_notifications"

TOAST_ICONS = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
}


def notify(message: str, kind: str = "info") -> None:
    """
    Queue a notification for display.

    Args:
        message: Text shown to the user
        kind: One of "success", "error", "warning", "info"
    """
    if kind not in TOAST_ICONS:
        kind = "info"

    queue = st.session_state.get(NOTIFICATIONS_KEY) or []
    queue.append({"message": message, "kind": kind})
    st.session_state[NOTIFICATIONS_KEY] = queue

    logger.debug("notification_queued", kind=kind, notification=message)


def flush_notifications() -> int:
    """
    Render and clear every queued notification.

    Returns:
        int: Number of notifications rendered
    """
    queue = st.session_state.get(NOTIFICATIONS_KEY) or []
    if not queue:
        return 0

    st.session_state[NOTIFICATIONS_KEY] = []
    style = get_notification_style()

    for item in queue:
        if style == "toast":
            st.toast(item["message"], icon=TOAST_ICONS[item["kind"]])
        else:
            _render_alert(item["message"], item["kind"])

    return len(queue)


def _render_alert(message: str, kind: str) -> None:
    if kind == "success":
        st.success(message)
    elif kind == "error":
        st.error(message)
    elif kind == "warning":
        st.warning(message)
    else:
        st.info(message)
