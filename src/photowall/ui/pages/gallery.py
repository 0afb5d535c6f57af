"""Gallery page: the photowall client's only page."""

import streamlit as st
import structlog

from photowall.config import get_gallery_columns
from photowall.ui.components.common import render_empty_state
from photowall.ui.components.gallery import (
    render_photo_grid,
    show_delete_confirmation_dialog,
    show_photo_detail_dialog,
)
from photowall.ui.components.upload import render_upload_panel
from photowall.ui.handlers.gallery import (
    ensure_photos_loaded,
    get_pending_delete,
    get_photos,
    get_selected_photo,
    initialize_gallery_state,
    refresh_photos,
)
from photowall.ui.handlers.upload import SHOW_UPLOAD_KEY, initialize_upload_state, toggle_upload_panel

logger = structlog.get_logger(__name__)

EMPTY_STATE_TITLE = "还没有照片，快去上传第一张吧！"


def render_page_header() -> None:
    """Render the page title with the upload toggle and refresh buttons."""
    upload_open = bool(st.session_state.get(SHOW_UPLOAD_KEY, False))

    col1, col2, col3 = st.columns([4, 1, 1])

    with col1:
        st.markdown("# 📸 我的照片墙")

    with col2:
        if st.button("🔄 刷新", key="refresh_photos", use_container_width=True):
            refresh_photos()
            st.rerun()

    with col3:
        if st.button(
            "❌ 取消" if upload_open else "➕ 上传照片",
            key="toggle_upload",
            type="secondary" if upload_open else "primary",
            use_container_width=True,
        ):
            toggle_upload_panel()
            st.rerun()

    st.divider()


def render_gallery_page() -> None:
    """Render the upload panel, the photo grid and any open dialog."""
    initialize_gallery_state()
    initialize_upload_state()

    ensure_photos_loaded()

    render_page_header()

    upload_open = bool(st.session_state.get(SHOW_UPLOAD_KEY, False))
    if upload_open:
        render_upload_panel()

    photos = get_photos()

    if not photos:
        render_empty_state(
            title=EMPTY_STATE_TITLE,
            description="照片墙还是空的。",
            icon="📷",
            action_text=None if upload_open else "➕ 上传照片",
            action_callback=toggle_upload_panel,
        )
    else:
        st.caption(f"共 {len(photos)} 张照片")
        rendered = render_photo_grid(photos, get_gallery_columns())
        logger.debug("gallery_rendered", photos=rendered)

    # Only one dialog can be open; a pending confirmation wins over the detail view
    pending = get_pending_delete()
    if pending:
        show_delete_confirmation_dialog(pending)
    else:
        selected = get_selected_photo()
        if selected is not None:
            show_photo_detail_dialog(selected)
