"""Upload panel component for the photowall client."""

from typing import Any

import streamlit as st
import structlog

from photowall.services.api_client import UploadProgress
from photowall.ui.components.common import format_file_size
from photowall.ui.handlers.error import ValidationError
from photowall.ui.handlers.upload import (
    SUPPORTED_IMAGE_TYPES,
    get_file_size,
    get_file_size_limit,
    get_upload_preview,
    submit_upload,
    upload_widget_key,
    validate_file_size,
)

logger = structlog.get_logger(__name__)

SOURCE_FILE = "选择文件"
SOURCE_CAMERA = "拍照"


def render_upload_panel() -> None:
    """Render the upload form: image source, preview, title, description and submit."""
    max_size = get_file_size_limit()

    with st.container(border=True):
        st.markdown("### 上传新照片")

        source = st.radio(
            "照片来源",
            [SOURCE_FILE, SOURCE_CAMERA],
            horizontal=True,
            key=upload_widget_key("source"),
        )

        if source == SOURCE_CAMERA:
            uploaded_file = st.camera_input("拍照 *", key=upload_widget_key("camera"))
        else:
            uploaded_file = st.file_uploader(
                "选择照片 *",
                type=SUPPORTED_IMAGE_TYPES,
                accept_multiple_files=False,
                help=f"支持格式: {', '.join(SUPPORTED_IMAGE_TYPES).upper()}，最大 {format_file_size(max_size)}",
                key=upload_widget_key("file"),
            )

        file_ok = render_selected_file(uploaded_file)

        title = st.text_input("标题 *", placeholder="给照片起个标题", key=upload_widget_key("title"))
        description = st.text_area(
            "描述", placeholder="描述一下这张照片...", height=100, key=upload_widget_key("description")
        )

        progress_placeholder = st.empty()
        submit_slot = st.empty()

        if submit_slot.button(
            "🚀 立即上传",
            type="primary",
            use_container_width=True,
            disabled=not file_ok,
            key=upload_widget_key("submit"),
        ):
            logger.info("upload_submitted", source=source)
            # The clicked button is already drawn; swap in a disabled one for the request
            submit_slot.button(
                "上传中...",
                type="primary",
                use_container_width=True,
                disabled=True,
                key=upload_widget_key("submitting"),
            )

            def show_progress(progress: UploadProgress) -> None:
                render_upload_progress(progress_placeholder, progress)

            with st.spinner("上传中..."):
                submit_upload(uploaded_file, title, description, progress_callback=show_progress)

            st.rerun()


def render_selected_file(uploaded_file: Any) -> bool:
    """
    Show size information and a preview for the picked file.

    Files above the size limit are rejected here, before any request.

    Returns:
        bool: False if a file is picked but may not be uploaded
    """
    if uploaded_file is None:
        return True

    size = get_file_size(uploaded_file)

    try:
        validate_file_size(size, uploaded_file.name)
    except ValidationError as e:
        st.error(e.user_message)
        return False

    st.caption(f"📷 {uploaded_file.name} · {format_file_size(size)}")

    preview = get_upload_preview(uploaded_file)
    if preview:
        st.image(preview, caption="预览")
    else:
        st.info("无法生成预览")

    return True


def render_upload_progress(progress_placeholder: Any, progress: UploadProgress) -> None:
    """
    Render upload progress as a percentage bar.

    Args:
        progress_placeholder: Streamlit placeholder to draw into
        progress: Current upload progress
    """
    percentage = progress.progress_percentage
    progress_placeholder.progress(
        int(percentage),
        text=f"上传中... {percentage:.0f}% ({format_file_size(progress.uploaded_bytes)} / "
        f"{format_file_size(progress.total_bytes)})",
    )
