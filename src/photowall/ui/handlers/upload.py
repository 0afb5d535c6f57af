"""Upload handlers for the photowall client."""

from collections.abc import Callable
from typing import Any

import streamlit as st
import structlog

from photowall.config import get_max_upload_size, get_preview_max_size
from photowall.logging_config import log_context
from photowall.services.api_client import UploadProgress, get_api_client
from photowall.services.image_preview import build_preview
from photowall.ui.components.common import format_file_size
from photowall.ui.handlers.error import PhotoWallError, ValidationError, handle_error
from photowall.ui.handlers.gallery import refresh_photos
from photowall.ui.handlers.notifications import notify

logger = structlog.get_logger(__name__)

SHOW_UPLOAD_KEY = "show_upload"
FORM_VERSION_KEY = "upload_form_version"
PROGRESS_KEY = "upload_progress"

MISSING_FIELDS_MESSAGE = "请选择文件并填写标题"

SUPPORTED_IMAGE_TYPES = ["jpg", "jpeg", "png", "gif", "webp", "bmp"]


def initialize_upload_state() -> None:
    """Initialize upload session state variables."""
    if SHOW_UPLOAD_KEY not in st.session_state:
        st.session_state[SHOW_UPLOAD_KEY] = False
    if FORM_VERSION_KEY not in st.session_state:
        st.session_state[FORM_VERSION_KEY] = 0
    if PROGRESS_KEY not in st.session_state:
        st.session_state[PROGRESS_KEY] = 0.0


def toggle_upload_panel() -> None:
    """Open the upload panel if closed, close it if open."""
    st.session_state[SHOW_UPLOAD_KEY] = not st.session_state.get(SHOW_UPLOAD_KEY, False)
    logger.info("upload_panel_toggled", open=st.session_state[SHOW_UPLOAD_KEY])


def upload_widget_key(name: str) -> str:
    """
    Key for an upload form widget.

    The key embeds the form version, so bumping the version gives Streamlit
    fresh, empty widgets.
    """
    return f"upload_{name}_{st.session_state.get(FORM_VERSION_KEY, 0)}"


def clear_upload_form() -> None:
    """Reset every upload form field and the progress display."""
    st.session_state[FORM_VERSION_KEY] = st.session_state.get(FORM_VERSION_KEY, 0) + 1
    st.session_state[PROGRESS_KEY] = 0.0


def get_file_size_limit() -> int:
    """Get the client-side upload limit in bytes."""
    return get_max_upload_size()


def validate_file_size(size: int, filename: str) -> None:
    """
    Reject files above the configured size limit.

    Raises:
        ValidationError: If the file is too large
    """
    limit = get_file_size_limit()
    if size > limit:
        logger.warning("file_size_too_large", filename=filename, file_size=size, max_size=limit)
        raise ValidationError(
            f"File '{filename}' is too large ({size} bytes). Maximum size: {limit} bytes",
            code="file_too_large",
            user_message=f"文件过大（{format_file_size(size)}），最大允许 {format_file_size(limit)}",
            details={"filename": filename, "file_size": size, "max_size": limit},
        )


def validate_upload_form(uploaded_file: Any, title: str | None) -> list[str]:
    """
    Check the upload form before anything is sent.

    Args:
        uploaded_file: Streamlit UploadedFile, or None if nothing was picked
        title: Title text as typed

    Returns:
        list: User-facing error messages; empty if the form may be submitted
    """
    if uploaded_file is None or not title or not title.strip():
        return [MISSING_FIELDS_MESSAGE]

    try:
        validate_file_size(get_file_size(uploaded_file), uploaded_file.name)
    except ValidationError as e:
        return [e.user_message]

    return []


def get_upload_preview(uploaded_file: Any) -> bytes | None:
    """Render a local preview of the picked file, or None if it cannot be decoded."""
    if uploaded_file is None:
        return None
    return build_preview(uploaded_file.getvalue(), max_size=get_preview_max_size())


def submit_upload(
    uploaded_file: Any,
    title: str,
    description: str | None = None,
    progress_callback: Callable[[UploadProgress], None] | None = None,
) -> bool:
    """
    Validate and send the upload form.

    On success the form is cleared, the panel is closed and the photo list is
    refreshed once. On failure the form is kept for a retry.

    Args:
        uploaded_file: Streamlit UploadedFile
        title: Required title
        description: Optional description
        progress_callback: Called with the UploadProgress after every chunk sent

    Returns:
        bool: True if the API accepted the upload
    """
    errors = validate_upload_form(uploaded_file, title)
    if errors:
        for message in errors:
            notify(message, "warning")
        logger.info("upload_rejected_client_side", errors=errors)
        return False

    file_data = uploaded_file.getvalue()
    filename = uploaded_file.name
    progress = UploadProgress(len(file_data), filename)

    def on_progress(bytes_sent: int, total_bytes: int) -> None:
        progress.total_bytes = total_bytes
        progress.update(bytes_sent)
        st.session_state[PROGRESS_KEY] = progress.progress_percentage
        if progress_callback is not None:
            progress_callback(progress)

    st.session_state[PROGRESS_KEY] = 0.0

    with log_context(logger, operation="upload", filename=filename, size=len(file_data)) as log:
        try:
            photo = get_api_client().create_photo(
                file_data,
                filename,
                title.strip(),
                description=(description or "").strip() or None,
                content_type=getattr(uploaded_file, "type", None),
                progress_callback=on_progress,
            )
        except PhotoWallError as e:
            error_info = handle_error(e, {"operation": "upload", "filename": filename})
            log.error("upload_failed", error=str(e), code=error_info.code)
            notify("上传失败", "error")
            return False

        progress.update(progress.total_bytes, status="completed")
        log.info("upload_succeeded", photo_id=photo.id, **progress.to_dict())

    clear_upload_form()
    st.session_state[SHOW_UPLOAD_KEY] = False
    notify("上传成功！", "success")
    refresh_photos()
    return True


def get_file_size(uploaded_file: Any) -> int:
    """Size of a picked file in bytes."""
    size = getattr(uploaded_file, "size", None)
    if isinstance(size, int):
        return size
    return len(uploaded_file.getvalue())
