"""Gallery handlers: list refresh, detail selection and the delete flow."""

from datetime import datetime
from typing import Any

import streamlit as st
import structlog

from photowall.logging_config import log_context
from photowall.models.photo import Photo
from photowall.services.api_client import get_api_client
from photowall.ui.handlers.error import PhotoWallError, handle_error
from photowall.ui.handlers.notifications import notify

logger = structlog.get_logger(__name__)

PHOTOS_KEY = "photos"
PHOTOS_LOADED_KEY = "photos_loaded"
SELECTED_PHOTO_KEY = "selected_photo_id"
PENDING_DELETE_KEY = "pending_delete"


def initialize_gallery_state() -> None:
    """Initialize gallery session state variables."""
    if PHOTOS_KEY not in st.session_state:
        st.session_state[PHOTOS_KEY] = []
    if PHOTOS_LOADED_KEY not in st.session_state:
        st.session_state[PHOTOS_LOADED_KEY] = False
    if SELECTED_PHOTO_KEY not in st.session_state:
        st.session_state[SELECTED_PHOTO_KEY] = None
    if PENDING_DELETE_KEY not in st.session_state:
        st.session_state[PENDING_DELETE_KEY] = None


def get_photos() -> list[Photo]:
    """Return the cached photo list in the order the API sent it."""
    return list(st.session_state.get(PHOTOS_KEY) or [])


def refresh_photos() -> bool:
    """
    Replace the cached photo list with a fresh copy from the API.

    On failure the previous list is left untouched and an error notification
    is queued.

    Returns:
        bool: True if the list was refreshed
    """
    try:
        photos = get_api_client().list_photos()
    except PhotoWallError as e:
        error_info = handle_error(e, {"operation": "list_photos"})
        logger.error("photos_refresh_failed", error=str(e), code=error_info.code)
        notify("获取照片失败", "error")
        return False

    st.session_state[PHOTOS_KEY] = photos
    st.session_state[PHOTOS_LOADED_KEY] = True

    selected_id = st.session_state.get(SELECTED_PHOTO_KEY)
    if selected_id is not None and all(photo.id != selected_id for photo in photos):
        st.session_state[SELECTED_PHOTO_KEY] = None

    logger.info("photos_loaded", count=len(photos))
    return True


def ensure_photos_loaded() -> None:
    """Fetch the photo list once per session."""
    if not st.session_state.get(PHOTOS_LOADED_KEY):
        # A failed first load still counts as attempted
        refresh_photos()
        st.session_state[PHOTOS_LOADED_KEY] = True


def open_photo_detail(photo_id: int) -> None:
    """Select a photo for the detail view."""
    st.session_state[SELECTED_PHOTO_KEY] = photo_id
    logger.info("photo_detail_opened", photo_id=photo_id)


def close_photo_detail() -> None:
    """Close the detail view."""
    st.session_state[SELECTED_PHOTO_KEY] = None


def get_selected_photo() -> Photo | None:
    """Return the photo shown in the detail view, if any."""
    selected_id = st.session_state.get(SELECTED_PHOTO_KEY)
    if selected_id is None:
        return None

    for photo in get_photos():
        if photo.id == selected_id:
            return photo
    return None


def request_delete(photo: Photo) -> None:
    """Ask the user to confirm deleting a photo."""
    st.session_state[PENDING_DELETE_KEY] = {"id": photo.id, "title": photo.title}


def cancel_delete() -> None:
    """Dismiss a pending delete confirmation."""
    st.session_state[PENDING_DELETE_KEY] = None


def get_pending_delete() -> dict[str, Any] | None:
    """Return the photo awaiting delete confirmation as ``{"id", "title"}``."""
    return st.session_state.get(PENDING_DELETE_KEY)


def delete_confirmation_message(title: str) -> str:
    return f'确定要删除 "{title}" 吗？'


def confirm_delete(photo_id: int) -> bool:
    """
    Delete a confirmed photo and refresh the list.

    On success the confirmation and the detail view are closed before the
    list is refreshed once. On failure only the confirmation is cleared.

    Returns:
        bool: True if the API deleted the photo
    """
    st.session_state[PENDING_DELETE_KEY] = None

    with log_context(logger, operation="delete_photo", photo_id=photo_id) as log:
        try:
            get_api_client().delete_photo(photo_id)
        except PhotoWallError as e:
            error_info = handle_error(e, {"operation": "delete_photo", "photo_id": photo_id})
            log.error("photo_delete_failed", error=str(e), code=error_info.code)
            notify("删除失败", "error")
            return False

        st.session_state[SELECTED_PHOTO_KEY] = None
        log.info("photo_removed_from_gallery")

    notify("删除成功！", "success")
    refresh_photos()
    return True


def get_photo_image_url(photo: Photo) -> str:
    """Return the URL the photo's image is served from."""
    return get_api_client().image_url(photo.filename)


def format_upload_date(upload_time: datetime) -> str:
    """Format a timestamp as a short date, e.g. ``2024/1/5``."""
    return f"{upload_time.year}/{upload_time.month}/{upload_time.day}"


def format_upload_time(upload_time: datetime) -> str:
    """Format a timestamp for the detail view, e.g. ``2024/1/5 09:03:00``."""
    return f"{format_upload_date(upload_time)} {upload_time.strftime('%H:%M:%S')}"
