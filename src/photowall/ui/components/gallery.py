"""Gallery components: photo grid, photo cards and the detail dialog."""

import streamlit as st
import structlog

from photowall.models.photo import Photo
from photowall.ui.components.common import escape_markdown
from ..handlers.gallery import (
    cancel_delete,
    close_photo_detail,
    confirm_delete,
    delete_confirmation_message,
    format_upload_date,
    format_upload_time,
    get_photo_image_url,
    open_photo_detail,
    request_delete,
)

logger = structlog.get_logger(__name__)


def render_photo_grid(photos: list[Photo], cols_per_row: int = 3) -> int:
    """
    Render photos row by row in a grid, keeping their order.

    Args:
        photos: Photo records in display order
        cols_per_row: Number of grid columns

    Returns:
        int: Number of cards rendered
    """
    rendered = 0

    for i in range(0, len(photos), cols_per_row):
        cols = st.columns(cols_per_row)

        for j, col in enumerate(cols):
            photo_index = i + j
            with col:
                if photo_index < len(photos):
                    render_photo_card(photos[photo_index])
                    rendered += 1
                else:
                    st.empty()

    return rendered


def render_photo_card(photo: Photo) -> None:
    """
    Render a single photo card with its view and delete actions.

    Args:
        photo: Photo record
    """
    with st.container(border=True):
        st.image(get_photo_image_url(photo), caption=None, use_container_width=True)
        st.markdown(f"#### {escape_markdown(photo.title)}")

        if photo.description:
            st.markdown(escape_markdown(photo.description))

        st.caption(f"📅 {format_upload_date(photo.upload_time)}")

        col1, col2 = st.columns(2)
        with col1:
            if st.button("🔍 查看详情", key=f"view_{photo.id}", use_container_width=True):
                open_photo_detail(photo.id)
                st.rerun()
        with col2:
            if st.button("🗑️ 删除", key=f"delete_{photo.id}", use_container_width=True):
                request_delete(photo)
                st.rerun()


def render_photo_detail(photo: Photo) -> None:
    """
    Render the contents of the detail view.

    Args:
        photo: Photo record
    """
    image_url = get_photo_image_url(photo)

    col1, col2 = st.columns([3, 1])

    with col1:
        st.image(image_url, caption=photo.title, use_container_width=True)

    with col2:
        st.markdown(f"### {escape_markdown(photo.title)}")

        if photo.description:
            st.markdown(escape_markdown(photo.description))

        st.write(f"""📤 **上传时间**
{format_upload_time(photo.upload_time)}""")

        st.link_button("⬇️ 下载原图", image_url, use_container_width=True)

        if st.button("🗑️ 删除", key=f"detail_delete_{photo.id}", type="primary", use_container_width=True):
            request_delete(photo)
            st.rerun()

        if st.button("关闭", key=f"detail_close_{photo.id}", use_container_width=True):
            close_photo_detail()
            st.rerun()


def render_delete_confirmation(pending: dict) -> None:
    """
    Render the delete confirmation prompt.

    Args:
        pending: ``{"id", "title"}`` of the photo awaiting confirmation
    """
    st.markdown(escape_markdown(delete_confirmation_message(pending["title"])))

    col1, col2 = st.columns(2)
    with col1:
        if st.button("确定", key=f"confirm_delete_{pending['id']}", type="primary", use_container_width=True):
            logger.info("photo_delete_confirmed", photo_id=pending["id"])
            confirm_delete(pending["id"])
            st.rerun()
    with col2:
        if st.button("取消", key=f"cancel_delete_{pending['id']}", use_container_width=True):
            cancel_delete()
            st.rerun()


# Clicking the backdrop dismisses a dialog; on_dismiss keeps session state in step
show_photo_detail_dialog = st.dialog("照片详情", width="large", on_dismiss=close_photo_detail)(render_photo_detail)
show_delete_confirmation_dialog = st.dialog("确认删除", on_dismiss=cancel_delete)(render_delete_confirmation)
