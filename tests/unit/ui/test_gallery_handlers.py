"""Tests for gallery handlers: list refresh, detail view and delete flow."""

from datetime import datetime
from unittest.mock import patch

from photowall.ui.handlers.error import ApiError, NetworkError
from photowall.ui.handlers.gallery import (
    PENDING_DELETE_KEY,
    PHOTOS_KEY,
    PHOTOS_LOADED_KEY,
    SELECTED_PHOTO_KEY,
    cancel_delete,
    close_photo_detail,
    confirm_delete,
    delete_confirmation_message,
    ensure_photos_loaded,
    format_upload_date,
    format_upload_time,
    get_pending_delete,
    get_photo_image_url,
    get_photos,
    get_selected_photo,
    initialize_gallery_state,
    open_photo_detail,
    refresh_photos,
    request_delete,
)
from photowall.ui.handlers.notifications import NOTIFICATIONS_KEY


def _messages(session_state):
    return [(item["kind"], item["message"]) for item in session_state.get(NOTIFICATIONS_KEY, [])]


class TestInitializeGalleryState:
    """Test gallery session state initialization."""

    def test_sets_defaults(self, session_state):
        initialize_gallery_state()

        assert session_state[PHOTOS_KEY] == []
        assert session_state[PHOTOS_LOADED_KEY] is False
        assert session_state[SELECTED_PHOTO_KEY] is None
        assert session_state[PENDING_DELETE_KEY] is None

    def test_keeps_existing_values(self, session_state, make_photo):
        photos = [make_photo()]
        session_state[PHOTOS_KEY] = photos

        initialize_gallery_state()

        assert session_state[PHOTOS_KEY] is photos


class TestRefreshPhotos:
    """Test replacing the cached photo list."""

    def test_success_replaces_list(self, session_state, api_client, make_photo):
        session_state[PHOTOS_KEY] = [make_photo(photo_id=1)]
        fresh = [make_photo(photo_id=3), make_photo(photo_id=2)]
        api_client.list_photos.return_value = fresh

        assert refresh_photos() is True

        assert get_photos() == fresh
        assert session_state[PHOTOS_LOADED_KEY] is True
        api_client.list_photos.assert_called_once_with()

    def test_failure_keeps_previous_list(self, session_state, api_client, make_photo):
        previous = [make_photo(photo_id=1)]
        session_state[PHOTOS_KEY] = previous
        api_client.list_photos.side_effect = NetworkError("connection refused")

        assert refresh_photos() is False

        assert session_state[PHOTOS_KEY] is previous
        assert _messages(session_state) == [("error", "获取照片失败")]

    def test_closes_detail_for_vanished_photo(self, session_state, api_client, make_photo):
        session_state[SELECTED_PHOTO_KEY] = 9
        api_client.list_photos.return_value = [make_photo(photo_id=1)]

        refresh_photos()

        assert session_state[SELECTED_PHOTO_KEY] is None

    def test_keeps_detail_for_existing_photo(self, session_state, api_client, make_photo):
        session_state[SELECTED_PHOTO_KEY] = 1
        api_client.list_photos.return_value = [make_photo(photo_id=1)]

        refresh_photos()

        assert session_state[SELECTED_PHOTO_KEY] == 1


class TestEnsurePhotosLoaded:
    """Test the once-per-session initial load."""

    def test_loads_once(self, session_state, api_client):
        api_client.list_photos.return_value = []

        ensure_photos_loaded()
        ensure_photos_loaded()

        api_client.list_photos.assert_called_once()

    def test_failed_first_load_not_repeated(self, session_state, api_client):
        api_client.list_photos.side_effect = ApiError("boom", status_code=500)

        ensure_photos_loaded()
        ensure_photos_loaded()

        api_client.list_photos.assert_called_once()
        assert session_state[PHOTOS_LOADED_KEY] is True


class TestDetailView:
    """Test detail view selection."""

    def test_open_and_close(self, session_state, make_photo):
        photo = make_photo(photo_id=4)
        session_state[PHOTOS_KEY] = [make_photo(photo_id=1), photo]

        open_photo_detail(4)
        assert get_selected_photo() == photo

        close_photo_detail()
        assert get_selected_photo() is None

    def test_selected_photo_missing(self, session_state, make_photo):
        session_state[PHOTOS_KEY] = [make_photo(photo_id=1)]
        session_state[SELECTED_PHOTO_KEY] = 2

        assert get_selected_photo() is None

    def test_image_url(self, api_client, make_photo):
        photo = make_photo(filename="abc.png")

        assert get_photo_image_url(photo) == "http://photos.test/uploads/abc.png"


class TestDeleteFlow:
    """Test the confirm-then-delete flow."""

    def test_request_and_cancel(self, session_state, make_photo):
        request_delete(make_photo(photo_id=3, title="山"))
        assert get_pending_delete() == {"id": 3, "title": "山"}

        cancel_delete()
        assert get_pending_delete() is None

    def test_confirmation_message(self):
        assert delete_confirmation_message("山") == '确定要删除 "山" 吗？'

    def test_success_clears_state_and_refreshes_once(self, session_state, api_client, make_photo):
        photo = make_photo(photo_id=3)
        session_state[PHOTOS_KEY] = [photo]
        open_photo_detail(3)
        request_delete(photo)

        with patch("photowall.ui.handlers.gallery.refresh_photos") as mock_refresh:
            assert confirm_delete(3) is True

        api_client.delete_photo.assert_called_once_with(3)
        mock_refresh.assert_called_once_with()
        assert session_state[PENDING_DELETE_KEY] is None
        assert session_state[SELECTED_PHOTO_KEY] is None
        assert ("success", "删除成功！") in _messages(session_state)

    def test_success_closes_any_open_detail(self, session_state, api_client, make_photo):
        session_state[PHOTOS_KEY] = [make_photo(photo_id=1), make_photo(photo_id=2)]
        open_photo_detail(1)

        with patch("photowall.ui.handlers.gallery.refresh_photos"):
            confirm_delete(2)

        assert session_state[SELECTED_PHOTO_KEY] is None

    def test_failure_notifies_without_refresh(self, session_state, api_client, make_photo):
        photo = make_photo(photo_id=3)
        open_photo_detail(3)
        request_delete(photo)
        api_client.delete_photo.side_effect = ApiError("delete failed", status_code=500)

        with patch("photowall.ui.handlers.gallery.refresh_photos") as mock_refresh:
            assert confirm_delete(3) is False

        mock_refresh.assert_not_called()
        assert session_state[PENDING_DELETE_KEY] is None
        assert session_state[SELECTED_PHOTO_KEY] == 3
        assert _messages(session_state) == [("error", "删除失败")]


class TestFormatting:
    """Test timestamp formatting."""

    def test_upload_date_has_no_padding(self):
        assert format_upload_date(datetime(2024, 1, 5, 9, 3)) == "2024/1/5"

    def test_upload_time(self):
        assert format_upload_time(datetime(2024, 12, 25, 18, 30, 5)) == "2024/12/25 18:30:05"


class TestDeleteLogging:
    """Test structured logging around deletes."""

    def test_delete_logs_with_bound_context(self, session_state, api_client):
        api_client.delete_photo.side_effect = ApiError("delete failed", status_code=500)

        with patch("photowall.ui.handlers.gallery.logger") as mock_logger:
            confirm_delete(7)

        mock_logger.bind.assert_called_once_with(operation="delete_photo", photo_id=7)
        assert mock_logger.bind.return_value.error.call_args.args == ("photo_delete_failed",)
