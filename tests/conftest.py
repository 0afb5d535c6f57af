"""
Pytest configuration and fixtures for photowall tests.
"""

import io
from collections.abc import Callable
from datetime import datetime
from unittest.mock import patch

import pytest
from PIL import Image

from photowall.config import get_config
from photowall.models.photo import Photo
from photowall.services.api_client import reset_api_client


class FakeUploadedFile(io.BytesIO):
    """Stand-in for Streamlit's UploadedFile: BytesIO plus name, type and size."""

    def __init__(self, data: bytes, name: str = "photo.jpg", type: str = "image/jpeg"):
        super().__init__(data)
        self.name = name
        self.type = type
        self.size = len(data)


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch: pytest.MonkeyPatch):
    """Point the client at a test API and start every test with fresh singletons."""
    monkeypatch.setenv("TESTING", "true")
    monkeypatch.setenv("PHOTOWALL_API_URL", "http://photos.test")
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.delenv("MAX_UPLOAD_SIZE", raising=False)
    monkeypatch.delenv("NOTIFICATION_STYLE", raising=False)

    get_config().clear_cache()
    reset_api_client()
    yield
    get_config().clear_cache()
    reset_api_client()


@pytest.fixture
def session_state():
    """Replace Streamlit's session state with a plain dict."""
    state: dict = {}
    with patch("streamlit.session_state", new=state):
        yield state


@pytest.fixture
def sample_image_data() -> bytes:
    """Provide a small real JPEG image."""
    output = io.BytesIO()
    Image.new("RGB", (800, 600), color=(200, 30, 30)).save(output, format="JPEG")
    return output.getvalue()


@pytest.fixture
def make_photo() -> Callable[..., Photo]:
    """Factory for Photo records."""

    def _make_photo(
        photo_id: int = 1,
        title: str = "日落",
        description: str | None = "海边的日落",
        filename: str | None = None,
        upload_time: datetime | None = None,
    ) -> Photo:
        return Photo(
            id=photo_id,
            filename=filename or f"{photo_id:08d}-0000-4000-8000-000000000000.jpg",
            title=title,
            description=description,
            upload_time=upload_time or datetime(2024, 1, 5, 9, 3, 0),
        )

    return _make_photo


@pytest.fixture
def make_uploaded_file() -> Callable[..., FakeUploadedFile]:
    """Factory for Streamlit-like uploaded files."""

    def _make_uploaded_file(data: bytes = b"fake_image_data", name: str = "photo.jpg", type: str = "image/jpeg"):
        return FakeUploadedFile(data, name=name, type=type)

    return _make_uploaded_file
