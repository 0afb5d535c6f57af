"""Configuration for UI unit tests."""

from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture
def api_client():
    """Mock photo API client shared by the gallery and upload handlers."""
    client = MagicMock()
    client.image_url.side_effect = lambda filename: f"http://photos.test/uploads/{filename}"
    with patch("photowall.ui.handlers.gallery.get_api_client", return_value=client), patch(
        "photowall.ui.handlers.upload.get_api_client", return_value=client
    ):
        yield client
