"""HTTP client for the external photo API."""

import time
from collections.abc import Callable, Iterator
from datetime import datetime, timedelta
from typing import Any

import requests

from photowall.config import get_api_base_url
from photowall.models.photo import Photo, parse_photo_list
from photowall.ui.handlers.error import ApiError, NetworkError, ValidationError
from ..logging_config import get_logger, log_performance

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int], None]

UPLOAD_CHUNK_SIZE = 64 * 1024


class UploadProgress:
    """Helper class for tracking upload progress."""

    def __init__(self, total_bytes: int, filename: str = ""):
        self.total_bytes = total_bytes
        self.uploaded_bytes = 0
        self.filename = filename
        self.start_time = datetime.now()
        self.status = "pending"

    def update(self, uploaded_bytes: int, status: str = "uploading") -> None:
        """Update progress information."""
        self.uploaded_bytes = uploaded_bytes
        self.status = status

    @property
    def progress_percentage(self) -> float:
        """Get progress as percentage."""
        if self.total_bytes == 0:
            return 0.0
        percentage = (self.uploaded_bytes / self.total_bytes) * 100
        return max(0.0, min(100.0, percentage))

    @property
    def elapsed_time(self) -> timedelta:
        """Get elapsed time since start."""
        return datetime.now() - self.start_time

    @property
    def upload_speed(self) -> float:
        """Get upload speed in bytes per second."""
        elapsed_seconds = self.elapsed_time.total_seconds()
        if elapsed_seconds == 0:
            return 0.0
        return self.uploaded_bytes / elapsed_seconds

    def to_dict(self) -> dict:
        """Convert progress to dictionary."""
        return {
            "filename": self.filename,
            "total_bytes": self.total_bytes,
            "uploaded_bytes": self.uploaded_bytes,
            "progress_percentage": self.progress_percentage,
            "status": self.status,
            "upload_speed": self.upload_speed,
        }


class ProgressReader:
    """
    File-like wrapper around an encoded request body.

    requests streams any object with ``read`` and ``__iter__`` and takes the
    Content-Length from ``__len__``; every read reports the running total.
    """

    def __init__(self, body: bytes, callback: ProgressCallback | None = None, chunk_size: int = UPLOAD_CHUNK_SIZE):
        self._body = body
        self._position = 0
        self._callback = callback
        self._chunk_size = chunk_size

    def __len__(self) -> int:
        return len(self._body)

    def read(self, size: int = -1) -> bytes:
        if size is None or size < 0:
            size = len(self._body) - self._position

        chunk = self._body[self._position : self._position + size]
        self._position += len(chunk)

        if chunk and self._callback is not None:
            self._callback(self._position, len(self._body))

        return chunk

    def __iter__(self) -> Iterator[bytes]:
        while True:
            chunk = self.read(self._chunk_size)
            if not chunk:
                break
            yield chunk


class PhotoApiClient:
    """Client for the photo API: list, create and delete photo records."""

    def __init__(self, base_url: str, session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    @property
    def photos_url(self) -> str:
        return f"{self.base_url}/api/photos"

    def image_url(self, filename: str) -> str:
        """Return the static URL an uploaded image is served from."""
        return f"{self.base_url}/uploads/{filename}"

    def list_photos(self) -> list[Photo]:
        """
        Fetch every photo record, in the order the API returns them.

        Raises:
            ApiError: On an error status or a malformed body
            NetworkError: If the API cannot be reached
        """
        response = self._send("list_photos", self.session.get, self.photos_url)
        photos = parse_photo_list(self._json(response))

        logger.info("photos_listed", count=len(photos))
        return photos

    def create_photo(
        self,
        file_data: bytes,
        filename: str,
        title: str,
        description: str | None = None,
        content_type: str | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> Photo:
        """
        Upload a new photo as multipart form data.

        Args:
            file_data: Raw image bytes
            filename: Name of the file the user picked
            title: Required, non-empty title
            description: Optional description, sent only when non-empty
            content_type: MIME type of the image
            progress_callback: Called with (bytes_sent, total_bytes) while the body is sent

        Returns:
            Photo: The record created by the API

        Raises:
            ValidationError: If the file is empty or the title is blank
            ApiError: On an error status or a malformed body
            NetworkError: If the API cannot be reached
        """
        if not file_data:
            raise ValidationError("No file data to upload", code="missing_file")
        if not title or not title.strip():
            raise ValidationError("Title is required", code="missing_title")

        fields: dict[str, Any] = {"title": title}
        if description:
            fields["description"] = description

        files = {"file": (filename, file_data, content_type or "application/octet-stream")}
        prepared = self.session.prepare_request(requests.Request("POST", self.photos_url, data=fields, files=files))

        body = prepared.body if isinstance(prepared.body, bytes) else str(prepared.body or "").encode("utf-8")
        prepared.body = ProgressReader(body, progress_callback)
        prepared.headers["Content-Length"] = str(len(body))

        logger.info("photo_upload_started", filename=filename, size=len(file_data), body_size=len(body))
        start_time = time.perf_counter()

        response = self._send("create_photo", self.session.send, prepared)
        photo = Photo.from_dict(self._json(response))

        duration = time.perf_counter() - start_time
        log_performance("photo_upload", duration, filename=filename, size=len(file_data), photo_id=photo.id)
        logger.info("photo_upload_completed", photo_id=photo.id, stored_as=photo.filename)
        return photo

    def delete_photo(self, photo_id: int) -> None:
        """
        Delete a photo record.

        Raises:
            ApiError: On an error status
            NetworkError: If the API cannot be reached
        """
        self._send("delete_photo", self.session.delete, f"{self.photos_url}/{photo_id}")
        logger.info("photo_deleted", photo_id=photo_id)

    def _send(self, operation: str, method: Callable[..., requests.Response], *args: Any) -> requests.Response:
        try:
            response = method(*args)
        except (requests.ConnectionError, requests.Timeout) as e:
            raise NetworkError(
                f"Could not reach photo API during {operation}: {e}",
                details={"operation": operation, "base_url": self.base_url},
                original_exception=e,
            ) from e
        except requests.RequestException as e:
            raise ApiError(
                f"Request failed during {operation}: {e}",
                details={"operation": operation},
                original_exception=e,
            ) from e

        if not response.ok:
            raise ApiError(
                f"{operation} failed with status {response.status_code}: {self._error_message(response)}",
                status_code=response.status_code,
                code=f"{operation}_failed",
                details={"operation": operation},
            )

        return response

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                "Photo API returned a body that is not valid JSON",
                status_code=response.status_code,
                code="invalid_response",
                original_exception=e,
            ) from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Extract the server's ``{"error": ...}`` message, falling back to the raw text."""
        try:
            payload = response.json()
        except ValueError:
            return response.text or response.reason or ""

        if isinstance(payload, dict) and payload.get("error"):
            return str(payload["error"])
        return response.text or ""


_api_client: PhotoApiClient | None = None


def get_api_client(base_url: str | None = None) -> PhotoApiClient:
    """
    Get the global photo API client instance.

    Args:
        base_url: API base URL (optional, uses configuration if not provided)

    Returns:
        PhotoApiClient: Global client instance
    """
    global _api_client

    if _api_client is None:
        _api_client = PhotoApiClient(base_url or get_api_base_url())

    return _api_client


def reset_api_client() -> None:
    """Drop the global client so the next call rebuilds it from configuration."""
    global _api_client
    _api_client = None
