"""
Photo record model for the photowall client.

Records are owned by the photo API; the client only ever holds a read-only
copy parsed from the API's JSON.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from photowall.ui.handlers.error import ApiError, ValidationError

REQUIRED_FIELDS = ("id", "filename", "title", "upload_time")


def parse_timestamp(value: Any) -> datetime:
    """
    Parse an API timestamp.

    Accepts datetime objects and ISO-8601 strings with or without a ``Z``
    suffix, offset, or fractional seconds.

    Raises:
        ValidationError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value

    if not isinstance(value, str) or not value:
        raise ValidationError(f"Invalid upload_time: {value!r}", code="invalid_timestamp")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise ValidationError(f"Invalid upload_time: {value!r}", code="invalid_timestamp", original_exception=e) from e


@dataclass(frozen=True)
class Photo:
    """
    One uploaded image and its metadata as reported by the photo API.

    ``filename`` is the server-assigned storage key, not the name of the file
    the user picked.
    """

    id: int
    filename: str
    title: str
    description: str | None
    upload_time: datetime

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Photo":
        """
        Build a Photo from an API JSON object.

        Args:
            data: Decoded JSON object

        Returns:
            Photo instance

        Raises:
            ValidationError: If a required field is missing or malformed
        """
        if not isinstance(data, dict):
            raise ValidationError(f"Invalid photo record: {data!r}", code="invalid_photo_record")

        missing = [field for field in REQUIRED_FIELDS if data.get(field) in (None, "")]
        if missing:
            raise ValidationError(
                f"Photo record missing required fields: {', '.join(missing)}",
                code="invalid_photo_record",
                details={"missing_fields": missing},
            )

        try:
            photo_id = int(data["id"])
        except (TypeError, ValueError) as e:
            raise ValidationError(
                f"Invalid photo id: {data['id']!r}", code="invalid_photo_record", original_exception=e
            ) from e

        return cls(
            id=photo_id,
            filename=str(data["filename"]),
            title=str(data["title"]),
            description=data.get("description") or None,
            upload_time=parse_timestamp(data["upload_time"]),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the API's JSON shape."""
        return {
            "id": self.id,
            "filename": self.filename,
            "title": self.title,
            "description": self.description,
            "upload_time": self.upload_time.isoformat(),
        }


def parse_photo_list(payload: Any) -> list[Photo]:
    """
    Parse the list endpoint's body, keeping the server's order.

    Raises:
        ApiError: If the body is not a JSON array or holds a malformed record
    """
    if not isinstance(payload, list):
        raise ApiError(f"Expected a list of photos, got {type(payload).__name__}", code="invalid_response")

    try:
        return [Photo.from_dict(item) for item in payload]
    except ValidationError as e:
        raise ApiError(f"Malformed photo record in response: {e}", code="invalid_response", original_exception=e) from e
