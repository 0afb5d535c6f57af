"""
Services module for the photowall client.

- PhotoApiClient: HTTP client for the external photo API
- UploadProgress: byte-level upload progress tracking
- build_preview: local upload previews rendered with Pillow
"""

from .api_client import PhotoApiClient, ProgressReader, UploadProgress, get_api_client, reset_api_client
from .image_preview import build_preview

__all__ = [
    "PhotoApiClient",
    "ProgressReader",
    "UploadProgress",
    "get_api_client",
    "reset_api_client",
    "build_preview",
]
