"""
Models module for the photowall client.

- Photo: read-only photo record as returned by the photo API
"""

from .photo import Photo, parse_photo_list, parse_timestamp

__all__ = [
    "Photo",
    "parse_photo_list",
    "parse_timestamp",
]
