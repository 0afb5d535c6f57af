"""Configuration management for the photowall client.

Values come from environment variables first, then Streamlit secrets, then
the supplied default.
"""

import os
from typing import Any

try:
    import streamlit as st

    STREAMLIT_AVAILABLE = True
except ImportError:
    STREAMLIT_AVAILABLE = False

from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_API_URL = "http://127.0.0.1:8080"
DEFAULT_MAX_UPLOAD_SIZE = 10 * 1024 * 1024
NOTIFICATION_STYLES = ("toast", "alert")


class Config:
    """Centralized configuration management using environment variables."""

    def __init__(self):
        self._cache = {}

    def get(self, key: str, default: Any = None, cast_type: type = str) -> Any:
        """Get configuration value from environment variables or Streamlit secrets.

        Args:
            key: Configuration key
            default: Default value if not found
            cast_type: Type to cast the value to (str, int, bool, float)

        Returns:
            Configuration value cast to the specified type
        """
        cache_key = f"{key}:{cast_type.__name__}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        value = os.getenv(key)

        if value is None and STREAMLIT_AVAILABLE:
            try:
                value = st.secrets.get(key)
            except Exception:  # nosec B110
                # No secrets.toml, or not running inside Streamlit
                pass

        if value is None:
            value = default

        if value is not None:
            try:
                if cast_type is bool:
                    if isinstance(value, str):
                        value = value.lower() in ("true", "1", "yes", "on")  # type: ignore[assignment]
                    else:
                        value = bool(value)  # type: ignore[assignment]
                elif cast_type is not str:
                    value = cast_type(value)
            except (ValueError, TypeError) as e:
                logger.warning(f"Failed to cast config value '{key}' to {cast_type.__name__}: {e}")
                value = default

        self._cache[cache_key] = value
        return value

    def clear_cache(self):
        """Clear configuration cache."""
        self._cache.clear()


_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def get_env(key: str, default: Any = None, cast_type: type = str) -> Any:
    """Get environment variable with type casting."""
    return get_config().get(key, default, cast_type)


def get_api_base_url() -> str:
    """Get the photo API base URL without a trailing slash."""
    return str(get_env("PHOTOWALL_API_URL", DEFAULT_API_URL)).rstrip("/")


def get_max_upload_size() -> int:
    """Get the client-side upload size limit in bytes."""
    return int(get_env("MAX_UPLOAD_SIZE", DEFAULT_MAX_UPLOAD_SIZE, int))


def get_notification_style() -> str:
    """Get how notifications are shown: ``toast`` or ``alert``."""
    style = str(get_env("NOTIFICATION_STYLE", "toast")).lower()
    if style not in NOTIFICATION_STYLES:
        logger.warning("unknown_notification_style", style=style, fallback="toast")
        return "toast"
    return style


def get_gallery_columns() -> int:
    """Get the number of grid columns, at least one."""
    return max(1, int(get_env("GALLERY_COLUMNS", 3, int)))


def get_preview_max_size() -> int:
    """Get the bounding box edge for upload previews in pixels."""
    return int(get_env("PREVIEW_MAX_SIZE", 400, int))


def get_debug_mode() -> bool:
    """Get debug mode setting."""
    return bool(get_env("DEBUG", False, bool))
