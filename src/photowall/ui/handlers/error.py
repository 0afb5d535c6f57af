"""
Centralized error handling and classification for the photowall client.

Every failure in this client is local: API and network errors are caught by
the handler that issued the request, classified here, logged, and turned into
a user-facing message.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from photowall.logging_config import get_logger, log_error

logger = get_logger(__name__)


class ErrorCategory(Enum):
    """Error categories for classification and handling."""

    API = "api"
    NETWORK = "network"
    UPLOAD = "upload"
    VALIDATION = "validation"
    SYSTEM = "system"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class ErrorInfo:
    """Structured error information."""

    category: ErrorCategory
    severity: ErrorSeverity
    code: str
    message: str
    user_message: str
    details: dict[str, Any]
    timestamp: datetime
    recoverable: bool = True
    retry_suggested: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert error info to dictionary."""
        return {
            "category": self.category.value,
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "user_message": self.user_message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
            "recoverable": self.recoverable,
            "retry_suggested": self.retry_suggested,
        }


USER_MESSAGES = {
    ErrorCategory.API: "服务器返回了错误。",
    ErrorCategory.NETWORK: "网络错误，请检查连接。",
    ErrorCategory.UPLOAD: "上传失败",
    ErrorCategory.VALIDATION: "输入内容有误，请检查后重试。",
    ErrorCategory.SYSTEM: "系统错误，请联系管理员。",
    ErrorCategory.UNKNOWN: "发生未知错误。",
}


class PhotoWallError(Exception):
    """
    Base exception class for the photowall client.

    Subclasses fix the category, severity and recovery hints as class
    attributes; keyword arguments override them for a single error.
    """

    category = ErrorCategory.UNKNOWN
    severity = ErrorSeverity.MEDIUM
    default_code: str | None = None
    recoverable = True
    retry_suggested = False

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
        *,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity | None = None,
        recoverable: bool | None = None,
        retry_suggested: bool | None = None,
    ):
        super().__init__(message)
        if category is not None:
            self.category = category
        if severity is not None:
            self.severity = severity
        if recoverable is not None:
            self.recoverable = recoverable
        if retry_suggested is not None:
            self.retry_suggested = retry_suggested

        self.code = code or self.default_code or f"{self.category.value}_error"
        self.user_message = user_message or USER_MESSAGES.get(self.category, "发生错误。")
        self.details = details or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now()

        self._log_error()

    def _log_error(self) -> None:
        error_context = {
            "category": self.category.value,
            "severity": self.severity.value,
            "code": self.code,
            "recoverable": self.recoverable,
            "retry_suggested": self.retry_suggested,
            **self.details,
        }

        if self.original_exception:
            error_context["original_exception"] = str(self.original_exception)

        log_error(self, error_context)

    def get_error_info(self) -> ErrorInfo:
        """Get structured error information."""
        return ErrorInfo(
            category=self.category,
            severity=self.severity,
            code=self.code,
            message=str(self),
            user_message=self.user_message,
            details=self.details,
            timestamp=self.timestamp,
            recoverable=self.recoverable,
            retry_suggested=self.retry_suggested,
        )


class ApiError(PhotoWallError):
    """The photo API answered with an error status or an unreadable body."""

    category = ErrorCategory.API

    def __init__(self, message: str, status_code: int | None = None, **kwargs: Any):
        self.status_code = status_code
        kwargs["details"] = {**(kwargs.get("details") or {}), "status_code": status_code}

        # No status means the body was unreadable; 5xx means the server failed
        server_side = status_code is None or status_code >= 500
        kwargs.setdefault("severity", ErrorSeverity.HIGH if server_side else ErrorSeverity.MEDIUM)
        kwargs.setdefault("retry_suggested", server_side)
        super().__init__(message, **kwargs)


class NetworkError(PhotoWallError):
    """The photo API could not be reached."""

    category = ErrorCategory.NETWORK
    retry_suggested = True


class UploadError(PhotoWallError):
    """The upload request broke off before the API answered."""

    category = ErrorCategory.UPLOAD
    default_code = "upload_failed"
    retry_suggested = True


class ValidationError(PhotoWallError):
    """Client-side validation errors; nothing was sent to the API."""

    category = ErrorCategory.VALIDATION
    severity = ErrorSeverity.LOW
    default_code = "validation_failed"


class PhotoWallSystemError(PhotoWallError):
    """System-related errors."""

    category = ErrorCategory.SYSTEM
    severity = ErrorSeverity.CRITICAL
    recoverable = False


class ErrorHandler:
    """Classifies exceptions and keeps per-code occurrence counts."""

    def __init__(self) -> None:
        self.error_counts: dict[str, int] = {}
        self.logger = get_logger(__name__)

    def handle_error(
        self,
        error: Exception | PhotoWallError,
        context: dict[str, Any] | None = None,
    ) -> ErrorInfo:
        """
        Handle and classify errors.

        Args:
            error: Exception to handle
            context: Additional context information

        Returns:
            ErrorInfo: Structured error information
        """
        context = context or {}

        if isinstance(error, PhotoWallError):
            error_info = error.get_error_info()
        else:
            error_info = self._classify_error(error, context).get_error_info()

        self._track_error(error_info.code)
        return error_info

    def _classify_error(self, error: Exception, context: dict[str, Any]) -> PhotoWallError:
        """Wrap a foreign exception in the matching PhotoWallError."""
        error_type = type(error).__name__
        error_message = str(error)
        lowered = error_message.lower()
        details = {"original_type": error_type, **context}

        if any(keyword in lowered for keyword in ["connection", "timeout", "unreachable", "network"]):
            return NetworkError(message=error_message, details=details, original_exception=error)

        if any(keyword in lowered for keyword in ["upload", "file size", "too large", "multipart"]):
            return UploadError(message=error_message, details=details, original_exception=error)

        if any(keyword in lowered for keyword in ["validation", "invalid", "required", "missing"]):
            return ValidationError(message=error_message, details=details, original_exception=error)

        if any(keyword in lowered for keyword in ["status", "server", "http", "json"]):
            return ApiError(message=error_message, details=details, original_exception=error)

        if error_type in ["SystemError", "MemoryError", "OSError"]:
            return PhotoWallSystemError(message=error_message, details=details, original_exception=error)

        return PhotoWallError(
            message=error_message,
            category=ErrorCategory.UNKNOWN,
            severity=ErrorSeverity.MEDIUM,
            details=details,
            original_exception=error,
        )

    def _track_error(self, error_code: str) -> None:
        self.error_counts[error_code] = self.error_counts.get(error_code, 0) + 1

        if self.error_counts[error_code] % 10 == 0:
            self.logger.warning("frequent_error_detected", error_code=error_code, count=self.error_counts[error_code])

    def get_error_statistics(self) -> dict[str, int]:
        """Get error occurrence statistics."""
        return self.error_counts.copy()


error_handler = ErrorHandler()


def handle_error(
    error: Exception | PhotoWallError,
    context: dict[str, Any] | None = None,
) -> ErrorInfo:
    """Classify an error with the global handler."""
    return error_handler.handle_error(error, context)
