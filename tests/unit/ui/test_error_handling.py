"""
Tests for error classification and display.
"""

from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
from streamlit.runtime.scriptrunner_utils.exceptions import RerunException, StopException

from photowall.ui.components.error_display import ErrorDisplayManager, error_context
from photowall.ui.handlers.error import (
    ApiError,
    ErrorCategory,
    ErrorHandler,
    ErrorInfo,
    ErrorSeverity,
    NetworkError,
    PhotoWallError,
    PhotoWallSystemError,
    UploadError,
    ValidationError,
)


class TestErrorInfo:
    """Test ErrorInfo dataclass."""

    def test_to_dict(self):
        timestamp = datetime(2024, 1, 5, 9, 3, 0)
        info = ErrorInfo(
            category=ErrorCategory.API,
            severity=ErrorSeverity.HIGH,
            code="list_failed",
            message="Server returned 500",
            user_message="获取照片失败",
            details={"status_code": 500},
            timestamp=timestamp,
        )

        result = info.to_dict()

        assert result["category"] == "api"
        assert result["severity"] == "high"
        assert result["code"] == "list_failed"
        assert result["timestamp"] == "2024-01-05T09:03:00"
        assert result["recoverable"] is True
        assert result["retry_suggested"] is False


class TestPhotoWallErrors:
    """Test the exception hierarchy."""

    def test_base_error_defaults(self):
        error = PhotoWallError("something odd")

        assert error.category == ErrorCategory.UNKNOWN
        assert error.code == "unknown_error"
        assert error.user_message == "发生未知错误。"

    def test_api_error_server_side(self):
        error = ApiError("Server returned 503", status_code=503)

        assert error.status_code == 503
        assert error.severity == ErrorSeverity.HIGH
        assert error.retry_suggested is True
        assert error.details["status_code"] == 503

    def test_api_error_client_side(self):
        error = ApiError("Missing file or title", status_code=400, code="create_failed")

        assert error.severity == ErrorSeverity.MEDIUM
        assert error.retry_suggested is False
        assert error.code == "create_failed"

    def test_network_error(self):
        error = NetworkError("refused")

        assert error.category == ErrorCategory.NETWORK
        assert error.retry_suggested is True

    def test_validation_error_keeps_user_message(self):
        error = ValidationError("title empty", user_message="请选择文件并填写标题")

        assert error.severity == ErrorSeverity.LOW
        assert error.get_error_info().user_message == "请选择文件并填写标题"

    def test_system_error_not_recoverable(self):
        assert PhotoWallSystemError("disk gone").recoverable is False

    def test_upload_error_message(self):
        assert UploadError("stream broke").user_message == "上传失败"


class TestErrorHandler:
    """Test ErrorHandler classification and statistics."""

    def setup_method(self):
        self.handler = ErrorHandler()

    def test_photowall_error_passthrough(self):
        info = self.handler.handle_error(ApiError("boom", status_code=500, code="list_failed"))

        assert info.code == "list_failed"
        assert info.category == ErrorCategory.API

    @pytest.mark.parametrize(
        "message,category",
        [
            ("Connection refused", ErrorCategory.NETWORK),
            ("Upload stream closed", ErrorCategory.UPLOAD),
            ("invalid literal for int()", ErrorCategory.VALIDATION),
            ("server sent garbage json", ErrorCategory.API),
            ("something else entirely", ErrorCategory.UNKNOWN),
        ],
    )
    def test_classifies_foreign_exceptions(self, message, category):
        info = self.handler.handle_error(RuntimeError(message))

        assert info.category == category

    def test_memory_error_is_system(self):
        info = self.handler.handle_error(MemoryError("out of memory"))

        assert info.category == ErrorCategory.SYSTEM

    def test_context_lands_in_details(self):
        info = self.handler.handle_error(RuntimeError("odd"), {"operation": "render"})

        assert info.details["operation"] == "render"
        assert info.details["original_type"] == "RuntimeError"

    def test_statistics(self):
        self.handler.handle_error(NetworkError("a"))
        self.handler.handle_error(NetworkError("b"))
        self.handler.handle_error(ApiError("c", status_code=500))

        assert self.handler.get_error_statistics() == {"network_error": 2, "api_error": 1}


class TestErrorDisplayManager:
    """Test ErrorDisplayManager."""

    @pytest.mark.parametrize(
        "severity,alert",
        [
            (ErrorSeverity.LOW, "info"),
            (ErrorSeverity.MEDIUM, "warning"),
            (ErrorSeverity.HIGH, "error"),
            (ErrorSeverity.CRITICAL, "error"),
        ],
    )
    def test_alert_type(self, severity, alert):
        assert ErrorDisplayManager()._get_alert_type(severity) == alert

    @patch("photowall.ui.components.error_display.st")
    def test_display_error_shows_user_message(self, mock_st):
        info = ApiError("Server returned 500", status_code=500).get_error_info()

        ErrorDisplayManager().display_error(info)

        mock_st.error.assert_called_once_with(info.user_message)


class TestErrorContext:
    """Test the render error context manager."""

    @patch("photowall.ui.components.error_display.error_display_manager")
    def test_suppresses_and_displays_errors(self, mock_manager):
        with error_context("照片墙加载时发生错误"):
            raise ValueError("render failed")

        mock_manager.display_exception.assert_called_once()
        kwargs = mock_manager.display_exception.call_args.kwargs
        assert isinstance(kwargs["exception"], ValueError)
        assert kwargs["context"] == {"context_message": "照片墙加载时发生错误"}

    @patch("photowall.ui.components.error_display.error_display_manager")
    def test_no_error(self, mock_manager):
        with error_context():
            pass

        mock_manager.display_exception.assert_not_called()

    @patch("photowall.ui.components.error_display.error_display_manager")
    def test_rerun_propagates(self, mock_manager):
        with pytest.raises(RerunException):
            with error_context():
                raise RerunException(MagicMock())

        mock_manager.display_exception.assert_not_called()

    @patch("photowall.ui.components.error_display.error_display_manager")
    def test_stop_propagates(self, mock_manager):
        with pytest.raises(StopException):
            with error_context():
                raise StopException()

        mock_manager.display_exception.assert_not_called()

    def test_keyboard_interrupt_propagates(self):
        with pytest.raises(KeyboardInterrupt):
            with error_context():
                raise KeyboardInterrupt()
