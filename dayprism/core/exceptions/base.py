"""dayprism core exception classes."""

from typing import Any

from dayprism.core.exceptions.codes import ErrorCode


class DayPrismError(Exception):
    """Base exception for dayprism."""

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.GENERAL_ERROR.value,
        details: dict[str, Any] | None = None,
    ):
        """Initialize the exception.

        Args:
            message: human readable message
            error_code: machine readable error code
            details: extra context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ConfigurationError(DayPrismError):
    """Required configuration (such as the upstream API key) is missing or invalid."""

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = dict(details or {})
        if setting:
            super_details["setting"] = setting
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR.value, super_details)
        self.setting = setting


class DataValidationError(DayPrismError):
    """Inbound input failed validation."""

    def __init__(
        self,
        message: str,
        validation_errors: dict[str, Any] | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = dict(details or {})
        if validation_errors:
            super_details["validation_errors"] = validation_errors
        super().__init__(message, ErrorCode.VALIDATION_ERROR.value, super_details)
        self.validation_errors = validation_errors or {}


class UpstreamError(DayPrismError):
    """The upstream provider could not deliver a usable series."""

    def __init__(
        self,
        message: str,
        provider_name: str,
        error_code: str = ErrorCode.UPSTREAM_ERROR.value,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, error_code, details)
        self.provider_name = provider_name


class TransportError(UpstreamError):
    """Network level failure: non-success status, timeout or connection error."""

    def __init__(
        self,
        message: str,
        provider_name: str,
        status_code: int | None = None,
        timeout: bool = False,
        details: dict[str, Any] | None = None,
    ):
        super_details = dict(details or {})
        if status_code is not None:
            super_details["status_code"] = status_code
        error_code = ErrorCode.TRANSPORT_TIMEOUT if timeout else ErrorCode.TRANSPORT_ERROR
        super().__init__(message, provider_name, error_code.value, super_details)
        self.status_code = status_code
        self.timeout = timeout


class DecodeError(UpstreamError):
    """The upstream payload could not be decoded into the expected structure."""

    def __init__(
        self,
        message: str,
        provider_name: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, provider_name, ErrorCode.DECODE_ERROR.value, details)
