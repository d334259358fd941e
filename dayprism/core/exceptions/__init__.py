"""Exception handling module."""

from dayprism.core.exceptions.base import (
    ConfigurationError,
    DataValidationError,
    DayPrismError,
    DecodeError,
    TransportError,
    UpstreamError,
)
from dayprism.core.exceptions.codes import ErrorCode
from dayprism.core.exceptions.messages import ErrorMessageTemplate

__all__ = [
    "DayPrismError",
    "ConfigurationError",
    "DataValidationError",
    "UpstreamError",
    "TransportError",
    "DecodeError",
    "ErrorCode",
    "ErrorMessageTemplate",
]
