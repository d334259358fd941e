"""Standardized error codes shared by the exception hierarchy."""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes surfaced in exceptions, logs and error envelopes."""

    GENERAL_ERROR = "GENERAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    UPSTREAM_SOFT_NOTE = "UPSTREAM_SOFT_NOTE"
    TIER_DENIED = "TIER_DENIED"

    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    TRANSPORT_TIMEOUT = "TRANSPORT_TIMEOUT"
    DECODE_ERROR = "DECODE_ERROR"

    INTERNAL_ERROR = "INTERNAL_ERROR"
