"""Standardized error message templates."""

from typing import Any

from dayprism.core.exceptions.codes import ErrorCode


class ErrorMessageTemplate:
    """Error message template registry."""

    _templates: dict[ErrorCode, str] = {
        ErrorCode.GENERAL_ERROR: "An unknown error occurred",
        ErrorCode.VALIDATION_ERROR: "Validation failed: {details}",
        ErrorCode.CONFIGURATION_ERROR: "Configuration error: {details}",
        ErrorCode.UPSTREAM_ERROR: "Upstream provider {provider} returned an error",
        ErrorCode.UPSTREAM_SOFT_NOTE: "Upstream provider {provider} declined the request",
        ErrorCode.TIER_DENIED: "Upstream provider {provider} denied every available tier",
        ErrorCode.TRANSPORT_ERROR: "Upstream provider {provider} could not be reached",
        ErrorCode.TRANSPORT_TIMEOUT: "Upstream provider {provider} timed out",
        ErrorCode.DECODE_ERROR: "Upstream provider {provider} returned an undecodable payload",
        ErrorCode.INTERNAL_ERROR: "An error occurred while processing your request",
    }

    @classmethod
    def get_message(cls, error_code: ErrorCode, **kwargs: Any) -> str:
        """Return the formatted template for ``error_code``.

        Falls back to the generic message when a template variable is missing.
        """
        template = cls._templates.get(error_code, cls._templates[ErrorCode.GENERAL_ERROR])
        try:
            return template.format(**kwargs)
        except KeyError:
            return f"{cls._templates[ErrorCode.GENERAL_ERROR]} (error code: {error_code.value})"
