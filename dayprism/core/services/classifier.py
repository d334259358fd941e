"""
Classification of decoded upstream payloads.

A payload may carry several advisory fields at once, so the rules below are
checked in a fixed priority order and the first match wins:

1. ``Error Message``                     -> :class:`HardError`
2. ``Information`` mentioning premium    -> :class:`TierDenied`
3. ``Note``                              -> :class:`SoftNote`
4. missing or empty series               -> :class:`Empty`
5. otherwise                             -> :class:`Valid`
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from dayprism.core.exceptions import DecodeError
from dayprism.core.models import (
    ClassifiedResponse,
    Empty,
    HardError,
    Interval,
    RawObservation,
    SeriesMetadata,
    SoftNote,
    TierDenied,
    TimeSeries,
    Valid,
)

ERROR_FIELD = "Error Message"
INFORMATION_FIELD = "Information"
NOTE_FIELD = "Note"
METADATA_FIELD = "Meta Data"
PREMIUM_MARKER = "premium"
DEFAULT_SERIES_KEY = Interval.MINUTE_15.series_key

_Rule = Callable[[Mapping[str, Any], str], ClassifiedResponse | None]


def decode_payload(body: str | bytes | bytearray, *, provider_name: str = "alpha_vantage") -> dict[str, Any]:
    """Decode a raw response body into a JSON object.

    Raises:
        DecodeError: the body is not valid JSON or its top level is not an object.
    """
    try:
        payload = json.loads(body)
    except ValueError as e:
        raise DecodeError(
            f"Failed to decode {provider_name} response: {e}",
            provider_name=provider_name,
            details={"body_length": len(body)},
        ) from e
    if not isinstance(payload, dict):
        raise DecodeError(
            f"Unexpected {provider_name} response: expected a JSON object, got {type(payload).__name__}",
            provider_name=provider_name,
        )
    return payload


def _advisory_text(payload: Mapping[str, Any], field_name: str) -> str | None:
    value = payload.get(field_name)
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    return text if text.strip() else None


def _metadata(payload: Mapping[str, Any]) -> SeriesMetadata | None:
    raw = payload.get(METADATA_FIELD)
    if not isinstance(raw, Mapping):
        return None
    try:
        return SeriesMetadata.model_validate(dict(raw))
    except ValidationError:
        return None


def _observation(values: Any) -> RawObservation:
    if isinstance(values, Mapping):
        return RawObservation.model_validate(dict(values))
    return RawObservation()


def _hard_error(payload: Mapping[str, Any], series_key: str) -> ClassifiedResponse | None:
    text = _advisory_text(payload, ERROR_FIELD)
    return HardError(text) if text else None


def _tier_denied(payload: Mapping[str, Any], series_key: str) -> ClassifiedResponse | None:
    text = _advisory_text(payload, INFORMATION_FIELD)
    if text and PREMIUM_MARKER in text.lower():
        return TierDenied(text)
    return None


def _soft_note(payload: Mapping[str, Any], series_key: str) -> ClassifiedResponse | None:
    text = _advisory_text(payload, NOTE_FIELD)
    return SoftNote(text) if text else None


def _empty_series(payload: Mapping[str, Any], series_key: str) -> ClassifiedResponse | None:
    raw_series = payload.get(series_key)
    if not isinstance(raw_series, Mapping) or not raw_series:
        return Empty(metadata=_metadata(payload))
    return None


def _valid_series(payload: Mapping[str, Any], series_key: str) -> ClassifiedResponse:
    series: TimeSeries = {str(ts): _observation(values) for ts, values in payload[series_key].items()}
    return Valid(series=series, metadata=_metadata(payload))


_RULES: tuple[_Rule, ...] = (_hard_error, _tier_denied, _soft_note, _empty_series, _valid_series)


def classify(payload: Mapping[str, Any], series_key: str = DEFAULT_SERIES_KEY) -> ClassifiedResponse:
    """Classify a decoded payload; never raises for unexpected shapes."""
    for rule in _RULES:
        result = rule(payload, series_key)
        if result is not None:
            return result
    raise AssertionError("unreachable: the last rule always matches")


def classify_body(body: str | bytes | bytearray, series_key: str = DEFAULT_SERIES_KEY) -> ClassifiedResponse:
    """Decode ``body`` and classify it.

    Raises:
        DecodeError: the body could not be decoded.
    """
    return classify(decode_payload(body), series_key)
