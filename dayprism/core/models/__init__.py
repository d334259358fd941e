"""Data models used across dayprism."""

from dayprism.core.models.base import DayAggregate, RawObservation, SeriesMetadata, TimeSeries
from dayprism.core.models.market import Interval, Tier
from dayprism.core.models.response import (
    ClassifiedResponse,
    Empty,
    FetchAttempt,
    FetchResult,
    HardError,
    ResponseKind,
    SoftNote,
    TierDenied,
    Valid,
)

__all__ = [
    "ClassifiedResponse",
    "DayAggregate",
    "Empty",
    "FetchAttempt",
    "FetchResult",
    "HardError",
    "Interval",
    "RawObservation",
    "ResponseKind",
    "SeriesMetadata",
    "SoftNote",
    "Tier",
    "TierDenied",
    "TimeSeries",
    "Valid",
]
