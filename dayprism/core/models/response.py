"""Classified upstream responses and fetch bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from dayprism.core.models.base import SeriesMetadata, TimeSeries
from dayprism.core.models.market import Tier


class ResponseKind(str, Enum):
    """The five disjoint outcomes of one upstream response."""

    HARD_ERROR = "hard_error"
    SOFT_NOTE = "soft_note"
    TIER_DENIED = "tier_denied"
    EMPTY = "empty"
    VALID = "valid"


@dataclass(frozen=True)
class ClassifiedResponse:
    """Base of the classified response variants."""

    kind: ResponseKind = field(init=False)

    @property
    def has_series(self) -> bool:
        return self.kind in (ResponseKind.VALID, ResponseKind.EMPTY)


@dataclass(frozen=True)
class HardError(ClassifiedResponse):
    message: str
    kind: ResponseKind = field(default=ResponseKind.HARD_ERROR, init=False)


@dataclass(frozen=True)
class SoftNote(ClassifiedResponse):
    message: str
    kind: ResponseKind = field(default=ResponseKind.SOFT_NOTE, init=False)


@dataclass(frozen=True)
class TierDenied(ClassifiedResponse):
    message: str
    kind: ResponseKind = field(default=ResponseKind.TIER_DENIED, init=False)


@dataclass(frozen=True)
class Empty(ClassifiedResponse):
    metadata: SeriesMetadata | None = None
    kind: ResponseKind = field(default=ResponseKind.EMPTY, init=False)

    @property
    def series(self) -> TimeSeries:
        return {}


@dataclass(frozen=True)
class Valid(ClassifiedResponse):
    series: TimeSeries
    metadata: SeriesMetadata | None = None
    kind: ResponseKind = field(default=ResponseKind.VALID, init=False)


@dataclass(frozen=True)
class FetchAttempt:
    """One upstream call; ``outcome`` is ``None`` when the transport failed."""

    tier: Tier
    url: str
    outcome: ResponseKind | None = None


@dataclass(frozen=True)
class FetchResult:
    """Series resolved by the tiered fetch together with the attempts made."""

    symbol: str
    tier: Tier
    series: TimeSeries
    attempts: tuple[FetchAttempt, ...] = ()
    metadata: SeriesMetadata | None = None

    @property
    def degraded(self) -> bool:
        return self.tier is Tier.FREE
