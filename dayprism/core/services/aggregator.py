"""Day bucketing of intraday observations."""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import date, datetime

from loguru import logger

from dayprism.core.models import DayAggregate, RawObservation


def parse_float(value: str | None) -> float | None:
    """Parse a finite float, ``None`` when the text is not one."""
    if value is None or "_" in value:
        return None
    try:
        number = float(value.strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_int(value: str | None) -> int | None:
    """Parse an integer, ``None`` when the text is not one."""
    if value is None or "_" in value:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def mean_of_parseable(values: Iterable[str | None]) -> float:
    """Mean of the values that parse as floats, 0.0 when none do."""
    numbers = [n for n in map(parse_float, values) if n is not None]
    if not numbers:
        return 0.0
    return sum(numbers) / len(numbers)


def sum_of_parseable(values: Iterable[str | None]) -> int:
    """Sum of the values that parse as integers; the others count as 0."""
    return sum(n for n in map(parse_int, values) if n is not None)


def day_key(timestamp: str) -> str | None:
    """Calendar date of ``timestamp`` as ``YYYY-MM-DD``.

    Any ISO 8601 date or datetime is accepted; otherwise the leading token is
    used if it is an ISO date. ``None`` means no date can be derived.
    """
    text = timestamp.strip()
    try:
        return datetime.fromisoformat(text).date().isoformat()
    except ValueError:
        pass

    parts = text.split(maxsplit=1)
    if not parts:
        return None
    try:
        return date.fromisoformat(parts[0]).isoformat()
    except ValueError:
        return None


def aggregate(series: Mapping[str, RawObservation]) -> list[DayAggregate]:
    """Reduce a time series into one :class:`DayAggregate` per calendar day, oldest first."""
    groups: dict[str, list[RawObservation]] = defaultdict(list)
    skipped = 0
    for timestamp, observation in series.items():
        key = day_key(timestamp)
        if key is None:
            skipped += 1
            continue
        groups[key].append(observation)

    if skipped:
        logger.warning("Skipped {count} observations with unparseable timestamps", count=skipped)

    return [
        DayAggregate(
            day=day,
            low_average=mean_of_parseable(o.low for o in observations),
            high_average=mean_of_parseable(o.high for o in observations),
            volume=sum_of_parseable(o.volume for o in observations),
        )
        for day, observations in sorted(groups.items())
    ]
