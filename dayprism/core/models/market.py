"""Tier and interval enums."""

from enum import Enum


class Tier(str, Enum):
    """Upstream service tier."""

    PREMIUM = "premium"  # full output, month scoped
    FREE = "free"  # compact output, most recent window


class Interval(str, Enum):
    """Intraday sampling intervals supported upstream."""

    MINUTE_1 = "1min"
    MINUTE_5 = "5min"
    MINUTE_15 = "15min"
    MINUTE_30 = "30min"
    MINUTE_60 = "60min"

    @property
    def series_key(self) -> str:
        """Name of the payload field holding the series for this interval."""
        return f"Time Series ({self.value})"
