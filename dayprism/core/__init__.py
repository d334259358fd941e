"""dayprism core: configuration, models, classification, aggregation and tiered fetching."""

from dayprism.core.config import ConfigManager, DayPrismConfig
from dayprism.core.models import DayAggregate, RawObservation, Tier, TimeSeries

__all__ = [
    "ConfigManager",
    "DayPrismConfig",
    "DayAggregate",
    "RawObservation",
    "Tier",
    "TimeSeries",
]
