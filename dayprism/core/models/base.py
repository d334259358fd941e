"""Series data models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class RawObservation(BaseModel):
    """One upstream sample; every field is kept as the raw string sent upstream."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    open: str | None = Field(default=None, alias="1. open")
    high: str | None = Field(default=None, alias="2. high")
    low: str | None = Field(default=None, alias="3. low")
    close: str | None = Field(default=None, alias="4. close")
    volume: str | None = Field(default=None, alias="5. volume")

    @field_validator("open", "high", "low", "close", "volume", mode="before")
    @classmethod
    def coerce_to_string(cls, value: Any) -> str | None:
        """Keep values as text; upstream does not guarantee numeric encoding."""
        if value is None:
            return None
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            return str(value)
        return None


TimeSeries = dict[str, RawObservation]


class SeriesMetadata(BaseModel):
    """The upstream ``Meta Data`` block."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    information: str | None = Field(default=None, alias="1. Information")
    symbol: str | None = Field(default=None, alias="2. Symbol")
    last_refreshed: str | None = Field(default=None, alias="3. Last Refreshed")
    interval: str | None = Field(default=None, alias="4. Interval")
    output_size: str | None = Field(default=None, alias="5. Output Size")
    time_zone: str | None = Field(default=None, alias="6. Time Zone")


class DayAggregate(BaseModel):
    """Aggregate of one calendar day of intraday observations."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    day: str
    low_average: float
    high_average: float
    volume: int
