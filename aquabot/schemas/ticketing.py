"""Tolerant models for the ticketing gateway.

The gateway is not consistent about field names, so every field lists the
spellings seen in its responses.
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

SESSION_WRAPPER_KEYS = ("result", "data", "sessions")


def _first_string(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


class SessionSlot(BaseModel):
    session_time: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("sessionTime", "SessionTime", "time", "Time", "name", "Name", "title", "Title"),
    )
    start_time: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("startTime", "StartTime", "timeStart", "TimeStart"),
    )
    end_time: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("endTime", "EndTime", "timeEnd", "TimeEnd"),
    )
    places_free: int = Field(
        default=0,
        validation_alias=AliasChoices(
            "availableCount", "AvailableCount", "placesFree", "PlacesFree", "free", "Free", "available", "Available"
        ),
    )
    places_total: int = Field(
        default=0,
        validation_alias=AliasChoices(
            "totalCount", "TotalCount", "placesTotal", "PlacesTotal", "total", "Total", "capacity", "Capacity"
        ),
    )

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("session_time", "start_time", "end_time", mode="before")
    @classmethod
    def only_strings(cls, value: Any) -> Optional[str]:
        return _first_string(value)

    @field_validator("places_free", "places_total", mode="before")
    @classmethod
    def only_numbers(cls, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return 0
        return int(value)

    @property
    def label(self) -> str:
        if self.session_time:
            return self.session_time
        if self.start_time and self.end_time:
            return f"{self.start_time}-{self.end_time}"
        return "Время не указано"


class Tariff(BaseModel):
    name: str = Field(default="", validation_alias=AliasChoices("Name", "name"))
    price: Decimal = Field(default=Decimal(0), validation_alias=AliasChoices("Price", "price"))

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("name", mode="before")
    @classmethod
    def name_or_empty(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""


class ParkLoad(BaseModel):
    count: int = Field(default=0, validation_alias=AliasChoices("Count", "count"))
    load: int = Field(default=0, validation_alias=AliasChoices("Load", "load"))

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


def extract_records(payload: Any) -> list[dict[str, Any]]:
    """Find the list of records in a bare-array or wrapped-object response."""
    if isinstance(payload, list):
        return [item for item in payload if isinstance(item, dict)]
    if not isinstance(payload, dict):
        return []

    for key in SESSION_WRAPPER_KEYS:
        value = payload.get(key)
        if isinstance(value, list):
            return [item for item in value if isinstance(item, dict)]

    for value in payload.values():
        if isinstance(value, list) and value and isinstance(value[0], dict):
            return [item for item in value if isinstance(item, dict)]

    return []
