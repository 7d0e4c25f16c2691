from __future__ import annotations

import datetime as dt
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from catch_chronicles.schemas.catch import FishCatchCreate, FishCatchRead, FishCatchUpsert


TimeOfDay = Literal["Morning", "Afternoon", "Evening", "Night"]


def _is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


class TripBase(BaseModel):
    date: dt.date
    time_of_day: TimeOfDay
    location: str = Field(max_length=255)
    weather: str = Field(max_length=100)
    notes: str | None = None
    water_temperature: float | None = None
    air_temperature: float | None = None

    @field_validator("location", "weather")
    @classmethod
    def _require_text(cls, v: str, info) -> str:
        value = (v or "").strip()
        if not value:
            raise ValueError(f"{info.field_name} is required")
        return value

    @field_validator("notes", mode="before")
    @classmethod
    def _blank_notes_to_none(cls, v):
        if _is_blank(v):
            return None
        return str(v).strip()


class TripCreate(TripBase):
    fish_catches: list[FishCatchCreate] = Field(default_factory=list)

    @field_validator("fish_catches", mode="before")
    @classmethod
    def _drop_empty_rows(cls, v):
        # The logbook form always submits at least one catch row; untouched rows are ignored.
        if v is None:
            return []
        if isinstance(v, list):
            return [
                item
                for item in v
                if not (isinstance(item, dict) and _is_blank(item.get("fish_type")) and _is_blank(item.get("caught_on")))
            ]
        return v


class TripUpdate(TripBase):
    # None leaves stored catches untouched; a list replaces them (upsert by id, delete the rest).
    fish_catches: list[FishCatchUpsert] | None = None


class TripRead(TripBase):
    id: int
    user_id: int
    image_url: str | None = None
    catch_count: int = 0
    fish_catches: list[FishCatchRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class TripImageResponse(BaseModel):
    trip_id: int
    image_url: str
