from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from catch_chronicles.services.condition_factor import assess_catch


class FishCatchBase(BaseModel):
    fish_type: str = Field(max_length=255)
    caught_on: str = Field(default="", max_length=255)
    length: float | None = Field(default=None, ge=0)
    weight: float | None = Field(default=None, ge=0)

    @field_validator("fish_type")
    @classmethod
    def _require_fish_type(cls, v: str) -> str:
        value = (v or "").strip()
        if not value:
            raise ValueError("fish type is required")
        return value

    @field_validator("caught_on", mode="before")
    @classmethod
    def _strip_caught_on(cls, v) -> str:
        return "" if v is None else str(v).strip()


class FishCatchCreate(FishCatchBase):
    pass


class FishCatchUpsert(FishCatchBase):
    # Present for catches that already exist on the trip; absent for new rows.
    id: int | None = None


class FishCatchUpdate(BaseModel):
    fish_type: str | None = Field(default=None, max_length=255)
    caught_on: str | None = Field(default=None, max_length=255)
    length: float | None = Field(default=None, ge=0)
    weight: float | None = Field(default=None, ge=0)

    @field_validator("fish_type")
    @classmethod
    def _reject_blank_fish_type(cls, v: str | None) -> str | None:
        if v is None:
            return None
        value = v.strip()
        if not value:
            raise ValueError("fish type cannot be blank")
        return value


class FishCatchRead(FishCatchBase):
    id: int
    trip_id: int
    condition_factor: float | None = None
    condition: str | None = None

    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode="after")
    def _fill_condition(self) -> "FishCatchRead":
        assessment = assess_catch(self.fish_type, self.length, self.weight)
        if assessment is not None:
            self.condition_factor = round(assessment.factor, 4)
            self.condition = assessment.condition
        return self


class CatchTripSummary(BaseModel):
    id: int
    location: str
    date: dt.date
    image_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CatchWithTripRead(FishCatchRead):
    trip: CatchTripSummary
