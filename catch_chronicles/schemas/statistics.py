from __future__ import annotations

from pydantic import BaseModel, Field


class FrequencyItem(BaseModel):
    name: str
    count: int


class TimeSeriesPoint(BaseModel):
    label: str
    count: int


class LargestFish(BaseModel):
    fish_type: str
    length: float | None = None
    weight: float | None = None


class FishingStatistics(BaseModel):
    total_trips: int = 0
    total_catches: int = 0
    average_length: float = 0.0
    average_weight: float = 0.0
    total_weight: float = 0.0
    most_used_fly: str = "N/A"
    most_common_species: str = "N/A"
    best_time_of_day: str = "N/A"
    best_weather: str = "N/A"
    favorite_location: str = "N/A"
    largest_fish: LargestFish | None = None
    trips_over_time: list[TimeSeriesPoint] = Field(default_factory=list)
    top_species: list[FrequencyItem] = Field(default_factory=list)
    top_locations: list[FrequencyItem] = Field(default_factory=list)


class ConditionFactorResponse(BaseModel):
    length_cm: float
    weight_g: float
    factor: float
    condition: str
