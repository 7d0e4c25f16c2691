# __init__.py
from catch_chronicles.schemas.catch import (
	CatchTripSummary,
	CatchWithTripRead,
	FishCatchCreate,
	FishCatchRead,
	FishCatchUpdate,
	FishCatchUpsert,
)
from catch_chronicles.schemas.profile import ProfileRead, ProfileUpdate
from catch_chronicles.schemas.statistics import ConditionFactorResponse, FishingStatistics, FrequencyItem, LargestFish, TimeSeriesPoint
from catch_chronicles.schemas.trip import TimeOfDay, TripCreate, TripImageResponse, TripRead, TripUpdate
from catch_chronicles.schemas.user import Token, TokenData, UserCreate, UserLogin, UserRead, UserUpdate

__all__ = [
	"CatchTripSummary",
	"CatchWithTripRead",
	"FishCatchCreate",
	"FishCatchRead",
	"FishCatchUpdate",
	"FishCatchUpsert",
	"ProfileRead",
	"ProfileUpdate",
	"ConditionFactorResponse",
	"FishingStatistics",
	"FrequencyItem",
	"LargestFish",
	"TimeSeriesPoint",
	"TimeOfDay",
	"TripCreate",
	"TripImageResponse",
	"TripRead",
	"TripUpdate",
	"Token",
	"TokenData",
	"UserCreate",
	"UserLogin",
	"UserRead",
	"UserUpdate",
]
