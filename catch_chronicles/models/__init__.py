# __init__.py
from catch_chronicles.models.fish_catch import FishCatch
from catch_chronicles.models.fishing_trip import FishingTrip
from catch_chronicles.models.profile import Profile
from catch_chronicles.models.user import User

__all__ = [
	"FishCatch",
	"FishingTrip",
	"Profile",
	"User",
]
