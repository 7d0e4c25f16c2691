"""Dashboard statistics derived from a user's trips and their catches.

Every function here is pure: it reads the attributes of trip objects
(``date``, ``time_of_day``, ``weather``, ``location``, ``fish_catches``) and
catch objects (``fish_type``, ``caught_on``, ``length``, ``weight``), so ORM
rows and validated schema records can be passed interchangeably.

Ties in every frequency ranking resolve to the value seen first in the input
order, since ``Counter`` keeps insertion order and its ranking sort is stable.
"""
from __future__ import annotations

from collections import Counter
from datetime import date, datetime
from typing import Any, Iterable, Sequence

from catch_chronicles.schemas.statistics import (
    FishingStatistics,
    FrequencyItem,
    LargestFish,
    TimeSeriesPoint,
)


NOT_AVAILABLE = "N/A"
NO_CATCH = "no catch"
TOP_N = 5

_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _clean(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _as_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def all_catches(trips: Iterable[Any]) -> list[Any]:
    return [fish for trip in trips for fish in (trip.fish_catches or [])]


def _measure(value: Any) -> float:
    # Unrecorded measurements count as 0.
    return 0.0 if value is None else float(value)


def _average(values: Sequence[float]) -> float:
    return sum(values) / max(1, len(values))


def average_length(catches: Sequence[Any]) -> float:
    return _average([_measure(c.length) for c in catches])


def average_weight(catches: Sequence[Any]) -> float:
    return _average([_measure(c.weight) for c in catches])


def total_weight(catches: Iterable[Any]) -> float:
    return float(sum(float(c.weight) for c in catches if c.weight is not None))


def rank_by_frequency(values: Iterable[Any], limit: int | None = None) -> list[FrequencyItem]:
    counts = Counter(v for v in (_clean(value) for value in values) if v)
    return [FrequencyItem(name=name, count=count) for name, count in counts.most_common(limit)]


def most_frequent(values: Iterable[Any]) -> str:
    ranked = rank_by_frequency(values, limit=1)
    return ranked[0].name if ranked else NOT_AVAILABLE


def most_used_fly(catches: Iterable[Any]) -> str:
    return most_frequent(c.caught_on for c in catches)


def most_common_species(catches: Iterable[Any]) -> str:
    return most_frequent(c.fish_type for c in catches)


def _best_by_catches(trips: Iterable[Any], attribute: str) -> str:
    """Category whose trips produced the most catches in total."""

    totals: Counter[str] = Counter()
    for trip in trips:
        key = _clean(getattr(trip, attribute, None))
        if key:
            totals[key] += len(trip.fish_catches or [])
    ranked = [(name, total) for name, total in totals.most_common() if total > 0]
    return ranked[0][0] if ranked else NOT_AVAILABLE


def best_time_of_day(trips: Iterable[Any]) -> str:
    return _best_by_catches(trips, "time_of_day")


def best_weather(trips: Iterable[Any]) -> str:
    return _best_by_catches(trips, "weather")


def favorite_location(trips: Iterable[Any]) -> str:
    # Counted per trip, not per catch.
    return most_frequent(trip.location for trip in trips)


def largest_fish(catches: Iterable[Any]) -> LargestFish | None:
    """Longest catch; the first catch stands in when no length beats it."""

    best = None
    for fish in catches:
        if best is None or _measure(fish.length) > _measure(best.length):
            best = fish
    if best is None:
        return None
    return LargestFish(
        fish_type=_clean(best.fish_type),
        length=float(best.length) if best.length is not None else None,
        weight=float(best.weight) if best.weight is not None else None,
    )


def month_label(year: int, month: int) -> str:
    return f"{_MONTH_ABBR[month - 1]} {year}"


def trips_over_time(trips: Iterable[Any]) -> list[TimeSeriesPoint]:
    buckets: Counter[tuple[int, int]] = Counter()
    for trip in trips:
        day = _as_date(trip.date)
        if day is None:
            continue
        buckets[(day.year, day.month)] += 1
    return [
        TimeSeriesPoint(label=month_label(year, month), count=buckets[(year, month)])
        for year, month in sorted(buckets)
    ]


def top_species(catches: Iterable[Any], limit: int = TOP_N) -> list[FrequencyItem]:
    names = (c.fish_type for c in catches if _clean(c.fish_type).lower() != NO_CATCH)
    return rank_by_frequency(names, limit=limit)


def top_locations(trips: Iterable[Any], limit: int = TOP_N) -> list[FrequencyItem]:
    return rank_by_frequency((trip.location for trip in trips), limit=limit)


def compute_statistics(trips: Sequence[Any]) -> FishingStatistics:
    trips = list(trips)
    catches = all_catches(trips)

    return FishingStatistics(
        total_trips=len(trips),
        total_catches=len(catches),
        average_length=average_length(catches),
        average_weight=average_weight(catches),
        total_weight=total_weight(catches),
        most_used_fly=most_used_fly(catches),
        most_common_species=most_common_species(catches),
        best_time_of_day=best_time_of_day(trips),
        best_weather=best_weather(trips),
        favorite_location=favorite_location(trips),
        largest_fish=largest_fish(catches),
        trips_over_time=trips_over_time(trips),
        top_species=top_species(catches),
        top_locations=top_locations(trips),
    )
