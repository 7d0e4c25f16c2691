# trip_service.py
from __future__ import annotations

import logging
from typing import Literal

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, selectinload

from catch_chronicles.database import atomic
from catch_chronicles.models.fish_catch import FishCatch
from catch_chronicles.models.fishing_trip import FishingTrip
from catch_chronicles.schemas.trip import TripCreate, TripRead, TripUpdate
from catch_chronicles.services import storage_service
from catch_chronicles.services.context import UserContext


logger = logging.getLogger(__name__)

TripSortField = Literal["date", "location"]
SortOrder = Literal["asc", "desc"]

_SORT_COLUMNS = {
    "date": FishingTrip.date,
    "location": FishingTrip.location,
}


def get_owned_trip(db: Session, ctx: UserContext, trip_id: int) -> FishingTrip:
    trip = (
        db.query(FishingTrip)
        .options(selectinload(FishingTrip.fish_catches))
        .filter(FishingTrip.id == trip_id, FishingTrip.user_id == ctx.user_id)
        .one_or_none()
    )
    if trip is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found")
    return trip


def sync_catch_count(trip: FishingTrip) -> None:
    trip.catch_count = len(trip.fish_catches)


def list_trips(
    db: Session,
    ctx: UserContext,
    *,
    sort_by: TripSortField = "date",
    order: SortOrder = "desc",
    location: str | None = None,
) -> list[TripRead]:
    q = (
        db.query(FishingTrip)
        .options(selectinload(FishingTrip.fish_catches))
        .filter(FishingTrip.user_id == ctx.user_id)
    )

    needle = (location or "").strip()
    if needle:
        escaped = needle.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        q = q.filter(FishingTrip.location.ilike(f"%{escaped}%", escape="\\"))

    column = _SORT_COLUMNS.get(sort_by, FishingTrip.date)
    if order == "asc":
        q = q.order_by(column.asc(), FishingTrip.id.asc())
    else:
        q = q.order_by(column.desc(), FishingTrip.id.desc())

    return [TripRead.model_validate(trip) for trip in q.all()]


def get_trip(db: Session, ctx: UserContext, trip_id: int) -> TripRead:
    return TripRead.model_validate(get_owned_trip(db, ctx, trip_id))


def create_trip(db: Session, ctx: UserContext, payload: TripCreate) -> TripRead:
    trip_data = payload.model_dump(exclude={"fish_catches"})
    with atomic(db):
        trip = FishingTrip(user_id=ctx.user_id, **trip_data)
        trip.fish_catches = [FishCatch(**fish.model_dump()) for fish in payload.fish_catches]
        sync_catch_count(trip)
        db.add(trip)
    db.refresh(trip)
    logger.info("trips.create user_id=%s trip_id=%s catches=%s", ctx.user_id, trip.id, trip.catch_count)
    return TripRead.model_validate(trip)


def _sync_catches(trip: FishingTrip, payload: TripUpdate) -> None:
    existing = {fish.id: fish for fish in trip.fish_catches}
    kept: set[int] = set()

    for item in payload.fish_catches or []:
        values = item.model_dump(exclude={"id"})
        if item.id is None:
            trip.fish_catches.append(FishCatch(**values))
            continue
        fish = existing.get(item.id)
        if fish is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Catch {item.id} does not belong to this trip",
            )
        for field, value in values.items():
            setattr(fish, field, value)
        kept.add(item.id)

    for fish_id, fish in existing.items():
        if fish_id not in kept:
            trip.fish_catches.remove(fish)


def update_trip(db: Session, ctx: UserContext, trip_id: int, payload: TripUpdate) -> TripRead:
    """Apply trip fields and the catch list in one transaction."""

    trip = get_owned_trip(db, ctx, trip_id)
    with atomic(db):
        for field, value in payload.model_dump(exclude={"fish_catches"}).items():
            setattr(trip, field, value)
        if payload.fish_catches is not None:
            _sync_catches(trip, payload)
        sync_catch_count(trip)
    db.refresh(trip)
    logger.info("trips.update user_id=%s trip_id=%s catches=%s", ctx.user_id, trip.id, trip.catch_count)
    return TripRead.model_validate(trip)


def delete_trip(db: Session, ctx: UserContext, trip_id: int) -> None:
    trip = get_owned_trip(db, ctx, trip_id)
    image_url = trip.image_url
    with atomic(db):
        db.delete(trip)
    storage_service.delete_image(image_url)
    logger.info("trips.delete user_id=%s trip_id=%s", ctx.user_id, trip_id)


def set_trip_image(db: Session, ctx: UserContext, trip_id: int, image_url: str) -> TripRead:
    """Point the trip at a freshly stored image and drop the one it replaces."""

    trip = get_owned_trip(db, ctx, trip_id)
    previous = trip.image_url
    with atomic(db):
        trip.image_url = image_url
    if previous and previous != image_url:
        storage_service.delete_image(previous)
    db.refresh(trip)
    return TripRead.model_validate(trip)


def load_trips_with_catches(db: Session, ctx: UserContext) -> list[TripRead]:
    """All trips of the caller, oldest first, validated for aggregation."""

    return list_trips(db, ctx, sort_by="date", order="asc")
