# catch_service.py
from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload

from catch_chronicles.database import atomic
from catch_chronicles.models.fish_catch import FishCatch
from catch_chronicles.models.fishing_trip import FishingTrip
from catch_chronicles.schemas.catch import CatchWithTripRead, FishCatchCreate, FishCatchRead, FishCatchUpdate
from catch_chronicles.services.context import UserContext
from catch_chronicles.services.trip_service import get_owned_trip, sync_catch_count


logger = logging.getLogger(__name__)


def _get_owned_catch(db: Session, ctx: UserContext, catch_id: int) -> FishCatch:
    fish = (
        db.query(FishCatch)
        .join(FishingTrip, FishCatch.trip_id == FishingTrip.id)
        .options(joinedload(FishCatch.trip))
        .filter(FishCatch.id == catch_id, FishingTrip.user_id == ctx.user_id)
        .one_or_none()
    )
    if fish is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Catch not found")
    return fish


def list_catches(db: Session, ctx: UserContext) -> list[CatchWithTripRead]:
    rows = (
        db.query(FishCatch)
        .join(FishingTrip, FishCatch.trip_id == FishingTrip.id)
        .options(joinedload(FishCatch.trip))
        .filter(FishingTrip.user_id == ctx.user_id)
        .order_by(FishingTrip.date.desc(), FishCatch.id.asc())
        .all()
    )
    return [CatchWithTripRead.model_validate(row) for row in rows]


def list_trip_catches(db: Session, ctx: UserContext, trip_id: int) -> list[FishCatchRead]:
    trip = get_owned_trip(db, ctx, trip_id)
    return [FishCatchRead.model_validate(fish) for fish in trip.fish_catches]


def add_catch(db: Session, ctx: UserContext, trip_id: int, payload: FishCatchCreate) -> FishCatchRead:
    trip = get_owned_trip(db, ctx, trip_id)
    fish = FishCatch(**payload.model_dump())
    with atomic(db):
        trip.fish_catches.append(fish)
        sync_catch_count(trip)
    db.refresh(fish)
    logger.info("catches.create user_id=%s trip_id=%s catch_id=%s", ctx.user_id, trip_id, fish.id)
    return FishCatchRead.model_validate(fish)


def update_catch(db: Session, ctx: UserContext, catch_id: int, payload: FishCatchUpdate) -> FishCatchRead:
    fish = _get_owned_catch(db, ctx, catch_id)
    with atomic(db):
        for field, value in payload.model_dump(exclude_unset=True).items():
            if field == "fish_type" and value is None:
                continue
            if field == "caught_on" and value is None:
                value = ""
            setattr(fish, field, value)
    db.refresh(fish)
    return FishCatchRead.model_validate(fish)


def delete_catch(db: Session, ctx: UserContext, catch_id: int) -> None:
    fish = _get_owned_catch(db, ctx, catch_id)
    trip = get_owned_trip(db, ctx, fish.trip_id)
    with atomic(db):
        trip.fish_catches.remove(fish)
        sync_catch_count(trip)
    logger.info("catches.delete user_id=%s trip_id=%s catch_id=%s", ctx.user_id, trip.id, catch_id)
