from __future__ import annotations

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status
from sqlalchemy.orm import Session

from catch_chronicles.database import get_db
from catch_chronicles.routers.dependencies import get_user_context
from catch_chronicles.schemas.catch import FishCatchCreate, FishCatchRead
from catch_chronicles.schemas.trip import TripCreate, TripImageResponse, TripRead, TripUpdate
from catch_chronicles.services import catch_service, storage_service, trip_service
from catch_chronicles.services.context import UserContext
from catch_chronicles.services.trip_service import SortOrder, TripSortField


router = APIRouter(prefix="/trips", tags=["trips"])


@router.get("", response_model=list[TripRead], summary="List my trips")
def list_trips(
    sort_by: TripSortField = Query(default="date"),
    order: SortOrder = Query(default="desc"),
    location: str | None = Query(default=None, description="Case-insensitive location substring"),
    db: Session = Depends(get_db),
    ctx: UserContext = Depends(get_user_context),
) -> list[TripRead]:
    return trip_service.list_trips(db, ctx, sort_by=sort_by, order=order, location=location)


@router.post("", response_model=TripRead, status_code=status.HTTP_201_CREATED, summary="Log a new trip")
def create_trip(
    payload: TripCreate,
    db: Session = Depends(get_db),
    ctx: UserContext = Depends(get_user_context),
) -> TripRead:
    return trip_service.create_trip(db, ctx, payload)


@router.get("/{trip_id}", response_model=TripRead)
def read_trip(trip_id: int, db: Session = Depends(get_db), ctx: UserContext = Depends(get_user_context)) -> TripRead:
    return trip_service.get_trip(db, ctx, trip_id)


@router.put("/{trip_id}", response_model=TripRead, summary="Edit a trip and its catches")
def update_trip(
    trip_id: int,
    payload: TripUpdate,
    db: Session = Depends(get_db),
    ctx: UserContext = Depends(get_user_context),
) -> TripRead:
    return trip_service.update_trip(db, ctx, trip_id, payload)


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_trip(trip_id: int, db: Session = Depends(get_db), ctx: UserContext = Depends(get_user_context)) -> Response:
    trip_service.delete_trip(db, ctx, trip_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{trip_id}/image", response_model=TripImageResponse, summary="Upload or replace the trip photo")
async def upload_trip_image(
    trip_id: int,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    ctx: UserContext = Depends(get_user_context),
) -> TripImageResponse:
    # Fail before storing anything if the trip is not ours.
    trip_service.get_owned_trip(db, ctx, trip_id)
    image_url = await storage_service.save_image(file, storage_service.TRIP_IMAGES_BUCKET, ctx.user_id, trip_id)
    try:
        trip = trip_service.set_trip_image(db, ctx, trip_id, image_url)
    except Exception:
        storage_service.delete_image(image_url)
        raise
    return TripImageResponse(trip_id=trip.id, image_url=trip.image_url or image_url)


@router.get("/{trip_id}/catches", response_model=list[FishCatchRead])
def list_trip_catches(
    trip_id: int, db: Session = Depends(get_db), ctx: UserContext = Depends(get_user_context)
) -> list[FishCatchRead]:
    return catch_service.list_trip_catches(db, ctx, trip_id)


@router.post("/{trip_id}/catches", response_model=FishCatchRead, status_code=status.HTTP_201_CREATED)
def add_catch(
    trip_id: int,
    payload: FishCatchCreate,
    db: Session = Depends(get_db),
    ctx: UserContext = Depends(get_user_context),
) -> FishCatchRead:
    return catch_service.add_catch(db, ctx, trip_id, payload)
