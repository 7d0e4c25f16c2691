from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from catch_chronicles.database import get_db
from catch_chronicles.routers.dependencies import get_user_context
from catch_chronicles.schemas.catch import CatchWithTripRead, FishCatchRead, FishCatchUpdate
from catch_chronicles.services import catch_service
from catch_chronicles.services.context import UserContext


router = APIRouter(prefix="/catches", tags=["catches"])


@router.get("", response_model=list[CatchWithTripRead], summary="Every catch across my trips")
def list_catches(db: Session = Depends(get_db), ctx: UserContext = Depends(get_user_context)) -> list[CatchWithTripRead]:
    return catch_service.list_catches(db, ctx)


@router.put("/{catch_id}", response_model=FishCatchRead)
def update_catch(
    catch_id: int,
    payload: FishCatchUpdate,
    db: Session = Depends(get_db),
    ctx: UserContext = Depends(get_user_context),
) -> FishCatchRead:
    return catch_service.update_catch(db, ctx, catch_id, payload)


@router.delete("/{catch_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_catch(catch_id: int, db: Session = Depends(get_db), ctx: UserContext = Depends(get_user_context)) -> Response:
    catch_service.delete_catch(db, ctx, catch_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
