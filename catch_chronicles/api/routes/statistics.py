from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from catch_chronicles.database import get_db
from catch_chronicles.routers.dependencies import get_user_context
from catch_chronicles.schemas.statistics import ConditionFactorResponse, FishingStatistics
from catch_chronicles.services.condition_factor import (
    UndefinedConditionFactorError,
    classify_condition,
    fulton_condition_factor,
)
from catch_chronicles.services.context import UserContext
from catch_chronicles.services.statistics import compute_statistics
from catch_chronicles.services.trip_service import load_trips_with_catches


router = APIRouter(tags=["statistics"])


@router.get("/statistics", response_model=FishingStatistics, summary="Dashboard statistics for my trips")
def read_statistics(db: Session = Depends(get_db), ctx: UserContext = Depends(get_user_context)) -> FishingStatistics:
    return compute_statistics(load_trips_with_catches(db, ctx))


@router.get("/condition-factor", response_model=ConditionFactorResponse, summary="Fulton's K for a length and weight")
def read_condition_factor(
    length_cm: float = Query(ge=0),
    weight_g: float = Query(ge=0),
) -> ConditionFactorResponse:
    try:
        factor = fulton_condition_factor(length_cm, weight_g)
    except UndefinedConditionFactorError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return ConditionFactorResponse(
        length_cm=length_cm,
        weight_g=weight_g,
        factor=round(factor, 4),
        condition=classify_condition(factor),
    )
