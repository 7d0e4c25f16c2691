# users.py
from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session
from catch_chronicles.database import atomic, get_db
from catch_chronicles.models.user import User
from catch_chronicles.routers.dependencies import get_current_user, get_user_context
from catch_chronicles.schemas.profile import ProfileRead, ProfileUpdate
from catch_chronicles.schemas.user import UserRead, UserUpdate
from catch_chronicles.services import storage_service
from catch_chronicles.services.context import UserContext
from catch_chronicles.services.profile_service import get_profile, set_avatar, update_profile


router = APIRouter()


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)) -> UserRead:
    return UserRead.model_validate(current_user)


@router.put("/me", response_model=UserRead)
def update_current_user(update: UserUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)) -> UserRead:
    update_data = update.model_dump(exclude_unset=True)
    with atomic(db):
        for field, value in update_data.items():
            setattr(current_user, field, value)
        db.add(current_user)
    db.refresh(current_user)
    return UserRead.model_validate(current_user)


@router.get("/me/profile", response_model=ProfileRead)
def read_my_profile(db: Session = Depends(get_db), ctx: UserContext = Depends(get_user_context)) -> ProfileRead:
    return get_profile(db, ctx)


@router.put("/me/profile", response_model=ProfileRead)
def update_my_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    ctx: UserContext = Depends(get_user_context),
) -> ProfileRead:
    return update_profile(db, ctx, payload)


@router.post("/me/profile/avatar", response_model=ProfileRead)
async def upload_my_avatar(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    ctx: UserContext = Depends(get_user_context),
) -> ProfileRead:
    avatar_url = await storage_service.save_image(file, storage_service.AVATARS_BUCKET, ctx.user_id)
    try:
        return set_avatar(db, ctx, avatar_url)
    except Exception:
        storage_service.delete_image(avatar_url)
        raise
