# profile_service.py
import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catch_chronicles.database import atomic
from catch_chronicles.models.profile import Profile
from catch_chronicles.models.user import User
from catch_chronicles.schemas.profile import ProfileRead, ProfileUpdate
from catch_chronicles.services import storage_service
from catch_chronicles.services.context import UserContext


logger = logging.getLogger(__name__)


def default_display_name(user: User) -> str:
    if user.full_name and user.full_name.strip():
        return user.full_name.strip()
    return (user.email or "").split("@", 1)[0]


def build_profile_for(user: User) -> Profile:
    return Profile(id=user.id, display_name=default_display_name(user))


def _get_or_create_profile(db: Session, ctx: UserContext) -> Profile:
    profile = db.query(Profile).filter(Profile.id == ctx.user_id).first()
    if profile is not None:
        return profile
    user = db.query(User).filter(User.id == ctx.user_id).first()
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    # Accounts created before profiles existed get one lazily.
    with atomic(db):
        profile = build_profile_for(user)
        db.add(profile)
    db.refresh(profile)
    return profile


def get_profile(db: Session, ctx: UserContext) -> ProfileRead:
    return ProfileRead.model_validate(_get_or_create_profile(db, ctx))


def update_profile(db: Session, ctx: UserContext, payload: ProfileUpdate) -> ProfileRead:
    profile = _get_or_create_profile(db, ctx)
    update_data = payload.model_dump(exclude_unset=True)

    username = update_data.get("username")
    if username:
        taken = (
            db.query(Profile.id)
            .filter(Profile.username == username, Profile.id != ctx.user_id)
            .first()
        )
        if taken:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken")

    if "display_name" in update_data and not update_data["display_name"]:
        # An emptied display name falls back to the account name.
        update_data.pop("display_name")

    try:
        with atomic(db):
            for field, value in update_data.items():
                setattr(profile, field, value)
    except IntegrityError:
        logger.warning("profile.update duplicate username user_id=%s", ctx.user_id)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken")
    db.refresh(profile)
    logger.info("profile.update user_id=%s fields=%s", ctx.user_id, sorted(update_data))
    return ProfileRead.model_validate(profile)


def set_avatar(db: Session, ctx: UserContext, avatar_url: str) -> ProfileRead:
    profile = _get_or_create_profile(db, ctx)
    previous = profile.avatar_url
    with atomic(db):
        profile.avatar_url = avatar_url
    if previous and previous != avatar_url:
        storage_service.delete_image(previous)
    db.refresh(profile)
    return ProfileRead.model_validate(profile)
