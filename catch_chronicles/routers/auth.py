# auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from catch_chronicles.database import atomic, get_db
from catch_chronicles.models.user import User
from catch_chronicles.schemas.user import Token, UserCreate, UserLogin, UserRead
from catch_chronicles.services.profile_service import build_profile_for
from catch_chronicles.utils.jwt_handler import create_access_token
from catch_chronicles.utils.password_hash import hash_password, verify_password


router = APIRouter()

logger = logging.getLogger(__name__)


def _authenticate(db: Session, email: str, password: str) -> Token:
    user = db.query(User).filter(User.email == email.strip()).first()
    if not user or not verify_password(password, user.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return Token(access_token=create_access_token(user.id), token_type="bearer")


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(user_in: UserCreate, db: Session = Depends(get_db)) -> UserRead:
    existing_user = db.query(User).filter(User.email == user_in.email).first()
    if existing_user:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")
    user = User(
        email=user_in.email,
        password=hash_password(user_in.password),
        full_name=user_in.full_name,
    )
    # Account and profile are created together.
    try:
        with atomic(db):
            db.add(user)
            db.flush()
            db.add(build_profile_for(user))
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email.
        logger.warning("auth.register duplicate email=%s", user_in.email)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")
    db.refresh(user)
    logger.info("auth.register user_id=%s", user.id)
    return UserRead.model_validate(user)


@router.post("/login", response_model=Token)
def login_user(user_in: UserLogin, db: Session = Depends(get_db)) -> Token:
    return _authenticate(db, user_in.email, user_in.password)


@router.post("/token", response_model=Token, include_in_schema=False)
def login_for_access_token(form: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)) -> Token:
    # Form-encoded variant used by the OpenAPI "Authorize" dialog.
    return _authenticate(db, form.username, form.password)
