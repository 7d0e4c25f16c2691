# main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from catch_chronicles.config import build_sqlalchemy_db_url, settings
from catch_chronicles.database import Base, engine
from catch_chronicles.models import FishCatch, FishingTrip, Profile, User  # noqa: F401  # register tables
from catch_chronicles.api.routes.catches import router as catches_router
from catch_chronicles.api.routes.health import router as health_router
from catch_chronicles.api.routes.statistics import router as statistics_router
from catch_chronicles.api.routes.trips import router as trips_router
from catch_chronicles.routers import auth, users
from catch_chronicles.services.storage_service import ensure_uploads_root


logger = logging.getLogger(__name__)


async def _database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("db.error method=%s path=%s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Database error"})


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_exception_handler(SQLAlchemyError, _database_error_handler)

    # Health endpoints (do not depend on API_PREFIX)
    application.include_router(health_router)

    application.include_router(auth.router, prefix="/auth", tags=["auth"])
    application.include_router(users.router, prefix="/users", tags=["users"])
    application.include_router(trips_router, prefix=settings.api_prefix)
    application.include_router(catches_router, prefix=settings.api_prefix)
    application.include_router(statistics_router, prefix=settings.api_prefix)

    # Uploaded trip photos and avatars are served straight from disk.
    application.mount(
        settings.uploads_url_prefix,
        StaticFiles(directory=str(ensure_uploads_root())),
        name="uploads",
    )

    # Avoid accidental schema changes in shared databases.
    # For local/test sqlite usage, auto-create ORM tables is still convenient.
    if build_sqlalchemy_db_url(settings).startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    return application


app = create_app()
