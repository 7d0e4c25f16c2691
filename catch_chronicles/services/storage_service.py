"""Image storage backed by the local uploads directory.

Stored files are served by the static mount at ``settings.uploads_url_prefix``;
the public reference handed back to callers is that URL path.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from uuid import uuid4

from fastapi import HTTPException, UploadFile, status

from catch_chronicles.config import settings


logger = logging.getLogger(__name__)

TRIP_IMAGES_BUCKET = "trip-images"
AVATARS_BUCKET = "avatars"

_CHUNK_SIZE = 1024 * 1024
_ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".heic"}


def uploads_root() -> Path:
    return Path(settings.uploads_dir).resolve()


def ensure_uploads_root() -> Path:
    root = uploads_root()
    root.mkdir(parents=True, exist_ok=True)
    return root


def _url_prefix() -> str:
    return "/" + settings.uploads_url_prefix.strip("/")


def build_public_url(relative_path: str) -> str:
    return f"{_url_prefix()}/{relative_path.lstrip('/')}"


def relative_path_from_url(url: str | None) -> str | None:
    if not url:
        return None
    marker = f"{_url_prefix()}/"
    if marker not in url:
        return None
    return url.split(marker, 1)[1] or None


def _resolve_inside_root(relative_path: str) -> Path | None:
    root = uploads_root()
    candidate = (root / relative_path).resolve()
    if root != candidate and root not in candidate.parents:
        return None
    return candidate


def _extension_for(upload: UploadFile) -> str:
    ext = os.path.splitext(os.path.basename(upload.filename or ""))[1].lower()
    if ext in _ALLOWED_EXTENSIONS:
        return ext
    subtype = (upload.content_type or "").split("/", 1)[-1].lower()
    guessed = f".{subtype}"
    return guessed if guessed in _ALLOWED_EXTENSIONS else ".jpg"


async def save_image(upload: UploadFile, bucket: str, *path_parts: str | int) -> str:
    """Store an uploaded image and return its public reference."""

    if not (upload.content_type or "").startswith("image/"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only image uploads are accepted")

    relative = "/".join([bucket, *(str(p) for p in path_parts), f"{uuid4().hex}{_extension_for(upload)}"])
    target = _resolve_inside_root(relative)
    if target is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid upload path")
    target.parent.mkdir(parents=True, exist_ok=True)

    total = 0
    try:
        with target.open("wb") as out:
            while True:
                chunk = await upload.read(_CHUNK_SIZE)
                if not chunk:
                    break
                total += len(chunk)
                if total > settings.max_upload_bytes:
                    raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="Image is too large")
                out.write(chunk)
    except BaseException:
        target.unlink(missing_ok=True)
        raise
    finally:
        await upload.close()

    if total == 0:
        target.unlink(missing_ok=True)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Uploaded file is empty")

    logger.info("storage.save bucket=%s bytes=%s path=%s", bucket, total, relative)
    return build_public_url(relative)


def delete_image(url: str | None) -> bool:
    relative = relative_path_from_url(url)
    if relative is None:
        return False
    target = _resolve_inside_root(relative)
    if target is None or not target.is_file():
        return False
    try:
        target.unlink()
    except OSError:
        logger.warning("storage.delete failed path=%s", relative, exc_info=True)
        return False
    logger.info("storage.delete path=%s", relative)
    return True
