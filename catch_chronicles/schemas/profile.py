# profile.py
from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator


_USERNAME_RE = re.compile(r"^[A-Za-z0-9_.-]{3,50}$")


class ProfileRead(BaseModel):
    id: int
    display_name: str = ""
    username: str | None = None
    short_bio: str | None = None
    avatar_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdate(BaseModel):
    display_name: str | None = Field(default=None, max_length=255)
    username: str | None = None
    short_bio: str | None = Field(default=None, max_length=500)

    @field_validator("username", mode="before")
    @classmethod
    def _normalize_username(cls, v):
        if v is None:
            return None
        value = str(v).strip().lstrip("@")
        if not value:
            return None
        if not _USERNAME_RE.match(value):
            raise ValueError("username must be 3-50 characters of letters, digits, '.', '_' or '-'")
        return value

    @field_validator("display_name", "short_bio", mode="before")
    @classmethod
    def _strip_text(cls, v):
        if v is None:
            return None
        return str(v).strip()
