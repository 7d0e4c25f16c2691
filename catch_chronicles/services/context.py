from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UserContext:
    """The authenticated caller, passed explicitly to every data-access call."""

    user_id: int
    email: str
