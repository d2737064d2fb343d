from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Caller roles used for scoping shift visibility and deletion."""

    ADMIN = "admin"
    USER = "user"
