from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class TeamRole(str, Enum):
    admin = "admin"
    user = "user"


def normalize_email(email: str) -> str:
    cleaned = email.strip().lower()
    if not cleaned:
        raise ValueError("email is required")
    return cleaned


class TeamMemberInput(BaseModel):
    email: str = Field(..., max_length=320)
    role: TeamRole = TeamRole.user

    @field_validator("email")
    @classmethod
    def _normalize(cls, value: str) -> str:
        return normalize_email(value)


class RoleUpdate(BaseModel):
    role: TeamRole


class TeamMember(BaseModel):
    id: str
    email: str
    role: TeamRole
    created_at: datetime
