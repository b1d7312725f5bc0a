"""Marketing team roster schemas."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict


class TeamMemberPayload(BaseModel):
    name: str | None = None
    role: str | None = None
    email: str | None = None
    phone: str | None = None
    bio: str | None = None


class TeamMemberModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    role: str
    email: str = ""
    phone: str = ""
    bio: str = ""
    is_admin: bool = False


class PersonnelResponse(BaseModel):
    default: str
    personnel: List[str]
