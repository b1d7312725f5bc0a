"""Visit log API schemas."""

from __future__ import annotations

import datetime
from typing import List

from pydantic import BaseModel, ConfigDict

from ..models.domain import VisitStatus


class VisitPayload(BaseModel):
    """Form input for logging or editing a visit; ``None`` keeps the stored value on edit."""

    customer_id: str | None = None
    date: datetime.date | None = None
    purpose: str | None = None
    assigned_to: str | None = None
    status: VisitStatus | None = None
    notes: str | None = None


class VisitStatusUpdate(BaseModel):
    status: VisitStatus


class VisitModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    customer_id: str
    customer_name: str
    date: datetime.date
    purpose: str
    assigned_to: str
    status: VisitStatus
    notes: str = ""
    created_at: str | None = None


class VisitListResponse(BaseModel):
    items: List[VisitModel]
    total: int


class VisitStatsResponse(BaseModel):
    total: int
    upcoming: int
    completed: int
    cancelled: int
    statusCounts: dict[str, int]
