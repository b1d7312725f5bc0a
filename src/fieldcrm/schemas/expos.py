"""Expo calendar API schemas."""

from __future__ import annotations

import datetime
from typing import List

from pydantic import BaseModel, ConfigDict

from ..models.domain import ExpoStatus, ParticipationType


class ExpoPayload(BaseModel):
    """Form input for an expo; on edit a field left as ``None`` keeps the stored value.

    Money and lead counts accept free text such as ``"2,50,000"``.
    """

    name: str | None = None
    start_date: datetime.date | None = None
    end_date: datetime.date | None = None
    city: str | None = None
    state: str | None = None
    venue: str | None = None
    zone: str | None = None
    industry: str | None = None
    region: str | None = None
    event_type: str | None = None
    organizer_name: str | None = None
    website: str | None = None
    participation_type: ParticipationType | None = None
    stall_no: str | None = None
    assigned_team: str | None = None
    status: ExpoStatus | None = None
    budget: str | int | float | None = None
    fee_cost: str | int | float | None = None
    leads_generated: str | int | float | None = None
    hot_leads: str | int | float | None = None
    orders_received: str | int | float | None = None


class ExpoModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    start_date: datetime.date
    end_date: datetime.date | None = None
    city: str = ""
    state: str = ""
    venue: str = ""
    zone: str = ""
    industry: str = ""
    region: str = ""
    event_type: str = ""
    organizer_name: str = ""
    website: str = ""
    participation_type: ParticipationType
    stall_no: str = ""
    assigned_team: str = ""
    status: ExpoStatus
    budget: int = 0
    fee_cost: int = 0
    leads_generated: int = 0
    hot_leads: int = 0
    orders_received: int = 0
    last_modified_by: str | None = None
    updated_at: str | None = None
    created_at: str | None = None


class ExpoListResponse(BaseModel):
    items: List[ExpoModel]
    total: int


class ExpoStatsResponse(BaseModel):
    total: int
    upcoming: int
    live: int
    totalLeads: int
    hotLeads: int
    ordersReceived: int
    statusCounts: dict[str, int]
