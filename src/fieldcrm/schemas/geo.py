"""Geo reference schemas."""

from __future__ import annotations

from pydantic import BaseModel


class LocationModel(BaseModel):
    city: str
    state: str
    zone: str
    postal_code: str


class StateModel(BaseModel):
    state: str
    zone: str
    cities: int
