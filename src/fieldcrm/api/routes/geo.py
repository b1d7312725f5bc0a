"""Geo reference endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from ...data.geo_repository import list_zones, load_geo_reference
from ...schemas.geo import LocationModel, StateModel
from ...services.geo import resolve_location, sanitize_postal_code

router = APIRouter(tags=["geo"])


@router.get("/geo/zones", response_model=List[str], status_code=status.HTTP_200_OK)
def get_zones() -> List[str]:
    return list_zones()


@router.get("/geo/states", response_model=List[StateModel], status_code=status.HTTP_200_OK)
def get_states(zone: str | None = Query(default=None, description="Optional zone filter")) -> List[StateModel]:
    return [
        StateModel(state=entry.state, zone=entry.zone, cities=len(entry.cities))
        for entry in load_geo_reference().values()
        if not zone or entry.zone == zone
    ]


@router.get("/geo/cities", response_model=List[str], status_code=status.HTTP_200_OK)
def get_cities(state: str = Query(..., description="State name as listed by /geo/states")) -> List[str]:
    entry = load_geo_reference().get(state)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown state '{state}'")
    return list(entry.cities)


@router.get("/geo/resolve", response_model=LocationModel, status_code=status.HTTP_200_OK)
def resolve(
    city: str | None = Query(default=None),
    state: str | None = Query(default=None),
    postal_code: str | None = Query(default=None, description="Non-digits are stripped; looked up at six digits"),
) -> LocationModel:
    location = resolve_location(city, state, postal_code)
    return LocationModel(
        city=location.city,
        state=location.state,
        zone=location.zone,
        postal_code=sanitize_postal_code(postal_code),
    )
