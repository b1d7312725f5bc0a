"""Expo calendar endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...errors import ExpoNotFoundError, PersistenceError
from ...models.domain import Expo
from ...schemas.expos import ExpoListResponse, ExpoModel, ExpoPayload, ExpoStatsResponse
from ...services.expos import ExpoFilters, delete_expo, expo_stats, get_expo, list_expos, save_expo
from ..deps import acting_personnel, require_confirmation

router = APIRouter(prefix="/expos", tags=["expos"])


def _to_model(expo: Expo) -> ExpoModel:
    return ExpoModel.model_validate(expo)


@router.get("", response_model=ExpoListResponse, status_code=status.HTTP_200_OK)
def get_expos(
    search: str | None = Query(default=None, description="Matches expo name, city, venue or organizer"),
    status_filter: str | None = Query(default=None, alias="status", description="Expo status or All"),
    zone: str | None = Query(default=None, description="Zone name, or 'All Zones'"),
    participation: str | None = Query(default=None, description="Visitor, Exhibitor or All"),
) -> ExpoListResponse:
    expos = list_expos(ExpoFilters(search=search, status=status_filter, zone=zone, participation_type=participation))
    return ExpoListResponse(items=[_to_model(expo) for expo in expos], total=len(expos))


@router.get("/stats", response_model=ExpoStatsResponse, status_code=status.HTTP_200_OK)
def get_expo_stats() -> ExpoStatsResponse:
    return ExpoStatsResponse(**expo_stats())


@router.get("/{expo_id}", response_model=ExpoModel, status_code=status.HTTP_200_OK)
def get_expo_detail(expo_id: str) -> ExpoModel:
    return _guard(lambda: get_expo(expo_id))


@router.post("", response_model=ExpoModel, status_code=status.HTTP_201_CREATED)
def create_expo(payload: ExpoPayload, personnel: str = Depends(acting_personnel)) -> ExpoModel:
    return _guard(lambda: save_expo(payload, personnel))


@router.put("/{expo_id}", response_model=ExpoModel, status_code=status.HTTP_200_OK)
def update_expo(expo_id: str, payload: ExpoPayload, personnel: str = Depends(acting_personnel)) -> ExpoModel:
    return _guard(lambda: save_expo(payload, personnel, expo_id))


@router.delete("/{expo_id}", status_code=status.HTTP_200_OK)
def remove_expo(
    expo_id: str,
    confirm: bool = Query(default=False, description="Must be true"),
    personnel: str = Depends(acting_personnel),
) -> dict:
    require_confirmation(confirm)
    _guard(lambda: delete_expo(expo_id, personnel))
    return {"deleted": expo_id}


def _guard(action):
    try:
        result = action()
    except ExpoNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Expo '{exc.args[0]}' not found") from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_model(result) if isinstance(result, Expo) else result
