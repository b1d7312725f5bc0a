"""Visit log endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...errors import CustomerNotFoundError, PersistenceError, VisitNotFoundError
from ...models.domain import Visit
from ...schemas.visits import VisitListResponse, VisitModel, VisitPayload, VisitStatsResponse, VisitStatusUpdate
from ...services.visits import (
    VisitFilters,
    change_visit_status,
    delete_visit,
    list_visits,
    save_visit,
    visit_stats,
)
from ..deps import acting_personnel, require_confirmation

router = APIRouter(prefix="/visits", tags=["visits"])


def _to_model(visit: Visit) -> VisitModel:
    return VisitModel.model_validate(visit)


@router.get("", response_model=VisitListResponse, status_code=status.HTTP_200_OK)
def get_visits(
    search: str | None = Query(default=None, description="Matches customer name, purpose or assignee"),
    status_filter: str | None = Query(default=None, alias="status", description="Visit status or All"),
    customer_id: str | None = Query(default=None),
) -> VisitListResponse:
    visits = list_visits(VisitFilters(search=search, status=status_filter, customer_id=customer_id))
    return VisitListResponse(items=[_to_model(visit) for visit in visits], total=len(visits))


@router.get("/stats", response_model=VisitStatsResponse, status_code=status.HTTP_200_OK)
def get_visit_stats() -> VisitStatsResponse:
    return VisitStatsResponse(**visit_stats())


@router.post("", response_model=VisitModel, status_code=status.HTTP_201_CREATED)
def log_visit(payload: VisitPayload, personnel: str = Depends(acting_personnel)) -> VisitModel:
    return _guard(lambda: save_visit(payload, personnel))


@router.put("/{visit_id}", response_model=VisitModel, status_code=status.HTTP_200_OK)
def update_visit(visit_id: str, payload: VisitPayload, personnel: str = Depends(acting_personnel)) -> VisitModel:
    return _guard(lambda: save_visit(payload, personnel, visit_id))


@router.post("/{visit_id}/status", response_model=VisitModel, status_code=status.HTTP_200_OK)
def update_visit_status(
    visit_id: str,
    update: VisitStatusUpdate,
    personnel: str = Depends(acting_personnel),
) -> VisitModel:
    return _guard(lambda: change_visit_status(visit_id, update.status, personnel))


@router.delete("/{visit_id}", status_code=status.HTTP_200_OK)
def remove_visit(
    visit_id: str,
    confirm: bool = Query(default=False, description="Must be true"),
    personnel: str = Depends(acting_personnel),
) -> dict:
    require_confirmation(confirm)
    _guard(lambda: delete_visit(visit_id, personnel))
    return {"deleted": visit_id}


def _guard(action):
    try:
        result = action()
    except (VisitNotFoundError, CustomerNotFoundError) as exc:
        kind = "Visit" if isinstance(exc, VisitNotFoundError) else "Customer"
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{kind} '{exc.args[0]}' not found") from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_model(result) if isinstance(result, Visit) else result
