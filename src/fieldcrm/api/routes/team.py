"""Marketing team roster and personnel endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...config import settings
from ...errors import (
    DuplicateTeamMemberError,
    PersistenceError,
    ProtectedTeamMemberError,
    TeamMemberNotFoundError,
)
from ...models.domain import TeamMember
from ...schemas.team import PersonnelResponse, TeamMemberModel, TeamMemberPayload
from ...services.personnel import (
    add_team_member,
    is_system_admin,
    list_personnel,
    list_team,
    remove_team_member,
    update_team_member,
)
from ..deps import acting_personnel, require_confirmation

router = APIRouter(tags=["team"])


def _to_model(member: TeamMember) -> TeamMemberModel:
    return TeamMemberModel(
        name=member.name,
        role=member.role,
        email=member.email,
        phone=member.phone,
        bio=member.bio,
        is_admin=is_system_admin(member.name),
    )


@router.get("/personnel", response_model=PersonnelResponse, status_code=status.HTTP_200_OK)
def get_personnel() -> PersonnelResponse:
    return PersonnelResponse(default=settings.default_personnel, personnel=list_personnel())


@router.get("/team", response_model=List[TeamMemberModel], status_code=status.HTTP_200_OK)
def get_team() -> List[TeamMemberModel]:
    return [_to_model(member) for member in list_team()]


@router.post("/team", response_model=TeamMemberModel, status_code=status.HTTP_201_CREATED)
def create_team_member(payload: TeamMemberPayload, personnel: str = Depends(acting_personnel)) -> TeamMemberModel:
    return _guard(lambda: add_team_member(payload, personnel))


@router.put("/team/{name}", response_model=TeamMemberModel, status_code=status.HTTP_200_OK)
def edit_team_member(
    name: str,
    payload: TeamMemberPayload,
    personnel: str = Depends(acting_personnel),
) -> TeamMemberModel:
    return _guard(lambda: update_team_member(name, payload, personnel))


@router.delete("/team/{name}", status_code=status.HTTP_200_OK)
def delete_team_member(
    name: str,
    confirm: bool = Query(default=False, description="Must be true"),
    personnel: str = Depends(acting_personnel),
) -> dict:
    require_confirmation(confirm)
    _guard(lambda: remove_team_member(name, personnel))
    return {"deleted": name}


def _guard(action):
    try:
        result = action()
    except TeamMemberNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Team member '{exc.args[0]}' not found") from exc
    except ProtectedTeamMemberError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except DuplicateTeamMemberError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_model(result) if isinstance(result, TeamMember) else result
