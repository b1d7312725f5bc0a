"""Marketing team roster and acting-personnel resolution for change attribution."""

from __future__ import annotations

import dataclasses
import logging
from typing import Optional

from ..config import settings
from ..errors import (
    DuplicateTeamMemberError,
    PersistenceError,
    ProtectedTeamMemberError,
    TeamMemberNotFoundError,
    UnknownPersonnelError,
)
from ..models.domain import TeamMember
from ..persistence.database import delete_team_member_from_database, save_team_member_to_database
from ..persistence.registry import Registry, get_registry
from ..schemas.team import TeamMemberPayload
from .clock import creation_stamp


def list_personnel(registry: Optional[Registry] = None) -> list[str]:
    registry = registry or get_registry()
    roster = [member.name for member in registry.team()]
    if settings.default_personnel not in roster:
        roster.insert(0, settings.default_personnel)
    return roster


def resolve_personnel(name: Optional[str], registry: Optional[Registry] = None) -> str:
    """Validate the acting personnel name; blank means the configured default."""

    candidate = (name or "").strip()
    if not candidate:
        return settings.default_personnel
    for member in list_personnel(registry):
        if member.lower() == candidate.lower():
            return member
    raise UnknownPersonnelError(f"Unknown personnel '{candidate}'")


def is_system_admin(name: str) -> bool:
    return name.strip().lower() in {admin.lower() for admin in settings.system_admins}


def list_team(registry: Optional[Registry] = None) -> list[TeamMember]:
    registry = registry or get_registry()
    return list(registry.team())


def get_team_member(name: str, registry: Optional[Registry] = None) -> TeamMember:
    registry = registry or get_registry()
    member = registry.get_member(name)
    if member is None:
        raise TeamMemberNotFoundError(name)
    return member


def add_team_member(payload: TeamMemberPayload, acting_personnel: str, registry: Optional[Registry] = None) -> TeamMember:
    registry = registry or get_registry()
    member = TeamMember(
        name=(payload.name or "").strip(),
        role=(payload.role or "").strip(),
        email=(payload.email or "").strip(),
        phone=(payload.phone or "").strip(),
        bio=(payload.bio or "").strip(),
    )
    _require_name_and_role(member)

    with registry.lock:
        if registry.get_member(member.name) is not None:
            raise DuplicateTeamMemberError(f"Team member '{member.name}' already exists")
        member.created_at = creation_stamp()
        snapshot = registry.snapshot()
        registry.add_member(member)
        if not save_team_member_to_database(member):
            registry.restore(snapshot)
            raise PersistenceError(f"Team member {member.name} could not be saved")

    logging.info(f"Personnel {acting_personnel} added {member.name} ({member.role}) to the team")
    return member


def update_team_member(
    previous_name: str,
    payload: TeamMemberPayload,
    acting_personnel: str,
    registry: Optional[Registry] = None,
) -> TeamMember:
    """Edit a member's profile. Renaming a system administrator is refused."""

    registry = registry or get_registry()

    with registry.lock:
        current = get_team_member(previous_name, registry)
        changes = {
            field: value.strip()
            for field, value in payload.model_dump(exclude_none=True).items()
        }
        member = dataclasses.replace(current, **changes)
        _require_name_and_role(member)

        renamed = member.name.lower() != current.name.lower()
        if renamed and is_system_admin(current.name):
            raise ProtectedTeamMemberError(f"System administrator '{current.name}' cannot be renamed")
        if renamed and registry.get_member(member.name) is not None:
            raise DuplicateTeamMemberError(f"Team member '{member.name}' already exists")

        snapshot = registry.snapshot()
        registry.replace_member(current.name, member)
        if not save_team_member_to_database(member, previous_name=current.name):
            registry.restore(snapshot)
            raise PersistenceError(f"Team member {current.name} could not be saved")

    logging.info(f"Personnel {acting_personnel} updated team member {current.name}")
    return member


def remove_team_member(name: str, acting_personnel: str, registry: Optional[Registry] = None) -> None:
    registry = registry or get_registry()

    with registry.lock:
        member = get_team_member(name, registry)
        if is_system_admin(member.name):
            raise ProtectedTeamMemberError(f"System administrator '{member.name}' cannot be removed")
        if member.name.lower() == acting_personnel.strip().lower():
            raise ProtectedTeamMemberError("You cannot remove yourself from the team")

        snapshot = registry.snapshot()
        registry.remove_member(member.name)
        if not delete_team_member_from_database(member.name):
            registry.restore(snapshot)
            raise PersistenceError(f"Team member {member.name} could not be removed")

    logging.info(f"Personnel {acting_personnel} removed {member.name} from the team")


def _require_name_and_role(member: TeamMember) -> None:
    if not member.name or not member.role:
        raise ValueError("Team member name and role are required.")
