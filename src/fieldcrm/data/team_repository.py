"""Loader for the bundled marketing team roster used when the store has none."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from ..config import settings
from ..models.domain import TeamMember


def load_team_seed(source: Optional[Path] = None) -> tuple[TeamMember, ...]:
    path = source or settings.team_seed_file
    if not path.exists():
        raise FileNotFoundError(f"Team roster not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, list):
        raise ValueError(f"Team roster '{path}' must contain a JSON array.")

    members = []
    for entry in payload:
        name = str(entry.get("name") or "").strip()
        role = str(entry.get("role") or "").strip()
        if not name or not role:
            continue  # name and role are required
        members.append(
            TeamMember(
                name=name,
                role=role,
                email=str(entry.get("email") or ""),
                phone=str(entry.get("phone") or ""),
                bio=str(entry.get("bio") or ""),
            )
        )
    return tuple(members)
