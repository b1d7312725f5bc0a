"""Shared request dependencies."""

from __future__ import annotations

from fastapi import Header, HTTPException, status

from ..errors import UnknownPersonnelError
from ..services.personnel import resolve_personnel


def acting_personnel(x_personnel: str | None = Header(default=None, description="Personnel the change is attributed to")) -> str:
    try:
        return resolve_personnel(x_personnel)
    except UnknownPersonnelError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


def require_confirmation(confirm: bool) -> None:
    """Purge actions must be explicitly confirmed by the caller."""
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_428_PRECONDITION_REQUIRED,
            detail="Deletion is permanent; repeat the request with confirm=true.",
        )
