"""Expo calendar workflows."""

from __future__ import annotations

import logging
from typing import Optional

from ...errors import ExpoNotFoundError, PersistenceError
from ...models.domain import Expo
from ...persistence.database import delete_expo_from_database, save_expo_to_database
from ...persistence.registry import Registry, get_registry
from ...schemas.expos import ExpoPayload
from ..clock import creation_stamp, format_timestamp
from .normalizer import normalize_expo
from .query import ExpoFilters, compute_expo_stats, query_expos


def list_expos(filters: Optional[ExpoFilters] = None, registry: Optional[Registry] = None) -> list[Expo]:
    registry = registry or get_registry()
    return query_expos(registry.expos(), filters)


def expo_stats(registry: Optional[Registry] = None) -> dict:
    registry = registry or get_registry()
    return compute_expo_stats(registry.expos())


def get_expo(expo_id: str, registry: Optional[Registry] = None) -> Expo:
    registry = registry or get_registry()
    expo = registry.get_expo(expo_id)
    if expo is None:
        raise ExpoNotFoundError(expo_id)
    return expo


def save_expo(
    payload: ExpoPayload,
    acting_personnel: str,
    expo_id: Optional[str] = None,
    registry: Optional[Registry] = None,
) -> Expo:
    """Add an expo to the calendar (no ``expo_id``) or edit an existing one."""

    registry = registry or get_registry()

    with registry.lock:
        existing = get_expo(expo_id, registry) if expo_id else None
        expo = normalize_expo(payload, existing, acting_personnel, format_timestamp())

        snapshot = registry.snapshot()
        if existing is None:
            expo.created_at = creation_stamp()
            registry.add_expo(expo)
        else:
            registry.replace_expo(expo)
        if not save_expo_to_database(expo, is_new=existing is None):
            registry.restore(snapshot)
            raise PersistenceError(f"Expo {expo.id} could not be saved")
    return expo


def delete_expo(expo_id: str, acting_personnel: str, registry: Optional[Registry] = None) -> None:
    registry = registry or get_registry()

    with registry.lock:
        expo = get_expo(expo_id, registry)
        snapshot = registry.snapshot()
        registry.remove_expo(expo_id)
        if not delete_expo_from_database(expo_id):
            registry.restore(snapshot)
            raise PersistenceError(f"Expo {expo_id} could not be deleted")
    logging.info(f"Personnel {acting_personnel} deleted expo {expo_id} ({expo.name})")
