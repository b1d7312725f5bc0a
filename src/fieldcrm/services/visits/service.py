"""Visit log workflows."""

from __future__ import annotations

import logging
from typing import Optional

from ...errors import CustomerNotFoundError, PersistenceError, VisitNotFoundError
from ...models.domain import Visit, VisitStatus
from ...persistence.database import delete_visit_from_database, save_visit_to_database
from ...persistence.registry import Registry, get_registry
from ...schemas.visits import VisitPayload
from ..clock import creation_stamp, today_local
from .normalizer import normalize_visit, set_visit_status
from .query import VisitFilters, compute_visit_stats, query_visits


def list_visits(filters: Optional[VisitFilters] = None, registry: Optional[Registry] = None) -> list[Visit]:
    registry = registry or get_registry()
    return query_visits(registry.visits(), filters)


def visit_stats(registry: Optional[Registry] = None) -> dict:
    registry = registry or get_registry()
    return compute_visit_stats(registry.visits(), today_local())


def get_visit(visit_id: str, registry: Optional[Registry] = None) -> Visit:
    registry = registry or get_registry()
    visit = registry.get_visit(visit_id)
    if visit is None:
        raise VisitNotFoundError(visit_id)
    return visit


def save_visit(
    payload: VisitPayload,
    acting_personnel: str,
    visit_id: Optional[str] = None,
    registry: Optional[Registry] = None,
) -> Visit:
    """Log a new visit (no ``visit_id``) or edit an existing one."""

    registry = registry or get_registry()

    with registry.lock:
        existing = get_visit(visit_id, registry) if visit_id else None

        customer = None
        if payload.customer_id is not None:
            customer = registry.get_customer(payload.customer_id)
            if customer is None:
                raise CustomerNotFoundError(payload.customer_id)
        elif existing is None:
            raise ValueError("customer_id is required to log a visit.")

        visit = normalize_visit(payload, existing, customer, acting_personnel, today_local())
        if existing is None:
            visit.created_at = creation_stamp()
        _commit(registry, visit, is_new=existing is None)
    return visit


def change_visit_status(
    visit_id: str,
    status: VisitStatus,
    acting_personnel: str,
    registry: Optional[Registry] = None,
) -> Visit:
    registry = registry or get_registry()
    with registry.lock:
        visit = set_visit_status(get_visit(visit_id, registry), status)
        _commit(registry, visit, is_new=False)
    logging.info(f"Personnel {acting_personnel} marked visit {visit_id} as {visit.status.value}")
    return visit


def delete_visit(visit_id: str, acting_personnel: str, registry: Optional[Registry] = None) -> None:
    registry = registry or get_registry()

    with registry.lock:
        get_visit(visit_id, registry)
        snapshot = registry.snapshot()
        registry.remove_visit(visit_id)
        if not delete_visit_from_database(visit_id):
            registry.restore(snapshot)
            raise PersistenceError(f"Visit {visit_id} could not be deleted")
    logging.info(f"Personnel {acting_personnel} deleted visit {visit_id}")


def _commit(registry: Registry, visit: Visit, *, is_new: bool) -> None:
    with registry.lock:
        snapshot = registry.snapshot()
        if is_new:
            registry.add_visit(visit)
        else:
            registry.replace_visit(visit)
        if not save_visit_to_database(visit, is_new=is_new):
            registry.restore(snapshot)
            raise PersistenceError(f"Visit {visit.id} could not be saved")
