"""Customer workflows: normalize, commit to the registry, persist, revert on failure."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

from ...errors import CustomerNotFoundError, PersistenceError
from ...models.domain import Customer
from ...persistence.database import (
    delete_customer_from_database,
    save_customer_to_database,
    save_customers_to_database,
)
from ...persistence.registry import Registry, get_registry
from ...schemas.customers import CustomerPayload
from ..clock import creation_stamp, format_timestamp, now_local
from .importer import ImportPlan, plan_import
from .normalizer import normalize_customer
from .query import CustomerFilters, query_customers


def list_customers(filters: Optional[CustomerFilters] = None, registry: Optional[Registry] = None) -> list[Customer]:
    registry = registry or get_registry()
    return query_customers(registry.customers(), filters)


def get_customer(customer_id: str, registry: Optional[Registry] = None) -> Customer:
    registry = registry or get_registry()
    customer = registry.get_customer(customer_id)
    if customer is None:
        raise CustomerNotFoundError(customer_id)
    return customer


def save_customer(
    payload: CustomerPayload,
    acting_personnel: str,
    customer_id: Optional[str] = None,
    registry: Optional[Registry] = None,
) -> Customer:
    """Create (no ``customer_id``) or edit a customer.

    The registry is updated first; if the backing store rejects the write the
    registry is restored and PersistenceError is raised.
    """

    registry = registry or get_registry()

    # read through commit under one hold, so an edit never outlives a purge
    with registry.lock:
        existing = get_customer(customer_id, registry) if customer_id else None
        customer = normalize_customer(payload, existing, acting_personnel, format_timestamp())
        if not customer.name:
            raise ValueError("Customer name is required.")

        snapshot = registry.snapshot()
        if existing is None:
            customer.created_at = creation_stamp()
            registry.add_customer(customer)
        else:
            registry.replace_customer(customer)
        if not save_customer_to_database(customer, is_new=existing is None):
            registry.restore(snapshot)
            raise PersistenceError(f"Customer {customer.id} could not be saved")
    return customer


def delete_customer(customer_id: str, acting_personnel: str, registry: Optional[Registry] = None) -> int:
    """Purge a customer and its visits. Returns the number of visits removed."""

    registry = registry or get_registry()

    with registry.lock:
        customer = get_customer(customer_id, registry)
        snapshot = registry.snapshot()
        removed_visits = registry.remove_customer(customer_id)
        if not delete_customer_from_database(customer_id):
            registry.restore(snapshot)
            raise PersistenceError(f"Customer {customer_id} could not be deleted")

    logging.info(
        f"Personnel {acting_personnel} purged customer {customer_id} ({customer.name}) "
        f"and {len(removed_visits)} related visits"
    )
    return len(removed_visits)


def import_customers(
    rows: list[dict[str, object]],
    acting_personnel: str,
    registry: Optional[Registry] = None,
) -> ImportPlan:
    registry = registry or get_registry()

    with registry.lock:
        plan = plan_import(rows, registry.customers(), acting_personnel, format_timestamp())
        if not plan.customers:
            return plan
        snapshot = registry.snapshot()
        # first row ends up newest, so the file order survives a reload
        created = now_local()
        for offset, customer in enumerate(plan.customers):
            customer.created_at = creation_stamp(created - timedelta(microseconds=offset))
        for customer in reversed(plan.customers):
            registry.add_customer(customer)
        saved = save_customers_to_database(plan.customers)
        if saved != len(plan.customers):
            registry.restore(snapshot)
            raise PersistenceError(f"Only {saved} of {len(plan.customers)} imported customers could be saved")

    logging.info(f"Personnel {acting_personnel} imported {len(plan.customers)} customers ({len(plan.skipped)} skipped)")
    return plan
