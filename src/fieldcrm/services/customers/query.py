"""Search, filter and sort helpers for the customer collection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Optional, Sequence

from ...models.domain import Customer, GeoEntry
from ..geo import zone_for_customer

ALL = "All"
ALL_ZONES = "All Zones"
ALL_STATES = "All States"
ALL_CITIES = "All Cities"

_SORT_KEYS: dict[str, Callable[[Customer], object]] = {
    "name": lambda customer: (customer.name or "").lower(),
    "city": lambda customer: (customer.city or "").lower(),
    "state": lambda customer: (customer.state or "").lower(),
    "turnover": lambda customer: customer.annual_turnover,
}

SORT_FIELDS = tuple(_SORT_KEYS)


@dataclass(slots=True)
class CustomerFilters:
    search: Optional[str] = None
    zone: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    status: Optional[str] = None
    sort_by: Optional[str] = None
    descending: bool = False


def is_all(value: Optional[str], *sentinels: str) -> bool:
    """True when a categorical filter value disables its filter."""

    if value is None:
        return True
    stripped = str(value).strip()
    return not stripped or stripped == ALL or stripped in sentinels


def matches_search(term: Optional[str], *fields: Optional[str]) -> bool:
    needle = (term or "").strip().lower()
    if not needle:
        return True
    return any(needle in field.lower() for field in fields if field)


def customer_matches(
    customer: Customer,
    filters: CustomerFilters,
    geo: Optional[Mapping[str, GeoEntry]] = None,
) -> bool:
    if not matches_search(filters.search, customer.name, customer.city, customer.state):
        return False
    if not is_all(filters.zone, ALL_ZONES) and zone_for_customer(customer, geo) != filters.zone.strip():
        return False
    if not is_all(filters.state, ALL_STATES) and customer.state != filters.state.strip():
        return False
    if not is_all(filters.city, ALL_CITIES) and (customer.city or "").strip() != filters.city.strip():
        return False
    if not is_all(filters.status) and _status_label(customer) != filters.status.strip():
        return False
    return True


def query_customers(
    customers: Iterable[Customer],
    filters: Optional[CustomerFilters] = None,
    geo: Optional[Mapping[str, GeoEntry]] = None,
) -> list[Customer]:
    """Customers satisfying every active filter.

    Collection order is kept unless ``filters.sort_by`` names a sort field.
    """

    filters = filters or CustomerFilters()
    results = [customer for customer in customers if customer_matches(customer, filters, geo)]
    if filters.sort_by:
        key = _SORT_KEYS.get(filters.sort_by)
        if key is None:
            raise ValueError(f"Unsupported sort field '{filters.sort_by}'. Use one of: {', '.join(SORT_FIELDS)}")
        results.sort(key=key, reverse=filters.descending)
    return results


def count_by_zone(
    customers: Sequence[Customer],
    zones: Iterable[str],
    geo: Optional[Mapping[str, GeoEntry]] = None,
) -> dict[str, int]:
    """Badge counts per zone over the whole collection, ignoring active filters.

    Zones seen on customers but missing from ``zones`` (e.g. ``Other``) are appended.
    """

    counts: dict[str, int] = {ALL_ZONES: len(customers)}
    for zone in zones:
        counts.setdefault(zone, 0)
    for customer in customers:
        zone = zone_for_customer(customer, geo)
        counts[zone] = counts.get(zone, 0) + 1
    return counts


def count_by_status(customers: Sequence[Customer]) -> dict[str, int]:
    counts: dict[str, int] = {ALL: len(customers), "Open": 0, "Closed": 0}
    for customer in customers:
        label = _status_label(customer)
        counts[label] = counts.get(label, 0) + 1
    return counts


def list_cities(customers: Iterable[Customer], state: Optional[str] = None) -> list[str]:
    """Distinct, sorted city names present on customers, optionally within one state."""

    names = {
        (customer.city or "").strip()
        for customer in customers
        if is_all(state, ALL_STATES) or customer.state == state
    }
    return sorted((name for name in names if name), key=str.lower)


def _status_label(customer: Customer) -> str:
    status = customer.status
    return status.value if hasattr(status, "value") else str(status or "")
