"""Location inference for partially specified customer addresses."""

from __future__ import annotations

import re
from typing import Mapping, Optional

from ...data.geo_repository import load_geo_reference, load_postal_codes
from ...models.domain import Customer, GeoEntry, Location

PRINCIPAL_CITY = "Principal City"
UNKNOWN_STATE = "N/A"
OTHER_ZONE = "Other"

POSTAL_CODE_LENGTH = 6

_NON_DIGITS = re.compile(r"\D")


def sanitize_postal_code(value: Optional[str]) -> str:
    """Strip non-digit characters and keep at most six digits."""

    if value is None:
        return ""
    return _NON_DIGITS.sub("", str(value))[:POSTAL_CODE_LENGTH]


def lookup_postal_code(
    value: Optional[str],
    postal_codes: Optional[Mapping[str, tuple[str, str]]] = None,
) -> Optional[tuple[str, str]]:
    """Return ``(city, state)`` for a complete postal code, or None.

    Partial codes never trigger a lookup.
    """

    code = sanitize_postal_code(value)
    if len(code) != POSTAL_CODE_LENGTH:
        return None
    table = postal_codes if postal_codes is not None else load_postal_codes()
    return table.get(code)


def infer_state_from_city(city: Optional[str], geo: Optional[Mapping[str, GeoEntry]] = None) -> Optional[str]:
    """First state, in table order, whose city list contains ``city`` (case-insensitive)."""

    needle = _clean(city).lower()
    if not needle:
        return None
    table = geo if geo is not None else load_geo_reference()
    for state, entry in table.items():
        if any(candidate.lower() == needle for candidate in entry.cities):
            return state
    return None


def derive_zone(
    *,
    zone: Optional[str] = None,
    state: Optional[str] = None,
    city: Optional[str] = None,
    geo: Optional[Mapping[str, GeoEntry]] = None,
) -> str:
    """Zone for a location: explicit override, then state, then city scan, then ``Other``."""

    override = _clean(zone)
    if override:
        return override
    table = geo if geo is not None else load_geo_reference()
    entry = table.get(_clean(state))
    if entry is not None:
        return entry.zone
    inferred = infer_state_from_city(city, table)
    if inferred is not None:
        return table[inferred].zone
    return OTHER_ZONE


def zone_for_customer(customer: Customer, geo: Optional[Mapping[str, GeoEntry]] = None) -> str:
    return derive_zone(zone=customer.zone, state=customer.state, city=customer.city, geo=geo)


def resolve_location(
    city: Optional[str] = None,
    state: Optional[str] = None,
    postal_code: Optional[str] = None,
    *,
    geo: Optional[Mapping[str, GeoEntry]] = None,
    postal_codes: Optional[Mapping[str, tuple[str, str]]] = None,
) -> Location:
    """Fill in the gaps of a partial location.

    Priority: a known six digit postal code, then a typed state, then a state
    inferred from the city. Missing values fall back to the resolver sentinels.
    """

    table = geo if geo is not None else load_geo_reference()
    typed_city = _clean(city)
    typed_state = _clean(state)

    match = lookup_postal_code(postal_code, postal_codes)
    if match is not None:
        resolved_city, resolved_state = match
    elif typed_state:
        resolved_city = typed_city or PRINCIPAL_CITY
        resolved_state = typed_state
    elif typed_city:
        resolved_city = typed_city
        resolved_state = infer_state_from_city(typed_city, table) or UNKNOWN_STATE
    else:
        resolved_city = PRINCIPAL_CITY
        resolved_state = UNKNOWN_STATE

    return Location(
        city=resolved_city,
        state=resolved_state,
        zone=derive_zone(state=resolved_state, city=resolved_city, geo=table),
    )


def _clean(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""
