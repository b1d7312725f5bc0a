"""Geo inference helpers."""

from .resolver import (
    OTHER_ZONE,
    PRINCIPAL_CITY,
    UNKNOWN_STATE,
    derive_zone,
    infer_state_from_city,
    lookup_postal_code,
    resolve_location,
    sanitize_postal_code,
    zone_for_customer,
)

__all__ = [
    "OTHER_ZONE",
    "PRINCIPAL_CITY",
    "UNKNOWN_STATE",
    "derive_zone",
    "infer_state_from_city",
    "lookup_postal_code",
    "resolve_location",
    "sanitize_postal_code",
    "zone_for_customer",
]
