"""Loaders for the static geo reference and postal code tables."""

from __future__ import annotations

import functools
import json
from pathlib import Path
from typing import Mapping, Optional

from ..config import settings
from ..models.domain import GeoEntry


def _read_json(path: Path, label: str) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"{label} not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{label} '{path}' must contain a JSON object.")
    return payload


@functools.lru_cache(maxsize=1)
def load_geo_reference(source: Optional[Path] = None) -> Mapping[str, GeoEntry]:
    """Load the state -> zone/cities table, preserving the file's state order."""

    payload = _read_json(source or settings.geo_reference_file, "Geo reference table")
    table: dict[str, GeoEntry] = {}
    for state, entry in payload.items():
        zone = str(entry.get("zone") or "").strip()
        cities = tuple(str(city).strip() for city in entry.get("cities") or () if str(city).strip())
        if not zone:
            raise ValueError(f"Geo reference entry '{state}' is missing a zone.")
        table[state] = GeoEntry(state=state, zone=zone, cities=cities)
    return table


@functools.lru_cache(maxsize=1)
def load_postal_codes(source: Optional[Path] = None) -> Mapping[str, tuple[str, str]]:
    """Load the postal code -> (city, state) lookup table."""

    payload = _read_json(source or settings.postal_code_file, "Postal code table")
    lookup: dict[str, tuple[str, str]] = {}
    for code, entry in payload.items():
        city = str(entry.get("city") or "").strip()
        state = str(entry.get("state") or "").strip()
        if len(code) != 6 or not code.isdigit() or not city or not state:
            continue  # ignore malformed rows
        lookup[code] = (city, state)
    return lookup


def list_zones(geo: Optional[Mapping[str, GeoEntry]] = None) -> list[str]:
    """Distinct zone names in first-seen order."""

    table = geo if geo is not None else load_geo_reference()
    return list(dict.fromkeys(entry.zone for entry in table.values()))


def clear_reference_caches() -> None:
    load_geo_reference.cache_clear()
    load_postal_codes.cache_clear()
