"""Search, filter and summary helpers for the expo calendar."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ...models.domain import Expo, ExpoStatus
from ..customers.query import ALL, ALL_ZONES, is_all, matches_search


@dataclass(slots=True)
class ExpoFilters:
    search: Optional[str] = None
    status: Optional[str] = None
    zone: Optional[str] = None
    participation_type: Optional[str] = None


def expo_matches(expo: Expo, filters: ExpoFilters) -> bool:
    if not matches_search(filters.search, expo.name, expo.city, expo.venue, expo.organizer_name):
        return False
    if not is_all(filters.status) and expo.status.value != filters.status.strip():
        return False
    if not is_all(filters.zone, ALL_ZONES) and expo.zone != filters.zone.strip():
        return False
    if not is_all(filters.participation_type) and expo.participation_type.value != filters.participation_type.strip():
        return False
    return True


def query_expos(expos: Iterable[Expo], filters: Optional[ExpoFilters] = None) -> list[Expo]:
    """Matching expos in collection order (newest first)."""

    filters = filters or ExpoFilters()
    return [expo for expo in expos if expo_matches(expo, filters)]


def compute_expo_stats(expos: Sequence[Expo]) -> dict:
    counts = {ALL: len(expos)}
    counts.update({status.value: 0 for status in ExpoStatus})
    for expo in expos:
        counts[expo.status.value] += 1
    return {
        "total": len(expos),
        "upcoming": counts[ExpoStatus.UPCOMING.value],
        "live": counts[ExpoStatus.LIVE.value],
        "totalLeads": sum(expo.leads_generated for expo in expos),
        "hotLeads": sum(expo.hot_leads for expo in expos),
        "ordersReceived": sum(expo.orders_received for expo in expos),
        "statusCounts": counts,
    }
