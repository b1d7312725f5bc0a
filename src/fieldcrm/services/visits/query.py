"""Search, filter and ordering helpers for the visit log."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from ...models.domain import Visit, VisitStatus
from ..customers.query import ALL, is_all, matches_search


@dataclass(slots=True)
class VisitFilters:
    search: Optional[str] = None
    status: Optional[str] = None
    customer_id: Optional[str] = None


def visit_matches(visit: Visit, filters: VisitFilters) -> bool:
    if not matches_search(filters.search, visit.customer_name, visit.purpose, visit.assigned_to):
        return False
    if not is_all(filters.status) and visit.status.value != filters.status.strip():
        return False
    if filters.customer_id and visit.customer_id != filters.customer_id:
        return False
    return True


def query_visits(visits: Iterable[Visit], filters: Optional[VisitFilters] = None) -> list[Visit]:
    """Matching visits, most recent date first; equal dates keep insertion order."""

    filters = filters or VisitFilters()
    matched = [visit for visit in visits if visit_matches(visit, filters)]
    return sorted(matched, key=lambda visit: visit.date, reverse=True)


def count_by_status(visits: Sequence[Visit]) -> dict[str, int]:
    counts = {ALL: len(visits)}
    counts.update({status.value: 0 for status in VisitStatus})
    for visit in visits:
        counts[visit.status.value] += 1
    return counts


def compute_visit_stats(visits: Sequence[Visit], today: date) -> dict:
    """Dashboard summary; ``upcoming`` counts planned visits dated today or later."""

    return {
        "total": len(visits),
        "upcoming": sum(1 for visit in visits if visit.status is VisitStatus.PLANNED and visit.date >= today),
        "completed": sum(1 for visit in visits if visit.status is VisitStatus.COMPLETED),
        "cancelled": sum(1 for visit in visits if visit.status is VisitStatus.CANCELLED),
        "statusCounts": count_by_status(visits),
    }
