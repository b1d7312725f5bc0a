"""Customer analytics helpers."""

from __future__ import annotations

from collections import Counter
from typing import List, Mapping, Optional, Sequence

from ...data.geo_repository import list_zones
from ...models.domain import Customer, GeoEntry
from ..export.formatter import format_crores
from ..geo import zone_for_customer
from .query import count_by_status, count_by_zone


def compute_customer_stats(
    customers: Sequence[Customer],
    top_n: int = 3,
    geo: Optional[Mapping[str, GeoEntry]] = None,
) -> dict:
    total_customers = len(customers)
    total_turnover = sum(customer.annual_turnover or 0 for customer in customers)

    zone_counts: Counter[str] = Counter(zone_for_customer(customer, geo) for customer in customers)

    top_zones: List[dict] = []
    if total_customers:
        for zone, count in zone_counts.most_common(top_n):
            ratio = round(count / total_customers, 2)
            top_zones.append({"code": zone, "ratio": ratio, "customers": count})

    return {
        "totalCustomers": total_customers,
        "totalTurnover": total_turnover,
        "totalTurnoverCrores": format_crores(total_turnover),
        "zoneCounts": count_by_zone(customers, list_zones(geo), geo),
        "statusCounts": count_by_status(customers),
        "topZones": top_zones,
    }
