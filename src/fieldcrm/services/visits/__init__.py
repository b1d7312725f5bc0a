"""Visit log service helpers."""

from .normalizer import normalize_visit, set_visit_status
from .query import VisitFilters, compute_visit_stats, query_visits
from .service import change_visit_status, delete_visit, get_visit, list_visits, save_visit, visit_stats

__all__ = [
    "VisitFilters",
    "change_visit_status",
    "compute_visit_stats",
    "delete_visit",
    "get_visit",
    "list_visits",
    "normalize_visit",
    "query_visits",
    "save_visit",
    "set_visit_status",
    "visit_stats",
]
