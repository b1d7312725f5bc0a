"""Customer service helpers."""

from .normalizer import normalize_customer, parse_amount
from .query import CustomerFilters, count_by_status, count_by_zone, list_cities, query_customers
from .service import delete_customer, get_customer, import_customers, list_customers, save_customer
from .stats import compute_customer_stats

__all__ = [
    "CustomerFilters",
    "compute_customer_stats",
    "count_by_status",
    "count_by_zone",
    "delete_customer",
    "get_customer",
    "import_customers",
    "list_cities",
    "list_customers",
    "normalize_customer",
    "parse_amount",
    "query_customers",
    "save_customer",
]
