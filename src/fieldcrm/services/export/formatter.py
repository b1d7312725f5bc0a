"""Flatten customer collections into tabular rows for spreadsheet and PDF writers."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from ...models.domain import Customer, GeoEntry
from ..geo import zone_for_customer

CRORE = 10_000_000

DEFAULT_INDUSTRY_LABEL = "General Mfg"
MISSING = "N/A"

EXPORT_COLUMNS = (
    "Company Name",
    "City",
    "State",
    "Zone",
    "Industry",
    "Annual Turnover (Cr)",
    "Last Modified By",
    "Last Updated",
)

# PDF report shows the first six columns under shorter headings.
PDF_COLUMNS = ("Identity", "City", "State", "Zone", "Vertical", "Rev (Cr)")

EXPORT_FORMATS = {
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "pdf": "application/pdf",
    "csv": "text/csv",
}


def format_crores(value: Optional[int | float]) -> str:
    """Currency value expressed in crores with two decimals, whatever its magnitude."""

    return f"{(value or 0) / CRORE:.2f}"


def customer_export_row(customer: Customer, geo: Optional[Mapping[str, GeoEntry]] = None) -> tuple[str, ...]:
    return (
        customer.name,
        customer.city,
        customer.state,
        zone_for_customer(customer, geo),
        customer.industry or DEFAULT_INDUSTRY_LABEL,
        format_crores(customer.annual_turnover),
        customer.last_modified_by or MISSING,
        customer.updated_at or MISSING,
    )


def customer_export_rows(
    customers: Iterable[Customer],
    geo: Optional[Mapping[str, GeoEntry]] = None,
) -> list[tuple[str, ...]]:
    return [customer_export_row(customer, geo) for customer in customers]


def export_filename(zone_label: Optional[str], extension: str) -> str:
    """``Customers_Export_<zone>.<ext>`` with spaces in the zone label turned into underscores."""

    label = (zone_label or "All Zones").strip() or "All Zones"
    return f"Customers_Export_{label.replace(' ', '_')}.{extension.lstrip('.')}"
