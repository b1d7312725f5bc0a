"""Assemble downloadable customer exports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from ...models.domain import Customer, GeoEntry
from .formatter import EXPORT_COLUMNS, EXPORT_FORMATS, PDF_COLUMNS, customer_export_rows, export_filename
from .writers import rows_to_csv, rows_to_pdf, rows_to_xlsx

PDF_TITLE = "National Client Directory"


@dataclass(slots=True)
class ExportFile:
    file_name: str
    media_type: str
    payload: bytes


def build_customer_export(
    customers: Sequence[Customer],
    export_format: str,
    *,
    zone_label: Optional[str] = None,
    generated_at: str = "",
    geo: Optional[Mapping[str, GeoEntry]] = None,
) -> ExportFile:
    """Render the given (already filtered) customers as a complete file."""

    fmt = export_format.lower().lstrip(".")
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format '{export_format}'. Use one of: {', '.join(EXPORT_FORMATS)}")

    rows = customer_export_rows(customers, geo)
    if fmt == "xlsx":
        payload = rows_to_xlsx(EXPORT_COLUMNS, rows)
    elif fmt == "csv":
        payload = rows_to_csv(EXPORT_COLUMNS, rows).encode("utf-8")
    else:
        region = (zone_label or "All Zones").strip() or "All Zones"
        payload = rows_to_pdf(
            PDF_COLUMNS,
            [row[: len(PDF_COLUMNS)] for row in rows],
            title=PDF_TITLE,
            subtitle_lines=(
                f"Region: {region} | Total Records: {len(rows)}",
                f"Generated on: {generated_at}",
            ),
        )

    return ExportFile(
        file_name=export_filename(zone_label, fmt),
        media_type=EXPORT_FORMATS[fmt],
        payload=payload,
    )
