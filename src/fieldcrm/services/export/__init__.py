"""Export services."""

from .customers import ExportFile, build_customer_export
from .formatter import (
    EXPORT_COLUMNS,
    customer_export_row,
    customer_export_rows,
    export_filename,
    format_crores,
)

__all__ = [
    "EXPORT_COLUMNS",
    "ExportFile",
    "build_customer_export",
    "customer_export_row",
    "customer_export_rows",
    "export_filename",
    "format_crores",
]
