"""Bulk customer import from CSV/XLSX uploads."""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import Iterable, Mapping, Optional, Sequence

from openpyxl import Workbook, load_workbook

from ...models.domain import Customer, CustomerStatus, GeoEntry
from ...schemas.customers import CustomerPayload
from .normalizer import normalize_customer

SUPPORTED_SUFFIXES = {".csv", ".xlsx"}

TEMPLATE_HEADERS = (
    "Customer Name",
    "City",
    "State",
    "Pincode",
    "Country",
    "Industry",
    "Annual Turnover",
    "Project Turnover",
    "Status",
    "Contact 1 Name",
    "Contact 1 Email",
    "Contact 1 Phone",
    "Contact 1 Designation",
)

# Patterns are matched against headers lowercased with spaces/dashes as underscores.
_FIELD_PATTERNS = {
    "name": ["customer_name", "customername", "company_name", "lead_name", "name", "company", "account_name"],
    "city": ["city", "city_hub", "town", "location"],
    "state": ["state", "province"],
    "postal_code": ["pincode", "pin_code", "pin", "postal_code", "zip", "zip_code"],
    "country": ["country"],
    "area_sector": ["area_sector", "area", "sector", "industrial_area"],
    "industry": ["industry", "vertical", "industry_type"],
    "annual_turnover": ["annual_turnover", "turnover", "revenue"],
    "project_turnover": ["project_turnover", "project_value"],
    "enquiry_no": ["enquiry_no", "enquiry_number", "enquiry", "inquiry_no"],
    "status": ["status", "lead_status"],
    "last_date": ["last_date", "date", "last_interaction"],
    "contact_name": ["contact_1_name", "contact_name", "primary_contact"],
    "contact_email": ["contact_1_email", "contact_email", "email"],
    "contact_phone": ["contact_1_phone", "contact_phone", "phone", "mobile"],
    "contact_designation": ["contact_1_designation", "contact_designation", "designation"],
}


@dataclass(slots=True)
class ImportPlan:
    customers: list[Customer] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def read_tabular_upload(file_name: str, contents: bytes) -> list[dict[str, object]]:
    """Parse CSV or XLSX bytes into row dictionaries keyed by header."""

    suffix = Path(file_name).suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError("Only .csv and .xlsx files are supported.")

    if suffix == ".csv":
        lines = contents.decode("utf-8-sig").splitlines()
        return list(csv.DictReader(lines))

    workbook = load_workbook(filename=BytesIO(contents), read_only=True, data_only=True)
    worksheet = workbook.active
    row_iter = worksheet.iter_rows(values_only=True)
    headers = [str(cell) if cell is not None else "" for cell in next(row_iter, [])]
    rows = []
    for row_values in row_iter:
        row_dict = {headers[i]: ("" if cell is None else cell) for i, cell in enumerate(row_values) if i < len(headers)}
        rows.append(row_dict)
    return rows


def suggest_column_mappings(headers: Iterable[str]) -> dict[str, str]:
    """Map payload fields to the upload's column headers."""
    mappings: dict[str, str] = {}
    normalized_headers = {h.lower().strip().replace(" ", "_").replace("-", "_"): h for h in headers if h}

    for field_name, pattern_list in _FIELD_PATTERNS.items():
        for pattern in pattern_list:
            if pattern in normalized_headers and normalized_headers[pattern] not in mappings.values():
                mappings[field_name] = normalized_headers[pattern]
                break

    return mappings


def row_to_payload(row: Mapping[str, object], mappings: Mapping[str, str]) -> CustomerPayload:
    values: dict[str, object] = {}
    for field_name, column in mappings.items():
        raw = row.get(column)
        text = "" if raw is None else str(raw).strip()
        if not text:
            continue
        values[field_name] = text

    status_text = str(values.pop("status", "")).lower()
    status = next((candidate for candidate in CustomerStatus if candidate.value.lower() == status_text), None)
    return CustomerPayload(**values, status=status)


def plan_import(
    rows: Sequence[Mapping[str, object]],
    existing: Iterable[Customer],
    acting_personnel: str,
    timestamp: str,
    *,
    geo: Optional[Mapping[str, GeoEntry]] = None,
    postal_codes: Optional[Mapping[str, tuple[str, str]]] = None,
) -> ImportPlan:
    """Normalize every row into a new customer.

    Rows without a name are ignored. Names already present (in the registry or
    earlier in the same upload, compared case-insensitively) are skipped.
    """

    plan = ImportPlan()
    if not rows:
        return plan

    mappings = suggest_column_mappings(rows[0].keys())
    seen = {customer.name.strip().lower() for customer in existing}
    for row in rows:
        payload = row_to_payload(row, mappings)
        name = (payload.name or "").strip()
        if not name:
            continue
        if name.lower() in seen:
            plan.skipped.append(name)
            continue
        seen.add(name.lower())
        plan.customers.append(
            normalize_customer(payload, None, acting_personnel, timestamp, geo=geo, postal_codes=postal_codes)
        )
    return plan


def build_import_template() -> bytes:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "Template"
    worksheet.append(list(TEMPLATE_HEADERS))
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
