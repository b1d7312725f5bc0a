"""Customer directory endpoints."""

from __future__ import annotations

import re
from dataclasses import asdict
from typing import List
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status

from ...data.geo_repository import list_zones
from ...errors import CustomerNotFoundError, PersistenceError
from ...models.domain import Customer
from ...persistence.registry import get_registry
from ...schemas.customers import (
    CustomerImportResponse,
    CustomerListResponse,
    CustomerModel,
    CustomerPayload,
    CustomerStatsResponse,
)
from ...services.clock import format_timestamp
from ...services.customers import (
    CustomerFilters,
    compute_customer_stats,
    count_by_zone,
    delete_customer,
    get_customer,
    import_customers,
    list_cities,
    list_customers,
    save_customer,
)
from ...services.customers.importer import build_import_template, read_tabular_upload
from ...services.customers.query import SORT_FIELDS
from ...services.export import build_customer_export
from ...services.geo import zone_for_customer
from ..deps import acting_personnel, require_confirmation

router = APIRouter(prefix="/customers", tags=["customers"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._() -]")


def customer_filters(
    search: str | None = Query(default=None, description="Matches company name, city or state"),
    zone: str | None = Query(default=None, description="Zone name, or 'All Zones'"),
    state: str | None = Query(default=None, description="State name, or 'All States'"),
    city: str | None = Query(default=None, description="City name, or 'All Cities'"),
    status_filter: str | None = Query(default=None, alias="status", description="Open, Closed or All"),
    sort: str | None = Query(default=None, description=f"One of: {', '.join(SORT_FIELDS)}"),
    descending: bool = Query(default=False),
) -> CustomerFilters:
    return CustomerFilters(
        search=search,
        zone=zone,
        state=state,
        city=city,
        status=status_filter,
        sort_by=sort,
        descending=descending,
    )


def _attachment_header(file_name: str) -> dict[str, str]:
    # plain filename= is latin-1 only; filename* carries the exact UTF-8 name
    fallback = _UNSAFE_FILENAME_CHARS.sub("_", file_name)
    return {"Content-Disposition": f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(file_name, safe='')}"}


def _to_model(customer: Customer) -> CustomerModel:
    return CustomerModel(**asdict(customer), derived_zone=zone_for_customer(customer))


def _filtered(filters: CustomerFilters) -> list[Customer]:
    try:
        return list_customers(filters)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("", response_model=CustomerListResponse, status_code=status.HTTP_200_OK)
def get_customers(filters: CustomerFilters = Depends(customer_filters)) -> CustomerListResponse:
    customers = _filtered(filters)
    return CustomerListResponse(items=[_to_model(customer) for customer in customers], total=len(customers))


@router.get("/stats", response_model=CustomerStatsResponse, status_code=status.HTTP_200_OK)
def get_customer_stats() -> CustomerStatsResponse:
    return CustomerStatsResponse(**compute_customer_stats(get_registry().customers()))


@router.get("/zone-counts", response_model=dict[str, int], status_code=status.HTTP_200_OK)
def get_zone_counts() -> dict[str, int]:
    return count_by_zone(get_registry().customers(), list_zones())


@router.get("/cities", response_model=List[str], status_code=status.HTTP_200_OK)
def get_customer_cities(
    state: str | None = Query(default=None, description="State name, or 'All States'"),
) -> List[str]:
    """Cities that appear on at least one customer, for the city filter."""
    return list_cities(get_registry().customers(), state)


@router.get("/export", status_code=status.HTTP_200_OK)
def export_customers(
    export_format: str = Query(default="xlsx", alias="format", description="xlsx, pdf or csv"),
    filters: CustomerFilters = Depends(customer_filters),
) -> Response:
    """Download the currently filtered customer list."""
    customers = _filtered(filters)
    try:
        export = build_customer_export(
            customers,
            export_format,
            zone_label=filters.zone,
            generated_at=format_timestamp(),
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return Response(
        content=export.payload,
        media_type=export.media_type,
        headers=_attachment_header(export.file_name),
    )


@router.get("/import/template", status_code=status.HTTP_200_OK)
def download_import_template() -> Response:
    return Response(
        content=build_import_template(),
        media_type=XLSX_MEDIA_TYPE,
        headers=_attachment_header("Customer_Import_Template.xlsx"),
    )


@router.post("/import", response_model=CustomerImportResponse, status_code=status.HTTP_201_CREATED)
async def import_customer_file(
    file: UploadFile = File(...),
    personnel: str = Depends(acting_personnel),
) -> CustomerImportResponse:
    """Bulk-create customers from a CSV or XLSX sheet.

    Pincodes are looked up and missing states are inferred from the city. Rows whose
    name already exists in the directory are skipped.
    """
    if not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Filename is required.")

    try:
        rows = read_tabular_upload(file.filename, await file.read())
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, detail=str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="CSV files must be UTF-8 encoded.") from exc

    try:
        plan = import_customers(rows, personnel)
    except PersistenceError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    return CustomerImportResponse(
        fileName=file.filename,
        totalRows=len(rows),
        imported=len(plan.customers),
        skipped=len(plan.skipped),
        skippedNames=plan.skipped,
    )


@router.get("/{customer_id}", response_model=CustomerModel, status_code=status.HTTP_200_OK)
def get_customer_detail(customer_id: str) -> CustomerModel:
    try:
        return _to_model(get_customer(customer_id))
    except CustomerNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Customer '{customer_id}' not found") from exc


@router.post("", response_model=CustomerModel, status_code=status.HTTP_201_CREATED)
def create_customer(payload: CustomerPayload, personnel: str = Depends(acting_personnel)) -> CustomerModel:
    return _save(payload, personnel)


@router.put("/{customer_id}", response_model=CustomerModel, status_code=status.HTTP_200_OK)
def update_customer(
    customer_id: str,
    payload: CustomerPayload,
    personnel: str = Depends(acting_personnel),
) -> CustomerModel:
    return _save(payload, personnel, customer_id)


@router.delete("/{customer_id}", status_code=status.HTTP_200_OK)
def remove_customer(
    customer_id: str,
    confirm: bool = Query(default=False, description="Must be true; deletion also removes the customer's visits"),
    personnel: str = Depends(acting_personnel),
) -> dict:
    require_confirmation(confirm)
    try:
        removed_visits = delete_customer(customer_id, personnel)
    except CustomerNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Customer '{customer_id}' not found") from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    return {"deleted": customer_id, "visitsRemoved": removed_visits}


def _save(payload: CustomerPayload, personnel: str, customer_id: str | None = None) -> CustomerModel:
    try:
        customer = save_customer(payload, personnel, customer_id)
    except CustomerNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Customer '{customer_id}' not found") from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_model(customer)
