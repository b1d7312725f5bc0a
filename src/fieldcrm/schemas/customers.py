"""Customer-facing API schemas."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict

from ..models.domain import CustomerStatus


class CustomerPayload(BaseModel):
    """Form input for creating or editing a customer.

    Every field is optional; on edit a field left as ``None`` keeps the stored value.
    Turnover fields accept free text such as ``"1,20,00,000"``.
    """

    name: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None
    area_sector: str | None = None
    industry: str | None = None
    annual_turnover: str | int | float | None = None
    project_turnover: str | int | float | None = None
    enquiry_no: str | None = None
    status: CustomerStatus | None = None
    last_date: str | None = None
    zone: str | None = None
    contact_name: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    contact_designation: str | None = None


class ContactModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    designation: str = ""
    email: str = ""
    phone: str = ""


class CustomerModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    city: str
    state: str
    country: str
    postal_code: str | None = None
    area_sector: str | None = None
    industry: str = ""
    annual_turnover: int = 0
    project_turnover: int = 0
    enquiry_no: str | None = None
    status: CustomerStatus = CustomerStatus.OPEN
    last_date: str | None = None
    zone: str | None = None
    derived_zone: str
    contacts: List[ContactModel] = []
    pricing_history: List[dict] = []
    last_modified_by: str | None = None
    updated_at: str | None = None
    created_at: str | None = None


class CustomerListResponse(BaseModel):
    items: List[CustomerModel]
    total: int


class TopZoneModel(BaseModel):
    code: str
    ratio: float
    customers: int


class CustomerStatsResponse(BaseModel):
    totalCustomers: int
    totalTurnover: int
    totalTurnoverCrores: str
    zoneCounts: dict[str, int]
    statusCounts: dict[str, int]
    topZones: list[TopZoneModel]


class CustomerImportResponse(BaseModel):
    fileName: str
    totalRows: int
    imported: int
    skipped: int
    skippedNames: List[str]
