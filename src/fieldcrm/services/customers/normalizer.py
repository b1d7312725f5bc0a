"""Build complete customer records from partial form input."""

from __future__ import annotations

import copy
import math
import uuid
from typing import Mapping, Optional

from ...config import settings
from ...models.domain import ContactPerson, Customer, CustomerStatus, GeoEntry
from ...schemas.customers import CustomerPayload
from ..geo import resolve_location, sanitize_postal_code

DEFAULT_INDUSTRY = "Manufacturing"
DEFAULT_CONTACT_DESIGNATION = "Primary Contact"

_CONTACT_FIELDS = ("contact_name", "contact_email", "contact_phone", "contact_designation")


def new_customer_id() -> str:
    return f"c-{uuid.uuid4().hex[:12]}"


def new_contact_id() -> str:
    return f"cp-{uuid.uuid4().hex[:12]}"


def parse_amount(value: object) -> int:
    """Parse free-text money input into whole currency units; unparseable input is 0."""

    if value is None or isinstance(value, bool):
        return 0
    raw = value if isinstance(value, (int, float)) else str(value).strip().replace(",", "").replace("₹", "").replace(" ", "")
    if raw == "":
        return 0
    try:
        # ints beyond float range overflow
        number = float(raw)
    except (OverflowError, ValueError):
        return 0
    if not math.isfinite(number):
        return 0
    return int(round(number))


def normalize_customer(
    form: CustomerPayload,
    existing: Optional[Customer],
    acting_personnel: str,
    timestamp: str,
    *,
    geo: Optional[Mapping[str, GeoEntry]] = None,
    postal_codes: Optional[Mapping[str, tuple[str, str]]] = None,
) -> Customer:
    """Return a complete customer for a create (``existing`` is None) or an edit.

    Absent form fields keep the stored value on edit. City, state and postal code
    always pass through the location resolver, and provenance is always restamped.
    """

    base = copy.deepcopy(existing) if existing is not None else None

    def pick(name: str, default=None):
        value = getattr(form, name)
        if value is not None:
            return value
        if base is not None:
            return getattr(base, name)
        return default

    postal_input = pick("postal_code")
    postal_code = sanitize_postal_code(postal_input) if postal_input is not None else None
    location = resolve_location(
        pick("city"),
        pick("state"),
        postal_code,
        geo=geo,
        postal_codes=postal_codes,
    )

    annual_turnover = parse_amount(form.annual_turnover) if form.annual_turnover is not None else (
        base.annual_turnover if base is not None else 0
    )
    project_turnover = parse_amount(form.project_turnover) if form.project_turnover is not None else (
        base.project_turnover if base is not None else 0
    )

    if base is None:
        return Customer(
            id=new_customer_id(),
            name=(form.name or "").strip(),
            city=location.city,
            state=location.state,
            country=form.country or settings.default_country,
            postal_code=postal_code or None,
            area_sector=form.area_sector,
            industry=form.industry or DEFAULT_INDUSTRY,
            annual_turnover=annual_turnover,
            project_turnover=project_turnover,
            enquiry_no=form.enquiry_no,
            status=CustomerStatus(form.status or CustomerStatus.OPEN),
            last_date=form.last_date,
            zone=form.zone or None,
            contacts=_new_contacts(form),
            pricing_history=[],
            last_modified_by=acting_personnel,
            updated_at=timestamp,
        )

    base.name = form.name.strip() if form.name is not None else base.name
    base.city = location.city
    base.state = location.state
    base.country = pick("country")
    base.postal_code = postal_code if postal_code is not None else base.postal_code
    base.area_sector = pick("area_sector")
    base.industry = pick("industry")
    base.annual_turnover = annual_turnover
    base.project_turnover = project_turnover
    base.enquiry_no = pick("enquiry_no")
    base.status = CustomerStatus(pick("status"))
    base.last_date = pick("last_date")
    base.zone = (form.zone or None) if form.zone is not None else base.zone
    if _has_contact_input(form):
        base.contacts = _replace_primary_contact(form, base.contacts)
    base.last_modified_by = acting_personnel
    base.updated_at = timestamp
    return base


def _has_contact_input(form: CustomerPayload) -> bool:
    return any(getattr(form, name) is not None for name in _CONTACT_FIELDS)


def _new_contacts(form: CustomerPayload) -> list[ContactPerson]:
    if not (form.contact_name or "").strip():
        return []
    return [
        ContactPerson(
            id=new_contact_id(),
            name=form.contact_name.strip(),
            designation=form.contact_designation or DEFAULT_CONTACT_DESIGNATION,
            email=form.contact_email or "",
            phone=form.contact_phone or "",
        )
    ]


def _replace_primary_contact(form: CustomerPayload, contacts: list[ContactPerson]) -> list[ContactPerson]:
    """Replace the contact list with a single contact built from the form."""

    if not contacts:
        return _new_contacts(form)
    prior = contacts[0]
    return [
        ContactPerson(
            id=prior.id,
            name=form.contact_name if form.contact_name is not None else prior.name,
            designation=form.contact_designation if form.contact_designation is not None else prior.designation,
            email=form.contact_email if form.contact_email is not None else prior.email,
            phone=form.contact_phone if form.contact_phone is not None else prior.phone,
        )
    ]
