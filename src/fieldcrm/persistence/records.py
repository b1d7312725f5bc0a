"""Mapping between domain objects and Supabase row dictionaries."""

from __future__ import annotations

from datetime import date
from typing import Any

from ..models.domain import (
    ContactPerson,
    Customer,
    CustomerStatus,
    Expo,
    ExpoStatus,
    ParticipationType,
    TeamMember,
    Visit,
    VisitStatus,
)


def customer_to_record(customer: Customer) -> dict[str, Any]:
    return {
        "id": customer.id,
        "name": customer.name,
        "city": customer.city,
        "state": customer.state,
        "country": customer.country,
        "pincode": customer.postal_code,
        "area_sector": customer.area_sector,
        "industry": customer.industry,
        "annual_turnover": customer.annual_turnover,
        "project_turnover": customer.project_turnover,
        "enquiry_no": customer.enquiry_no,
        "status": customer.status.value,
        "last_date": customer.last_date,
        "zone": customer.zone,
        "last_modified_by": customer.last_modified_by,
        "updated_at": customer.updated_at,
        "created_at": customer.created_at,
    }


def contact_to_record(contact: ContactPerson, customer_id: str) -> dict[str, Any]:
    return {
        "id": contact.id,
        "customer_id": customer_id,
        "name": contact.name,
        "designation": contact.designation,
        "email": contact.email,
        "phone": contact.phone,
    }


def record_to_customer(row: dict[str, Any]) -> Customer:
    contacts = [
        ContactPerson(
            id=str(item.get("id") or ""),
            name=item.get("name") or "",
            designation=item.get("designation") or "",
            email=item.get("email") or "",
            phone=item.get("phone") or "",
        )
        for item in row.get("contacts") or []
    ]
    try:
        status = CustomerStatus(row.get("status") or CustomerStatus.OPEN.value)
    except ValueError:
        status = CustomerStatus.OPEN
    return Customer(
        id=str(row["id"]),
        name=row.get("name") or "",
        city=row.get("city") or "",
        state=row.get("state") or "",
        country=row.get("country") or "",
        postal_code=row.get("pincode"),
        area_sector=row.get("area_sector"),
        industry=row.get("industry") or "",
        annual_turnover=_coerce_int(row.get("annual_turnover")),
        project_turnover=_coerce_int(row.get("project_turnover")),
        enquiry_no=row.get("enquiry_no"),
        status=status,
        last_date=row.get("last_date"),
        zone=row.get("zone"),
        contacts=contacts,
        pricing_history=list(row.get("pricing_history") or []),
        last_modified_by=row.get("last_modified_by"),
        updated_at=row.get("updated_at"),
        created_at=row.get("created_at"),
    )


def visit_to_record(visit: Visit) -> dict[str, Any]:
    return {
        "id": visit.id,
        "customer_id": visit.customer_id,
        "customer_name": visit.customer_name,
        "date": visit.date.isoformat(),
        "purpose": visit.purpose,
        "assigned_to": visit.assigned_to,
        "status": visit.status.value,
        "notes": visit.notes,
        "created_at": visit.created_at,
    }


def record_to_visit(row: dict[str, Any]) -> Visit:
    return Visit(
        id=str(row["id"]),
        customer_id=str(row.get("customer_id") or ""),
        customer_name=row.get("customer_name") or "",
        date=_parse_date(row.get("date")),
        purpose=row.get("purpose") or "",
        assigned_to=row.get("assigned_to") or "",
        status=VisitStatus(row.get("status") or VisitStatus.PLANNED.value),
        notes=row.get("notes") or "",
        created_at=row.get("created_at"),
    )


def _coerce_int(value: Any) -> int:
    if value is None or value == "":
        return 0
    try:
        return int(round(float(value)))
    except (TypeError, ValueError):
        return 0


def expo_to_record(expo: Expo) -> dict[str, Any]:
    return {
        "id": expo.id,
        "name": expo.name,
        "start_date": expo.start_date.isoformat(),
        "end_date": expo.end_date.isoformat() if expo.end_date else None,
        "city": expo.city,
        "state": expo.state,
        "venue": expo.venue,
        "zone": expo.zone,
        "industry": expo.industry,
        "region": expo.region,
        "event_type": expo.event_type,
        "organizer_name": expo.organizer_name,
        "website": expo.website,
        "participation_type": expo.participation_type.value,
        "stall_no": expo.stall_no,
        "assigned_team": expo.assigned_team,
        "status": expo.status.value,
        "budget": expo.budget,
        "fee_cost": expo.fee_cost,
        "leads_generated": expo.leads_generated,
        "hot_leads": expo.hot_leads,
        "orders_received": expo.orders_received,
        "last_modified_by": expo.last_modified_by,
        "updated_at": expo.updated_at,
        "created_at": expo.created_at,
    }


def record_to_expo(row: dict[str, Any]) -> Expo:
    end_date = row.get("end_date")
    try:
        participation = ParticipationType(row.get("participation_type") or ParticipationType.VISITOR.value)
    except ValueError:
        participation = ParticipationType.VISITOR
    return Expo(
        id=str(row["id"]),
        name=row.get("name") or "",
        start_date=_parse_date(row.get("start_date")),
        end_date=_parse_date(end_date) if end_date else None,
        city=row.get("city") or "",
        state=row.get("state") or "",
        venue=row.get("venue") or "",
        zone=row.get("zone") or "",
        industry=row.get("industry") or "",
        region=row.get("region") or "",
        event_type=row.get("event_type") or "",
        organizer_name=row.get("organizer_name") or "",
        website=row.get("website") or "",
        participation_type=participation,
        stall_no=row.get("stall_no") or "",
        assigned_team=row.get("assigned_team") or "",
        status=parse_expo_status(row.get("status")),
        budget=_coerce_int(row.get("budget")),
        fee_cost=_coerce_int(row.get("fee_cost")),
        leads_generated=_coerce_int(row.get("leads_generated")),
        hot_leads=_coerce_int(row.get("hot_leads")),
        orders_received=_coerce_int(row.get("orders_received")),
        last_modified_by=row.get("last_modified_by"),
        updated_at=row.get("updated_at"),
        created_at=row.get("created_at"),
    )


def parse_expo_status(value: Any) -> ExpoStatus:
    """Case-insensitive; older rows spell the cancelled state ``canceled``."""
    text = str(value or "").strip().lower()
    if text == "canceled":
        return ExpoStatus.CANCELLED
    return next((status for status in ExpoStatus if status.value.lower() == text), ExpoStatus.UPCOMING)


def team_member_to_record(member: TeamMember) -> dict[str, Any]:
    return {
        "name": member.name,
        "role": member.role,
        "email": member.email,
        "phone": member.phone,
        "bio": member.bio,
        "created_at": member.created_at,
    }


def record_to_team_member(row: dict[str, Any]) -> TeamMember:
    return TeamMember(
        name=str(row["name"]),
        role=row.get("role") or "",
        email=row.get("email") or "",
        phone=row.get("phone") or "",
        bio=row.get("bio") or "",
        created_at=row.get("created_at"),
    )


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])
