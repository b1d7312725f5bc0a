"""Build complete visit records and apply status transitions."""

from __future__ import annotations

import copy
import dataclasses
import uuid
from datetime import date
from typing import Optional

from ...models.domain import Customer, Visit, VisitStatus
from ...schemas.visits import VisitPayload


def new_visit_id() -> str:
    return f"v-{uuid.uuid4().hex[:12]}"


def normalize_visit(
    form: VisitPayload,
    existing: Optional[Visit],
    customer: Optional[Customer],
    acting_personnel: str,
    today: date,
) -> Visit:
    """Return a complete visit for a new log entry or an edit.

    A new visit needs the referenced ``customer``; its name is copied as a
    snapshot. On edit the snapshot is only retaken when the visit is moved to a
    different customer.
    """

    if existing is None:
        if customer is None:
            raise ValueError("A new visit must reference an existing customer.")
        return Visit(
            id=new_visit_id(),
            customer_id=customer.id,
            customer_name=customer.name,
            date=form.date or today,
            purpose=(form.purpose or "").strip(),
            assigned_to=(form.assigned_to or "").strip() or acting_personnel,
            status=VisitStatus(form.status or VisitStatus.PLANNED),
            notes=form.notes or "",
        )

    visit = copy.deepcopy(existing)
    if customer is not None and customer.id != visit.customer_id:
        visit.customer_id = customer.id
        visit.customer_name = customer.name
    if form.date is not None:
        visit.date = form.date
    if form.purpose is not None:
        visit.purpose = form.purpose.strip()
    if form.assigned_to is not None:
        visit.assigned_to = form.assigned_to.strip() or acting_personnel
    if form.status is not None:
        visit.status = VisitStatus(form.status)
    if form.notes is not None:
        visit.notes = form.notes
    return visit


def set_visit_status(visit: Visit, status: VisitStatus | str) -> Visit:
    # every transition is allowed
    return dataclasses.replace(visit, status=VisitStatus(status))
