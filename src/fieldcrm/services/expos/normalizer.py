"""Build complete expo records from partial form input."""

from __future__ import annotations

import copy
import uuid
from typing import Mapping, Optional

from ...models.domain import Expo, ExpoStatus, GeoEntry, ParticipationType
from ...schemas.expos import ExpoPayload
from ..customers.normalizer import parse_amount
from ..geo import derive_zone

DEFAULT_INDUSTRY = "Mechanical"
DEFAULT_REGION = "India"
DEFAULT_EVENT_TYPE = "Expo / Trade Fair"

_TEXT_FIELDS = (
    "city",
    "state",
    "venue",
    "organizer_name",
    "website",
    "stall_no",
    "assigned_team",
)
_AMOUNT_FIELDS = ("budget", "fee_cost", "leads_generated", "hot_leads", "orders_received")


def new_expo_id() -> str:
    return f"e-{uuid.uuid4().hex[:12]}"


def normalize_expo(
    form: ExpoPayload,
    existing: Optional[Expo],
    acting_personnel: str,
    timestamp: str,
    *,
    geo: Optional[Mapping[str, GeoEntry]] = None,
) -> Expo:
    """Return a complete expo for a create (``existing`` is None) or an edit.

    Raises ValueError when the merged record has no name or start date, or
    ends before it starts.
    """

    expo = copy.deepcopy(existing) if existing is not None else Expo(
        id=new_expo_id(),
        name="",
        start_date=None,
        industry=DEFAULT_INDUSTRY,
        region=DEFAULT_REGION,
        event_type=DEFAULT_EVENT_TYPE,
    )

    if form.name is not None:
        expo.name = form.name.strip()
    if form.start_date is not None:
        expo.start_date = form.start_date
    if form.end_date is not None:
        expo.end_date = form.end_date
    for name in _TEXT_FIELDS:
        value = getattr(form, name)
        if value is not None:
            setattr(expo, name, value.strip())
    for name in ("industry", "region", "event_type"):
        value = getattr(form, name)
        if value is not None:
            setattr(expo, name, value.strip() or getattr(expo, name))
    for name in _AMOUNT_FIELDS:
        value = getattr(form, name)
        if value is not None:
            setattr(expo, name, parse_amount(value))
    if form.participation_type is not None:
        expo.participation_type = ParticipationType(form.participation_type)
    if form.status is not None:
        expo.status = ExpoStatus(form.status)

    if form.zone is not None and form.zone.strip():
        expo.zone = form.zone.strip()
    elif any(getattr(form, name) is not None for name in ("zone", "city", "state")):
        # relocated or override cleared
        expo.zone = derive_zone(state=expo.state, city=expo.city, geo=geo) if expo.city or expo.state else ""

    if not expo.name:
        raise ValueError("Expo name is required.")
    if expo.start_date is None:
        raise ValueError("Expo start date is required.")
    if expo.end_date is not None and expo.end_date < expo.start_date:
        raise ValueError("Expo end date cannot be before its start date.")

    expo.last_modified_by = acting_personnel
    expo.updated_at = timestamp
    return expo
