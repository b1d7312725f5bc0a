"""Domain models for customer accounts, field visits, expos, the marketing team and geo reference data."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class CustomerStatus(str, Enum):
    OPEN = "Open"
    CLOSED = "Closed"


class VisitStatus(str, Enum):
    """Visit lifecycle states. Any state may move to any other."""

    PLANNED = "Planned"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    RESCHEDULED = "Rescheduled"


@dataclass(slots=True)
class ContactPerson:
    id: str
    name: str
    designation: str = ""
    email: str = ""
    phone: str = ""


@dataclass(slots=True)
class Customer:
    """A customer account with its location, commercial figures and provenance."""

    id: str
    name: str
    city: str
    state: str
    country: str
    postal_code: Optional[str] = None
    area_sector: Optional[str] = None
    industry: str = ""
    annual_turnover: int = 0
    project_turnover: int = 0
    enquiry_no: Optional[str] = None
    status: CustomerStatus = CustomerStatus.OPEN
    last_date: Optional[str] = None
    zone: Optional[str] = None
    contacts: list[ContactPerson] = field(default_factory=list)
    pricing_history: list[dict] = field(default_factory=list)
    last_modified_by: Optional[str] = None
    updated_at: Optional[str] = None
    # ISO-8601 instant; orders the collection across reloads
    created_at: Optional[str] = None


@dataclass(slots=True)
class Visit:
    """A field visit logged against a customer.

    ``customer_name`` is a snapshot taken when the visit is created and is not
    kept in sync with later renames of the customer.
    """

    id: str
    customer_id: str
    customer_name: str
    date: date
    purpose: str
    assigned_to: str
    status: VisitStatus = VisitStatus.PLANNED
    notes: str = ""
    created_at: Optional[str] = None


class ExpoStatus(str, Enum):
    UPCOMING = "Upcoming"
    LIVE = "Live"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class ParticipationType(str, Enum):
    VISITOR = "Visitor"
    EXHIBITOR = "Exhibitor"


@dataclass(slots=True)
class Expo:
    """A trade fair or exhibition the team attends or exhibits at."""

    id: str
    name: str
    start_date: date
    end_date: Optional[date] = None
    city: str = ""
    state: str = ""
    venue: str = ""
    zone: str = ""
    industry: str = ""
    region: str = ""
    event_type: str = ""
    organizer_name: str = ""
    website: str = ""
    participation_type: ParticipationType = ParticipationType.VISITOR
    stall_no: str = ""
    assigned_team: str = ""
    status: ExpoStatus = ExpoStatus.UPCOMING
    budget: int = 0
    fee_cost: int = 0
    leads_generated: int = 0
    hot_leads: int = 0
    orders_received: int = 0
    last_modified_by: Optional[str] = None
    updated_at: Optional[str] = None
    created_at: Optional[str] = None


@dataclass(slots=True)
class TeamMember:
    """A marketing team member who can act as personnel."""

    name: str
    role: str
    email: str = ""
    phone: str = ""
    bio: str = ""
    created_at: Optional[str] = None


@dataclass(frozen=True, slots=True)
class GeoEntry:
    """Reference data for a single state."""

    state: str
    zone: str
    cities: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Location:
    city: str
    state: str
    zone: str
