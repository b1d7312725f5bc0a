from datetime import date

import pytest

from fieldcrm.config import settings
from fieldcrm.models.domain import ContactPerson, Customer, CustomerStatus, Visit, VisitStatus


@pytest.fixture(autouse=True)
def in_memory_store(monkeypatch: pytest.MonkeyPatch):
    """Run every test without Supabase and with a fresh registry."""
    from fieldcrm.data.geo_repository import clear_reference_caches
    from fieldcrm.db.supabase import get_supabase_client
    from fieldcrm.persistence.registry import get_registry

    monkeypatch.setattr(settings, "supabase_url", None)
    monkeypatch.setattr(settings, "supabase_key", None)
    get_supabase_client.cache_clear()
    get_registry.cache_clear()
    clear_reference_caches()
    yield
    get_supabase_client.cache_clear()
    get_registry.cache_clear()


def make_customer(
    cid: str,
    name: str,
    city: str = "Ludhiana",
    state: str = "Punjab",
    *,
    turnover: int = 0,
    status: CustomerStatus = CustomerStatus.OPEN,
    zone: str | None = None,
    industry: str = "Manufacturing",
    contacts: list[ContactPerson] | None = None,
) -> Customer:
    return Customer(
        id=cid,
        name=name,
        city=city,
        state=state,
        country="India",
        industry=industry,
        annual_turnover=turnover,
        status=status,
        zone=zone,
        contacts=list(contacts or []),
        last_modified_by="Mr. Bharat",
        updated_at="01 Jan 2026 10:00:00 AM",
    )


def make_visit(
    vid: str,
    customer: Customer,
    when: date,
    *,
    status: VisitStatus = VisitStatus.PLANNED,
    purpose: str = "Quarterly review",
) -> Visit:
    return Visit(
        id=vid,
        customer_id=customer.id,
        customer_name=customer.name,
        date=when,
        purpose=purpose,
        assigned_to="Rohit Verma",
        status=status,
    )
