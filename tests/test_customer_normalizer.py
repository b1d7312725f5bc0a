import dataclasses

import pytest

from conftest import make_customer
from fieldcrm.models.domain import ContactPerson, CustomerStatus
from fieldcrm.schemas.customers import CustomerPayload
from fieldcrm.services.customers import normalize_customer, parse_amount

STAMP = "17 Oct 2026 04:05:09 PM"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("5,00,00,000", 50_000_000),
        ("5e7", 50_000_000),
        ("₹ 1,20,000", 120_000),
        ("12.6", 13),
        (5.4, 5),
        (7, 7),
        ("", 0),
        (None, 0),
        ("twelve lakh", 0),
        ("nan", 0),
        ("inf", 0),
        (10**400, 0),
        ("9" * 401, 0),
    ],
)
def test_parse_amount(raw, expected) -> None:
    assert parse_amount(raw) == expected


def test_create_fills_defaults_and_resolves_location() -> None:
    form = CustomerPayload(
        name="  Acme Forgings ",
        city="Ludhiana",
        annual_turnover="5,00,00,000",
        contact_name="Raj Malhotra",
        contact_phone="98140 00000",
    )

    customer = normalize_customer(form, None, "Salil Anand", STAMP)

    assert customer.id.startswith("c-")
    assert customer.name == "Acme Forgings"
    assert (customer.city, customer.state) == ("Ludhiana", "Punjab")
    assert customer.country == "India"
    assert customer.industry == "Manufacturing"
    assert customer.annual_turnover == 50_000_000
    assert customer.project_turnover == 0
    assert customer.status is CustomerStatus.OPEN
    assert customer.pricing_history == []
    assert customer.last_modified_by == "Salil Anand"
    assert customer.updated_at == STAMP

    [contact] = customer.contacts
    assert contact.id.startswith("cp-")
    assert contact.name == "Raj Malhotra"
    assert contact.designation == "Primary Contact"
    assert contact.phone == "98140 00000"


def test_create_without_contact_name_has_no_contacts() -> None:
    customer = normalize_customer(CustomerPayload(name="Solo", contact_email="x@example.com"), None, "Mr. Bharat", STAMP)

    assert customer.contacts == []


def test_create_with_postal_code_only() -> None:
    customer = normalize_customer(CustomerPayload(name="Delhi Traders", postal_code="110 001"), None, "Mr. Bharat", STAMP)

    assert (customer.city, customer.state, customer.postal_code) == ("New Delhi", "Delhi", "110001")


def test_create_with_nothing_uses_sentinels() -> None:
    customer = normalize_customer(CustomerPayload(name="Unknown Co"), None, "Mr. Bharat", STAMP)

    assert (customer.city, customer.state) == ("Principal City", "N/A")
    assert customer.postal_code is None


def test_edit_keeps_absent_fields_and_restamps() -> None:
    existing = make_customer("c-1", "Acme", "Pune", "Maharashtra", turnover=10_000_000)
    existing.enquiry_no = "ENQ-7"

    edited = normalize_customer(CustomerPayload(industry="Textiles"), existing, "Rohit Verma", STAMP)

    assert edited.id == "c-1"
    assert edited.name == "Acme"
    assert (edited.city, edited.state) == ("Pune", "Maharashtra")
    assert edited.annual_turnover == 10_000_000
    assert edited.enquiry_no == "ENQ-7"
    assert edited.industry == "Textiles"
    assert edited.last_modified_by == "Rohit Verma"
    assert edited.updated_at == STAMP


def test_edit_does_not_mutate_existing() -> None:
    existing = make_customer("c-1", "Acme", turnover=10_000_000)

    normalize_customer(CustomerPayload(name="Renamed", annual_turnover="bad"), existing, "Rohit Verma", STAMP)

    assert existing.name == "Acme"
    assert existing.annual_turnover == 10_000_000
    assert existing.last_modified_by == "Mr. Bharat"


def test_edit_with_unparseable_turnover_stores_zero() -> None:
    existing = make_customer("c-1", "Acme", turnover=10_000_000)

    edited = normalize_customer(CustomerPayload(annual_turnover="abc"), existing, "Mr. Bharat", STAMP)

    assert edited.annual_turnover == 0


def test_edit_with_postal_code_relocates() -> None:
    existing = make_customer("c-1", "Acme", "Pune", "Maharashtra")

    edited = normalize_customer(CustomerPayload(postal_code="141001"), existing, "Mr. Bharat", STAMP)

    assert (edited.city, edited.state, edited.postal_code) == ("Ludhiana", "Punjab", "141001")


def test_edit_status_and_zone_override() -> None:
    existing = make_customer("c-1", "Acme", zone="Key Accounts")

    edited = normalize_customer(CustomerPayload(status="Closed", zone=""), existing, "Mr. Bharat", STAMP)

    assert edited.status is CustomerStatus.CLOSED
    assert edited.zone is None


def test_edit_contact_keeps_primary_contact_id() -> None:
    existing = make_customer(
        "c-1",
        "Acme",
        contacts=[
            ContactPerson(id="cp-keep", name="Old Name", designation="Buyer", email="old@example.com"),
            ContactPerson(id="cp-drop", name="Second"),
        ],
    )

    edited = normalize_customer(CustomerPayload(contact_name="New Name"), existing, "Mr. Bharat", STAMP)

    [contact] = edited.contacts
    assert contact.id == "cp-keep"
    assert contact.name == "New Name"
    assert contact.designation == "Buyer"
    assert contact.email == "old@example.com"


def test_edit_without_contact_fields_keeps_contacts() -> None:
    contacts = [ContactPerson(id="cp-1", name="A"), ContactPerson(id="cp-2", name="B")]
    existing = make_customer("c-1", "Acme", contacts=contacts)

    edited = normalize_customer(CustomerPayload(city="Amritsar"), existing, "Mr. Bharat", STAMP)

    assert [contact.id for contact in edited.contacts] == ["cp-1", "cp-2"]


def test_resubmitting_stored_values_changes_only_provenance() -> None:
    existing = make_customer(
        "c-1",
        "Acme",
        "Pune",
        "Maharashtra",
        turnover=12_500_000,
        contacts=[ContactPerson(id="cp-1", name="Raj", designation="Buyer", email="raj@example.com", phone="1")],
    )
    form = CustomerPayload(
        name=existing.name,
        city=existing.city,
        state=existing.state,
        country=existing.country,
        industry=existing.industry,
        annual_turnover=str(existing.annual_turnover),
        project_turnover=existing.project_turnover,
        status=existing.status,
        contact_name="Raj",
        contact_designation="Buyer",
        contact_email="raj@example.com",
        contact_phone="1",
    )

    edited = normalize_customer(form, existing, "Shubham Kumar", STAMP)

    assert edited == dataclasses.replace(existing, last_modified_by="Shubham Kumar", updated_at=STAMP)
