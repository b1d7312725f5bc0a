import io

import pytest
from openpyxl import Workbook, load_workbook

from conftest import make_customer
from fieldcrm.models.domain import CustomerStatus
from fieldcrm.services.customers.importer import (
    TEMPLATE_HEADERS,
    build_import_template,
    plan_import,
    read_tabular_upload,
    suggest_column_mappings,
)

CSV_UPLOAD = (
    "Customer Name,City,State,Pincode,Annual Turnover,Status,Contact 1 Name\n"
    "Acme Forgings,,,141001,\"5,00,00,000\",closed,Raj\n"
    "Lake Textiles,Udaipur,,,,,\n"
    "acme forgings,Pune,,,,,\n"
    ",Chennai,,,,,\n"
    "Existing Co,Pune,,,,,\n"
).encode("utf-8")


def test_read_csv_upload() -> None:
    rows = read_tabular_upload("customers.csv", CSV_UPLOAD)

    assert len(rows) == 5
    assert rows[0]["Customer Name"] == "Acme Forgings"


def test_read_xlsx_upload() -> None:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.append(["Customer Name", "Pincode"])
    worksheet.append(["Delhi Traders", 110001])
    buffer = io.BytesIO()
    workbook.save(buffer)

    rows = read_tabular_upload("customers.xlsx", buffer.getvalue())

    assert rows == [{"Customer Name": "Delhi Traders", "Pincode": 110001}]


def test_unsupported_upload_type() -> None:
    with pytest.raises(ValueError):
        read_tabular_upload("customers.txt", b"hello")


def test_suggest_column_mappings() -> None:
    mappings = suggest_column_mappings(["Company Name", "Town", "PIN Code", "Revenue", "Contact 1 Email"])

    assert mappings == {
        "name": "Company Name",
        "city": "Town",
        "postal_code": "PIN Code",
        "annual_turnover": "Revenue",
        "contact_email": "Contact 1 Email",
    }


def test_plan_import_resolves_and_skips_duplicates() -> None:
    rows = read_tabular_upload("customers.csv", CSV_UPLOAD)
    existing = [make_customer("c-9", "EXISTING CO")]

    plan = plan_import(rows, existing, "Shreeya Anand", "stamp")

    assert [customer.name for customer in plan.customers] == ["Acme Forgings", "Lake Textiles"]
    assert plan.skipped == ["acme forgings", "Existing Co"]

    acme, lake = plan.customers
    assert (acme.city, acme.state, acme.postal_code) == ("Ludhiana", "Punjab", "141001")
    assert acme.annual_turnover == 50_000_000
    assert acme.status is CustomerStatus.CLOSED
    assert acme.contacts[0].name == "Raj"
    assert (lake.city, lake.state) == ("Udaipur", "Rajasthan")
    assert lake.last_modified_by == "Shreeya Anand"


def test_plan_import_of_empty_upload() -> None:
    plan = plan_import([], [], "Mr. Bharat", "stamp")

    assert plan.customers == []
    assert plan.skipped == []


def test_import_template_headers() -> None:
    worksheet = load_workbook(io.BytesIO(build_import_template())).active

    assert next(worksheet.iter_rows(values_only=True)) == TEMPLATE_HEADERS
