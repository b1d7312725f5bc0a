import csv
import io

import pytest
from openpyxl import load_workbook

from conftest import make_customer
from fieldcrm.services.export import (
    EXPORT_COLUMNS,
    build_customer_export,
    customer_export_row,
    export_filename,
    format_crores,
)


@pytest.mark.parametrize(
    "value,expected",
    [(50_000_000, "5.00"), (0, "0.00"), (None, "0.00"), (1_234_567, "0.12"), (2_500_000_000, "250.00")],
)
def test_format_crores(value, expected) -> None:
    assert format_crores(value) == expected


def test_export_row_fills_placeholders() -> None:
    customer = make_customer("c-1", "Acme", "Ludhiana", "Punjab", turnover=50_000_000, industry="")
    customer.last_modified_by = None
    customer.updated_at = None

    assert customer_export_row(customer) == (
        "Acme",
        "Ludhiana",
        "Punjab",
        "North",
        "General Mfg",
        "5.00",
        "N/A",
        "N/A",
    )


def test_export_filename() -> None:
    assert export_filename("North", "xlsx") == "Customers_Export_North.xlsx"
    assert export_filename("Key Accounts", ".csv") == "Customers_Export_Key_Accounts.csv"
    assert export_filename(None, "pdf") == "Customers_Export_All_Zones.pdf"


def test_xlsx_export_has_header_and_rows() -> None:
    customers = [make_customer("c-1", "Acme", turnover=50_000_000), make_customer("c-2", "Bharat", "Pune", "Maharashtra")]

    export = build_customer_export(customers, "xlsx", zone_label="All Zones")

    assert export.file_name == "Customers_Export_All_Zones.xlsx"
    assert export.media_type.endswith("spreadsheetml.sheet")
    worksheet = load_workbook(io.BytesIO(export.payload)).active
    rows = list(worksheet.iter_rows(values_only=True))
    assert worksheet.title == "Customers"
    assert rows[0] == EXPORT_COLUMNS
    assert rows[1][:6] == ("Acme", "Ludhiana", "Punjab", "North", "Manufacturing", "5.00")
    assert rows[2][3] == "West"


def test_csv_export_matches_rows() -> None:
    export = build_customer_export([make_customer("c-1", "Acme", turnover=20_000_000)], "csv", zone_label="North")

    rows = list(csv.reader(io.StringIO(export.payload.decode("utf-8"))))
    assert export.file_name == "Customers_Export_North.csv"
    assert rows[0] == list(EXPORT_COLUMNS)
    assert rows[1][5] == "2.00"


def test_pdf_export_renders_document() -> None:
    export = build_customer_export([make_customer("c-1", "Acme")], "pdf", zone_label="North", generated_at="now")

    assert export.media_type == "application/pdf"
    assert export.payload.startswith(b"%PDF")


def test_pdf_export_of_empty_list() -> None:
    export = build_customer_export([], "pdf")

    assert export.payload.startswith(b"%PDF")


def test_unknown_export_format() -> None:
    with pytest.raises(ValueError):
        build_customer_export([], "docx")
