import asyncio

import pytest

from catasto.errors import StructuralError
from catasto.extractor import TableExtractor
from catasto.models import EstateRecord
from tests.conftest import HEADERS, ROW_1, ROW_2, FakePage


def test_map_rows_skips_empty_header_row():
    records = TableExtractor.map_rows(HEADERS, [[], ROW_1, ROW_2])

    assert len(records) == 2
    assert records[0].cadastre == "F"
    assert records[0].class_ == "3"
    assert records[0].cadastral_income == "Euro:781,14"
    assert records[1].classification == "SEMINATIVO"
    assert records[1].register_number == ""


def test_map_rows_skips_repeated_header_row():
    records = TableExtractor.map_rows(HEADERS, [list(HEADERS), ROW_1])
    assert len(records) == 1
    assert records[0].location.startswith("ROMA VIA APPIA")


def test_map_rows_without_header_row_keeps_every_row():
    records = TableExtractor.map_rows(HEADERS, [ROW_1, ROW_2, ROW_1])
    assert len(records) == 3
    assert [r.cadastre for r in records] == ["F", "T", "F"]


def test_map_rows_ignores_unknown_columns_and_fills_gaps():
    headers = ["Catasto", "Dati derivanti da", "Foglio", "Particella"]
    rows = [["F", "VARIAZIONE del 01/01/2000", " 12 ", "345"]]

    records = TableExtractor.map_rows(headers, rows)

    assert len(records) == 1
    dumped = records[0].model_dump(by_alias=True)
    assert len(dumped) == 12
    assert dumped["cadastre"] == "F"
    assert dumped["sheet"] == "12"
    assert dumped["parcel"] == "345"
    assert dumped["ownership"] == ""
    assert "VARIAZIONE del 01/01/2000" not in dumped.values()


def test_map_rows_ignores_cells_beyond_header():
    records = TableExtractor.map_rows(["Catasto"], [["F", "extra", "more"]])
    assert records == [EstateRecord(cadastre="F")]


def test_map_rows_handles_missing_cells():
    records = TableExtractor.map_rows(HEADERS, [["F", None]])
    assert records[0].cadastre == "F"
    assert records[0].ownership == ""


def test_map_rows_empty_table():
    assert TableExtractor.map_rows(HEADERS, []) == []
    assert TableExtractor.map_rows(HEADERS, [[]]) == []


def test_extract_reads_table_from_page():
    page = FakePage()
    extractor = TableExtractor("#tabella")

    records = asyncio.run(extractor.extract(page))

    assert len(records) == 2
    assert ("eval", "table") in page.calls


def test_extract_missing_table_is_structural_error():
    page = FakePage()
    page.table = None
    extractor = TableExtractor("#tabella")

    with pytest.raises(StructuralError, match="Results table not found"):
        asyncio.run(extractor.extract(page))
