from __future__ import annotations

import csv
import io
from decimal import Decimal
from pathlib import Path

import pytest

from stmt_cli.shared.exceptions import CanonicalFormatError
from stmt_cli.stmt_normalize.serializer import (
    CANONICAL_HEADER,
    load_canonical,
    serialize,
    write_records,
)
from stmt_cli.stmt_normalize.types import CanonicalTransaction


def _records() -> list[CanonicalTransaction]:
    return [
        CanonicalTransaction(
            date="2023-07-31",
            description='Coffee, "large"',
            amount=Decimal("-3.50"),
            payee="Cafe",
        ),
        CanonicalTransaction(
            date="2023-08-01",
            description="Salary\nAugust",
            amount=Decimal("1234.5"),
            reference="PAY-08",
            check_number="1001",
        ),
    ]


def test_serialize_writes_canonical_header() -> None:
    text = serialize([])
    assert text == "*Date,Description,*Amount,Payee,Reference,Check Number\r\n"


def test_serialize_quotes_and_orders_rows() -> None:
    text = serialize(_records())

    lines = text.split("\r\n")
    assert lines[0] == ",".join(CANONICAL_HEADER)
    assert lines[1] == '2023-07-31,"Coffee, ""large""",-3.50,Cafe,,'
    assert lines[2] == '2023-08-01,"Salary\nAugust",1234.50,,PAY-08,1001'


def test_serialize_output_is_standard_csv() -> None:
    rows = list(csv.reader(io.StringIO(serialize(_records()), newline="")))
    assert rows[1][1] == 'Coffee, "large"'
    assert rows[2][1] == "Salary\nAugust"


def test_round_trip_preserves_dates_and_amounts() -> None:
    records = _records()

    reloaded = load_canonical(serialize(records))

    assert [r.date for r in reloaded] == [r.date for r in records]
    assert [r.amount for r in reloaded] == [r.amount for r in records]
    assert [r.description for r in reloaded] == [r.description for r in records]
    assert serialize(reloaded) == serialize(records)


def test_load_canonical_rejects_foreign_header() -> None:
    with pytest.raises(CanonicalFormatError):
        load_canonical("Date,Description,Debit,Credit\r\n2023-07-31,x,1,\r\n")


def test_write_records_creates_parent_directories(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "out.csv"

    written = write_records(_records(), target)

    assert written == target
    assert target.read_bytes().startswith(b"*Date,Description,*Amount")
    assert b"-3.50" in target.read_bytes()
