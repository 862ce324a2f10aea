from __future__ import annotations

from pathlib import Path

import pytest

from stmt_cli.shared.exceptions import TableReadError
from stmt_cli.stmt_normalize.reader import read_table, read_table_file


def test_read_table_drops_blank_lines_and_trims_cells() -> None:
    text = "Example Bank\n\nDate,Description,Debit,Credit\n31/07/2023, Coffee ,3.50,\n,,,\n"

    table = read_table(text)

    assert table == (
        ("Example Bank",),
        ("Date", "Description", "Debit", "Credit"),
        ("31/07/2023", "Coffee", "3.50", ""),
    )


def test_read_table_keeps_quoted_delimiters() -> None:
    text = 'Date,Description,Debit,Credit\n31/07/2023,"Coffee, large",3.50,\n'

    table = read_table(text)

    assert table[1] == ("31/07/2023", "Coffee, large", "3.50", "")


def test_read_table_sniffs_semicolons() -> None:
    text = "Datum;Omschrijving;Debit;Credit\n31-07-2023;Koffie;3,50;\n01-08-2023;Salaris;;1.234,56\n"

    table = read_table(text)

    assert table[1] == ("31-07-2023", "Koffie", "3,50", "")
    assert table[2][3] == "1.234,56"


def test_read_table_accepts_explicit_delimiter() -> None:
    table = read_table("Date|Debit|Credit\n31/07/2023|1.00|\n", delimiter="|")
    assert table[0] == ("Date", "Debit", "Credit")


def test_read_table_strips_bom() -> None:
    table = read_table("\ufeffDate,Debit,Credit\n")
    assert table[0][0] == "Date"


@pytest.mark.parametrize("text", ["", "  \n\n"])
def test_read_table_rejects_empty_input(text: str) -> None:
    with pytest.raises(TableReadError):
        read_table(text)


def test_read_table_file_reads_bom_encoded_files(tmp_path: Path) -> None:
    path = tmp_path / "statement.csv"
    path.write_text("\ufeffDate,Debit,Credit\n31/07/2023,1.00,\n", encoding="utf-8")

    table = read_table_file(path)

    assert table == (("Date", "Debit", "Credit"), ("31/07/2023", "1.00", ""))


def test_read_table_file_missing_file(tmp_path: Path) -> None:
    with pytest.raises(TableReadError):
        read_table_file(tmp_path / "absent.csv")


def test_read_table_file_reports_bad_encoding(tmp_path: Path) -> None:
    path = tmp_path / "latin.csv"
    path.write_bytes("Date,Débit,Credit\n".encode("latin-1"))

    with pytest.raises(TableReadError):
        read_table_file(path, encoding="utf-8")


def test_read_table_file_reports_directory(tmp_path: Path) -> None:
    with pytest.raises(TableReadError, match="Could not read"):
        read_table_file(tmp_path)


def test_read_table_file_reports_unknown_encoding(tmp_path: Path) -> None:
    path = tmp_path / "statement.csv"
    path.write_text("Date,Debit,Credit\n", encoding="utf-8")

    with pytest.raises(TableReadError, match="Unknown encoding"):
        read_table_file(path, encoding="bogus-enc")
