from __future__ import annotations

import pytest

from stmt_cli.shared.exceptions import HeaderNotFoundError
from stmt_cli.stmt_normalize.header import is_header_row, locate_header, split_at_header
from stmt_cli.stmt_normalize.types import HeaderCell


def _noisy_table() -> tuple[tuple[str, ...], ...]:
    return (
        ("Example Bank plc",),
        ("Account", "12-34-56 87654321"),
        ("Statement period", "01/07/2023 - 31/07/2023"),
        ("Date", "Description", "Debit", "Credit"),
        ("31/07/2023", "Coffee", "3.50", ""),
    )


def test_locate_header_skips_preamble_rows() -> None:
    assert locate_header(_noisy_table()) == 3


def test_locate_header_returns_first_qualifying_row() -> None:
    table = (
        ("Debit and credit card activity",),
        ("Date", "Narrative", "Debit Amount", "Credit Amount"),
    )
    assert locate_header(table) == 0


def test_locate_header_is_case_insensitive() -> None:
    table = (("TXN DATE", "DEBIT", "CREDIT"),)
    assert locate_header(table) == 0


def test_locate_header_requires_both_tokens() -> None:
    table = (
        ("Date", "Description", "Debit"),
        ("Date", "Description", "Credit"),
    )
    with pytest.raises(HeaderNotFoundError):
        locate_header(table)


def test_tokens_do_not_straddle_cells() -> None:
    assert is_header_row(("Deb", "it", "Credit")) is False


def test_locate_header_empty_table() -> None:
    with pytest.raises(HeaderNotFoundError):
        locate_header(())


def test_split_at_header_keeps_column_indices() -> None:
    table = (
        ("Statement",),
        ("Date", "", "Debit", "Credit"),
        ("31/07/2023", "", "3.50", ""),
    )

    index, header, rows = split_at_header(table)

    assert index == 1
    assert header.cells == (
        HeaderCell(index=0, text="Date"),
        HeaderCell(index=2, text="Debit"),
        HeaderCell(index=3, text="Credit"),
    )
    assert rows == (("31/07/2023", "", "3.50", ""),)
