"""Locate the header row of a statement table."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from stmt_cli.shared.exceptions import HeaderNotFoundError

from .types import HeaderRow, RawTable, Row

_LOGGER = logging.getLogger(__name__)

HEADER_TOKENS = ("debit", "credit")


def is_header_row(row: Sequence[str]) -> bool:
    """Return True when the joined, lower-cased cells mention every header token."""

    joined = " ".join(cell.lower() for cell in row if cell)
    return all(token in joined for token in HEADER_TOKENS)


def locate_header(table: RawTable) -> int:
    """Return the index of the first row naming both debit and credit columns.

    Title rows, bank metadata and blank separators above the header are
    ignored. Raises :class:`HeaderNotFoundError` when no row qualifies.
    """

    for idx, row in enumerate(table):
        if is_header_row(row):
            _LOGGER.debug("Header row found at index %d: %s", idx, row)
            return idx
    raise HeaderNotFoundError()


def split_at_header(table: RawTable) -> tuple[int, HeaderRow, RawTable]:
    """Return the header index, the header row and the data rows below it."""

    idx = locate_header(table)
    header: Row = table[idx]
    return idx, HeaderRow.from_cells(header), tuple(table[idx + 1 :])
