"""Read delimited statement exports into immutable tables."""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from stmt_cli.shared.exceptions import TableReadError

from .types import RawTable, Row

_LOGGER = logging.getLogger(__name__)

_CANDIDATE_DELIMITERS = ",;\t|"
_SNIFF_SAMPLE_SIZE = 8192


def read_table(text: str, *, delimiter: str = "auto") -> RawTable:
    """Tokenize delimited text into a :data:`RawTable`.

    Blank lines (rows whose cells are all empty) are dropped and every cell
    is trimmed. ``delimiter="auto"`` sniffs among comma, semicolon, tab and
    pipe, falling back to comma.
    """

    text = text.lstrip("\ufeff")
    if not text.strip():
        raise TableReadError("Input is empty.")

    dialect_delimiter = _sniff_delimiter(text) if delimiter == "auto" else delimiter
    _LOGGER.debug("Reading table with delimiter %r", dialect_delimiter)
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=dialect_delimiter)
    try:
        return normalize_rows(reader)
    except csv.Error as exc:
        raise TableReadError(f"Could not parse delimited text: {exc}") from exc


def read_table_file(
    path: str | Path,
    *,
    encoding: str = "utf-8-sig",
    delimiter: str = "auto",
) -> RawTable:
    """Read a statement file from disk."""

    file_path = Path(path).expanduser()
    if not file_path.exists():
        raise TableReadError(f"Statement file not found: {file_path}")
    try:
        text = file_path.read_text(encoding=encoding)
    except UnicodeDecodeError as exc:
        raise TableReadError(f"{file_path}: not valid {encoding} text ({exc.reason})") from exc
    except LookupError as exc:
        raise TableReadError(f"Unknown encoding '{encoding}'") from exc
    except OSError as exc:
        raise TableReadError(f"Could not read {file_path}: {exc.strerror or exc}") from exc
    return read_table(text, delimiter=delimiter)


def normalize_rows(rows: Iterable[Sequence[str | None]]) -> RawTable:
    """Trim cells, convert ``None`` to empty strings and drop blank rows."""

    normalized = (normalize_cells(row) for row in rows)
    return tuple(row for row in normalized if any(row))


def normalize_cells(row: Sequence[str | None]) -> Row:
    return tuple((cell or "").strip() for cell in row)


def _sniff_delimiter(text: str) -> str:
    sample = text[:_SNIFF_SAMPLE_SIZE]
    try:
        return csv.Sniffer().sniff(sample, delimiters=_CANDIDATE_DELIMITERS).delimiter
    except csv.Error:
        return ","
