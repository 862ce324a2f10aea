"""Write canonical records as CSV and read them back."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable
from pathlib import Path

from stmt_cli.shared.exceptions import CanonicalFormatError

from .amounts import format_amount, parse_amount
from .dates import parse_date
from .types import CanonicalTransaction

# Asterisks mark the fields the downstream importer treats as mandatory.
CANONICAL_HEADER: tuple[str, ...] = (
    "*Date",
    "Description",
    "*Amount",
    "Payee",
    "Reference",
    "Check Number",
)


def serialize(records: Iterable[CanonicalTransaction]) -> str:
    """Render records as CSV with the canonical header, in input order."""

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")
    writer.writerow(CANONICAL_HEADER)
    for record in records:
        writer.writerow(
            [
                record.date,
                record.description,
                format_amount(record.amount),
                record.payee,
                record.reference,
                record.check_number,
            ]
        )
    return buffer.getvalue()


def write_records(records: Iterable[CanonicalTransaction], path: str | Path) -> Path:
    """Serialize ``records`` to ``path``, creating parent directories."""

    output_path = Path(path).expanduser()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(serialize(records))
    return output_path


def load_canonical(text: str) -> list[CanonicalTransaction]:
    """Parse canonical CSV produced by :func:`serialize` back into records.

    Dates and amounts go through the same normalizers used for bank
    exports. Raises :class:`CanonicalFormatError` on a foreign header and
    :class:`DateParseError` on an unreadable date.
    """

    reader = csv.reader(io.StringIO(text.lstrip("\ufeff"), newline=""))
    header = next(reader, None)
    if header is None or tuple(cell.strip() for cell in header) != CANONICAL_HEADER:
        raise CanonicalFormatError(
            "Expected canonical header: " + ",".join(CANONICAL_HEADER)
        )

    records: list[CanonicalTransaction] = []
    for row in reader:
        if not any(cell.strip() for cell in row):
            continue
        cells = list(row) + [""] * (len(CANONICAL_HEADER) - len(row))
        records.append(
            CanonicalTransaction(
                date=parse_date(cells[0]),
                description=cells[1],
                amount=parse_amount(cells[2]),
                payee=cells[3],
                reference=cells[4],
                check_number=cells[5],
            )
        )
    return records
