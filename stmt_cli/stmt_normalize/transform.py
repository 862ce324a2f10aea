"""Turn statement rows plus a confirmed column mapping into canonical records."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal, InvalidOperation

from stmt_cli.shared.exceptions import MissingColumnError, NoValidTransactionsError

from .amounts import ZERO, parse_amount, quantize_amount
from .dates import coerce_date
from .types import CanonicalTransaction, ColumnMapping, SemanticField, TransformResult

_LOGGER = logging.getLogger(__name__)

SKIP_SHORT_ROW = "short_row"
SKIP_INVALID_DATE = "invalid_date"
SKIP_ZERO_AMOUNT = "zero_amount"
SKIP_INVALID_AMOUNT = "invalid_amount"


def transform(
    rows: Iterable[Sequence[str]],
    mapping: Mapping[SemanticField, int],
) -> TransformResult:
    """Convert data rows into :class:`CanonicalTransaction` records.

    ``rows`` are the rows below the header. Rows that are too short, carry
    an unreadable date, an amount too large to round to cents, or no
    non-zero debit/credit are skipped and only counted. Debits become
    negative amounts, credits positive; when both columns hold a value the
    debit wins.

    Raises :class:`MissingColumnError` when date, debit or credit is not
    mapped and :class:`NoValidTransactionsError` when no row survives.
    """

    mapping = mapping if isinstance(mapping, ColumnMapping) else ColumnMapping(mapping)
    missing = mapping.missing_required()
    if missing:
        raise MissingColumnError([field.display_name for field in missing])

    min_cells = max(mapping.values()) + 1
    records: list[CanonicalTransaction] = []
    skip_reasons: Counter[str] = Counter()

    for row in rows:
        record, reason = _transform_row(row, mapping, min_cells)
        if record is None:
            skip_reasons[reason] += 1
        else:
            records.append(record)

    skipped = sum(skip_reasons.values())
    if skipped:
        _LOGGER.debug("Skipped %d row(s): %s", skipped, dict(skip_reasons))
    if not records:
        raise NoValidTransactionsError(skipped)
    return TransformResult(records=tuple(records), skipped=skipped, skip_reasons=skip_reasons)


def _transform_row(
    row: Sequence[str],
    mapping: ColumnMapping,
    min_cells: int,
) -> tuple[CanonicalTransaction | None, str]:
    if len(row) < min_cells:
        return None, SKIP_SHORT_ROW

    txn_date = coerce_date(_get_cell(row, mapping.get(SemanticField.DATE)))
    if txn_date is None:
        return None, SKIP_INVALID_DATE

    debit = parse_amount(_get_cell(row, mapping.get(SemanticField.DEBIT)))
    credit = parse_amount(_get_cell(row, mapping.get(SemanticField.CREDIT)))
    try:
        amount = _signed_amount(debit, credit)
    except InvalidOperation:
        return None, SKIP_INVALID_AMOUNT
    if amount is None:
        return None, SKIP_ZERO_AMOUNT

    return (
        CanonicalTransaction(
            date=txn_date,
            amount=amount,
            description=_get_cell(row, mapping.get(SemanticField.DESCRIPTION)),
            payee=_get_cell(row, mapping.get(SemanticField.PAYEE)),
            reference=_get_cell(row, mapping.get(SemanticField.REFERENCE)),
            check_number=_get_cell(row, mapping.get(SemanticField.CHECK_NUMBER)),
        ),
        "",
    )


def _signed_amount(debit: Decimal, credit: Decimal) -> Decimal | None:
    """Return the signed, cent-rounded amount or ``None`` to drop the row.

    Both sides are rounded before the debit-first comparison, so a sub-cent
    debit never hides a real credit.
    """

    debit = quantize_amount(debit)
    if debit > ZERO:
        return -debit
    credit = quantize_amount(credit)
    if credit > ZERO:
        return credit
    return None


def _get_cell(cells: Sequence[str], index: int | None) -> str:
    if index is None or index < 0 or index >= len(cells):
        return ""
    return cells[index].strip()
