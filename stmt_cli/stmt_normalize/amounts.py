"""Amount parsing for comma- and dot-decimal spellings."""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal

_NON_NUMERIC_RE = re.compile(r"[^\d.,\-]")
_LEADING_ZEROS_RE = re.compile(r"^(-?)0+")
_NUMBER_PREFIX_RE = re.compile(r"^-?(?:\d+(?:\.\d*)?|\.\d+)")

ZERO = Decimal("0")
CENTS = Decimal("0.01")


def parse_amount(value: str) -> Decimal:
    """Parse a money string into a Decimal, returning zero when unreadable.

    Both ``1,234.56`` and ``1.234,56`` resolve to ``1234.56``: every comma
    becomes a dot and only the rightmost dot survives as the decimal point.
    Currency symbols, spaces and other noise are dropped first.
    """

    cleaned = _NON_NUMERIC_RE.sub("", value or "")
    cleaned = cleaned.replace(",", ".")
    if cleaned.count(".") > 1:
        head, _, tail = cleaned.rpartition(".")
        cleaned = f"{head.replace('.', '')}.{tail}"
    if cleaned.startswith("."):
        cleaned = f"0{cleaned}"
    cleaned = _LEADING_ZEROS_RE.sub(r"\1", cleaned)

    match = _NUMBER_PREFIX_RE.match(cleaned)
    if not match:
        return ZERO
    return Decimal(match.group())


def quantize_amount(value: Decimal) -> Decimal:
    """Round to cents, halves away from zero."""

    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_amount(value: Decimal) -> str:
    """Render ``value`` with exactly two fraction digits."""

    return f"{quantize_amount(value):.2f}"
