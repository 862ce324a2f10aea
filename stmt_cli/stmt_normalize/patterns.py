"""Header keyword sets used to suggest column mappings."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from stmt_cli.shared.exceptions import ConfigurationError

from .types import SemanticField

PatternSet = Mapping[SemanticField, frozenset[str]]

_DEFAULT_KEYWORDS: dict[SemanticField, tuple[str, ...]] = {
    SemanticField.DATE: (
        "date",
        "transaction date",
        "posting date",
        "posted",
        "value date",
        "txn date",
    ),
    SemanticField.DESCRIPTION: (
        "description",
        "narrative",
        "narration",
        "details",
        "transaction details",
        "particulars",
        "memo",
    ),
    SemanticField.DEBIT: (
        "debit",
        "debits",
        "dr.",
        "withdrawal",
        "withdrawals",
        "money out",
        "paid out",
    ),
    SemanticField.CREDIT: (
        "credit",
        "credits",
        "cr.",
        "deposit",
        "deposits",
        "money in",
        "paid in",
    ),
    SemanticField.PAYEE: (
        "payee",
        "merchant",
        "beneficiary",
        "counterparty",
        "name",
    ),
    SemanticField.REFERENCE: (
        "reference",
        "ref",
        "ref no",
        "transaction id",
    ),
    SemanticField.CHECK_NUMBER: (
        "check number",
        "cheque number",
        "check no",
        "cheque no",
        "chq",
        "check",
        "cheque",
    ),
}


def _freeze(keywords: Mapping[SemanticField, Iterable[str]]) -> PatternSet:
    return MappingProxyType(
        {
            field: frozenset(keyword.strip().lower() for keyword in keywords.get(field, ()) if keyword.strip())
            for field in SemanticField
        }
    )


DEFAULT_PATTERNS: PatternSet = _freeze(_DEFAULT_KEYWORDS)


def build_pattern_set(
    extra: Mapping[str, Iterable[str]] | None = None,
    *,
    replace_defaults: bool = False,
) -> PatternSet:
    """Merge configured keywords into the defaults.

    ``extra`` is keyed by field value or display name (``checkNumber`` and
    ``Check Number`` both work). With ``replace_defaults`` the configured
    keywords are used on their own for every field they name.
    """

    merged: dict[SemanticField, set[str]] = {
        field: set(keywords) for field, keywords in DEFAULT_PATTERNS.items()
    }
    for name, keywords in (extra or {}).items():
        try:
            field = SemanticField.lookup(name)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown pattern field '{name}'") from exc
        if replace_defaults:
            merged[field] = set()
        merged[field].update(keywords)
    return _freeze(merged)
