"""Suggest which statement columns hold which semantic fields."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .patterns import DEFAULT_PATTERNS, PatternSet
from .types import ColumnMapping, ColumnMatch, HeaderCell, HeaderRow, SemanticField


def header_matches(header_text: str, keywords: Iterable[str]) -> bool:
    """Bidirectional containment between a header cell and keywords.

    ``"Transaction Debit Amount"`` matches ``debit`` because the header
    contains the keyword; ``"Dr"`` matches ``dr.`` and ``"Deb"`` matches
    ``debit`` because the keyword contains the header.
    """

    normalized = header_text.strip().lower()
    if not normalized:
        return False
    return any(keyword in normalized or normalized in keyword for keyword in keywords if keyword)


def classify(
    header: HeaderRow | Iterable[HeaderCell | str],
    patterns: PatternSet = DEFAULT_PATTERNS,
) -> dict[SemanticField, list[ColumnMatch]]:
    """Return every candidate column per field, in column order.

    Nothing is ranked or selected: when several columns satisfy the same
    field they are all returned for the caller to choose from. Every field
    is present as a key, with an empty list when nothing matched.
    """

    cells = _as_cells(header)
    suggestions: dict[SemanticField, list[ColumnMatch]] = {field: [] for field in SemanticField}
    for cell in cells:
        for field in SemanticField:
            if header_matches(cell.text, patterns.get(field, ())):
                suggestions[field].append(
                    ColumnMatch(field=field, column_index=cell.index, header=cell.text)
                )
    return suggestions


def unambiguous_mapping(suggestions: Mapping[SemanticField, Iterable[ColumnMatch]]) -> ColumnMapping:
    """Build a mapping from the fields that have exactly one candidate column."""

    entries: dict[SemanticField, int] = {}
    for field, matches in suggestions.items():
        matches = list(matches)
        if len(matches) == 1:
            entries[field] = matches[0].column_index
    return ColumnMapping(entries)


def _as_cells(header: HeaderRow | Iterable[HeaderCell | str]) -> list[HeaderCell]:
    if isinstance(header, HeaderRow):
        return list(header.cells)
    cells: list[HeaderCell] = []
    for idx, item in enumerate(header):
        if isinstance(item, HeaderCell):
            cells.append(item)
        elif item and item.strip():
            cells.append(HeaderCell(index=idx, text=item.strip()))
    return cells
