"""Compose the normalization stages for callers that hold raw text."""

from __future__ import annotations

from collections.abc import Mapping

from .columns import classify
from .header import split_at_header
from .patterns import DEFAULT_PATTERNS, PatternSet
from .reader import read_table
from .serializer import serialize
from .transform import transform
from .types import PreparedTable, RawTable, SemanticField, TransformResult


def prepare(table: RawTable, patterns: PatternSet = DEFAULT_PATTERNS) -> PreparedTable:
    """Locate the header and suggest candidate columns for every field."""

    header_index, header, rows = split_at_header(table)
    suggestions = classify(header, patterns)
    return PreparedTable(
        header_index=header_index,
        header=header,
        rows=rows,
        suggestions={field: tuple(matches) for field, matches in suggestions.items()},
    )


def convert(
    prepared: PreparedTable | RawTable,
    mapping: Mapping[SemanticField, int],
) -> TransformResult:
    """Run the transformer over a prepared table's data rows."""

    rows = prepared.rows if isinstance(prepared, PreparedTable) else prepared
    return transform(rows, mapping)


def convert_text(
    text: str,
    mapping: Mapping[SemanticField, int],
    *,
    patterns: PatternSet = DEFAULT_PATTERNS,
    delimiter: str = "auto",
) -> tuple[TransformResult, str]:
    """Read, convert and serialize in one call.

    Any fatal condition raises before output text is produced.
    """

    prepared = prepare(read_table(text, delimiter=delimiter), patterns)
    result = convert(prepared, mapping)
    return result, serialize(result.records)
