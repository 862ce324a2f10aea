"""Public exports for the stmt-normalize package."""

from .amounts import format_amount, parse_amount
from .columns import classify, unambiguous_mapping
from .dates import coerce_date, parse_date
from .header import locate_header, split_at_header
from .patterns import DEFAULT_PATTERNS, PatternSet, build_pattern_set
from .pipeline import convert, convert_text, prepare
from .reader import read_table, read_table_file
from .serializer import CANONICAL_HEADER, load_canonical, serialize, write_records
from .transform import transform
from .types import (
    CanonicalTransaction,
    ColumnMapping,
    ColumnMatch,
    HeaderCell,
    HeaderRow,
    PreparedTable,
    SemanticField,
    TransformResult,
)

__all__ = [
    "CANONICAL_HEADER",
    "DEFAULT_PATTERNS",
    "CanonicalTransaction",
    "ColumnMapping",
    "ColumnMatch",
    "HeaderCell",
    "HeaderRow",
    "PatternSet",
    "PreparedTable",
    "SemanticField",
    "TransformResult",
    "build_pattern_set",
    "classify",
    "coerce_date",
    "convert",
    "convert_text",
    "format_amount",
    "load_canonical",
    "locate_header",
    "parse_amount",
    "parse_date",
    "prepare",
    "read_table",
    "read_table_file",
    "serialize",
    "split_at_header",
    "transform",
    "unambiguous_mapping",
    "write_records",
]
