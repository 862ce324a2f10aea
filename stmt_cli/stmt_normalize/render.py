"""Output rendering helpers for stmt-normalize."""

from __future__ import annotations

import sys

from rich import box
from rich.console import Console
from rich.table import Table

from stmt_cli.shared.logging import Logger

from .types import ColumnMapping, PreparedTable, SemanticField, TransformResult


def render_suggestions(prepared: PreparedTable, *, stream=None) -> None:
    """Print each header cell with the fields it could represent."""

    output_stream = stream or sys.stdout
    console = Console(file=output_stream, highlight=False, force_terminal=False, width=120)

    fields_by_index: dict[int, list[str]] = {}
    for field, matches in prepared.suggestions.items():
        for match in matches:
            fields_by_index.setdefault(match.column_index, []).append(field.value)

    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Index", justify="right")
    table.add_column("Header", style="bold")
    table.add_column("Candidate fields")
    for cell in prepared.header:
        table.add_row(str(cell.index), cell.text, ", ".join(fields_by_index.get(cell.index, [])))
    console.print(f"Header row: {prepared.header_index} ({len(prepared.rows)} data rows)")
    console.print(table)


def warn_unmatched_fields(prepared: PreparedTable, logger: Logger) -> None:
    for field in SemanticField:
        matches = prepared.suggestions.get(field, ())
        if field.required and not matches:
            logger.warning(f"No candidate column for required field {field.display_name}.")
        elif len(matches) > 1:
            headers = ", ".join(f"{m.column_index}:{m.header}" for m in matches)
            logger.debug(f"Several candidates for {field.display_name}: {headers}")


def warn_conflicts(mapping: ColumnMapping, logger: Logger) -> None:
    for index, fields in mapping.conflicts().items():
        names = ", ".join(field.display_name for field in fields)
        logger.warning(f"Column {index} is mapped to several fields: {names}")


def emit_summary(result: TransformResult, logger: Logger) -> None:
    logger.info(f"Transactions: {len(result)}")
    logger.info(f"Skipped rows: {result.skipped}")
    for reason, count in sorted(result.skip_reasons.items()):
        logger.debug(f"  {reason}: {count}")
