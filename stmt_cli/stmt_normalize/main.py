"""stmt-normalize CLI entrypoint."""

from __future__ import annotations

from pathlib import Path

import click

from stmt_cli.shared import paths
from stmt_cli.shared.cli import CLIContext, common_cli_options, handle_cli_errors, pass_cli_context

from .columns import unambiguous_mapping
from .patterns import PatternSet, build_pattern_set
from .pipeline import convert, prepare
from .reader import read_table_file
from .render import emit_summary, render_suggestions, warn_conflicts, warn_unmatched_fields
from .serializer import serialize, write_records
from .types import ColumnMapping, HeaderRow, PreparedTable, SemanticField


@click.group(help="Normalize bank statement CSV exports into a canonical transaction CSV.")
@common_cli_options
def main(cli_ctx: CLIContext) -> None:
    return


@main.command("suggest")
@click.argument("statement_file", type=click.Path(path_type=str))
@handle_cli_errors
@pass_cli_context
def suggest_command(cli_ctx: CLIContext, statement_file: str) -> None:
    """Show the detected header row and candidate columns per field."""

    prepared = _prepare_file(cli_ctx, statement_file)
    render_suggestions(prepared)
    warn_unmatched_fields(prepared, cli_ctx.logger)


@main.command("convert")
@click.argument("statement_file", type=click.Path(path_type=str))
@click.option(
    "--map",
    "mappings",
    multiple=True,
    metavar="FIELD=COLUMN",
    help="Confirm a column for a field, by zero-based index or exact header text (repeatable).",
)
@click.option(
    "--accept-unique",
    is_flag=True,
    help="Pre-fill fields that have exactly one candidate column.",
)
@click.option("--output", "output_path", type=click.Path(path_type=str), help="Output CSV to file.")
@click.option("--stdout", is_flag=True, help="Output CSV to stdout.")
@click.option("--dry-run", is_flag=True, help="Convert and summarise without writing output.")
@handle_cli_errors
@pass_cli_context
def convert_command(
    cli_ctx: CLIContext,
    statement_file: str,
    mappings: tuple[str, ...],
    accept_unique: bool,
    output_path: str | None,
    stdout: bool,
    dry_run: bool,
) -> None:
    """Convert a statement using the confirmed column mapping."""

    if output_path and stdout:
        raise click.UsageError("Cannot use both --output and --stdout simultaneously.")

    prepared = _prepare_file(cli_ctx, statement_file)
    mapping = build_mapping(prepared, mappings, accept_unique=accept_unique)
    cli_ctx.logger.debug(f"Column mapping: {mapping!r}")
    warn_conflicts(mapping, cli_ctx.logger)

    result = convert(prepared, mapping)
    emit_summary(result, cli_ctx.logger)

    if dry_run:
        cli_ctx.logger.info("Dry run: no output written.")
        return

    if stdout:
        click.echo(serialize(result.records), nl=False)
        cli_ctx.logger.success("Conversion complete. Output sent to stdout.")
        return

    if output_path:
        destination = Path(output_path).expanduser()
    else:
        destination = paths.default_output_path(statement_file, cli_ctx.config.output.directory)
        cli_ctx.logger.info(f"No --output provided; defaulting to {destination}.")
    written = write_records(result.records, destination)
    cli_ctx.logger.success(f"Conversion complete. Output written to {written}.")


def build_mapping(
    prepared: PreparedTable,
    options: tuple[str, ...] | list[str],
    *,
    accept_unique: bool = False,
) -> ColumnMapping:
    """Combine optional unambiguous suggestions with explicit ``FIELD=COLUMN`` options."""

    mapping = unambiguous_mapping(prepared.suggestions) if accept_unique else ColumnMapping()
    for option in options:
        field, index = _parse_mapping_option(option, prepared.header)
        mapping = mapping.with_field(field, index)
    return mapping


def _parse_mapping_option(option: str, header: HeaderRow) -> tuple[SemanticField, int]:
    name, sep, column = option.partition("=")
    if not sep or not name.strip() or not column.strip():
        raise click.BadParameter(f"Expected FIELD=COLUMN, got '{option}'.", param_hint="--map")
    try:
        field = SemanticField.lookup(name)
    except ValueError as exc:
        choices = ", ".join(member.value for member in SemanticField)
        raise click.BadParameter(f"{exc}. Choose from: {choices}.", param_hint="--map") from exc

    column = column.strip()
    if column.isdigit():
        return field, int(column)
    index = header.index_of(column)
    if index is None:
        raise click.BadParameter(f"No header named '{column}'.", param_hint="--map")
    return field, index


def _prepare_file(cli_ctx: CLIContext, statement_file: str) -> PreparedTable:
    config = cli_ctx.config
    table = read_table_file(
        statement_file,
        encoding=config.input.encoding,
        delimiter=config.input.delimiter,
    )
    prepared = prepare(table, _patterns_for(cli_ctx))
    cli_ctx.logger.debug(
        f"Header row {prepared.header_index}: {', '.join(cell.text for cell in prepared.header)}"
    )
    return prepared


def _patterns_for(cli_ctx: CLIContext) -> PatternSet:
    settings = cli_ctx.config.patterns
    return build_pattern_set(settings.extra, replace_defaults=settings.replace_defaults)


if __name__ == "__main__":  # pragma: no cover
    main()
