#!/usr/bin/env python3
"""
GitFormat CLI Tool

This CLI tool prints git ``--format`` strings for the supported record types
and decodes the output git produced with them.

Usage:
    gitformat format log
    git log --shortstat --format="$(gitformat format log)" | gitformat decode log
    git for-each-ref --format="$(gitformat format ref)" | gitformat decode ref --json
"""

import json
import logging
import sys
from typing import Any, Dict, List

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from config.settings import export_config, settings
from shared.models import RECORD_TYPES
from services.format_decoder.decoder import GitFormatDecoder
from services.format_decoder.encoder import GitFormatEncoder
from services.format_decoder.errors import FormatDecodeError

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.monitoring.log_level),
    format=settings.monitoring.log_format
)
logger = logging.getLogger(__name__)

# Initialize Rich consoles
console = Console()
error_console = Console(stderr=True)

KIND = click.Choice(sorted(RECORD_TYPES))


def display_error_message(error: str, suggestion: str = ""):
    """Display an error panel on stderr."""
    content = error
    if suggestion:
        content += f"\n\n💡 {suggestion}"
    error_console.print(Panel(content, title=Text("❌ Error", style="bold red"), border_style="red"))


def display_records(kind: str, records: List[Any]):
    """Display decoded records in a table."""
    record_type = RECORD_TYPES[kind]
    table = Table(title=f"{kind} records", show_header=True, header_style="bold magenta")
    for column in record_type.table_columns:
        table.add_column(column.replace("_", " ").title(), overflow="fold")

    for record in records:
        row = []
        for column in record_type.table_columns:
            value = getattr(record, column)
            row.append("" if value is None else str(value))
        table.add_row(*row)

    console.print(table)
    console.print(f"[green]✅ Decoded {len(records)} {kind} record(s)[/green]")


def records_to_json(records: List[Any]) -> List[Dict[str, Any]]:
    return [record.model_dump(mode="json", by_alias=True) for record in records]


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose: bool):
    """Decode git --format output into typed records."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command("format")
@click.argument("kind", type=KIND)
def format_command(kind: str):
    """Print the --format string for a record kind."""
    click.echo(GitFormatEncoder().encode_record(RECORD_TYPES[kind]))


@cli.command("decode")
@click.argument("kind", type=KIND)
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option('--json', 'as_json', is_flag=True, help='Print records as JSON')
@click.option('--first', is_flag=True, help='Decode only the first record')
@click.option('--keep-going/--stop-on-error', default=not settings.decoder.stop_on_error,
              help='Report malformed records and continue with the rest')
def decode_command(kind: str, source, as_json: bool, first: bool, keep_going: bool):
    """Decode git output read from SOURCE (stdin by default)."""
    decoder = GitFormatDecoder()
    record_type = RECORD_TYPES[kind]
    output = source.read()

    records = []
    failures = 0
    try:
        for result in decoder.iter_results(output, record_type):
            if result.error is not None:
                if not keep_going:
                    raise result.error
                failures += 1
                display_error_message(str(result.error))
                continue
            records.append(result.value)
            if first:
                break
    except FormatDecodeError as e:
        logger.error(f"Decoding failed: {e}")
        display_error_message(
            str(e),
            f"Check that git was run with: --format=\"$(gitformat format {kind})\""
        )
        sys.exit(1)

    if as_json:
        payload = records_to_json(records)
        if first:
            payload = payload[0] if payload else None
        click.echo(json.dumps(payload, indent=2))
    else:
        display_records(kind, records)

    if failures:
        error_console.print(f"[yellow]⚠️ {failures} record(s) could not be decoded[/yellow]")
        sys.exit(1)


@cli.command("config")
def config_command():
    """Print the effective configuration."""
    click.echo(json.dumps(export_config(), indent=2))


if __name__ == "__main__":
    cli()
