#!/usr/bin/env python
"""
Command line driver for LeadMerge.

Loads a lead file, consolidates duplicate records and writes the result,
recording every merge decision in an append-only change log.
"""
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from leadmerge.connectors import load_leads, write_consolidated
from leadmerge.exceptions import LeadMergeError
from leadmerge.merge import Consolidator
from leadmerge.utils import ConfigManager, change_log

app = typer.Typer(
    add_completion=False,
    help="Detect and consolidate duplicate user records in a JSON lead file."
)


def _fail(error: LeadMergeError) -> None:
    """Report a LeadMerge error and exit with a non-zero status."""
    typer.echo(f"Error: {error.message}", err=True)
    for name, value in error.details.items():
        if name == "duplicates":
            value = ", ".join(str(d) for d in value)
        typer.echo(f"  {name}: {value}", err=True)
    raise typer.Exit(code=1)


@app.command()
def consolidate(
    input_file: Path = typer.Argument(Path("leads.json"), help="JSON file holding the lead records"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Where to write consolidated records"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", "-l", help="Append-only change log"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML configuration file"),
    keys: Optional[List[str]] = typer.Option(None, "--key", "-k", help="Identifying key (repeatable)"),
    max_passes: Optional[int] = typer.Option(None, "--max-passes", help="Give up after this many passes"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Write the change log as JSON lines"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Do not echo merge decisions or records")
):
    """Consolidate duplicate lead records."""
    manager = ConfigManager()
    try:
        config = manager.load(
            config_file,
            overrides={
                "keys": list(keys) if keys else None,
                "max_passes": max_passes,
                "output_file": str(output) if output else None,
                "log_file": str(log_file) if log_file else None
            }
        )
    except LeadMergeError as e:
        _fail(e)
        
    try:
        with change_log(config.log_file, json_format=json_logs, console=not quiet) as logger:
            records = load_leads(input_file, collection_field=config.collection_field)
            consolidator = Consolidator(config, logger=logger)
            consolidated = consolidator.resolve(records)
            write_consolidated(consolidated, config.output_file)
    except LeadMergeError as e:
        _fail(e)
        
    result = consolidator.last_result
    if not quiet:
        Console().print_json(data=[record.to_dict() for record in consolidated])
    typer.echo(
        f"Consolidated {result.input_count} records into {len(result.records)} "
        f"in {result.passes} pass(es)"
    )
    typer.echo(f"Consolidated users written to {config.output_file}")


def main():
    app(prog_name="leadmerge")


if __name__ == "__main__":
    main()
