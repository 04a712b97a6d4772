#!/usr/bin/env python3
"""
gridpulse Command Line Interface

Runs a single map metrics collection cycle against a cluster snapshot and
prints the resulting report.

Usage:
    gridpulse --help
    gridpulse collect path/to/snapshot.yaml
    gridpulse --config collector.yaml collect snapshot.json --json

Environment Variables:
    GRIDPULSE_CONFIG_PATH: Path to the collector settings file
    GRIDPULSE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
"""

import json
import logging
import os
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from gridpulse import __version__
from gridpulse.cluster import load_snapshot
from gridpulse.config import CollectorSettings, load_settings
from gridpulse.core.enums import KeyStyle
from gridpulse.core.exceptions import ConfigurationError, GridPulseError, format_exception_context
from gridpulse.monitoring.metrics import collect_map_metrics

console = Console()

logging.basicConfig(
    level=os.environ.get("GRIDPULSE_LOG_LEVEL", "INFO").upper(),
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True)]
)
logger = logging.getLogger(__name__)

app = typer.Typer(
    name="gridpulse",
    help="Configuration and latency metrics for distributed maps",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]}
)

# Shared objects resolved by the callback
state: dict = {"settings": None}


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"gridpulse {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose output.")] = False,
    config_path: Annotated[Optional[str], typer.Option("--config", "-c", help="Path to collector settings file.")] = None,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
):
    """
    gridpulse CLI.
    """
    logging.getLogger("gridpulse").setLevel(logging.DEBUG if verbose else logging.INFO)
    if verbose:
        logger.debug("Verbose logging enabled")

    try:
        state["settings"] = load_settings(config_path)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {format_exception_context(e)}")
        raise typer.Exit(code=1)


@app.command()
def collect(
    snapshot: Annotated[str, typer.Argument(help="YAML or JSON cluster snapshot.")],
    as_json: Annotated[bool, typer.Option("--json", help="Print the report as JSON.")] = False,
    compact: Annotated[bool, typer.Option("--compact", help="Use compact report keys.")] = False,
) -> None:
    """
    Run one collection cycle over a cluster snapshot and print the report.
    """
    settings: CollectorSettings = state["settings"] or CollectorSettings()
    if compact:
        settings = settings.model_copy(update={"key_style": KeyStyle.COMPACT})

    try:
        cluster = load_snapshot(snapshot, map_service_name=settings.map_service_name)
        report = collect_map_metrics(cluster, settings)
    except GridPulseError as e:
        logger.error(f"Collection failed: {format_exception_context(e)}")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(report, indent=2, sort_keys=True))
        return

    table = Table(title="Map metrics")
    table.add_column("Key", style="cyan")
    table.add_column("Value", justify="right")
    for key in sorted(report):
        table.add_row(key, report[key])
    console.print(table)


if __name__ == "__main__":
    app()
