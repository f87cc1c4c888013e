"""Command line interface for lookup-fanout."""

import logging
import sys
from typing import Any

import click

from lookup_fanout.cli_modules.utils.results_display import (
    display_failures,
    display_outcome,
    failures_to_json,
    outcome_to_json,
)
from lookup_fanout.core.config.config_manager import (
    ConfigurationError,
    ConfigurationManager,
)
from lookup_fanout.core.execution.errors import AggregateLookupError
from lookup_fanout.core.execution.fan_out_coordinator import run_lookups
from lookup_fanout.core.sources.source_factory import SourceFactory
from lookup_fanout.schemas.lookup_config import LookupConfig

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("lookup_fanout").setLevel(level)


def _load_config(config_path: str | None) -> LookupConfig:
    try:
        return ConfigurationManager(config_path).load_config()
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


def _echo_dispatch(event_type: str, data: dict[str, Any]) -> None:
    if event_type == "lookup_started":
        click.echo(f"Looking up {data['key']}")


@click.group()
@click.version_option(package_name="lookup-fanout")
def cli() -> None:
    """Lookup Fan-out - concurrent remote lookups joined into one result."""
    pass


@cli.command()
@click.argument("keys", nargs=-1)
@click.option(
    "--source",
    "source_name",
    default=None,
    help="Configured source to query (defaults to default_source)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to a YAML config file",
)
@click.option(
    "--output-format",
    type=click.Choice(["json", "text"]),
    default="text",
    help="Output format for results",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Per-lookup timeout in seconds (overrides config)",
)
@click.option(
    "--simulated-latency",
    type=click.FloatRange(min=0),
    default=None,
    help="Artificial delay added after each lookup, in seconds",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def lookup(
    keys: tuple[str, ...],
    source_name: str | None,
    config_path: str | None,
    output_format: str,
    timeout: float | None,
    simulated_latency: float | None,
    verbose: bool,
) -> None:
    """Look up KEYS concurrently and report results with elapsed time."""
    config = _load_config(config_path)
    _configure_logging("DEBUG" if verbose else config.log_level)

    try:
        source = SourceFactory(config).create(source_name)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    timeout_seconds = (
        timeout if timeout is not None else config.execution.timeout_seconds
    )
    latency = (
        simulated_latency
        if simulated_latency is not None
        else config.execution.simulated_latency_seconds
    )

    try:
        outcome = run_lookups(
            source,
            list(keys),
            timeout_seconds=timeout_seconds,
            simulated_latency=latency,
            emit_event_fn=_echo_dispatch if output_format == "text" else None,
        )
    except AggregateLookupError as e:
        if output_format == "json":
            click.echo(failures_to_json(e))
        else:
            display_failures(e)
        sys.exit(1)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if output_format == "json":
        click.echo(outcome_to_json(outcome))
    else:
        display_outcome(outcome)


@cli.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to a YAML config file",
)
def sources(config_path: str | None) -> None:
    """List configured lookup sources."""
    config = _load_config(config_path)

    for name, source_config in sorted(config.sources.items()):
        marker = "*" if name == config.default_source else " "
        target = source_config.resolved_base_url or "in-process"
        click.echo(f"{marker} {name} ({source_config.kind}) {target}")


if __name__ == "__main__":
    cli()
