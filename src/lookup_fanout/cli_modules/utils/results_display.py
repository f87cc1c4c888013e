"""Results display utilities for the CLI."""

import json
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lookup_fanout.core.execution.errors import AggregateLookupError
from lookup_fanout.core.execution.result_types import AggregateOutcome, LookupResult


def _record_summary(result: LookupResult) -> str:
    if result.record is None:
        return ""
    fields = result.record.model_dump(exclude_none=True)
    return ", ".join(f"{name}={value}" for name, value in fields.items())


def display_outcome(
    outcome: AggregateOutcome,
    console: Console | None = None,
) -> None:
    """Print elapsed time and one row per lookup, in input order."""
    console = console or Console(soft_wrap=True, highlight=False)

    console.print(f"[bold blue]Elapsed time:[/bold blue] {outcome.elapsed_ms} ms")
    if not outcome.results:
        console.print("No lookups requested")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Key")
    table.add_column("Record")
    table.add_column("Duration", justify="right")
    for result in outcome.results:
        # Keys and remote fields are user data, not markup
        table.add_row(
            escape(result.key),
            escape(_record_summary(result)),
            f"{result.duration_ms} ms",
        )
    console.print(table)


def display_failures(
    error: AggregateLookupError,
    console: Console | None = None,
) -> None:
    """Print every failed key with its cause."""
    console = console or Console(stderr=True, soft_wrap=True, highlight=False)

    console.print(
        f"[bold red]{len(error.failures)} of {error.total} "
        f"lookups failed[/bold red]"
    )
    for failure in error.failures:
        console.print(
            f"  [red]✗ {escape(failure.key)}[/red]: {escape(str(failure.cause))}"
        )


def outcome_to_json(outcome: AggregateOutcome) -> str:
    return json.dumps(outcome.to_dict(), indent=2)


def failures_to_json(error: AggregateLookupError) -> str:
    payload: dict[str, Any] = {
        "status": "failed",
        "failures": [
            {"key": failure.key, "error": str(failure.cause)}
            for failure in error.failures
        ],
    }
    return json.dumps(payload, indent=2)
