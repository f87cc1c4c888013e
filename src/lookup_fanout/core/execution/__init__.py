"""Lookup execution components."""

from lookup_fanout.core.execution.errors import AggregateLookupError, TransportError
from lookup_fanout.core.execution.fan_out_coordinator import (
    CoordinatorState,
    FanOutCoordinator,
    run_lookups,
)
from lookup_fanout.core.execution.lookup_task import LookupHandle, LookupTask
from lookup_fanout.core.execution.result_types import (
    AggregateOutcome,
    LookupResult,
    TaskState,
)

__all__ = [
    "AggregateLookupError",
    "AggregateOutcome",
    "CoordinatorState",
    "FanOutCoordinator",
    "LookupHandle",
    "LookupResult",
    "LookupTask",
    "TaskState",
    "TransportError",
    "run_lookups",
]
