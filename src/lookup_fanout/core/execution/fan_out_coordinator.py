"""Fan-out coordination: dispatch every lookup, then join on all of them."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING

from lookup_fanout.core.execution.errors import AggregateLookupError, TransportError
from lookup_fanout.core.execution.lookup_task import (
    EmitEventFn,
    LookupHandle,
    LookupTask,
    noop_event,
)
from lookup_fanout.core.execution.result_types import AggregateOutcome

if TYPE_CHECKING:
    from lookup_fanout.sources.base import LookupSource

logger = logging.getLogger(__name__)


class CoordinatorState(Enum):
    """Lifecycle of a FanOutCoordinator run."""

    NOT_STARTED = "not_started"
    DISPATCHING = "dispatching"
    AWAITING_ALL = "awaiting_all"
    AGGREGATED = "aggregated"


class FanOutCoordinator:
    """Runs one lookup per key concurrently and joins on all of them.

    Every lookup is started before any is awaited. The join wakes on task
    completion rather than polling, and never returns while a lookup is
    still pending. A coordinator performs a single run.
    """

    def __init__(
        self,
        source: LookupSource,
        *,
        timeout_seconds: float | None = None,
        simulated_latency: float = 0.0,
        emit_event_fn: EmitEventFn | None = None,
    ) -> None:
        self._source = source
        self._emit_event = emit_event_fn or noop_event
        self._lookup_task = LookupTask(
            source,
            timeout_seconds=timeout_seconds,
            simulated_latency=simulated_latency,
            emit_event_fn=self._emit_event,
        )
        self._state = CoordinatorState.NOT_STARTED
        self._handles: list[LookupHandle] = []

    @property
    def state(self) -> CoordinatorState:
        return self._state

    @property
    def handles(self) -> list[LookupHandle]:
        """Handles dispatched by this coordinator, in input order."""
        return list(self._handles)

    async def run_all(self, keys: Sequence[str]) -> AggregateOutcome:
        """Look up every key concurrently and return results in input order.

        Args:
            keys: Lookup keys; duplicates are looked up independently

        Returns:
            AggregateOutcome with one result per key and the elapsed time

        Raises:
            AggregateLookupError: If any lookup failed, after all completed
            ValueError: If a key is not a non-empty string
            RuntimeError: If this coordinator already ran
        """
        if self._state is not CoordinatorState.NOT_STARTED:
            raise RuntimeError(
                f"FanOutCoordinator already used (state: {self._state.value})"
            )

        keys = list(keys)
        for key in keys:
            if not isinstance(key, str) or not key:
                raise ValueError(
                    f"Lookup key must be a non-empty string, got {key!r}"
                )

        start_time = time.perf_counter()
        self._state = CoordinatorState.DISPATCHING
        self._emit_event(
            "fan_out_started",
            {"source": self._source.name, "total_lookups": len(keys)},
        )
        self._handles = [self._lookup_task.start(key) for key in keys]

        self._state = CoordinatorState.AWAITING_ALL
        await self._await_all()
        elapsed = time.perf_counter() - start_time

        self._state = CoordinatorState.AGGREGATED
        return self._aggregate(elapsed)

    async def _await_all(self) -> None:
        tasks = [handle.task for handle in self._handles if handle.task is not None]
        if tasks:
            await asyncio.wait(tasks, return_when=asyncio.ALL_COMPLETED)

        pending = [handle.key for handle in self._handles if not handle.done()]
        if pending:
            raise RuntimeError(
                f"Lookups finished without a terminal state: {', '.join(pending)}"
            )

    def _aggregate(self, elapsed: float) -> AggregateOutcome:
        failures: list[TransportError] = [
            handle.error for handle in self._handles if handle.error is not None
        ]

        self._emit_event(
            "fan_out_completed",
            {
                "source": self._source.name,
                "total_lookups": len(self._handles),
                "failed_lookups": len(failures),
                "duration_ms": int(elapsed * 1000),
            },
        )

        if failures:
            logger.warning(
                "%d of %d lookups failed after %.3fs",
                len(failures),
                len(self._handles),
                elapsed,
            )
            raise AggregateLookupError(failures, self._handles)

        logger.debug(
            "All %d lookups completed in %.3fs", len(self._handles), elapsed
        )
        return AggregateOutcome(
            results=[handle.outcome() for handle in self._handles],
            elapsed_seconds=elapsed,
        )


def run_lookups(
    source: LookupSource,
    keys: Sequence[str],
    *,
    timeout_seconds: float | None = None,
    simulated_latency: float = 0.0,
    emit_event_fn: EmitEventFn | None = None,
) -> AggregateOutcome:
    """Blocking entry point: run a fan-out on a fresh event loop.

    The shared HTTP client is bound to the loop it was created on, so it is
    closed before the loop ends.
    """
    from lookup_fanout.sources.base import HTTPConnectionPool

    async def _run() -> AggregateOutcome:
        coordinator = FanOutCoordinator(
            source,
            timeout_seconds=timeout_seconds,
            simulated_latency=simulated_latency,
            emit_event_fn=emit_event_fn,
        )
        try:
            return await coordinator.run_all(keys)
        finally:
            await HTTPConnectionPool.close()

    return asyncio.run(_run())
