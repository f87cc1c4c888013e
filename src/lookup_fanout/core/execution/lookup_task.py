"""Single asynchronous lookup with a pollable, awaitable completion handle."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from lookup_fanout.core.execution.errors import TransportError
from lookup_fanout.core.execution.result_types import LookupResult, TaskState

if TYPE_CHECKING:
    from lookup_fanout.sources.base import LookupSource

logger = logging.getLogger(__name__)

EmitEventFn = Callable[[str, dict[str, Any]], None]


def noop_event(_event_type: str, _data: dict[str, Any]) -> None:
    pass


class LookupHandle:
    """Completion handle for one dispatched lookup.

    The state moves from PENDING to DONE or FAILED exactly once. ``done()``
    never blocks; ``result()`` waits for the running lookup and never
    starts another one.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        self._state = TaskState.PENDING
        self._record: BaseModel | None = None
        self._error: TransportError | None = None
        self._duration_ms = 0
        self._task: asyncio.Task[None] | None = None

    def __repr__(self) -> str:
        return f"<LookupHandle key='{self.key}' state={self._state.value}>"

    @property
    def state(self) -> TaskState:
        return self._state

    @property
    def error(self) -> TransportError | None:
        return self._error

    @property
    def task(self) -> asyncio.Task[None] | None:
        return self._task

    def done(self) -> bool:
        """Return True once the lookup is terminal. Never blocks."""
        return self._state.is_terminal

    async def wait(self) -> None:
        """Wait until the lookup is terminal without raising on failure."""
        if self._task is not None and not self.done():
            await asyncio.shield(self._task)

    async def result(self) -> LookupResult:
        """Wait for the lookup and return its result.

        Raises:
            TransportError: If the lookup failed
        """
        await self.wait()
        if self._error is not None:
            raise self._error
        return self.outcome()

    def outcome(self) -> LookupResult:
        """Terminal view of the lookup; failed lookups carry the error text.

        Raises:
            RuntimeError: If the lookup is still pending
        """
        if not self.done():
            raise RuntimeError(f"Lookup of '{self.key}' has not completed")
        if self._state is TaskState.FAILED:
            return LookupResult(
                key=self.key,
                status="failed",
                error=str(self._error),
                duration_ms=self._duration_ms,
            )
        return LookupResult(
            key=self.key,
            status="success",
            record=self._record,
            duration_ms=self._duration_ms,
        )

    def _complete(self, record: BaseModel, duration_ms: int) -> None:
        self._transition(TaskState.DONE)
        self._record = record
        self._duration_ms = duration_ms

    def _fail(self, error: TransportError, duration_ms: int) -> None:
        self._transition(TaskState.FAILED)
        self._error = error
        self._duration_ms = duration_ms

    def _transition(self, new_state: TaskState) -> None:
        if self._state.is_terminal:
            raise RuntimeError(
                f"Lookup of '{self.key}' is already {self._state.value}, "
                f"cannot become {new_state.value}"
            )
        self._state = new_state


class LookupTask:
    """Starts lookups against one source on their own asyncio tasks."""

    def __init__(
        self,
        source: LookupSource,
        *,
        timeout_seconds: float | None = None,
        simulated_latency: float = 0.0,
        emit_event_fn: EmitEventFn | None = None,
    ) -> None:
        """Initialize the lookup task.

        Args:
            source: Source performing the remote call
            timeout_seconds: Per-lookup timeout; None waits indefinitely
            simulated_latency: Constant delay added after a successful fetch
            emit_event_fn: Receives lookup_started and lookup_completed events
        """
        if simulated_latency < 0:
            raise ValueError("simulated_latency must not be negative")
        self._source = source
        self._timeout_seconds = timeout_seconds
        self._simulated_latency = simulated_latency
        self._emit_event = emit_event_fn or noop_event

    def start(self, key: str) -> LookupHandle:
        """Begin the lookup of ``key`` and return its handle immediately.

        Must be called from a running event loop.
        """
        if not isinstance(key, str) or not key:
            raise ValueError(f"Lookup key must be a non-empty string, got {key!r}")

        handle = LookupHandle(key)
        handle._task = asyncio.create_task(
            self._run(handle), name=f"lookup:{self._source.name}:{key}"
        )
        return handle

    async def _run(self, handle: LookupHandle) -> None:
        key = handle.key
        start_time = time.perf_counter()
        self._emit(
            "lookup_started",
            {"key": key, "source": self._source.name, "timestamp": time.time()},
        )
        logger.debug("Looking up %s via %s", key, self._source.name)

        try:
            record = await self._fetch_with_timeout(key)
            if self._simulated_latency:
                await asyncio.sleep(self._simulated_latency)
        except TransportError as e:
            self._record_failure(handle, e, start_time)
        except Exception as e:
            self._record_failure(handle, TransportError(key, e), start_time)
        else:
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            handle._complete(record, duration_ms)
            self._emit(
                "lookup_completed",
                {"key": key, "timestamp": time.time(), "duration_ms": duration_ms},
            )
            logger.debug("Lookup of %s completed in %d ms", key, duration_ms)

    def _emit(self, event_type: str, data: dict[str, Any]) -> None:
        # A failing observer must not leave the handle pending
        try:
            self._emit_event(event_type, data)
        except Exception:
            logger.exception("Event handler failed for %s", event_type)

    async def _fetch_with_timeout(self, key: str) -> BaseModel:
        if self._timeout_seconds is None:
            return await self._fetch(key)

        try:
            return await asyncio.wait_for(
                self._fetch(key), timeout=self._timeout_seconds
            )
        except TimeoutError as e:
            raise TransportError(
                key, f"timed out after {self._timeout_seconds} seconds"
            ) from e

    async def _fetch(self, key: str) -> BaseModel:
        payload = await self._source.fetch(key)
        return self._source.parse(key, payload)

    def _record_failure(
        self, handle: LookupHandle, error: TransportError, start_time: float
    ) -> None:
        if error.__cause__ is None and isinstance(error.cause, BaseException):
            error.__cause__ = error.cause
        duration_ms = int((time.perf_counter() - start_time) * 1000)
        handle._fail(error, duration_ms)
        self._emit(
            "lookup_completed",
            {
                "key": handle.key,
                "timestamp": time.time(),
                "duration_ms": duration_ms,
                "error": str(error),
            },
        )
        logger.warning("%s", error)
