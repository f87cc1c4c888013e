"""Error types raised by lookup execution."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lookup_fanout.core.execution.lookup_task import LookupHandle


class TransportError(Exception):
    """A single remote lookup failed.

    Covers connectivity problems, non-2xx responses, malformed payloads
    and per-task timeouts. Always names the key that failed.
    """

    def __init__(self, key: str, cause: BaseException | str) -> None:
        self.key = key
        self.cause = cause
        super().__init__(f"Lookup of '{key}' failed: {cause}")


class AggregateLookupError(Exception):
    """One or more lookups of a fan-out failed.

    Raised only after every dispatched lookup reached a terminal state.
    ``handles`` holds all of them, so the successful results can still be
    read from the error.
    """

    def __init__(
        self,
        failures: Sequence[TransportError],
        handles: Sequence[LookupHandle] = (),
    ) -> None:
        self.failures = list(failures)
        self.handles = list(handles)
        details = "; ".join(f"{f.key}: {f.cause}" for f in self.failures)
        super().__init__(
            f"{len(self.failures)} of {self.total} lookups failed ({details})"
        )

    @property
    def total(self) -> int:
        """Number of lookups in the fan-out, or of failures when no handles."""
        return len(self.handles) or len(self.failures)

    @property
    def failed_keys(self) -> list[str]:
        """Keys of the failed lookups, in dispatch order."""
        return [failure.key for failure in self.failures]
