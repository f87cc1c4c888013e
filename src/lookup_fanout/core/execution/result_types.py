"""Typed result models for lookup fan-out.

LookupResult is produced by a LookupHandle once its lookup is terminal;
AggregateOutcome is produced by FanOutCoordinator once every handle is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel


class TaskState(Enum):
    """Completion state of a single lookup."""

    PENDING = "pending"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not TaskState.PENDING


@dataclass
class LookupResult:
    """Result of one lookup.

    ``record`` is the parsed payload for successful lookups; failed
    lookups carry the error text instead.
    """

    key: str
    status: Literal["success", "failed"]
    record: BaseModel | None = None
    error: str | None = None
    duration_ms: int = 0

    @property
    def succeeded(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dict, including error only for failed lookups."""
        result: dict[str, Any] = {
            "key": self.key,
            "status": self.status,
            "record": (
                self.record.model_dump(exclude_none=True)
                if self.record is not None
                else None
            ),
            "duration_ms": self.duration_ms,
        }
        if self.status == "failed" and self.error is not None:
            result["error"] = self.error
        return result


@dataclass
class AggregateOutcome:
    """Ordered results of a fan-out, one per input key."""

    results: list[LookupResult] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def elapsed_ms(self) -> int:
        return int(self.elapsed_seconds * 1000)

    @property
    def keys(self) -> list[str]:
        return [result.key for result in self.results]

    def __len__(self) -> int:
        return len(self.results)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dict for JSON output."""
        return {
            "elapsed_ms": self.elapsed_ms,
            "results": [result.to_dict() for result in self.results],
        }
