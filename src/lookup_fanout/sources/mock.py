"""Mock source for running lookups without external services."""

import asyncio
from collections.abc import Iterable

from pydantic import BaseModel, ValidationError

from lookup_fanout.core.execution.errors import TransportError
from lookup_fanout.schemas.records import MockRecord
from lookup_fanout.sources.base import LookupSource, RawPayload


class MockSource(LookupSource):
    """In-process source with fixed latency and scripted failures."""

    def __init__(
        self,
        latency_seconds: float = 0.0,
        fail_keys: Iterable[str] = (),
        source_name: str = "mock",
    ) -> None:
        """Initialize mock source.

        Args:
            latency_seconds: Delay applied to every fetch
            fail_keys: Keys whose fetch raises TransportError after the delay
            source_name: Name identifier for the source
        """
        self.latency_seconds = latency_seconds
        self.fail_keys = set(fail_keys)
        self._source_name = source_name

    @property
    def name(self) -> str:
        return self._source_name

    async def fetch(self, key: str) -> RawPayload:
        if self.latency_seconds:
            await asyncio.sleep(self.latency_seconds)
        if key in self.fail_keys:
            raise TransportError(key, "simulated transport failure")
        return {"key": key, "name": key.replace("-", " ").title()}

    def parse(self, key: str, payload: RawPayload) -> BaseModel:
        try:
            return MockRecord.model_validate(payload)
        except ValidationError as e:
            raise TransportError(key, f"malformed payload: {e}") from e
