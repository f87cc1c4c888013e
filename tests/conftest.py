"""Shared test fixtures and configuration."""

import asyncio
from collections.abc import Generator, Iterable
from typing import Any

import pytest
from pydantic import BaseModel, ValidationError

from lookup_fanout.core.execution.errors import TransportError
from lookup_fanout.schemas.records import MockRecord
from lookup_fanout.sources.base import HTTPConnectionPool, LookupSource, RawPayload


class ScriptedSource(LookupSource):
    """Source with per-key latency, failures and a fetch call log."""

    def __init__(
        self,
        latencies: dict[str, float] | None = None,
        fail_keys: Iterable[str] = (),
        payloads: dict[str, RawPayload] | None = None,
        errors: dict[str, Exception] | None = None,
    ) -> None:
        self.latencies = latencies or {}
        self.fail_keys = set(fail_keys)
        self.payloads = payloads or {}
        self.errors = errors or {}
        self.calls: list[str] = []

    @property
    def name(self) -> str:
        return "scripted"

    async def fetch(self, key: str) -> RawPayload:
        self.calls.append(key)
        await asyncio.sleep(self.latencies.get(key, 0.0))
        if key in self.errors:
            raise self.errors[key]
        if key in self.fail_keys:
            raise TransportError(key, "connection refused")
        return self.payloads.get(key, {"key": key, "name": f"Name of {key}"})

    def parse(self, key: str, payload: RawPayload) -> BaseModel:
        try:
            return MockRecord.model_validate(payload)
        except ValidationError as e:
            raise TransportError(key, f"malformed payload: {e}") from e


@pytest.fixture
def scripted_source() -> Any:
    """Factory for ScriptedSource instances."""

    def _make(**kwargs: Any) -> ScriptedSource:
        return ScriptedSource(**kwargs)

    return _make


@pytest.fixture(autouse=True)
def reset_connection_pool() -> Generator[None, None, None]:
    """Keep the shared HTTP client singleton from leaking between tests."""
    yield
    HTTPConnectionPool._instance = None
    HTTPConnectionPool._httpx_client = None
    HTTPConnectionPool._pool_config = None
    HTTPConnectionPool._user_agent = "lookup-fanout/1.0"
