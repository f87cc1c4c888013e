"""Base classes and shared HTTP infrastructure for lookup sources."""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from lookup_fanout.core.execution.errors import TransportError
from lookup_fanout.schemas.lookup_config import ConnectionPoolConfig

logger = logging.getLogger(__name__)

RawPayload = dict[str, Any]


class HTTPConnectionPool:
    """Owns the httpx client shared by every HTTP lookup source.

    httpx.AsyncClient is safe for concurrent use, so all lookups of a
    fan-out go through one client and one connection pool.
    """

    _instance: "HTTPConnectionPool | None" = None
    _httpx_client: httpx.AsyncClient | None = None
    _pool_config: ConnectionPoolConfig | None = None
    _user_agent: str = "lookup-fanout/1.0"

    def __new__(cls) -> "HTTPConnectionPool":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def configure(
        cls,
        pool_config: ConnectionPoolConfig,
        user_agent: str | None = None,
    ) -> None:
        """Set pool configuration. Takes effect on the next client created.

        A live client is kept as is; it cannot be closed synchronously. Call
        ``close()`` first to apply new settings to a running pool.
        """
        cls._pool_config = pool_config
        if user_agent is not None:
            cls._user_agent = user_agent

    @classmethod
    def get_httpx_client(cls) -> httpx.AsyncClient:
        """Get or create the shared httpx client."""
        if cls._instance is None:
            cls._instance = cls()

        if cls._httpx_client is None or cls._httpx_client.is_closed:
            config = cls._pool_config or ConnectionPoolConfig()

            limits = httpx.Limits(
                max_connections=config.max_connections,
                max_keepalive_connections=config.max_keepalive,
                keepalive_expiry=config.keepalive_expiry,
            )

            timeout = httpx.Timeout(
                connect=10.0,
                read=30.0,
                write=10.0,
                pool=5.0,
            )

            cls._httpx_client = httpx.AsyncClient(
                limits=limits,
                timeout=timeout,
                headers={"User-Agent": cls._user_agent},
            )

        return cls._httpx_client

    @classmethod
    async def close(cls) -> None:
        """Close the shared HTTP client."""
        if cls._httpx_client is not None and not cls._httpx_client.is_closed:
            await cls._httpx_client.aclose()
        cls._httpx_client = None


class LookupSource(ABC):
    """A remote source that can be looked up by key."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Source name identifier."""
        pass

    @abstractmethod
    async def fetch(self, key: str) -> RawPayload:
        """Fetch the raw payload for ``key``.

        Raises:
            TransportError: If the remote call fails
        """
        pass

    @abstractmethod
    def parse(self, key: str, payload: RawPayload) -> BaseModel:
        """Deserialize a raw payload into a record.

        Raises:
            TransportError: If the payload is malformed
        """
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name='{self.name}'>"


class HttpJsonSource(LookupSource):
    """Source that GETs ``{base_url}{key}`` and decodes a JSON object."""

    record_model: type[BaseModel]

    def __init__(
        self,
        base_url: str,
        *,
        headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url
        self.headers = headers or {}
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        return HTTPConnectionPool.get_httpx_client()

    def url_for(self, key: str) -> str:
        return f"{self.base_url}{key}"

    async def fetch(self, key: str) -> RawPayload:
        url = self.url_for(key)
        logger.debug("GET %s", url)
        try:
            response = await self.client.get(url, headers=self.headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                key, f"HTTP {e.response.status_code} from {url}"
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(key, f"{type(e).__name__}: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise TransportError(key, f"invalid JSON from {url}") from e

        if not isinstance(payload, dict):
            raise TransportError(
                key, f"expected a JSON object from {url}, got {type(payload).__name__}"
            )
        return payload

    def parse(self, key: str, payload: RawPayload) -> BaseModel:
        try:
            return self.record_model.model_validate(payload)
        except ValidationError as e:
            raise TransportError(key, f"malformed payload: {e}") from e
