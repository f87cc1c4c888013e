"""Factory for creating lookup sources from configuration."""

import logging

from lookup_fanout.schemas.lookup_config import LookupConfig, SourceConfig
from lookup_fanout.sources.base import HTTPConnectionPool, LookupSource
from lookup_fanout.sources.facebook import FacebookPageSource
from lookup_fanout.sources.github import GitHubUserSource
from lookup_fanout.sources.mock import MockSource

logger = logging.getLogger(__name__)


class SourceFactory:
    """Creates LookupSource instances by configured name."""

    def __init__(self, config: LookupConfig) -> None:
        """Initialize the source factory.

        Configures the shared HTTP connection pool from ``config``. The
        settings apply to the next client the pool creates; a client that is
        already open keeps its limits until ``HTTPConnectionPool.close()``.

        Args:
            config: Validated lookup configuration
        """
        self._config = config
        HTTPConnectionPool.configure(config.connection_pool, config.user_agent)

    @property
    def source_names(self) -> list[str]:
        return sorted(self._config.sources)

    def create(self, name: str | None = None) -> LookupSource:
        """Create the source called ``name``, or the default source.

        Raises:
            ValueError: If no source with that name is configured
        """
        source_name = name or self._config.default_source
        source_config = self._config.sources.get(source_name)
        if source_config is None:
            raise ValueError(
                f"Unknown source '{source_name}'. "
                f"Available: {', '.join(self.source_names)}"
            )
        logger.debug("Creating %s source '%s'", source_config.kind, source_name)
        return self._build(source_name, source_config)

    @staticmethod
    def _build(source_name: str, source_config: SourceConfig) -> LookupSource:
        if source_config.kind == "mock":
            return MockSource(
                latency_seconds=source_config.latency_seconds,
                fail_keys=source_config.fail_keys,
                source_name=source_name,
            )
        if source_config.kind == "github":
            return GitHubUserSource(
                source_config.resolved_base_url, headers=source_config.headers
            )
        if source_config.kind == "facebook":
            return FacebookPageSource(
                source_config.resolved_base_url, headers=source_config.headers
            )
        raise ValueError(f"Unsupported source kind: {source_config.kind}")
