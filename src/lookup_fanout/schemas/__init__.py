"""Pydantic schemas for configuration and lookup records."""

from lookup_fanout.schemas.lookup_config import (
    ConnectionPoolConfig,
    ExecutionConfig,
    LookupConfig,
    SourceConfig,
)
from lookup_fanout.schemas.records import (
    FacebookPage,
    GitHubUser,
    LookupRecord,
    MockRecord,
)

__all__ = [
    "ConnectionPoolConfig",
    "ExecutionConfig",
    "FacebookPage",
    "GitHubUser",
    "LookupConfig",
    "LookupRecord",
    "MockRecord",
    "SourceConfig",
]
