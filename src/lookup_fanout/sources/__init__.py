"""Lookup source implementations."""

from lookup_fanout.sources.base import (
    HTTPConnectionPool,
    HttpJsonSource,
    LookupSource,
    RawPayload,
)
from lookup_fanout.sources.facebook import FacebookPageSource
from lookup_fanout.sources.github import GitHubUserSource
from lookup_fanout.sources.mock import MockSource

__all__ = [
    "FacebookPageSource",
    "GitHubUserSource",
    "HTTPConnectionPool",
    "HttpJsonSource",
    "LookupSource",
    "MockSource",
    "RawPayload",
]
