"""Lookup Fan-out - concurrent remote lookups joined into one ordered result."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("lookup-fanout")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "unknown"
