"""Pydantic record models for lookup payloads.

Each remote source deserializes its JSON body into one of these. Unknown
fields are ignored and every field is optional, since remote APIs omit
fields freely.
"""

from pydantic import BaseModel, ConfigDict


class LookupRecord(BaseModel):
    """Shared base for all lookup records."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class GitHubUser(LookupRecord):
    """A GitHub user or organization account."""

    login: str | None = None
    name: str | None = None
    blog: str | None = None


class FacebookPage(LookupRecord):
    """A Facebook Graph page."""

    id: str | None = None
    name: str | None = None
    website: str | None = None


class MockRecord(LookupRecord):
    """Record produced by the in-process mock source."""

    key: str | None = None
    name: str | None = None
