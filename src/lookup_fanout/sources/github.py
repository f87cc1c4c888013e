"""GitHub user lookup source."""

from lookup_fanout.schemas.records import GitHubUser
from lookup_fanout.sources.base import HttpJsonSource


class GitHubUserSource(HttpJsonSource):
    """Looks up GitHub users and organizations by login."""

    record_model = GitHubUser

    @property
    def name(self) -> str:
        return "github"
