"""Facebook Graph page lookup source."""

from lookup_fanout.schemas.records import FacebookPage
from lookup_fanout.sources.base import HttpJsonSource


class FacebookPageSource(HttpJsonSource):
    """Looks up public Facebook Graph pages by page name."""

    record_model = FacebookPage

    @property
    def name(self) -> str:
        return "facebook"
