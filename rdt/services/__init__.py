"""External service integrations for rdt.

- Reddit: search execution for resolved SearchParams

Example Usage:
    >>> from rdt.core.config import ApiSettings
    >>> from rdt.services import create_reddit_searcher
    >>>
    >>> settings = ApiSettings.from_env()
    >>> searcher = create_reddit_searcher(settings)
"""

from rdt.services.reddit import (
    RedditPost,
    RedditSearchResults,
    RedditSearcher,
    create_reddit_searcher,
    parse_reddit_results,
)

__all__ = [
    "RedditPost",
    "RedditSearchResults",
    "RedditSearcher",
    "create_reddit_searcher",
    "parse_reddit_results",
]
