"""Reddit search execution.

Public API:
    - create_reddit_searcher: Factory building a searcher from ApiSettings
    - RedditSearcher: Runs resolved SearchParams through the LangChain Reddit tool
    - parse_reddit_results: Utility to parse Reddit tool payloads into posts
    - RedditPost, RedditSearchResults: Result models
"""
from rdt.services.reddit.client import parse_reddit_results
from rdt.services.reddit.schemas import RedditPost, RedditSearchResults
from rdt.services.reddit.tools import RedditSearcher, create_reddit_searcher

__all__ = [
    "RedditPost",
    "RedditSearchResults",
    "RedditSearcher",
    "create_reddit_searcher",
    "parse_reddit_results",
]
