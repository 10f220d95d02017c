from __future__ import annotations

import logging

from langchain_community.tools.reddit_search.tool import (
    RedditSearchRun,
    RedditSearchSchema,
)
from langchain_community.utilities.reddit_search import RedditSearchAPIWrapper

from rdt.core.config import ApiSettings
from rdt.core.schemas import SearchParams
from rdt.services.reddit.client import parse_reddit_results
from rdt.services.reddit.schemas import RedditSearchResults

logger = logging.getLogger(__name__)

ALL_SUBREDDITS = "all"


class RedditSearcher:
    """Execute resolved SearchParams against Reddit search."""

    def __init__(self, reddit_search: RedditSearchRun) -> None:
        self._reddit_search = reddit_search

    async def search(self, params: SearchParams) -> RedditSearchResults:
        subreddit = params.subreddit or ALL_SUBREDDITS
        request = RedditSearchSchema(
            query=params.query,
            sort=params.sort,
            time_filter=params.time_range,
            subreddit=subreddit,
            limit=str(params.limit),
        )
        logger.debug("Reddit search request: %s", request)

        raw_payload = await self._reddit_search.arun(request.model_dump())
        posts = parse_reddit_results(raw_payload)
        logger.info("Reddit search for %r in r/%s returned %d posts", params.query, subreddit, len(posts))

        return RedditSearchResults(
            query=params.query,
            subreddit=params.subreddit,
            sort=params.sort,
            time_range=params.time_range,
            posts=posts,
        )


def create_reddit_searcher(settings: ApiSettings) -> RedditSearcher:
    """Build a RedditSearcher from the configured Reddit API credentials."""

    client_id = settings.ensure("reddit_client_id")
    client_secret = settings.ensure("reddit_client_secret")

    api_wrapper = RedditSearchAPIWrapper(
        reddit_client_id=client_id,
        reddit_client_secret=client_secret,
        reddit_user_agent=settings.reddit_user_agent,
    )
    return RedditSearcher(
        RedditSearchRun(
            api_wrapper=api_wrapper,
            description="Search Reddit posts with structured parameters.",
        )
    )
