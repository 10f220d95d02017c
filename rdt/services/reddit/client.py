"""Parsing of the LangChain Reddit search payload into post models."""
from __future__ import annotations

import re
from typing import Any, List

from rdt.services.reddit.schemas import RedditPost

_POST_PATTERN = re.compile(
    r"""
    Post\ Title:\s*(?P<title>.*?)\n
    \s*User:\s*(?P<user>.*?)\n
    \s*Subreddit:\s*(?P<subreddit>.*?)\s*:?\s*\n
    \s*Text\ body:\s*(?P<body>.*?)
    \s*Post\ URL:\s*(?P<url>\S+)\n
    \s*Post\ Category:\s*(?P<category>.*?)\.\s*\n
    \s*Score:\s*(?P<score>\d+)
    """,
    re.DOTALL | re.VERBOSE,
)


def parse_reddit_results(payload: Any) -> List[RedditPost]:
    """Normalise the Reddit string payload into RedditPost models."""

    text = payload.get("result") if isinstance(payload, dict) and "result" in payload else payload
    if not isinstance(text, str):
        return []

    posts: List[RedditPost] = []
    for match in _POST_PATTERN.finditer(text):
        score = match.group("score").strip()
        posts.append(
            RedditPost(
                title=match.group("title").strip().strip("'\""),
                author=match.group("user").strip(),
                subreddit=match.group("subreddit").strip().rstrip(":"),
                body=match.group("body").strip(),
                url=match.group("url").strip(),
                category=match.group("category").strip() or None,
                score=int(score) if score.isdigit() else None,
            )
        )
    return posts
