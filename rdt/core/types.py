"""Shared type aliases used by the search parameter models."""
from __future__ import annotations

import re
from typing import Annotated, Any, Literal

from pydantic import BeforeValidator, Field, StringConstraints

MAX_LIMIT = 100
DEFAULT_LIMIT = 25

_SUBREDDIT_PREFIX = re.compile(r"^/?r/", re.IGNORECASE)


def _lower(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _strip_subreddit_prefix(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    name = _SUBREDDIT_PREFIX.sub("", value.strip())
    return name.strip("/").lower()


def _clamp_limit(value: Any) -> Any:
    """Cap oversized limits at MAX_LIMIT; anything below 1 is left for validation to reject."""

    if isinstance(value, str) and value.strip().isdecimal():
        value = int(value.strip())
    if isinstance(value, int) and not isinstance(value, bool) and value > MAX_LIMIT:
        return MAX_LIMIT
    return value


SortOrder = Annotated[
    Literal["relevance", "hot", "new", "top", "comments"],
    BeforeValidator(_lower),
]
TimeRange = Annotated[
    Literal["hour", "day", "week", "month", "year", "all"],
    BeforeValidator(_lower),
]
ParseMethod = Literal["pattern", "ai", "literal"]
SubredditName = Annotated[
    str,
    StringConstraints(pattern=r"^[a-z0-9_]+$"),
    BeforeValidator(_strip_subreddit_prefix),
]
Limit = Annotated[int, Field(ge=1, le=MAX_LIMIT), BeforeValidator(_clamp_limit)]
