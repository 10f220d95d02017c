"""Pydantic data models for natural-language Reddit search.

This module holds the structured query shared by every resolution layer:

- SearchParams: the finished, immutable request handed to the Reddit searcher
- PartialParams: a partially determined request (pattern match, AI reply, or
  explicit command-line overrides), every field optional
- Resolution: per-field provenance used when merging overrides with inferred
  values (explicit > inferred > default)
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Generic, Literal, Optional, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from rdt.core.types import (
    DEFAULT_LIMIT,
    Limit,
    ParseMethod,
    SortOrder,
    SubredditName,
    TimeRange,
)

__all__ = [
    "PartialParams",
    "Resolution",
    "SearchParams",
    "collapse_whitespace",
]

T = TypeVar("T")

_WHITESPACE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Trim the text and squeeze internal runs of whitespace to single spaces."""

    return _WHITESPACE.sub(" ", text).strip()


class SearchParams(BaseModel):
    """Fully resolved Reddit search request.

    Attributes:
        query: Search terms, never empty
        subreddit: Subreddit to restrict the search to (lower-case, no ``r/``)
        sort: Reddit sort order
        time_range: Reddit time filter, only meaningful with ``sort="top"``
        limit: Number of results to request, within ``[1, MAX_LIMIT]``
        parse_method: Which layer produced the inferred values
    """

    query: str = Field(min_length=1, description="Search terms sent to Reddit")
    subreddit: Optional[SubredditName] = Field(default=None, description="Subreddit without the r/ prefix")
    sort: SortOrder = Field(default="relevance", description="Sort order")
    time_range: TimeRange = Field(default="all", description="Time filter")
    limit: Limit = Field(default=DEFAULT_LIMIT, description="Maximum number of results")
    parse_method: Optional[ParseMethod] = Field(default=None, description="Resolution layer that produced the query")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("query", mode="before")
    @classmethod
    def _normalise_query(cls, value: Any) -> Any:
        if isinstance(value, str):
            return collapse_whitespace(value)
        return value


class PartialParams(BaseModel):
    """Search fields determined so far; ``None`` means "not determined"."""

    query: Optional[str] = None
    subreddit: Optional[SubredditName] = None
    sort: Optional[SortOrder] = None
    time_range: Optional[TimeRange] = Field(
        default=None,
        validation_alias=AliasChoices("time_range", "time", "time_filter"),
    )
    limit: Optional[Limit] = None

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_blank_values(cls, data: Any) -> Any:
        """Treat blank strings and nulls as absent rather than invalid."""

        if isinstance(data, dict):
            return {
                key: value
                for key, value in data.items()
                if value is not None and not (isinstance(value, str) and not value.strip())
            }
        return data

    @field_validator("query", mode="before")
    @classmethod
    def _normalise_query(cls, value: Any) -> Any:
        if isinstance(value, str):
            return collapse_whitespace(value) or None
        return value

    def provided(self) -> dict[str, Any]:
        """Return only the fields that carry a value."""

        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.provided()


@dataclass(frozen=True, slots=True)
class Resolution(Generic[T]):
    """Provenance-tagged value of a single search field."""

    state: Literal["unset", "inferred", "explicit"]
    value: Optional[T] = None

    @classmethod
    def unset(cls) -> "Resolution[T]":
        return cls("unset")

    @classmethod
    def inferred(cls, value: T) -> "Resolution[T]":
        return cls("inferred", value)

    @classmethod
    def explicit(cls, value: T) -> "Resolution[T]":
        return cls("explicit", value)

    @classmethod
    def pick(cls, explicit: Optional[T], inferred: Optional[T]) -> "Resolution[T]":
        """Combine an override and an inferred value; the override always wins."""

        if explicit is not None:
            return cls.explicit(explicit)
        if inferred is not None:
            return cls.inferred(inferred)
        return cls.unset()

    @property
    def is_set(self) -> bool:
        return self.state != "unset"

    def value_or(self, default: T) -> T:
        return self.value if self.is_set else default
