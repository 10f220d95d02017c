"""Tests for search parameter models and data validation."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from rdt.core.schemas import PartialParams, Resolution, SearchParams
from rdt.core.types import DEFAULT_LIMIT, MAX_LIMIT


def test_search_params_defaults():
    params = SearchParams(query="rust")

    assert params.subreddit is None
    assert params.sort == "relevance"
    assert params.time_range == "all"
    assert params.limit == DEFAULT_LIMIT
    assert params.parse_method is None


def test_search_params_rejects_empty_query():
    with pytest.raises(ValidationError):
        SearchParams(query="   ")


def test_search_params_collapses_query_whitespace():
    params = SearchParams(query="  rust   async \t tutorials ")
    assert params.query == "rust async tutorials"


def test_search_params_is_immutable():
    params = SearchParams(query="rust")
    with pytest.raises(ValidationError):
        params.limit = 10


@pytest.mark.parametrize("raw", ["R/Programming", "r/programming", "/r/programming", "programming", "PROGRAMMING"])
def test_subreddit_normalisation(raw):
    assert SearchParams(query="rust", subreddit=raw).subreddit == "programming"
    assert PartialParams(subreddit=raw).subreddit == "programming"


def test_subreddit_rejects_invalid_characters():
    with pytest.raises(ValidationError):
        PartialParams(subreddit="rust lang")


def test_limit_is_capped_at_maximum():
    assert SearchParams(query="rust", limit=500).limit == MAX_LIMIT
    assert PartialParams(limit="250").limit == MAX_LIMIT


@pytest.mark.parametrize("bad_limit", [0, -3])
def test_limit_below_one_is_rejected(bad_limit):
    with pytest.raises(ValidationError):
        SearchParams(query="rust", limit=bad_limit)


def test_non_ascii_digit_limit_is_rejected():
    with pytest.raises(ValidationError):
        PartialParams(limit="²")


def test_sort_and_time_are_case_insensitive():
    partial = PartialParams(sort="TOP", time_range="Week")
    assert partial.sort == "top"
    assert partial.time_range == "week"


def test_unknown_sort_is_rejected():
    with pytest.raises(ValidationError):
        PartialParams(sort="controversial")


def test_partial_params_accepts_time_aliases():
    assert PartialParams.model_validate({"time": "month"}).time_range == "month"
    assert PartialParams.model_validate({"time_filter": "year"}).time_range == "year"


def test_partial_params_drops_blank_values():
    partial = PartialParams.model_validate({"query": "  ", "subreddit": "", "sort": None, "limit": 5})

    assert partial.query is None
    assert partial.subreddit is None
    assert partial.provided() == {"limit": 5}


def test_partial_params_ignores_unknown_keys():
    partial = PartialParams.model_validate({"query": "rust", "confidence": 0.9})
    assert partial.provided() == {"query": "rust"}


class TestResolution:
    """Precedence rules for a single field."""

    def test_explicit_wins_over_inferred(self):
        resolution = Resolution.pick("new", "top")
        assert resolution.state == "explicit"
        assert resolution.value_or("relevance") == "new"

    def test_inferred_used_without_explicit(self):
        resolution = Resolution.pick(None, "top")
        assert resolution.state == "inferred"
        assert resolution.value_or("relevance") == "top"

    def test_unset_falls_back_to_default(self):
        resolution = Resolution.pick(None, None)
        assert not resolution.is_set
        assert resolution.value_or("relevance") == "relevance"

    def test_explicit_default_value_is_still_explicit(self):
        resolution = Resolution.pick("relevance", "top")
        assert resolution == Resolution.explicit("relevance")
