"""Deterministic extraction of search parameters from free-form query text.

The matcher folds an ordered list of extraction rules over the query. Every
rule looks for one fragment (a trailing ``limit 10``, a leading ``top``...),
records the field it implies and hands the remaining text to the next rule, so
``"top rust from this week"`` yields ``sort=top``, ``time_range=week`` and
``query="rust"``. Passes repeat until nothing fires, which lets trailing
clauses appear in any order.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from functools import reduce
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from rdt.core.schemas import PartialParams, collapse_whitespace

logger = logging.getLogger(__name__)

_TIME_UNITS = {
    "hour": "hour",
    "day": "day",
    "24 hours": "day",
    "today": "day",
    "week": "week",
    "month": "month",
    "year": "year",
}

# Phrasing the rules cannot capture faithfully; a bare query like this goes to the AI layer.
NEEDS_AI_PATTERNS: Tuple[re.Pattern[str], ...] = (
    # Questions
    re.compile(r"^(what|how|why|which|who|where)\b", re.IGNORECASE),
    # Conversational phrases
    re.compile(r"\b(people saying|talking about|discussions? on|opinions? on)\b", re.IGNORECASE),
    # Subjective queries
    re.compile(r"\b(best|worst|controversial|popular|unpopular)\b", re.IGNORECASE),
    # Ambiguous time references
    re.compile(r"\b(recently|lately|nowadays)\b", re.IGNORECASE),
    # Comparisons
    re.compile(r"\b(compare|versus|vs\.?|difference between)\b", re.IGNORECASE),
)
MAX_PLAIN_WORDS = 5


@dataclass(frozen=True, slots=True)
class ExtractionRule:
    """One fragment pattern and the field value it implies.

    ``extract`` returns the field value for a match, or ``None`` when the
    fragment is present but unusable (``limit abc``); the rule then does not
    apply and the text is left untouched. Rules with ``field=None`` only strip
    filler words.
    """

    name: str
    pattern: re.Pattern[str]
    field: Optional[str]
    extract: Callable[[re.Match[str]], Any] = lambda match: True

    def apply(self, text: str) -> Optional[Tuple[str, Any]]:
        match = self.pattern.search(text)
        if match is None:
            return None
        value = self.extract(match)
        if value is None:
            return None
        residual = collapse_whitespace(f"{text[:match.start()]} {text[match.end():]}")
        if not residual:
            return None
        return residual, value


@dataclass(frozen=True, slots=True)
class _MatchState:
    residual: str
    fields: Dict[str, Any] = field(default_factory=dict)
    fired: Tuple[str, ...] = ()


def _positive_int(match: re.Match[str]) -> Optional[int]:
    raw = match.group("n")
    if not raw.isdecimal():
        return None
    number = int(raw)
    return number if number > 0 else None


def _time_unit(match: re.Match[str]) -> str:
    if match.group("alltime"):
        return "all"
    unit = match.group("unit") or match.group("today")
    return _TIME_UNITS[collapse_whitespace(unit.lower())]


# Priority order: trailing clauses are peeled before leading tokens.
DEFAULT_RULES: Tuple[ExtractionRule, ...] = (
    ExtractionRule(
        name="limit",
        pattern=re.compile(r"\s+limit(?:\s+to)?\s+(?P<n>\S+)$", re.IGNORECASE),
        field="limit",
        extract=_positive_int,
    ),
    ExtractionRule(
        name="time_range",
        pattern=re.compile(
            r"\s+(?:"
            r"(?:from|in|during|over)\s+(?:this|the\s+past|the\s+last|past|last)\s+"
            r"(?P<unit>hour|day|24\s+hours|week|month|year)"
            r"|from\s+(?P<today>today)"
            r"|(?P<alltime>of\s+all\s+time)"
            r")$",
            re.IGNORECASE,
        ),
        field="time_range",
        extract=_time_unit,
    ),
    ExtractionRule(
        name="sorted_by",
        pattern=re.compile(r"\s+sort(?:ed)?\s+by\s+(?P<sort>relevance|hot|new|top|comments)$", re.IGNORECASE),
        field="sort",
        extract=lambda match: match.group("sort").lower(),
    ),
    ExtractionRule(
        name="subreddit",
        pattern=re.compile(r"\s+(?:in|from)\s+/?(?:r/)?(?P<name>[A-Za-z0-9_]+)$", re.IGNORECASE),
        field="subreddit",
        extract=lambda match: match.group("name").lower(),
    ),
    ExtractionRule(
        name="posts_about",
        pattern=re.compile(r"^posts?\s+about\s+", re.IGNORECASE),
        field=None,
    ),
    ExtractionRule(
        name="top",
        pattern=re.compile(r"^top\s+", re.IGNORECASE),
        field="sort",
        extract=lambda match: "top",
    ),
    ExtractionRule(
        name="recent",
        pattern=re.compile(r"^(?:recent|new|newest|latest)\s+", re.IGNORECASE),
        field="sort",
        extract=lambda match: "new",
    ),
    ExtractionRule(
        name="hot",
        pattern=re.compile(r"^hot\s+", re.IGNORECASE),
        field="sort",
        extract=lambda match: "hot",
    ),
)


class PatternMatcher:
    """Stateless rule-based parser for common search phrasings."""

    def __init__(
        self,
        rules: Sequence[ExtractionRule] = DEFAULT_RULES,
        *,
        needs_ai_patterns: Sequence[re.Pattern[str]] = NEEDS_AI_PATTERNS,
        max_plain_words: int = MAX_PLAIN_WORDS,
    ) -> None:
        self._rules = tuple(rules)
        self._needs_ai_patterns = tuple(needs_ai_patterns)
        self._max_plain_words = max_plain_words

    def try_match(self, raw: str) -> Optional[PartialParams]:
        """Extract search parameters from ``raw``.

        Returns ``None`` for empty input and for bare queries that are too
        conversational to take literally; any other input is a match, possibly
        with nothing but ``query`` set.
        """

        text = collapse_whitespace(raw or "")
        if not text:
            return None

        state = _MatchState(residual=text)
        while True:
            next_state = reduce(self._apply_rule, self._rules, state)
            if next_state.fired == state.fired:
                break
            state = next_state

        if not state.fired and self.needs_ai(text):
            logger.debug("No rule matched and query looks conversational: %r", text)
            return None

        logger.debug("Pattern rules %s matched %r -> %s", state.fired, text, state.fields)
        return PartialParams(query=state.residual, **state.fields)

    def needs_ai(self, text: str) -> bool:
        """Return True if a rule-free query reads like natural language rather than keywords."""

        if any(pattern.search(text) for pattern in self._needs_ai_patterns):
            return True
        return len(text.split()) > self._max_plain_words

    @staticmethod
    def _apply_rule(state: _MatchState, rule: ExtractionRule) -> _MatchState:
        if rule.name in state.fired:
            return state
        if rule.field is not None and rule.field in state.fields:
            return state

        outcome = rule.apply(state.residual)
        if outcome is None:
            return state

        residual, value = outcome
        fields = dict(state.fields)
        if rule.field is not None:
            fields[rule.field] = value
        return _MatchState(residual=residual, fields=fields, fired=state.fired + (rule.name,))
