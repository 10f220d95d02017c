"""Query router: pattern matching first, AI fallback second, literal text last."""
from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Optional, Tuple

from langchain_core.language_models.chat_models import BaseChatModel

from rdt.core.config import ApiSettings, RouterConfig
from rdt.core.errors import FallbackError, InvalidQueryError
from rdt.core.schemas import PartialParams, Resolution, SearchParams
from rdt.core.types import ParseMethod
from rdt.nlp.fallback import AIFallback, build_chat_model
from rdt.nlp.patterns import PatternMatcher

logger = logging.getLogger(__name__)


def merge_params(
    raw: str,
    inferred: PartialParams,
    overrides: Optional[PartialParams] = None,
    *,
    parse_method: Optional[ParseMethod] = None,
) -> SearchParams:
    """Merge inferred values with explicit overrides, field by field.

    Precedence is explicit override > inferred value > model default, decided
    independently for every field.

    Raises:
        InvalidQueryError: If no query text survives the merge.
    """

    overrides = overrides or PartialParams()
    values = {}
    for name in PartialParams.model_fields:
        resolution = Resolution.pick(getattr(overrides, name), getattr(inferred, name))
        if name == "query":
            query = resolution.value_or("")
            if not query.strip():
                raise InvalidQueryError(raw)
            values[name] = query
        elif resolution.is_set:
            values[name] = resolution.value
        else:
            values[name] = SearchParams.model_fields[name].default

    return SearchParams(**values, parse_method=parse_method)


class QueryRouter:
    """Turn raw query text plus optional overrides into finished SearchParams.

    The router keeps no per-call state, so ``resolve`` may run concurrently.
    """

    def __init__(
        self,
        matcher: Optional[PatternMatcher] = None,
        fallback: Optional[AIFallback] = None,
        *,
        ai_enabled: bool = True,
    ) -> None:
        self.matcher = matcher or PatternMatcher()
        self.fallback = fallback
        self.ai_enabled = ai_enabled

    @classmethod
    def from_config(cls, config: RouterConfig, llm: Optional[BaseChatModel] = None) -> "QueryRouter":
        """Build a router; ``llm`` replaces the Bedrock model built from ``config``."""

        if llm is None and config.ai_enabled:
            try:
                llm = build_chat_model(config)
            except Exception as exc:
                logger.warning("AI fallback disabled, could not build chat model: %s", exc)
                llm = None

        fallback = AIFallback(llm, timeout=config.ai_timeout) if llm is not None else None
        return cls(fallback=fallback, ai_enabled=config.ai_enabled)

    @classmethod
    def from_settings(
        cls,
        settings: ApiSettings,
        llm: Optional[BaseChatModel] = None,
        *,
        ai_enabled: Optional[bool] = None,
    ) -> "QueryRouter":
        return cls.from_config(settings.router_config(ai_enabled=ai_enabled), llm=llm)

    async def resolve(self, raw: str, overrides: Optional[PartialParams] = None) -> SearchParams:
        """Resolve ``raw`` into SearchParams, applying ``overrides`` on top.

        Fallback failures are logged and absorbed; the literal input is used as
        the query instead.

        Raises:
            InvalidQueryError: If the effective query is empty.
        """

        raw = raw or ""
        inferred, method = await self._infer(raw)
        params = merge_params(raw, inferred, overrides, parse_method=method)
        logger.info("Resolved %r via %s: %s", raw, method, params.model_dump(exclude={"parse_method"}))
        return params

    async def resolve_many(
        self,
        raws: Iterable[str],
        overrides: Optional[PartialParams] = None,
    ) -> List[SearchParams]:
        """Resolve several queries concurrently, preserving input order."""

        return list(await asyncio.gather(*(self.resolve(raw, overrides) for raw in raws)))

    async def _infer(self, raw: str) -> Tuple[PartialParams, ParseMethod]:
        matched = self.matcher.try_match(raw)
        if matched is not None:
            return matched, "pattern"

        if raw.strip() and self.ai_enabled and self.fallback is not None:
            try:
                completed = await self.fallback.complete(raw)
            except FallbackError as exc:
                logger.warning("AI fallback failed (%s), using literal query", exc)
            else:
                if completed.query is None:
                    completed = completed.model_copy(update={"query": raw.strip()})
                return completed, "ai"

        return PartialParams(query=raw), "literal"
