"""AI fallback that asks a chat model to structure queries the patterns declined."""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from langchain_core.language_models.chat_models import BaseChatModel

from rdt.core.config import DEFAULT_AI_TIMEOUT, RouterConfig
from rdt.core.errors import FallbackError, FallbackErrorKind
from rdt.core.post_processing import message_to_text, parse_partial_params
from rdt.core.prompts import query_parse_prompt
from rdt.core.schemas import PartialParams

logger = logging.getLogger(__name__)


def build_chat_model(config: RouterConfig) -> Optional[BaseChatModel]:
    """Instantiate the Bedrock chat model, or return None when the fallback is disabled."""

    if not config.ai_enabled:
        return None

    from langchain_aws import ChatBedrockConverse

    return ChatBedrockConverse(
        model=config.model_id,
        region_name=config.region,
        temperature=0,
        max_tokens=200,
    )


class AIFallback:
    """Single bounded chat-model call that returns best-effort search parameters."""

    def __init__(
        self,
        llm: Optional[BaseChatModel],
        *,
        timeout: float = DEFAULT_AI_TIMEOUT,
        prompt_template: str = query_parse_prompt,
    ) -> None:
        self._llm = llm
        self._timeout = timeout
        self._prompt_template = prompt_template

    async def complete(self, raw: str) -> PartialParams:
        """Parse ``raw`` with the chat model.

        Raises:
            FallbackError: UNAVAILABLE when no model is configured or the call
                fails, TIMEOUT when the model does not answer in time, and
                MALFORMED_RESPONSE when the reply is not usable JSON.
        """

        if self._llm is None:
            raise FallbackError(FallbackErrorKind.UNAVAILABLE, "no chat model configured")

        prompt = self._prompt_template.format(query=raw.strip())
        try:
            response = await asyncio.wait_for(self._llm.ainvoke(prompt), timeout=self._timeout)
        except asyncio.TimeoutError as exc:
            raise FallbackError(
                FallbackErrorKind.TIMEOUT,
                f"no reply within {self._timeout:g}s",
            ) from exc
        except Exception as exc:
            raise FallbackError(FallbackErrorKind.UNAVAILABLE, f"model call failed: {exc}") from exc

        text = message_to_text(response)
        logger.debug("Raw AI reply for %r: %s", raw, text)
        return parse_partial_params(text)
