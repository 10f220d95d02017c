"""Tests for the AI fallback adapter."""
from __future__ import annotations

import asyncio
from typing import Any, List

import pytest
from langchain_core.messages import AIMessage

from rdt.core.config import RouterConfig
from rdt.core.errors import FallbackError, FallbackErrorKind
from rdt.nlp.fallback import AIFallback, build_chat_model


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class StubLLM:
    """Captures prompts and replies with a canned message."""

    def __init__(self, reply: Any = None, *, error: Exception | None = None, delay: float = 0.0) -> None:
        self.reply = reply
        self.error = error
        self.delay = delay
        self.prompts: List[str] = []

    async def ainvoke(self, prompt: str) -> Any:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.reply)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_complete_parses_structured_reply():
    llm = StubLLM('{"query": "rust tutorials", "sort": "top", "time_range": "week"}')
    fallback = AIFallback(llm)

    result = await fallback.complete("what are the best rust tutorials from this week")

    assert result.query == "rust tutorials"
    assert result.sort == "top"
    assert result.time_range == "week"
    assert len(llm.prompts) == 1
    assert '"what are the best rust tutorials from this week"' in llm.prompts[0]


@pytest.mark.asyncio
async def test_complete_accepts_fenced_json():
    llm = StubLLM('```json\n{"query": "zelda", "subreddit": "NintendoSwitch"}\n```')

    result = await AIFallback(llm).complete("what are people saying about zelda on the switch sub")

    assert result.query == "zelda"
    assert result.subreddit == "nintendoswitch"


@pytest.mark.asyncio
async def test_complete_without_model_is_unavailable():
    with pytest.raises(FallbackError) as excinfo:
        await AIFallback(None).complete("how do I learn rust")
    assert excinfo.value.kind is FallbackErrorKind.UNAVAILABLE


@pytest.mark.asyncio
async def test_transport_error_is_unavailable():
    llm = StubLLM(error=ConnectionError("credentials not found"))

    with pytest.raises(FallbackError) as excinfo:
        await AIFallback(llm).complete("how do I learn rust")
    assert excinfo.value.kind is FallbackErrorKind.UNAVAILABLE
    assert "credentials not found" in str(excinfo.value)


@pytest.mark.asyncio
async def test_slow_model_times_out():
    llm = StubLLM('{"query": "rust"}', delay=1.0)

    with pytest.raises(FallbackError) as excinfo:
        await AIFallback(llm, timeout=0.01).complete("how do I learn rust")
    assert excinfo.value.kind is FallbackErrorKind.TIMEOUT


@pytest.mark.asyncio
async def test_unparseable_reply_is_malformed():
    llm = StubLLM("Sorry, I can't help with that.")

    with pytest.raises(FallbackError) as excinfo:
        await AIFallback(llm).complete("how do I learn rust")
    assert excinfo.value.kind is FallbackErrorKind.MALFORMED_RESPONSE


def test_build_chat_model_disabled_returns_none():
    assert build_chat_model(RouterConfig(ai_enabled=False)) is None
