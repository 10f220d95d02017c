"""Convert raw chat-model replies into search parameter models."""
import json
import logging
import re
from typing import Any, List, Optional

from langchain_core.messages import BaseMessage
from pydantic import ValidationError

from rdt.core.errors import FallbackError, FallbackErrorKind
from rdt.core.schemas import PartialParams

logger = logging.getLogger(__name__)

_CODE_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)


def message_to_text(response: Any) -> Optional[str]:
    """Flatten a chat model response (message, string, or content blocks) into text."""

    content = response.content if isinstance(response, BaseMessage) else response

    if isinstance(content, str):
        return content
    if isinstance(content, dict):
        try:
            return json.dumps(content)
        except (TypeError, ValueError):
            return str(content)
    if isinstance(content, list):
        text_chunks: List[str] = []
        for chunk in content:
            if isinstance(chunk, dict) and chunk.get("type") == "text":
                text_chunks.append(chunk.get("text", ""))
            elif isinstance(chunk, str):
                text_chunks.append(chunk)
        return "\n".join(text_chunks) if text_chunks else None
    if content is not None:
        return str(content)
    return None


def extract_json_payload(raw_output: Optional[str]) -> Optional[Any]:
    """Extract JSON from raw LLM output with tolerant parsing of extra wrappers."""
    if not raw_output:
        return None

    candidates: List[str] = []
    stripped = raw_output.strip()
    if stripped:
        candidates.append(stripped)

    # Code-fenced blocks (```json ... ```)
    for match in _CODE_BLOCK_PATTERN.finditer(raw_output):
        block = match.group(1).strip()
        if block:
            candidates.append(block)

    # First JSON object embedded in surrounding prose
    start_idx = stripped.find("{")
    end_idx = stripped.rfind("}")
    if start_idx != -1 and end_idx > start_idx:
        candidates.append(stripped[start_idx : end_idx + 1].strip())

    last_error: Optional[json.JSONDecodeError] = None
    for candidate in dict.fromkeys(candidates):
        try:
            return json.loads(candidate)
        except json.JSONDecodeError as exc:
            last_error = exc
            continue

    if last_error:
        logger.warning("Failed to parse raw LLM output as JSON: %s", last_error)
    return None


def parse_partial_params(raw_output: Optional[str]) -> PartialParams:
    """Parse a model reply into PartialParams or raise a MALFORMED_RESPONSE FallbackError."""

    payload = extract_json_payload(raw_output)
    if not isinstance(payload, dict):
        raise FallbackError(
            FallbackErrorKind.MALFORMED_RESPONSE,
            f"expected a JSON object, got {type(payload).__name__}",
        )

    try:
        return PartialParams.model_validate(payload)
    except ValidationError as exc:
        logger.debug("Rejected AI payload %s: %s", payload, exc)
        raise FallbackError(
            FallbackErrorKind.MALFORMED_RESPONSE,
            f"reply did not match the search parameter shape ({exc.error_count()} errors)",
        ) from exc
