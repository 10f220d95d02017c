"""Configuration helpers for API keys and environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from rdt.core.errors import ConfigurationError

DEFAULT_BEDROCK_MODEL_ID = "anthropic.claude-3-haiku-20240307-v1:0"
DEFAULT_AWS_REGION = "us-east-1"
DEFAULT_AI_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "rdt/0.1 (Python CLI)"


def _getenv(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _flag(value: Optional[str], *, default: bool) -> bool:
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


@dataclass(slots=True, frozen=True)
class RouterConfig:
    """Settings consumed by the query router and its AI fallback."""

    ai_enabled: bool = True
    model_id: str = DEFAULT_BEDROCK_MODEL_ID
    region: str = DEFAULT_AWS_REGION
    ai_timeout: float = DEFAULT_AI_TIMEOUT


@dataclass(slots=True)
class ApiSettings:
    """Centralised container for the external service credentials."""

    reddit_client_id: Optional[str] = None
    reddit_client_secret: Optional[str] = None
    reddit_user_agent: str = DEFAULT_USER_AGENT
    aws_region: str = DEFAULT_AWS_REGION
    bedrock_model_id: str = DEFAULT_BEDROCK_MODEL_ID
    ai_fallback: bool = True
    ai_timeout: float = DEFAULT_AI_TIMEOUT

    @classmethod
    def from_env(cls) -> "ApiSettings":
        """Load settings from the process environment (``.env`` is loaded by the CLI)."""

        timeout_raw = _getenv("RDT_AI_TIMEOUT")
        try:
            ai_timeout = float(timeout_raw) if timeout_raw else DEFAULT_AI_TIMEOUT
        except ValueError as exc:
            raise ConfigurationError(f"RDT_AI_TIMEOUT must be a number, got {timeout_raw!r}") from exc
        if ai_timeout <= 0:
            raise ConfigurationError(f"RDT_AI_TIMEOUT must be positive, got {ai_timeout}")

        return cls(
            reddit_client_id=_getenv("REDDIT_CLIENT_ID"),
            reddit_client_secret=_getenv("REDDIT_CLIENT_SECRET"),
            reddit_user_agent=_getenv("REDDIT_USER_AGENT") or DEFAULT_USER_AGENT,
            aws_region=_getenv("AWS_REGION") or _getenv("AWS_DEFAULT_REGION") or DEFAULT_AWS_REGION,
            bedrock_model_id=_getenv("RDT_BEDROCK_MODEL_ID") or DEFAULT_BEDROCK_MODEL_ID,
            ai_fallback=_flag(_getenv("RDT_AI_FALLBACK"), default=True),
            ai_timeout=ai_timeout,
        )

    def ensure(self, field: str) -> str:
        """Return the requested field and fail fast if it is missing."""

        value = getattr(self, field)
        if not value:
            raise ConfigurationError(f"Missing configuration value: {field}")
        return value

    def router_config(self, *, ai_enabled: Optional[bool] = None) -> RouterConfig:
        """Project the settings the router needs; ``ai_enabled`` can only turn the fallback off."""

        enabled = self.ai_fallback if ai_enabled is None else (self.ai_fallback and ai_enabled)
        return RouterConfig(
            ai_enabled=enabled,
            model_id=self.bedrock_model_id,
            region=self.aws_region,
            ai_timeout=self.ai_timeout,
        )
