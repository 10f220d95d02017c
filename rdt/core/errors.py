"""Exception hierarchy for the rdt client."""
from __future__ import annotations

from enum import Enum


class RdtError(Exception):
    """Base class for all errors raised by rdt."""


class ConfigurationError(RdtError, RuntimeError):
    """A required configuration value is missing or invalid."""


class FallbackErrorKind(str, Enum):
    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"
    MALFORMED_RESPONSE = "malformed_response"


class FallbackError(RdtError):
    """The AI fallback could not produce search parameters.

    Always recoverable: the router degrades to a literal query when it sees one.
    """

    def __init__(self, kind: FallbackErrorKind, message: str) -> None:
        super().__init__(f"{kind.value}: {message}")
        self.kind = kind


class InvalidQueryError(RdtError, ValueError):
    """The effective query is empty after resolution and overrides."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Search query is empty after resolution (input: {raw!r})")
        self.raw = raw
