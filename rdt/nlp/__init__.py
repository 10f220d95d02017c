"""Natural-language query resolution.

Public API:
    - QueryRouter: pattern matching, then AI fallback, then literal query
    - PatternMatcher: deterministic rule-based extraction
    - AIFallback: bounded chat-model call returning partial parameters
    - merge_params: per-field merge of overrides with inferred values
"""
from rdt.nlp.fallback import AIFallback, build_chat_model
from rdt.nlp.patterns import ExtractionRule, PatternMatcher
from rdt.nlp.router import QueryRouter, merge_params

__all__ = [
    "AIFallback",
    "ExtractionRule",
    "PatternMatcher",
    "QueryRouter",
    "build_chat_model",
    "merge_params",
]
