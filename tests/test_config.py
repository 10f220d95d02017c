"""Tests for environment-driven configuration."""
from __future__ import annotations

import pytest

from rdt.core.config import DEFAULT_BEDROCK_MODEL_ID, ApiSettings
from rdt.core.errors import ConfigurationError


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "REDDIT_CLIENT_ID",
        "REDDIT_CLIENT_SECRET",
        "REDDIT_USER_AGENT",
        "AWS_REGION",
        "AWS_DEFAULT_REGION",
        "RDT_BEDROCK_MODEL_ID",
        "RDT_AI_FALLBACK",
        "RDT_AI_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_from_env_defaults(clean_env):
    settings = ApiSettings.from_env()

    assert settings.reddit_client_id is None
    assert settings.bedrock_model_id == DEFAULT_BEDROCK_MODEL_ID
    assert settings.aws_region == "us-east-1"
    assert settings.ai_fallback is True
    assert settings.ai_timeout == 10.0


def test_from_env_reads_overrides(clean_env):
    clean_env.setenv("REDDIT_CLIENT_ID", " abc ")
    clean_env.setenv("AWS_REGION", "eu-west-1")
    clean_env.setenv("RDT_BEDROCK_MODEL_ID", "anthropic.claude-3-5-haiku")
    clean_env.setenv("RDT_AI_FALLBACK", "off")
    clean_env.setenv("RDT_AI_TIMEOUT", "2.5")

    settings = ApiSettings.from_env()

    assert settings.reddit_client_id == "abc"
    assert settings.aws_region == "eu-west-1"
    assert settings.bedrock_model_id == "anthropic.claude-3-5-haiku"
    assert settings.ai_fallback is False
    assert settings.ai_timeout == 2.5


@pytest.mark.parametrize("timeout", ["soon", "0", "-1"])
def test_from_env_rejects_bad_timeout(clean_env, timeout):
    clean_env.setenv("RDT_AI_TIMEOUT", timeout)

    with pytest.raises(ConfigurationError):
        ApiSettings.from_env()


def test_ensure_fails_fast_on_missing_value():
    with pytest.raises(ConfigurationError, match="reddit_client_secret"):
        ApiSettings().ensure("reddit_client_secret")


def test_router_config_flag_can_only_disable():
    enabled = ApiSettings(ai_fallback=True)
    disabled = ApiSettings(ai_fallback=False, ai_timeout=4.0, aws_region="ap-south-1")

    assert enabled.router_config().ai_enabled is True
    assert enabled.router_config(ai_enabled=False).ai_enabled is False
    assert disabled.router_config(ai_enabled=True).ai_enabled is False
    assert disabled.router_config().region == "ap-south-1"
    assert disabled.router_config().ai_timeout == 4.0
