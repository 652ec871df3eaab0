import pytest

from config import settings
from agent.llm import get_llm_client
from agent.llm.anthropic_client import AnthropicClient
from agent.llm.openai_client import OpenAIClient


def test_unknown_provider(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "carrier-pigeon")
    with pytest.raises(ValueError, match="Unknown LLM_PROVIDER"):
        get_llm_client()


@pytest.mark.parametrize("provider, key_field", [("anthropic", "anthropic_api_key"), ("openai", "openai_api_key")])
def test_missing_key(monkeypatch, provider, key_field):
    monkeypatch.setattr(settings, "llm_provider", provider)
    monkeypatch.setattr(settings, key_field, "")
    with pytest.raises(RuntimeError, match="not set"):
        get_llm_client()


def test_providers_build_clients(monkeypatch):
    monkeypatch.setattr(settings, "anthropic_api_key", "sk-ant-test")
    monkeypatch.setattr(settings, "openai_api_key", "sk-test")

    monkeypatch.setattr(settings, "llm_provider", "Anthropic")
    assert isinstance(get_llm_client(), AnthropicClient)

    monkeypatch.setattr(settings, "llm_provider", "openai")
    assert isinstance(get_llm_client(), OpenAIClient)


def test_custom_provider_needs_no_key(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "custom")
    monkeypatch.setattr(settings, "openai_api_key", "")
    monkeypatch.setattr(settings, "openai_base_url", "http://localhost:11434/v1")
    assert isinstance(get_llm_client(), OpenAIClient)
