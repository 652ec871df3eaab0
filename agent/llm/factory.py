from agent.llm.base import LLMClient


def get_llm_client() -> LLMClient:
    from config import settings

    provider = settings.llm_provider.lower()

    if provider == "anthropic":
        from agent.llm.anthropic_client import AnthropicClient
        if not settings.anthropic_api_key:
            raise RuntimeError("ANTHROPIC_API_KEY not set in .env.")
        return AnthropicClient(
            api_key=settings.anthropic_api_key,
            model=settings.anthropic_model,
        )

    if provider == "openai":
        from agent.llm.openai_client import OpenAIClient
        if not settings.openai_api_key:
            raise RuntimeError(
                "OPENAI_API_KEY not set in .env. "
                "Hook and thread generation need a configured LLM provider."
            )
        return OpenAIClient(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
        )

    if provider == "custom":
        from agent.llm.openai_client import OpenAIClient
        # OpenAI-compatible endpoint; some local servers accept any key.
        return OpenAIClient(
            api_key=settings.openai_api_key or "unused",
            model=settings.openai_model,
            base_url=settings.openai_base_url,
        )

    raise ValueError(f"Unknown LLM_PROVIDER: {provider!r}")
