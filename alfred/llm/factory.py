"""LLM provider factory.

Supports any OpenAI-compatible backend through ``langchain-openai``:
- OpenAI (default): Direct OpenAI API access
- OpenRouter, Together, Groq, Ollama: via their OpenAI-compatible endpoints
- Any other OpenAI-compatible API: Set LLM_BASE_URL

Environment variables:
- LLM_PROVIDER: openai (default), openrouter, together, groq, ollama, custom
- LLM_MODEL: Model name (e.g., gpt-4-0125-preview, anthropic/claude-sonnet-4)
- LLM_API_KEY: API key for the provider
- LLM_BASE_URL: Custom base URL for OpenAI-compatible APIs

Temperature is not configurable: tool selection must be reproducible for
identical transcripts, so every model is built with temperature 0.
"""

from typing import Any

from langchain_core.language_models import BaseChatModel

from alfred.exceptions import ConfigurationError
from alfred.settings import Settings, get_settings

DETERMINISTIC_TEMPERATURE = 0.0

# Provider base URLs
PROVIDER_BASE_URLS = {
    "openrouter": "https://openrouter.ai/api/v1",
    "openai": "https://api.openai.com/v1",
    "together": "https://api.together.xyz/v1",
    "groq": "https://api.groq.com/openai/v1",
    "ollama": "http://localhost:11434/v1",
}


def get_llm(
    model: str | None = None,
    provider: str | None = None,
    settings: Settings | None = None,
    **kwargs: Any,
) -> BaseChatModel:
    """Get a streaming chat model for the configured provider.

    Args:
        model: Override default model name
        provider: Override default provider
        settings: Settings to read (defaults to get_settings())
        **kwargs: Additional ChatOpenAI arguments

    Returns:
        Configured chat model with streaming enabled

    Raises:
        ConfigurationError: If the provider is unknown or the API key is missing
    """
    from langchain_openai import ChatOpenAI

    settings = settings or get_settings()
    model_name = model or settings.llm_model
    provider = provider or settings.llm_provider

    api_key = settings.llm_api_key.get_secret_value()
    if not api_key and provider != "ollama":
        raise ConfigurationError(f"LLM_API_KEY is required when using {provider} provider")

    base_url = settings.llm_base_url
    if base_url is None:
        base_url = PROVIDER_BASE_URLS.get(provider)
        if base_url is None:
            raise ConfigurationError(
                f"Unknown provider '{provider}'. Set LLM_BASE_URL for custom providers."
            )

    llm_kwargs: dict[str, Any] = {
        **kwargs,
        "model": model_name,
        "temperature": DETERMINISTIC_TEMPERATURE,
        "streaming": True,
        "base_url": base_url,
        "api_key": api_key or "ollama",
    }

    # Add headers for OpenRouter
    if provider == "openrouter":
        llm_kwargs.setdefault("default_headers", {})
        llm_kwargs["default_headers"]["X-Title"] = "ALFReD"

    return ChatOpenAI(**llm_kwargs)
