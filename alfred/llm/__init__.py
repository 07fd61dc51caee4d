"""LLM provider factory."""

from alfred.llm.factory import (
    DETERMINISTIC_TEMPERATURE,
    PROVIDER_BASE_URLS,
    get_llm,
)

__all__ = [
    "DETERMINISTIC_TEMPERATURE",
    "PROVIDER_BASE_URLS",
    "get_llm",
]
