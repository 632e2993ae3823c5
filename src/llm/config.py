"""LLM provider configuration using LangChain abstractions."""

from langchain_core.language_models.chat_models import BaseChatModel

from config.settings import Settings, get_settings
from src.exceptions import ConfigurationError


def get_llm(settings: Settings | None = None) -> BaseChatModel:
    """Create and return the configured chat model.

    Uses LangChain's BaseChatModel abstraction for LLM-agnostic access.
    Default: Anthropic Claude via langchain-anthropic.
    """
    settings = settings or get_settings()
    provider = settings.omnirecall_llm_provider.lower()

    if provider == "anthropic":
        from langchain_anthropic import ChatAnthropic

        return ChatAnthropic(
            model=settings.omnirecall_llm_model,
            temperature=0,
            api_key=settings.anthropic_api_key,
        )
    elif provider in ("google", "gemini"):
        from langchain_google_genai import ChatGoogleGenerativeAI

        return ChatGoogleGenerativeAI(
            model=settings.omnirecall_llm_model,
            temperature=0,
            google_api_key=settings.gemini_api_key or None,
        )
    else:
        raise ConfigurationError(
            f"Unsupported LLM provider: {provider}. "
            "Supported: 'anthropic', 'google'"
        )
