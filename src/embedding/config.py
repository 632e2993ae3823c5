"""Embedding provider selection from configuration."""

from config.settings import Settings, get_settings
from src.embedding.http_providers import (
    GeminiEmbeddingProvider,
    OllamaEmbeddingProvider,
    OpenAIEmbeddingProvider,
)
from src.embedding.provider import EmbeddingProvider
from src.exceptions import ConfigurationError
from src.models.enums import EmbeddingProviderType


def get_embedding_provider(settings: Settings | None = None) -> EmbeddingProvider:
    """Create the embedding provider named by ``omnirecall_embedding_provider``.

    Supported tags: 'gemini', 'openai', 'ollama', 'local'. Hosted providers
    need their API key in the settings.
    """
    settings = settings or get_settings()
    tag = settings.omnirecall_embedding_provider.lower()
    model = settings.omnirecall_embedding_model or None
    timeout = settings.omnirecall_request_timeout

    try:
        provider = EmbeddingProviderType(tag)
    except ValueError:
        supported = ", ".join(f"'{p.value}'" for p in EmbeddingProviderType)
        raise ConfigurationError(
            f"Unsupported embedding provider: {tag}. Supported: {supported}"
        ) from None

    if provider == EmbeddingProviderType.GEMINI:
        if not settings.gemini_api_key:
            raise ConfigurationError("GEMINI_API_KEY not set")
        return GeminiEmbeddingProvider(
            api_key=settings.gemini_api_key, model=model, timeout=timeout
        )
    elif provider == EmbeddingProviderType.OPENAI:
        if not settings.openai_api_key:
            raise ConfigurationError("OPENAI_API_KEY not set")
        return OpenAIEmbeddingProvider(
            api_key=settings.openai_api_key, model=model, timeout=timeout
        )
    elif provider == EmbeddingProviderType.OLLAMA:
        return OllamaEmbeddingProvider(
            model=model, base_url=settings.omnirecall_ollama_base_url, timeout=timeout
        )
    else:
        from src.embedding.sentence_transformer import (
            DEFAULT_LOCAL_MODEL,
            SentenceTransformerEmbeddingProvider,
        )

        return SentenceTransformerEmbeddingProvider(model or DEFAULT_LOCAL_MODEL)
