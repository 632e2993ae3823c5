"""Unit tests for embedding provider selection."""

from unittest.mock import MagicMock, patch

import pytest

from config.settings import Settings
from src.embedding.config import get_embedding_provider
from src.embedding.http_providers import (
    GeminiEmbeddingProvider,
    OllamaEmbeddingProvider,
    OpenAIEmbeddingProvider,
)
from src.exceptions import ConfigurationError


def _settings(**overrides) -> Settings:
    values = {"gemini_api_key": "", "openai_api_key": "", "omnirecall_embedding_model": ""}
    values.update(overrides)
    return Settings(**values)


class TestGetEmbeddingProvider:
    def test_gemini(self):
        provider = get_embedding_provider(_settings(
            omnirecall_embedding_provider="gemini", gemini_api_key="gem-key",
        ))
        assert isinstance(provider, GeminiEmbeddingProvider)
        assert provider.model == "text-embedding-004"

    def test_openai_with_model_override(self):
        provider = get_embedding_provider(_settings(
            omnirecall_embedding_provider="openai",
            openai_api_key="sk-test",
            omnirecall_embedding_model="text-embedding-3-large",
        ))
        assert isinstance(provider, OpenAIEmbeddingProvider)
        assert provider.dimension == 3072

    def test_ollama_needs_no_key(self):
        provider = get_embedding_provider(_settings(omnirecall_embedding_provider="ollama"))
        assert isinstance(provider, OllamaEmbeddingProvider)

    def test_tag_is_case_insensitive(self):
        provider = get_embedding_provider(_settings(omnirecall_embedding_provider="OLLAMA"))
        assert isinstance(provider, OllamaEmbeddingProvider)

    def test_missing_gemini_key(self):
        with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
            get_embedding_provider(_settings(omnirecall_embedding_provider="gemini"))

    def test_missing_openai_key(self):
        with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
            get_embedding_provider(_settings(omnirecall_embedding_provider="openai"))

    def test_unknown_provider(self):
        with pytest.raises(ConfigurationError, match="Unsupported embedding provider"):
            get_embedding_provider(_settings(omnirecall_embedding_provider="word2vec"))

    def test_local_provider(self):
        with patch("src.embedding.sentence_transformer.SentenceTransformer") as MockST:
            mock_model = MagicMock()
            mock_model.get_sentence_embedding_dimension.return_value = 384
            MockST.return_value = mock_model

            provider = get_embedding_provider(_settings(omnirecall_embedding_provider="local"))

        assert provider.dimension == 384
        assert provider.model_name == "all-MiniLM-L6-v2"
