"""Unit tests for the HTTP embedding providers."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from src.embedding.http_providers import (
    HTTPEmbeddingProvider,
    GeminiEmbeddingProvider,
    OllamaEmbeddingProvider,
    OpenAIEmbeddingProvider,
    lookup_dimension,
)
from src.exceptions import EmbeddingError
from src.models.enums import EmbeddingErrorKind, EmbeddingProviderType


def _response(status_code=200, payload=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload
    return resp


@pytest.fixture
def mock_post():
    with patch("src.embedding.http_providers.requests.post") as post:
        yield post


class TestGeminiProvider:
    def test_embeds_text(self, mock_post):
        mock_post.return_value = _response(payload={"embedding": {"values": [0.1, 0.2, 0.3]}})
        provider = GeminiEmbeddingProvider(api_key="gem-key")

        assert provider.embed("hello") == [0.1, 0.2, 0.3]

    def test_request_shape(self, mock_post):
        mock_post.return_value = _response(payload={"embedding": {"values": [1.0]}})
        GeminiEmbeddingProvider(api_key="gem-key").embed("hello")

        url = mock_post.call_args[0][0]
        kwargs = mock_post.call_args[1]
        assert url.endswith("/models/text-embedding-004:embedContent")
        assert "gem-key" not in url
        assert kwargs["headers"]["x-goog-api-key"] == "gem-key"
        assert kwargs["json"] == {
            "model": "models/text-embedding-004",
            "content": {"parts": [{"text": "hello"}]},
        }
        assert kwargs["timeout"] == 30.0

    def test_default_dimension(self):
        assert GeminiEmbeddingProvider(api_key="k").dimension == 768


class TestOpenAIProvider:
    def test_embeds_text(self, mock_post):
        mock_post.return_value = _response(payload={"data": [{"embedding": [0.5, 0.5]}]})
        provider = OpenAIEmbeddingProvider(api_key="sk-test")

        assert provider.embed("hello") == [0.5, 0.5]

    def test_request_shape(self, mock_post):
        mock_post.return_value = _response(payload={"data": [{"embedding": [1.0]}]})
        OpenAIEmbeddingProvider(api_key="sk-test", model="text-embedding-3-large").embed("hi")

        kwargs = mock_post.call_args[1]
        assert mock_post.call_args[0][0] == "https://api.openai.com/v1/embeddings"
        assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
        assert kwargs["json"] == {"model": "text-embedding-3-large", "input": "hi"}

    def test_dimension_follows_model(self):
        assert OpenAIEmbeddingProvider(api_key="k").dimension == 1536
        assert OpenAIEmbeddingProvider(api_key="k", model="text-embedding-3-large").dimension == 3072

    def test_empty_data_is_bad_response(self, mock_post):
        mock_post.return_value = _response(payload={"data": []})
        with pytest.raises(EmbeddingError) as exc_info:
            OpenAIEmbeddingProvider(api_key="k").embed("hi")
        assert exc_info.value.kind == EmbeddingErrorKind.BAD_RESPONSE


class TestOllamaProvider:
    def test_embeds_text(self, mock_post):
        mock_post.return_value = _response(payload={"embedding": [1, 2, 3]})
        provider = OllamaEmbeddingProvider(base_url="http://ollama:11434/")

        assert provider.embed("hello") == [1.0, 2.0, 3.0]
        assert mock_post.call_args[0][0] == "http://ollama:11434/api/embeddings"
        assert mock_post.call_args[1]["json"] == {"model": "nomic-embed-text", "prompt": "hello"}

    def test_explicit_dimension_overrides_table(self):
        assert OllamaEmbeddingProvider(model="custom", dimension=512).dimension == 512


class TestErrorMapping:
    @pytest.mark.parametrize("status, kind", [
        (429, EmbeddingErrorKind.RATE_LIMITED),
        (401, EmbeddingErrorKind.INVALID_KEY),
        (403, EmbeddingErrorKind.INVALID_KEY),
        (500, EmbeddingErrorKind.BAD_RESPONSE),
        (404, EmbeddingErrorKind.BAD_RESPONSE),
    ])
    def test_http_status(self, mock_post, status, kind):
        mock_post.return_value = _response(status_code=status)
        with pytest.raises(EmbeddingError) as exc_info:
            GeminiEmbeddingProvider(api_key="k").embed("hi")
        assert exc_info.value.kind == kind

    def test_connection_error_is_network_error(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("connection refused")
        with pytest.raises(EmbeddingError) as exc_info:
            OllamaEmbeddingProvider().embed("hi")
        assert exc_info.value.kind == EmbeddingErrorKind.NETWORK_ERROR

    def test_timeout_is_network_error(self, mock_post):
        mock_post.side_effect = requests.Timeout("timed out")
        with pytest.raises(EmbeddingError) as exc_info:
            OpenAIEmbeddingProvider(api_key="k").embed("hi")
        assert exc_info.value.kind == EmbeddingErrorKind.NETWORK_ERROR

    def test_invalid_json_is_bad_response(self, mock_post):
        resp = _response()
        resp.json.side_effect = ValueError("not json")
        mock_post.return_value = resp
        with pytest.raises(EmbeddingError) as exc_info:
            GeminiEmbeddingProvider(api_key="k").embed("hi")
        assert exc_info.value.kind == EmbeddingErrorKind.BAD_RESPONSE

    def test_missing_vector_is_bad_response(self, mock_post):
        mock_post.return_value = _response(payload={"unexpected": True})
        with pytest.raises(EmbeddingError) as exc_info:
            GeminiEmbeddingProvider(api_key="k").embed("hi")
        assert exc_info.value.kind == EmbeddingErrorKind.BAD_RESPONSE

    def test_empty_vector_is_bad_response(self, mock_post):
        mock_post.return_value = _response(payload={"embedding": []})
        with pytest.raises(EmbeddingError) as exc_info:
            OllamaEmbeddingProvider().embed("hi")
        assert exc_info.value.kind == EmbeddingErrorKind.BAD_RESPONSE

    def test_error_code_matches_kind(self, mock_post):
        mock_post.return_value = _response(status_code=429)
        with pytest.raises(EmbeddingError) as exc_info:
            GeminiEmbeddingProvider(api_key="k").embed("hi")
        assert exc_info.value.error_code == "RATE_LIMITED"


class TestBatchEmbedding:
    def test_embed_batch_calls_once_per_text(self, mock_post):
        mock_post.return_value = _response(payload={"embedding": [1.0, 0.0]})
        vectors = OllamaEmbeddingProvider().embed_batch(["a", "b", "c"])

        assert vectors == [[1.0, 0.0]] * 3
        assert mock_post.call_count == 3


class TestDimensionTable:
    def test_known_pairs(self):
        assert lookup_dimension(EmbeddingProviderType.OLLAMA, "mxbai-embed-large") == 1024
        assert lookup_dimension(EmbeddingProviderType.OLLAMA, "nomic-embed-text") == 768

    def test_unknown_pair_falls_back(self):
        assert lookup_dimension(EmbeddingProviderType.OPENAI, "some-future-model") == 768


class TestAdapterContract:
    def test_adapter_without_request_hooks_cannot_be_created(self):
        class HalfWrittenProvider(HTTPEmbeddingProvider):
            provider_type = EmbeddingProviderType.OLLAMA

            def _build_request(self, text):
                return "http://localhost", {}, {}

        with pytest.raises(TypeError):
            HalfWrittenProvider()
